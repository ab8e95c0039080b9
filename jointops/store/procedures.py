"""Server-side procedures run by :meth:`SqlStore.call_procedure`.

Each procedure receives an open session inside a transaction and the caller's
argument dict. Raising rolls the whole procedure back.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from jointops.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from jointops.core.security import verify_pin
from jointops.domain import Event, EventPricing, Joint, Payment, Seller
from jointops.store.rows import Row, bind_value, to_row

logger = logging.getLogger(__name__)

Procedure = Callable[[AsyncSession, dict[str, Any]], Awaitable[Any]]

_PRICING_FIELDS = (
    "unit_qty",
    "unit_price",
    "delivery_fee",
    "opening_fee",
    "other_fee",
    "other_fee_note",
)
_EVENT_FIELDS = (
    "joint_id",
    "event_ts",
    "status",
    "customer_name",
    "customer_phone",
    "location_note",
    "note",
)


async def _get(session: AsyncSession, model: type, entity_id: Any):
    instance = await session.get(model, entity_id) if entity_id else None
    if instance is None:
        raise NotFoundError(model.__name__, entity_id)
    return instance


async def confirm_payment_with_pin(session: AsyncSession, args: dict[str, Any]) -> Row:
    """Insert a seller-confirmed payment after checking the seller's PIN."""
    seller = await _get(session, Seller, args.get("seller_id"))
    joint = await _get(session, Joint, args.get("joint_id"))

    if not verify_pin(args.get("pin"), seller.pin_hash):
        logger.warning("PIN rejected for seller %s", seller.id)
        raise ForbiddenError("Invalid seller PIN")

    payment = Payment(
        joint_id=joint.id,
        seller_id=seller.id,
        amount=args["amount"],
        note=args.get("note"),
        confirmed_by_seller=True,
    )
    session.add(payment)
    await session.flush()
    return to_row(payment)


async def create_event_with_pricing(session: AsyncSession, args: dict[str, Any]) -> Row:
    """Insert an event and its pricing row together."""
    event_data = args.get("event") or {}
    pricing_data = args.get("pricing") or {}
    if not event_data.get("event_ts"):
        raise ValidationError("event_ts is required")
    await _get(session, Joint, event_data.get("joint_id"))

    event = Event(
        **{k: bind_value(event_data[k]) for k in _EVENT_FIELDS if event_data.get(k) is not None}
    )
    session.add(event)
    await session.flush()  # populate id

    pricing = EventPricing(
        event_id=event.id,
        **{k: pricing_data[k] for k in _PRICING_FIELDS if pricing_data.get(k) is not None},
    )
    session.add(pricing)
    await session.flush()

    row = to_row(event)
    row["pricing"] = to_row(pricing)
    return row


PROCEDURES: dict[str, Procedure] = {
    "confirm_payment_with_pin": confirm_payment_with_pin,
    "create_event_with_pricing": create_event_with_pricing,
}
