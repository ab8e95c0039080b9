"""Events router — scheduled customer events."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from jointops.core.response import DataResponse, ListResponse, listed
from jointops.schemas.event import EventCreate, EventOut
from jointops.services.events import EventService
from jointops.store import Store, get_store

router = APIRouter(prefix="/events", tags=["Events"])


def _svc(store: Store) -> EventService:
    return EventService(store)


@router.get("", response_model=ListResponse[EventOut])
async def list_events(
    joint_id: Optional[str] = Query(default=None, alias="jointId"),
    store: Store = Depends(get_store),
):
    rows = await _svc(store).list_events(joint_id=joint_id)
    return listed([EventOut.model_validate(r) for r in rows])


@router.post("", response_model=DataResponse[EventOut], status_code=status.HTTP_201_CREATED)
async def create_event(body: EventCreate, store: Store = Depends(get_store)):
    event = body.model_dump(exclude={"pricing"})
    row = await _svc(store).create_event(event, body.pricing.model_dump())
    return {"data": EventOut.model_validate(row)}
