"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  joint.py   — Joints (selling locations) and suppliers
  seller.py  — Sellers and their time-windowed joint assignments
  ledger.py  — Append-only deliveries, allocations, payments, audits
  event.py   — Scheduled customer events and their pricing
  mixins.py  — Shared IdMixin, CreatedAtMixin
"""

from jointops.domain.event import Event, EventPricing
from jointops.domain.joint import Joint, Supplier
from jointops.domain.ledger import Allocation, Audit, Delivery, Payment
from jointops.domain.seller import Seller, SellerAssignment

__all__ = [
    "Allocation",
    "Audit",
    "Delivery",
    "Event",
    "EventPricing",
    "Joint",
    "Payment",
    "Seller",
    "SellerAssignment",
    "Supplier",
]
