"""Event Pydantic schemas (request DTOs and response models)."""


from datetime import datetime
from typing import Literal

from pydantic import Field

from jointops.schemas.common import CamelModel, Note

EventStatus = Literal["planned", "confirmed", "done", "cancelled"]

class PricingIn(CamelModel):
    unit_qty: float = Field(default=0, ge=0)
    unit_price: float = Field(default=0, ge=0)
    delivery_fee: float = Field(default=0, ge=0)
    opening_fee: float = Field(default=0, ge=0)
    other_fee: float = Field(default=0, ge=0)
    other_fee_note: str | None = None

class EventCreate(CamelModel):
    joint_id: str
    event_ts: datetime
    status: EventStatus = "planned"
    customer_name: str | None = None
    customer_phone: str | None = None
    location_note: str | None = None
    note: Note = None
    pricing: PricingIn = Field(default_factory=PricingIn)

class PricingOut(PricingIn):
    event_id: str

class EventOut(CamelModel):
    id: str
    joint_id: str
    event_ts: datetime
    status: str
    customer_name: str | None = None
    customer_phone: str | None = None
    location_note: str | None = None
    note: str | None = None
    pricing: PricingOut | None = None
    total: float | None = None
