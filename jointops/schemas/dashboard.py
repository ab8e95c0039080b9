"""Dashboard Pydantic schemas — balances, activity feed, upcoming events."""


from datetime import datetime

from jointops.schemas.common import CamelModel

class ActivityItemOut(CamelModel):
    kind: str
    id: str
    created_at: datetime
    joint_id: str | None = None
    seller_id: str | None = None
    value: float

class BalancesOut(CamelModel):
    expected_stock: float
    amount_owed: float
    activity: list[ActivityItemOut]
    window: int
    failed_streams: list[str] = []

class UpcomingEventOut(CamelModel):
    id: str
    joint_id: str
    event_ts: datetime
    status: str
    customer_name: str | None = None
    location_note: str | None = None
