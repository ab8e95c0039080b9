"""SQLAlchemy ORM models for scheduled customer events and their pricing."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jointops.db.base import Base
from jointops.domain.mixins import CreatedAtMixin, IdMixin


class Event(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "events"

    joint_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("joints.id"), nullable=False, index=True
    )
    event_ts: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    # "planned" | "confirmed" | "done" | "cancelled"
    status: Mapped[str] = mapped_column(String(20), default="planned", nullable=False)
    customer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    customer_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    location_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class EventPricing(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "event_pricing"

    event_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    unit_qty: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    unit_price: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    delivery_fee: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    opening_fee: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    other_fee: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    other_fee_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
