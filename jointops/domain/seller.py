"""SQLAlchemy ORM models for sellers and their joint assignments."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jointops.db.base import Base
from jointops.domain.mixins import CreatedAtMixin, IdMixin, _now


class Seller(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "sellers"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    # bcrypt hash of the seller's payment confirmation PIN
    pin_hash: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    # legacy home joint; assignments are authoritative
    joint_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("joints.id"), nullable=True
    )


class SellerAssignment(Base, IdMixin, CreatedAtMixin):
    """A seller's authorization window ``[start_at, end_at)`` at a joint.

    Rows are closed (active=False, end_at set) on reassignment, never deleted.
    """

    __tablename__ = "seller_assignments"

    seller_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sellers.id"), nullable=False, index=True
    )
    joint_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("joints.id"), nullable=False, index=True
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    start_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_now, nullable=False, index=True
    )
    end_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
