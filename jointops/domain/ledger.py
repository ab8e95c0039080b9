"""SQLAlchemy ORM models for the append-only stock and money streams."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jointops.db.base import Base
from jointops.domain.mixins import CreatedAtMixin, IdMixin


class Delivery(Base, IdMixin, CreatedAtMixin):
    """Stock entering a joint."""

    __tablename__ = "deliveries"

    joint_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("joints.id"), nullable=False, index=True
    )
    supplier_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("suppliers.id"), nullable=True
    )
    qty: Mapped[float] = mapped_column(Float, nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Allocation(Base, IdMixin, CreatedAtMixin):
    """Stock handed from joint inventory to a seller, in basis units."""

    __tablename__ = "allocations"

    joint_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("joints.id"), nullable=False, index=True
    )
    seller_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sellers.id"), nullable=False, index=True
    )
    qty_basis: Mapped[float] = mapped_column(Float, nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Payment(Base, IdMixin, CreatedAtMixin):
    """Money returned by a seller, in currency."""

    __tablename__ = "payments"

    joint_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("joints.id"), nullable=False, index=True
    )
    seller_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("sellers.id"), nullable=False, index=True
    )
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    confirmed_by_seller: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )


class Audit(Base, IdMixin, CreatedAtMixin):
    """Physical stock count. Display only; never folded into balances."""

    __tablename__ = "audits"

    joint_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("joints.id"), nullable=False, index=True
    )
    seller_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("sellers.id"), nullable=True, index=True
    )
    counted_qty: Mapped[float] = mapped_column(Float, nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
