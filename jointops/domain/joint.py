"""SQLAlchemy ORM models for joints (selling locations) and suppliers."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jointops.db.base import Base
from jointops.domain.mixins import CreatedAtMixin, IdMixin


class Joint(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "joints"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # toggled by an administrator; identity never changes
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class Supplier(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "suppliers"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone_whatsapp: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
