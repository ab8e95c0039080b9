"""Ledger Pydantic schemas for deliveries, allocations, payments and audits."""


from datetime import datetime

from pydantic import Field

from jointops.schemas.common import CamelModel, Note

class DeliveryCreate(CamelModel):
    joint_id: str
    supplier_id: str | None = None
    qty: float = Field(gt=0)
    note: Note = None

class DeliveryOut(CamelModel):
    id: str
    joint_id: str
    supplier_id: str | None = None
    qty: float
    note: str | None = None
    created_at: datetime

class AllocationCreate(CamelModel):
    joint_id: str
    seller_id: str
    qty_basis: float = Field(gt=0)
    note: Note = None

class AllocationOut(CamelModel):
    id: str
    joint_id: str
    seller_id: str
    qty_basis: float
    note: str | None = None
    created_at: datetime

class PaymentCreate(CamelModel):
    joint_id: str
    seller_id: str
    amount: float = Field(gt=0)
    note: Note = None
    # seller PIN; when given the payment is stored as seller-confirmed
    pin: str | None = None

class PaymentOut(CamelModel):
    id: str
    joint_id: str
    seller_id: str
    amount: float
    note: str | None = None
    confirmed_by_seller: bool
    created_at: datetime
    basis_equivalent: float | None = None

class AuditCreate(CamelModel):
    joint_id: str
    seller_id: str | None = None
    counted_qty: float = Field(ge=0)
    note: Note = None

class AuditOut(CamelModel):
    id: str
    joint_id: str
    seller_id: str | None = None
    counted_qty: float
    note: str | None = None
    created_at: datetime
