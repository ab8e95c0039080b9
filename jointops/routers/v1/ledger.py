"""Ledger router — deliveries, allocations, payments and audits."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from jointops.core.response import DataResponse, ListResponse, listed
from jointops.schemas.ledger import (
    AllocationCreate,
    AllocationOut,
    AuditCreate,
    AuditOut,
    DeliveryCreate,
    DeliveryOut,
    PaymentCreate,
    PaymentOut,
)
from jointops.services.ledger import LedgerService
from jointops.store import Store, get_store

router = APIRouter(tags=["Ledger"])


def _svc(store: Store) -> LedgerService:
    return LedgerService(store)


@router.post("/deliveries", response_model=DataResponse[DeliveryOut], status_code=status.HTTP_201_CREATED)
async def create_delivery(body: DeliveryCreate, store: Store = Depends(get_store)):
    row = await _svc(store).record_delivery(
        body.joint_id, body.qty, supplier_id=body.supplier_id, note=body.note
    )
    return {"data": DeliveryOut.model_validate(row)}


@router.post("/allocations", response_model=DataResponse[AllocationOut], status_code=status.HTTP_201_CREATED)
async def create_allocation(body: AllocationCreate, store: Store = Depends(get_store)):
    row = await _svc(store).record_allocation(
        body.joint_id, body.seller_id, body.qty_basis, note=body.note
    )
    return {"data": AllocationOut.model_validate(row)}


@router.post("/payments", response_model=DataResponse[PaymentOut], status_code=status.HTTP_201_CREATED)
async def create_payment(body: PaymentCreate, store: Store = Depends(get_store)):
    """Record a payment; include the seller's PIN to store it as confirmed."""
    row = await _svc(store).record_payment(
        body.joint_id, body.seller_id, body.amount, note=body.note, pin=body.pin
    )
    return {"data": PaymentOut.model_validate(row)}


@router.get("/payments", response_model=ListResponse[PaymentOut])
async def list_payments(
    joint_id: Optional[str] = Query(default=None, alias="jointId"),
    seller_id: Optional[str] = Query(default=None, alias="sellerId"),
    store: Store = Depends(get_store),
):
    rows = await _svc(store).list_payments(joint_id=joint_id, seller_id=seller_id)
    return listed([PaymentOut.model_validate(r) for r in rows])


@router.post("/audits", response_model=DataResponse[AuditOut], status_code=status.HTTP_201_CREATED)
async def create_audit(body: AuditCreate, store: Store = Depends(get_store)):
    row = await _svc(store).record_audit(
        body.joint_id, body.counted_qty, seller_id=body.seller_id, note=body.note
    )
    return {"data": AuditOut.model_validate(row)}


@router.get("/audits", response_model=ListResponse[AuditOut])
async def list_audits(
    joint_id: Optional[str] = Query(default=None, alias="jointId"),
    seller_id: Optional[str] = Query(default=None, alias="sellerId"),
    store: Store = Depends(get_store),
):
    rows = await _svc(store).list_audits(joint_id=joint_id, seller_id=seller_id)
    return listed([AuditOut.model_validate(r) for r in rows])
