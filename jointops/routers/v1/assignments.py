"""Seller assignment router — resolve, assign, revoke, history."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from jointops.core.exceptions import NotFoundError
from jointops.core.response import DataResponse, ListResponse, listed
from jointops.schemas.assignment import (
    AssignmentCreate,
    AssignmentRevoke,
    BindingOut,
    RevokeOut,
)
from jointops.services.assignments import AssignmentResolver
from jointops.store import Store, get_store

router = APIRouter(prefix="/assignments", tags=["Assignments"])


def _svc(store: Store) -> AssignmentResolver:
    return AssignmentResolver(store)


@router.get("", response_model=ListResponse[BindingOut])
async def resolve_active(
    joint_id: Optional[str] = Query(default=None, alias="jointId"),
    as_of: Optional[datetime] = Query(default=None, alias="asOf"),
    store: Store = Depends(get_store),
):
    """Sellers currently assigned to a joint (or to any joint), newest assignment first."""
    bindings = await _svc(store).resolve_active(joint_id=joint_id, as_of=as_of)
    return listed([BindingOut.model_validate(b) for b in bindings])


@router.post("", response_model=DataResponse[BindingOut], status_code=status.HTTP_201_CREATED)
async def assign(body: AssignmentCreate, store: Store = Depends(get_store)):
    """Move a seller to a joint, closing any assignment they currently hold."""
    binding = await _svc(store).assign(body.seller_id, body.joint_id, note=body.note)
    return {"data": BindingOut.model_validate(binding)}


@router.get("/history", response_model=ListResponse[BindingOut])
async def history(
    seller_id: Optional[str] = Query(default=None, alias="sellerId"),
    joint_id: Optional[str] = Query(default=None, alias="jointId"),
    store: Store = Depends(get_store),
):
    bindings = await _svc(store).history(seller_id=seller_id, joint_id=joint_id)
    return listed([BindingOut.model_validate(b) for b in bindings])


@router.get("/sellers/{seller_id}/current", response_model=DataResponse[BindingOut])
async def current_joint(seller_id: str, store: Store = Depends(get_store)):
    binding = await _svc(store).current_joint(seller_id)
    if binding is None:
        raise NotFoundError("Current assignment for seller", seller_id)
    return {"data": BindingOut.model_validate(binding)}


@router.post("/sellers/{seller_id}/revoke", response_model=DataResponse[RevokeOut])
async def revoke(
    seller_id: str,
    body: AssignmentRevoke | None = None,
    store: Store = Depends(get_store),
):
    closed = await _svc(store).revoke(seller_id, note=body.note if body else None)
    return {"data": RevokeOut(seller_id=seller_id, closed=closed)}
