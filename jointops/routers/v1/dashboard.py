"""Dashboard router — windowed balances, activity feed, upcoming events."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from jointops.core.response import DataResponse, ListResponse, listed
from jointops.schemas.dashboard import BalancesOut, UpcomingEventOut
from jointops.services.reconciliation import ReconciliationEngine
from jointops.store import Store, get_store

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def _svc(store: Store) -> ReconciliationEngine:
    return ReconciliationEngine(store)


@router.get("", response_model=DataResponse[BalancesOut])
async def balances(
    joint_id: Optional[str] = Query(default=None, alias="jointId"),
    seller_id: Optional[str] = Query(default=None, alias="sellerId"),
    window: Optional[int] = Query(default=None, ge=1, le=500),
    store: Store = Depends(get_store),
):
    """Expected stock and amount owed over the most recent rows of each stream."""
    result = await _svc(store).compute_balances(joint_id=joint_id, window=window, seller_id=seller_id)
    return {"data": BalancesOut.model_validate(result)}


@router.get("/upcoming", response_model=ListResponse[UpcomingEventOut])
async def upcoming(
    joint_id: Optional[str] = Query(default=None, alias="jointId"),
    horizon_days: Optional[int] = Query(default=None, ge=0, le=365, alias="horizonDays"),
    store: Store = Depends(get_store),
):
    events = await _svc(store).compute_upcoming(joint_id=joint_id, horizon_days=horizon_days)
    return listed([UpcomingEventOut.model_validate(e) for e in events])
