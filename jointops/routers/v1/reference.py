"""Reference-data router — joints, sellers, suppliers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from jointops.core.response import DataResponse
from jointops.schemas.reference import PinUpdate, ReferenceOut
from jointops.services.reference import ReferenceService
from jointops.store import Store, get_store

router = APIRouter(prefix="/reference", tags=["Reference"])


def _svc(store: Store) -> ReferenceService:
    return ReferenceService(store)


@router.get("", response_model=DataResponse[ReferenceOut])
async def reference_data(store: Store = Depends(get_store)):
    data = await _svc(store).fetch_reference_data()
    return {"data": ReferenceOut.model_validate(data)}


@router.put("/sellers/{seller_id}/pin", status_code=status.HTTP_204_NO_CONTENT)
async def set_seller_pin(seller_id: str, body: PinUpdate, store: Store = Depends(get_store)):
    await _svc(store).set_seller_pin(seller_id, body.pin)
