"""Standardized JSON response envelope helpers."""


from typing import Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Single-item response envelope: `{ data: {...} }`"""

    data: T

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


class ListMeta(BaseModel):
    count: int


class ListResponse(BaseModel, Generic[T]):
    """List response envelope: `{ data: [...], meta: { count } }`"""

    data: list[T]
    meta: ListMeta

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


def listed(items: list) -> dict:
    """Build a list response dict for use with ListResponse."""
    return {"data": items, "meta": {"count": len(items)}}
