"""Shared Pydantic schema base with camelCase aliases, plus common field types."""

from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator
from pydantic.alias_generators import to_camel


def _blank_to_none(value: Any) -> Any:
    # forms submit "" for untouched inputs
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


# Optional free-text note; blank input is stored as NULL
Note = Annotated[Optional[str], BeforeValidator(_blank_to_none)]


class CamelModel(BaseModel):
    """All API schemas inherit from this to auto-generate camelCase aliases."""

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }


class HealthResponse(BaseModel):
    """Health-check response returned by /health."""
    status: str = "ok"
    app: str
    env: str
