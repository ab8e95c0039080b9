"""Assignment Pydantic schemas (request DTOs and response models)."""


from datetime import datetime

from pydantic import Field

from jointops.schemas.common import CamelModel, Note

class AssignmentCreate(CamelModel):
    seller_id: str = Field(min_length=1)
    joint_id: str = Field(min_length=1)
    note: Note = None

class AssignmentRevoke(CamelModel):
    note: Note = None

class BindingOut(CamelModel):
    assignment_id: str
    seller_id: str
    seller_name: str
    joint_id: str
    joint_name: str
    start_at: datetime
    end_at: datetime | None = None
    note: str = ""
    active: bool

class RevokeOut(CamelModel):
    seller_id: str
    closed: int
