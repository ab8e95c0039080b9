"""Reference-data Pydantic schemas."""


from jointops.schemas.common import CamelModel

class JointOut(CamelModel):
    id: str
    name: str
    is_active: bool

class SellerOut(CamelModel):
    # pin_hash is never serialized
    id: str
    name: str
    is_active: bool

class SupplierOut(CamelModel):
    id: str
    name: str
    phone_whatsapp: str | None = None
    note: str | None = None
    is_active: bool

class ReferenceOut(CamelModel):
    joints: list[JointOut]
    sellers: list[SellerOut]
    suppliers: list[SupplierOut]

class PinUpdate(CamelModel):
    pin: str
