from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator
from inventory_api.models.base import SoftDeleteModel

class Supplier(SoftDeleteModel):
    name: str
    company: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None


class SupplierIn(BaseModel):
    name: str = Field(..., min_length=1)
    company: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Supplier name is required")
        return v
