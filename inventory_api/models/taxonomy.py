from typing import Optional
from pydantic import BaseModel, Field, field_validator
from inventory_api.models.base import SoftDeleteModel

class Brand(SoftDeleteModel):
    name: str
    description: Optional[str] = None


class Category(SoftDeleteModel):
    name: str


class TaxonomyIn(BaseModel):
    """Create/update payload shared by brands and categories."""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        # "Nike " and "Nike" are the same brand
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v
