from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator
from inventory_api.models.base import SoftDeleteModel

DEFAULT_VARIANT_NAME = "Variant"


def build_variant_name(name: Optional[str], attributes: Optional[Dict[str, Any]]) -> str:
    """
    Name a variant from its attributes when no explicit name was given.
    Values are ordered by attribute key, e.g. {"size": "M", "color": "Red"} -> "Red - M".
    """
    if name and name.strip():
        return name.strip()
    if attributes:
        return " - ".join(str(attributes[key]) for key in sorted(attributes))
    return DEFAULT_VARIANT_NAME


class Variant(BaseModel):
    """A named sub-SKU carrying its own stock and price."""
    name: str
    attributes: Dict[str, Any] = Field(default_factory=dict)
    stock: int = 0
    price: float = Field(..., ge=0)


class Product(SoftDeleteModel):
    """
    Catalog product. With has_variants the variant stock counters are
    authoritative and the product-level stock/price are ignored.
    """
    name: str
    brand: Optional[str] = None
    category: Optional[str] = None

    stock: int = 0
    price: Optional[float] = None

    has_variants: bool = False
    variants: List[Variant] = Field(default_factory=list)

    # Receipt keys ("<order id>:<line>") already added to stock
    applied_receipts: List[str] = Field(default_factory=list)

    def find_variant(self, name: Optional[str]) -> Optional[Variant]:
        if not name:
            return None
        return next((v for v in self.variants if v.name == name), None)

    def stock_for(self, variant_name: Optional[str] = None) -> int:
        if self.has_variants:
            variant = self.find_variant(variant_name)
            return variant.stock if variant else 0
        return self.stock

    def price_for(self, variant_name: Optional[str] = None) -> float:
        if self.has_variants:
            variant = self.find_variant(variant_name)
            return variant.price if variant else 0.0
        return self.price or 0.0

    @property
    def total_stock(self) -> int:
        if self.has_variants:
            return sum(v.stock for v in self.variants)
        return self.stock


class ProductPublic(Product):
    """Product as returned by the API; receipt keys stay on the stored document only."""
    applied_receipts: List[str] = Field(default_factory=list, exclude=True)


# Request Models
class VariantIn(BaseModel):
    name: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)
    stock: int = Field(0, ge=0)
    price: float = Field(..., gt=0)

    @field_validator("attributes")
    @classmethod
    def attributes_required(cls, v):
        if not v:
            raise ValueError("Each variant must have attributes defined")
        return v


class ProductIn(BaseModel):
    name: str = Field(..., min_length=1)
    brand: Optional[str] = None
    category: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    price: Optional[float] = Field(None, gt=0)
    has_variants: bool = False
    variants: List[VariantIn] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Product name is required")
        return v

    @model_validator(mode="after")
    def check_mode(self):
        if self.has_variants:
            if not self.variants:
                raise ValueError("Variants must be provided when has_variants is true")
        else:
            if self.price is None:
                raise ValueError("Price must be greater than 0 for non-variant products")
            if self.stock is None:
                self.stock = 0
        return self

    def to_fields(self) -> Dict[str, Any]:
        """Fields to store on the Product document, normalized for its mode."""
        if self.has_variants:
            variants = [
                Variant(
                    name=build_variant_name(v.name, v.attributes),
                    attributes=v.attributes,
                    stock=v.stock,
                    price=v.price,
                )
                for v in self.variants
            ]
            return {
                "name": self.name,
                "brand": self.brand,
                "category": self.category,
                "has_variants": True,
                "variants": variants,
                "stock": 0,
                "price": None,
            }
        return {
            "name": self.name,
            "brand": self.brand,
            "category": self.category,
            "has_variants": False,
            "variants": [],
            "stock": self.stock,
            "price": self.price,
        }
