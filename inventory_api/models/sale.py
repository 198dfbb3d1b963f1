import random
import time
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field
from inventory_api.models.base import SoftDeleteModel, utcnow


def generate_invoice_number() -> str:
    """INV-<last 6 digits of epoch millis>-<0..999>"""
    stamp = str(int(time.time() * 1000))[-6:]
    return f"INV-{stamp}-{random.randint(0, 999)}"


class SaleItem(BaseModel):
    product_id: str
    product_name: Optional[str] = None
    variant: Optional[str] = None
    quantity: int = Field(..., ge=1)
    price_at_sale: float = Field(..., ge=0)

    @property
    def line_total(self) -> float:
        return self.price_at_sale * self.quantity


class Sale(SoftDeleteModel):
    """
    A recorded sale. Stock has already been deducted when this is saved.
    """
    user_id: str
    items: List[SaleItem] = Field(default_factory=list)
    total_amount: float = 0.0

    invoice_number: str = Field(default_factory=generate_invoice_number)
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None

    date: datetime = Field(default_factory=utcnow)

    def calculate_total(self) -> float:
        return round(sum(item.line_total for item in self.items), 2)


# Request Models
class SaleItemIn(BaseModel):
    product_id: str
    variant: Optional[str] = None
    quantity: int = Field(..., ge=1)


class SaleCreate(BaseModel):
    items: List[SaleItemIn] = Field(..., min_length=1)
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = Field(None, min_length=7, max_length=20)
