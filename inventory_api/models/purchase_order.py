from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from inventory_api.models.base import SoftDeleteModel, utcnow

class POStatus(str, Enum):
    DRAFT = "draft"
    ORDERED = "ordered"
    RECEIVED = "received"
    CANCELLED = "cancelled"

# Lifecycle: the only legal moves between statuses
VALID_TRANSITIONS: Dict[POStatus, List[POStatus]] = {
    POStatus.DRAFT: [POStatus.ORDERED, POStatus.CANCELLED],
    POStatus.ORDERED: [POStatus.RECEIVED, POStatus.CANCELLED],
    POStatus.RECEIVED: [],
    POStatus.CANCELLED: [],
}

TERMINAL_STATUSES = {status for status, targets in VALID_TRANSITIONS.items() if not targets}


def can_transition(from_status: POStatus, to_status: POStatus) -> bool:
    return to_status in VALID_TRANSITIONS.get(from_status, [])


class LineItem(BaseModel):
    """One product/variant/quantity/cost entry on a purchase order."""
    product_id: str
    product_name: Optional[str] = None
    variant: Optional[str] = Field(None, description="Variant name, e.g. 'Red - M'")
    variant_snapshot: Optional[Dict[str, Any]] = None

    quantity: int = Field(..., ge=1)
    unit_cost: float = Field(..., ge=0)
    subtotal: Optional[float] = Field(None, ge=0)

    @model_validator(mode="after")
    def fill_subtotal(self):
        if self.subtotal is None:
            self.subtotal = round(self.quantity * self.unit_cost, 2)
        return self


class StatusHistoryEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_status: POStatus = Field(..., alias="from")
    to_status: POStatus = Field(..., alias="to")
    changed_by: Optional[str] = None
    changed_at: datetime = Field(default_factory=utcnow)


class PurchaseOrder(SoftDeleteModel):
    """
    Purchase order document. Line items and status history are embedded.
    """
    po_number: str = Field(..., description="PO-<year>-<seq>, unique")
    supplier_id: str

    order_date: datetime = Field(default_factory=utcnow)
    expected_date: Optional[datetime] = None
    received_date: Optional[datetime] = None

    status: POStatus = Field(default=POStatus.DRAFT)
    items: List[LineItem] = Field(default_factory=list)
    status_history: List[StatusHistoryEntry] = Field(default_factory=list)

    notes: Optional[str] = None
    total_amount: float = Field(0.0, ge=0)

    created_by: Optional[str] = None
    received_by: Optional[str] = None

    def calculate_total(self) -> float:
        """Sum of line subtotals."""
        return round(sum(item.subtotal or 0.0 for item in self.items), 2)

    @property
    def allowed_transitions(self) -> List[POStatus]:
        return list(VALID_TRANSITIONS.get(self.status, []))


# Request Models
class LineItemIn(BaseModel):
    product_id: str
    variant: Optional[str] = None
    quantity: int = Field(..., ge=1)
    unit_cost: float = Field(..., ge=0)
    subtotal: Optional[float] = Field(None, ge=0)


class PurchaseOrderCreate(BaseModel):
    supplier_id: str
    items: List[LineItemIn] = Field(..., min_length=1)
    notes: Optional[str] = None
    expected_date: Optional[datetime] = None
    total_amount: Optional[float] = Field(None, ge=0)


class PurchaseOrderUpdate(BaseModel):
    supplier_id: Optional[str] = None
    items: Optional[List[LineItemIn]] = Field(None, min_length=1)
    notes: Optional[str] = None
    expected_date: Optional[datetime] = None
    total_amount: Optional[float] = Field(None, ge=0)


class StatusChange(BaseModel):
    # Plain string: unknown values are rejected by the transition table, not the schema
    status: str
