from typing import List, Optional


class InventoryError(Exception):
    """Base class for domain errors raised by the services layer."""
    status_code: int = 400
    code: str = "inventory_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(InventoryError):
    status_code = 404
    code = "not_found"

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} {entity_id} not found or inactive")
        self.entity = entity
        self.entity_id = entity_id


class ProductNotFound(NotFound):
    def __init__(self, product_id: str):
        super().__init__("Product", product_id)


class OrderNotFound(NotFound):
    def __init__(self, order_id: str):
        super().__init__("Purchase order", order_id)


class SupplierNotFound(NotFound):
    def __init__(self, supplier_id: str):
        super().__init__("Supplier", supplier_id)


class VariantNotFound(InventoryError):
    status_code = 404
    code = "variant_not_found"

    def __init__(self, product_id: str, variant: str):
        super().__init__(f"Variant '{variant}' not found on product {product_id}")
        self.product_id = product_id
        self.variant = variant


class InvalidTransition(InventoryError):
    status_code = 409
    code = "invalid_transition"

    def __init__(self, from_status: str, to_status: str):
        super().__init__(f"Invalid transition: cannot move from {from_status} to {to_status}")
        self.from_status = from_status
        self.to_status = to_status


class VariantMismatch(InventoryError):
    status_code = 400
    code = "variant_mismatch"

    def __init__(self, product_name: str, message: str):
        super().__init__(message)
        self.product_name = product_name


class ImmutableAfterDraft(InventoryError):
    status_code = 409
    code = "immutable_after_draft"

    def __init__(self, po_number: str, status: str):
        super().__init__(f"Only draft purchase orders can be edited ({po_number} is {status})")
        self.po_number = po_number
        self.status = status


class DuplicateOrderNumber(InventoryError):
    status_code = 409
    code = "duplicate_order_number"

    def __init__(self, po_number: str):
        super().__init__(f"Purchase order number {po_number} already exists, retry the request")
        self.po_number = po_number


class InsufficientStock(InventoryError):
    status_code = 400
    code = "insufficient_stock"

    def __init__(self, product_name: str, requested: int, available: Optional[int] = None):
        detail = f"Not enough stock for {product_name}"
        if available is not None:
            detail += f" (requested {requested}, available {available})"
        super().__init__(detail)
        self.product_name = product_name
        self.requested = requested
        self.available = available


class DuplicateEntry(InventoryError):
    status_code = 400
    code = "duplicate"


class StockApplicationError(InventoryError):
    """
    Raised when a receipt fails part-way through its line items.
    Increments listed in `applied` stay in place; the order keeps its status.
    """
    status_code = 500
    code = "stock_application_failed"

    def __init__(self, po_number: str, applied: List[str], cause: Exception):
        super().__init__(
            f"Stock update failed while receiving {po_number} after {len(applied)} line(s): {cause}"
        )
        self.po_number = po_number
        self.applied = applied
        self.cause = cause
