import logging
from datetime import datetime
from typing import List, Optional, Union

from inventory_api.config import settings
from inventory_api.database import db as default_db
from inventory_api.errors import (
    InvalidTransition,
    ImmutableAfterDraft,
    OrderNotFound,
    ProductNotFound,
    StockApplicationError,
    SupplierNotFound,
    VariantMismatch,
)
from inventory_api.models.base import utcnow
from inventory_api.models.purchase_order import (
    LineItem,
    LineItemIn,
    POStatus,
    PurchaseOrder,
    PurchaseOrderUpdate,
    StatusHistoryEntry,
    can_transition,
)
from inventory_api.services.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)

class PurchaseOrderService:
    """
    Purchase order lifecycle: draft -> ordered -> received | cancelled.

    Receiving an order adds every line's quantity to stock through the
    InventoryLedger. Product updates are individual writes; each line carries a
    receipt key ("<order id>:<line index>") so a retry after a partial failure
    only applies the lines that did not make it.
    """
    def __init__(self, database=None, ledger: Optional[InventoryLedger] = None):
        self._db = database
        self.ledger = ledger or InventoryLedger(database)

    @property
    def db(self):
        return self._db or default_db

    # --- helpers -------------------------------------------------------

    async def _require_supplier(self, supplier_id: str) -> None:
        supplier = await self.db.suppliers.get_active(supplier_id)
        if not supplier:
            raise SupplierNotFound(supplier_id)

    async def _build_items(self, items: List[LineItemIn]) -> List[LineItem]:
        """Validate requested lines against the catalog and snapshot product data."""
        line_items = []
        for item in items:
            product = await self.ledger.get_product(item.product_id)

            snapshot = None
            if product.has_variants:
                if not item.variant:
                    raise VariantMismatch(product.name, f'Product "{product.name}" requires a variant.')
                variant = product.find_variant(item.variant)
                if not variant:
                    raise VariantMismatch(
                        product.name,
                        f'Variant "{item.variant}" does not belong to product "{product.name}".'
                    )
                snapshot = dict(variant.attributes)
            elif item.variant:
                raise VariantMismatch(
                    product.name,
                    f'Product "{product.name}" has no variants, but a variant was provided.'
                )

            line_items.append(LineItem(
                product_id=item.product_id,
                product_name=product.name,
                variant=item.variant if product.has_variants else None,
                variant_snapshot=snapshot,
                quantity=item.quantity,
                unit_cost=item.unit_cost,
                subtotal=item.subtotal,
            ))
        return line_items

    async def _next_po_number(self) -> str:
        year = utcnow().year
        prefix = settings.PO_NUMBER_PREFIX
        existing = await self.db.purchase_orders.count_by_year_prefix(year, prefix)
        seq = await self.db.counters.next_value(f"{prefix.lower()}-{year}", floor=existing)
        return f"{prefix}-{year}-{seq:04d}"

    # --- operations ----------------------------------------------------

    async def create_order(self,
                           supplier_id: str,
                           items: List[LineItemIn],
                           notes: Optional[str] = None,
                           expected_date: Optional[datetime] = None,
                           total_amount: Optional[float] = None,
                           created_by: Optional[str] = None) -> PurchaseOrder:
        """Validate and store a new draft order with the next PO number."""
        await self._require_supplier(supplier_id)
        line_items = await self._build_items(items)

        order = PurchaseOrder(
            po_number=await self._next_po_number(),
            supplier_id=supplier_id,
            items=line_items,
            notes=notes,
            expected_date=expected_date,
            created_by=created_by,
        )
        order.total_amount = total_amount if total_amount is not None else order.calculate_total()

        await self.db.purchase_orders.insert(order)
        logger.info(f"Created purchase order {order.po_number} ({len(line_items)} items)")
        return order

    async def get_order(self, order_id: str) -> PurchaseOrder:
        order = await self.db.purchase_orders.find_by_id(order_id)
        if not order or not order.active:
            raise OrderNotFound(order_id)
        return order

    async def list_active(self, skip: int = 0, limit: int = 100, include_inactive: bool = False) -> List[PurchaseOrder]:
        return await self.db.purchase_orders.list_active(skip=skip, limit=limit, include_inactive=include_inactive)

    async def update_order(self, order_id: str, changes: PurchaseOrderUpdate) -> PurchaseOrder:
        """Edit supplier, items, notes, expected date or total. Draft orders only."""
        order = await self.get_order(order_id)
        if order.status != POStatus.DRAFT:
            raise ImmutableAfterDraft(order.po_number, order.status.value)

        fields = changes.model_dump(exclude_unset=True)
        if fields.get("supplier_id"):
            await self._require_supplier(fields["supplier_id"])
            order.supplier_id = fields["supplier_id"]
        if changes.items is not None:
            order.items = await self._build_items(changes.items)
            if "total_amount" not in fields:
                order.total_amount = order.calculate_total()
        if "notes" in fields:
            order.notes = changes.notes
        if "expected_date" in fields:
            order.expected_date = changes.expected_date
        if fields.get("total_amount") is not None:
            order.total_amount = changes.total_amount

        await self.db.purchase_orders.save(order)
        logger.info(f"Updated draft purchase order {order.po_number}")
        return order

    async def request_transition(self,
                                 order_id: str,
                                 target_status: Union[POStatus, str],
                                 actor_id: Optional[str]) -> PurchaseOrder:
        """
        Move an order along the transition table.
        Reaching `received` adds each line's quantity to stock first.
        """
        order = await self.get_order(order_id)
        current = order.status

        try:
            target = POStatus(target_status)
        except ValueError:
            raise InvalidTransition(current.value, str(target_status))
        if not can_transition(current, target):
            raise InvalidTransition(current.value, target.value)

        if target == POStatus.RECEIVED:
            await self._apply_receipt(order)
            order.received_date = utcnow()
            order.received_by = actor_id

        order.status_history.append(StatusHistoryEntry(
            from_status=current,
            to_status=target,
            changed_by=actor_id,
            changed_at=utcnow(),
        ))
        order.status = target
        await self.db.purchase_orders.save(order)

        logger.info(f"Purchase order {order.po_number}: {current.value} -> {target.value} by {actor_id}")
        return order

    async def _apply_receipt(self, order: PurchaseOrder) -> List[str]:
        applied: List[str] = []
        for index, item in enumerate(order.items):
            receipt_key = f"{order.id}:{index}"
            try:
                product = await self.db.products.get(item.product_id)
                if not product:
                    raise ProductNotFound(item.product_id)
                variant = item.variant if product.has_variants and item.variant else None
                await self.ledger.increment_stock(item.product_id, variant, item.quantity, receipt_key)
            except Exception as e:
                logger.error(f"Receipt of {order.po_number} failed on line {index}: {e}")
                raise StockApplicationError(order.po_number, applied, e) from e
            applied.append(receipt_key)
        return applied

    async def soft_delete(self, order_id: str) -> PurchaseOrder:
        """Deactivate an order. Status and any stock already received are left alone."""
        order = await self.db.purchase_orders.find_by_id(order_id)
        if not order:
            raise OrderNotFound(order_id)
        order.mark_deleted()
        await self.db.purchase_orders.save(order)
        logger.info(f"Deactivated purchase order {order.po_number}")
        return order

purchase_order_service = PurchaseOrderService()
