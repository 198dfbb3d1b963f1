import logging
from typing import List, Optional

from inventory_api.database import db as default_db
from inventory_api.errors import InsufficientStock, NotFound, VariantMismatch
from inventory_api.models.product import Product
from inventory_api.models.sale import Sale, SaleCreate, SaleItem, SaleItemIn
from inventory_api.services.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)

class SalesService:
    """
    Records a sale in one step: check every line, deduct stock, store the sale.
    If a deduction or the insert fails, stock already deducted for the sale is put back.
    """
    def __init__(self, database=None, ledger: Optional[InventoryLedger] = None):
        self._db = database
        self.ledger = ledger or InventoryLedger(database)

    @property
    def db(self):
        return self._db or default_db

    def _check_variant(self, product: Product, variant: Optional[str]) -> None:
        if product.has_variants:
            if not variant or not product.find_variant(variant):
                raise VariantMismatch(product.name, f'Product "{product.name}" requires a valid variant.')
        elif variant:
            raise VariantMismatch(product.name, f'Product "{product.name}" has no variants.')

    async def record_sale(self, payload: SaleCreate, user_id: str) -> Sale:
        # Validate everything before touching stock
        products = {}
        requested = {}
        for item in payload.items:
            product = products.get(item.product_id) or await self.ledger.get_product(item.product_id)
            self._check_variant(product, item.variant)
            products[item.product_id] = product

            key = (item.product_id, item.variant)
            requested[key] = requested.get(key, 0) + item.quantity
            available = product.stock_for(item.variant)
            if requested[key] > available:
                raise InsufficientStock(product.name, requested[key], available)

        sale_items: List[SaleItem] = []
        deducted: List[SaleItemIn] = []
        try:
            for item in payload.items:
                product = products[item.product_id]
                # Guarded update: a concurrent sale may have taken the stock meanwhile
                await self.ledger.decrement_stock(item.product_id, item.variant, item.quantity)
                deducted.append(item)
                sale_items.append(SaleItem(
                    product_id=item.product_id,
                    product_name=product.name,
                    variant=item.variant,
                    quantity=item.quantity,
                    price_at_sale=product.price_for(item.variant),
                ))

            sale = Sale(
                user_id=user_id,
                items=sale_items,
                customer_name=payload.customer_name,
                customer_email=payload.customer_email,
                customer_phone=payload.customer_phone,
            )
            sale.total_amount = sale.calculate_total()
            await self.db.sales.create(sale)
        except Exception as e:
            logger.warning(f"Sale failed after {len(deducted)} deduction(s), restoring stock: {e}")
            await self._restore(deducted)
            raise

        logger.info(f"Recorded sale {sale.invoice_number}: {len(sale_items)} items, total {sale.total_amount}")
        return sale

    async def _restore(self, deducted: List[SaleItemIn]) -> None:
        for item in reversed(deducted):
            await self.ledger.increment_stock(item.product_id, item.variant, item.quantity)

    async def get_sale(self, sale_id: str) -> Sale:
        sale = await self.db.sales.get_active(sale_id)
        if not sale:
            raise NotFound("Sale", sale_id)
        return sale

    async def list_sales(self, skip: int = 0, limit: int = 100) -> List[Sale]:
        return await self.db.sales.list_recent(skip=skip, limit=limit)

sales_service = SalesService()
