import logging
from typing import Optional

from inventory_api.database import db as default_db
from inventory_api.errors import InsufficientStock, ProductNotFound, VariantNotFound
from inventory_api.models.product import Product

logger = logging.getLogger(__name__)

class InventoryLedger:
    """
    Stock counters keyed by product id and, for variant products, variant name.
    Every change is a single atomic update on the product document.
    """
    def __init__(self, database=None):
        self._db = database

    @property
    def db(self):
        return self._db or default_db

    async def get_product(self, product_id: str) -> Product:
        product = await self.db.products.get_active(product_id)
        if not product:
            raise ProductNotFound(product_id)
        return product

    async def increment_stock(self,
                              product_id: str,
                              variant_name: Optional[str],
                              amount: int,
                              receipt_key: Optional[str] = None) -> bool:
        """
        Add `amount` to the product's stock, or to the named variant's stock.

        Returns False without changing anything when `receipt_key` was already
        applied to this product. Raises ProductNotFound / VariantNotFound.
        """
        applied = await self.db.products.inc_stock(product_id, variant_name, amount, receipt_key)
        if applied:
            logger.debug(f"Stock +{amount} on {product_id} ({variant_name or 'base'})")
            return True

        # Nothing matched: work out why
        product = await self.db.products.get(product_id)
        if not product:
            raise ProductNotFound(product_id)
        if variant_name and not product.find_variant(variant_name):
            raise VariantNotFound(product_id, variant_name)
        if receipt_key and receipt_key in product.applied_receipts:
            logger.info(f"Receipt {receipt_key} already applied to {product_id}, skipping")
            return False
        raise RuntimeError(f"Stock update on {product_id} matched no document")

    async def decrement_stock(self, product_id: str, variant_name: Optional[str], amount: int) -> None:
        """Remove `amount` from a stock counter, refusing to go below zero."""
        if await self.db.products.dec_stock_if_available(product_id, variant_name, amount):
            logger.debug(f"Stock -{amount} on {product_id} ({variant_name or 'base'})")
            return

        product = await self.db.products.get_active(product_id)
        if not product:
            raise ProductNotFound(product_id)
        if variant_name and not product.find_variant(variant_name):
            raise VariantNotFound(product_id, variant_name)
        raise InsufficientStock(product.name, amount, product.stock_for(variant_name))
