from typing import Any, Dict, List, Optional
from inventory_api.models.product import Product
from inventory_api.models.base import utcnow
from inventory_api.repositories.base import BaseRepository, to_object_id

class ProductRepository(BaseRepository[Product]):

    async def inc_stock(self,
                        product_id: str,
                        variant_name: Optional[str],
                        amount: int,
                        receipt_key: Optional[str] = None) -> bool:
        """
        Atomically add `amount` to one stock counter.
        With a receipt_key the update only matches if that key was not applied
        before, and records it in the same write. Returns True if a document changed.
        """
        filter: Dict[str, Any] = {"_id": to_object_id(product_id)}
        if variant_name:
            filter["variants.name"] = variant_name
            field = "variants.$.stock"
        else:
            field = "stock"

        update: Dict[str, Any] = {
            "$inc": {field: amount},
            "$set": {"updated_at": utcnow()},
        }
        if receipt_key:
            filter["applied_receipts"] = {"$ne": receipt_key}
            update["$push"] = {"applied_receipts": receipt_key}

        result = await self.collection.update_one(filter, update)
        return result.matched_count > 0

    async def dec_stock_if_available(self, product_id: str, variant_name: Optional[str], amount: int) -> bool:
        """Atomically subtract `amount` only when the counter holds at least that much."""
        filter: Dict[str, Any] = {"_id": to_object_id(product_id), "active": True}
        if variant_name:
            filter["variants"] = {"$elemMatch": {"name": variant_name, "stock": {"$gte": amount}}}
            field = "variants.$.stock"
        else:
            filter["stock"] = {"$gte": amount}
            field = "stock"

        result = await self.collection.update_one(
            filter,
            {"$inc": {field: -amount}, "$set": {"updated_at": utcnow()}}
        )
        return result.matched_count > 0

    async def low_stock(self, threshold: int, limit: int = 100) -> List[Product]:
        """Active products with a stock counter at or below the threshold."""
        filter = {
            "$or": [
                {"has_variants": False, "stock": {"$lte": threshold}},
                {"has_variants": True, "variants.stock": {"$lte": threshold}},
            ]
        }
        return await self.list(filter, limit=limit)
