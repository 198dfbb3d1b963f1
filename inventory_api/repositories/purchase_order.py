import re
from typing import Dict, List
from pymongo.errors import DuplicateKeyError
from inventory_api.errors import DuplicateOrderNumber
from inventory_api.models.purchase_order import PurchaseOrder
from inventory_api.repositories.base import BaseRepository

class PurchaseOrderRepository(BaseRepository[PurchaseOrder]):

    async def find_by_id(self, order_id: str) -> PurchaseOrder | None:
        return await self.get(order_id)

    async def insert(self, order: PurchaseOrder) -> PurchaseOrder:
        """Insert a new order; the unique po_number index turns races into DuplicateOrderNumber."""
        try:
            return await self.create(order)
        except DuplicateKeyError as e:
            raise DuplicateOrderNumber(order.po_number) from e

    async def count_by_year_prefix(self, year: int, prefix: str = "PO") -> int:
        """Number of orders (active or not) whose number carries the given year."""
        pattern = f"^{re.escape(prefix)}-{year}-"
        return await self.collection.count_documents({"po_number": {"$regex": pattern}})

    async def list_active(self, skip: int = 0, limit: int = 100, include_inactive: bool = False) -> List[PurchaseOrder]:
        return await self.list(
            skip=skip,
            limit=limit,
            include_inactive=include_inactive,
            sort=[("order_date", -1)]
        )

    async def count_by_status(self) -> Dict[str, int]:
        pipeline = [
            {"$match": {"active": True}},
            {"$group": {"_id": "$status", "count": {"$sum": 1}}}
        ]
        cursor = self.collection.aggregate(pipeline)
        return {doc["_id"]: doc["count"] for doc in await cursor.to_list(length=None)}
