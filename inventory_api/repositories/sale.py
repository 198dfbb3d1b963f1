from typing import List
from inventory_api.models.sale import Sale
from inventory_api.repositories.base import BaseRepository

class SaleRepository(BaseRepository[Sale]):
    async def list_recent(self, skip: int = 0, limit: int = 100) -> List[Sale]:
        return await self.list(skip=skip, limit=limit, sort=[("date", -1)])
