import re
from typing import Optional
from inventory_api.repositories.base import BaseRepository, T

class TaxonomyRepository(BaseRepository[T]):
    """Brands and categories: named, soft-deletable, names unique ignoring case."""

    async def get_by_name(self, name: str, exclude_id: Optional[str] = None) -> Optional[T]:
        filter = {
            "name": {"$regex": f"^{re.escape(name.strip())}$", "$options": "i"},
            "active": True,
        }
        doc = await self.collection.find_one(filter)
        if not doc or (exclude_id and str(doc["_id"]) == exclude_id):
            return None
        return self.model_cls.from_mongo(doc)
