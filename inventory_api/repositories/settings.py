from typing import Any, Dict
from inventory_api.models.base import utcnow
from inventory_api.models.settings import BusinessSettings
from inventory_api.repositories.base import BaseRepository

class SettingsRepository(BaseRepository[BusinessSettings]):

    async def get_or_create(self) -> BusinessSettings:
        """Return the settings singleton, creating the defaults on first access."""
        doc = await self.collection.find_one({})
        if doc:
            return self.model_cls.from_mongo(doc)
        return await self.create(BusinessSettings())

    async def apply(self, changes: Dict[str, Any]) -> BusinessSettings:
        current = await self.get_or_create()
        if changes:
            changes = dict(changes, updated_at=utcnow())
            return await self.update(current.id, changes)
        return current
