from typing import Generic, TypeVar, Any, Dict, List, Optional, Union
from motor.motor_asyncio import AsyncIOMotorCollection
from bson import ObjectId
from inventory_api.models.base import MongoModel, utcnow

T = TypeVar("T", bound=MongoModel)


def to_object_id(id: str) -> Union[ObjectId, str]:
    """ObjectId for valid hex ids, the raw value otherwise (lookups then simply miss)."""
    return ObjectId(id) if ObjectId.is_valid(id) else id


class BaseRepository(Generic[T]):
    def __init__(self, collection: AsyncIOMotorCollection, model_cls: type[T]):
        self.collection = collection
        self.model_cls = model_cls

    async def get(self, id: str) -> Optional[T]:
        """Get a document by ID, active or not."""
        doc = await self.collection.find_one({"_id": to_object_id(id)})
        return self.model_cls.from_mongo(doc) if doc else None

    async def get_active(self, id: str) -> Optional[T]:
        """Get a document by ID, skipping soft-deleted ones."""
        doc = await self.collection.find_one({"_id": to_object_id(id), "active": True})
        return self.model_cls.from_mongo(doc) if doc else None

    async def get_by_field(self, field: str, value: Any) -> Optional[T]:
        """Get a document by a specific field."""
        doc = await self.collection.find_one({field: value})
        return self.model_cls.from_mongo(doc) if doc else None

    async def list(self,
                   filter: Optional[Dict[str, Any]] = None,
                   skip: int = 0,
                   limit: int = 100,
                   include_inactive: bool = False,
                   sort: Optional[List] = None) -> List[T]:
        """List documents with optional filter and pagination."""
        query = dict(filter or {})
        if not include_inactive:
            query["active"] = True
        cursor = self.collection.find(query)
        if sort:
            cursor = cursor.sort(sort)
        cursor = cursor.skip(skip).limit(limit)
        docs = await cursor.to_list(length=limit)
        return [self.model_cls.from_mongo(doc) for doc in docs]

    async def create(self, model: T) -> T:
        """Create a new document."""
        data = model.to_mongo()
        result = await self.collection.insert_one(data)
        model.id = str(result.inserted_id)
        return model

    async def save(self, model: T) -> T:
        """Replace the whole document (upsert)."""
        if model.id is None:
            return await self.create(model)
        if hasattr(model, "updated_at"):
            model.updated_at = utcnow()
        data = model.to_mongo()
        await self.collection.replace_one({"_id": data["_id"]}, data, upsert=True)
        return model

    async def update(self, id: str, update_data: Dict[str, Any]) -> Optional[T]:
        """Update a document by ID."""
        update_data = dict(update_data)
        update_data.setdefault("updated_at", utcnow())
        await self.collection.update_one(
            {"_id": to_object_id(id)},
            {"$set": update_data}
        )
        return await self.get(id)

    async def soft_delete(self, id: str) -> bool:
        """Mark a document inactive. Returns False if it does not exist."""
        now = utcnow()
        result = await self.collection.update_one(
            {"_id": to_object_id(id)},
            {"$set": {"active": False, "deleted_at": now, "updated_at": now}}
        )
        return result.matched_count > 0

    async def count(self, filter: Optional[Dict[str, Any]] = None, include_inactive: bool = False) -> int:
        """Count documents matching a filter."""
        query = dict(filter or {})
        if not include_inactive:
            query["active"] = True
        return await self.collection.count_documents(query)
