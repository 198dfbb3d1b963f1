from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

class CounterRepository:
    """
    Named monotonic sequences stored as {_id: key, seq: n}.
    """
    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def next_value(self, key: str, floor: int = 0) -> int:
        """
        Increment and return the sequence for `key`.
        `floor` lifts a fresh (or lagging) counter to at least that value first,
        so numbering continues after documents that predate the counter.
        """
        if floor:
            await self.collection.update_one(
                {"_id": key},
                {"$max": {"seq": floor}},
                upsert=True
            )
        doc = await self.collection.find_one_and_update(
            {"_id": key},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return int(doc["seq"])
