from typing import Optional
from pymongo.errors import DuplicateKeyError
from inventory_api.errors import DuplicateEntry
from inventory_api.models.user import User
from inventory_api.repositories.base import BaseRepository

class UserRepository(BaseRepository[User]):
    async def get_by_email(self, email: str, include_inactive: bool = False) -> Optional[User]:
        """
        Look up a user by email. Logins only see active accounts; duplicate
        checks pass include_inactive=True since the unique index covers every user.
        """
        query = {"email": email.strip().lower()}
        if not include_inactive:
            query["active"] = True
        doc = await self.collection.find_one(query)
        return self.model_cls.from_mongo(doc) if doc else None

    async def create(self, model: User) -> User:
        try:
            return await super().create(model)
        except DuplicateKeyError as e:
            raise DuplicateEntry("Email already in use.") from e

    async def update(self, id: str, update_data) -> Optional[User]:
        try:
            return await super().update(id, update_data)
        except DuplicateKeyError as e:
            raise DuplicateEntry("Email already in use.") from e
