from typing import List, Type

from fastapi import APIRouter, Depends

from inventory_api.database import db
from inventory_api.errors import DuplicateEntry, NotFound
from inventory_api.guardrails.decorators import require_permission
from inventory_api.guardrails.permissions import Permission
from inventory_api.models.base import SoftDeleteModel
from inventory_api.models.taxonomy import Brand, Category, TaxonomyIn
from inventory_api.models.user import User


def build_router(collection: str, model_cls: Type[SoftDeleteModel], label: str) -> APIRouter:
    """
    CRUD routes for a named taxonomy (brands, categories).
    `collection` is the attribute name of the repository on `db`.
    """
    router = APIRouter(prefix=f"/api/{collection}", tags=[collection.title()])

    def repo():
        return getattr(db, collection)

    def fields(payload: TaxonomyIn) -> dict:
        data = payload.model_dump()
        return {k: v for k, v in data.items() if k in model_cls.model_fields}

    @router.get("/", response_model=List[model_cls])
    async def list_entries(
        skip: int = 0,
        limit: int = 100,
        current_user: User = Depends(require_permission(Permission.VIEW_INVENTORY))
    ):
        return await repo().list(skip=skip, limit=limit, sort=[("name", 1)])

    @router.post("/", response_model=model_cls, status_code=201)
    async def create_entry(
        payload: TaxonomyIn,
        current_user: User = Depends(require_permission(Permission.MANAGE_CATALOG))
    ):
        if await repo().get_by_name(payload.name):
            raise DuplicateEntry(f'{label} "{payload.name}" already exists')
        return await repo().create(model_cls(**fields(payload)))

    @router.put("/{entry_id}", response_model=model_cls)
    async def update_entry(
        entry_id: str,
        payload: TaxonomyIn,
        current_user: User = Depends(require_permission(Permission.MANAGE_CATALOG))
    ):
        if not await repo().get_active(entry_id):
            raise NotFound(label, entry_id)
        if await repo().get_by_name(payload.name, exclude_id=entry_id):
            raise DuplicateEntry(f'{label} "{payload.name}" already exists')
        return await repo().update(entry_id, fields(payload))

    @router.delete("/{entry_id}")
    async def delete_entry(
        entry_id: str,
        current_user: User = Depends(require_permission(Permission.MANAGE_CATALOG))
    ):
        if not await repo().soft_delete(entry_id):
            raise NotFound(label, entry_id)
        return {"message": f"{label} deactivated successfully"}

    return router


brands_router = build_router("brands", Brand, "Brand")
categories_router = build_router("categories", Category, "Category")
