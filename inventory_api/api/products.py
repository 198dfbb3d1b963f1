import logging
from typing import List

from fastapi import APIRouter, Depends

from inventory_api.database import db
from inventory_api.errors import ProductNotFound
from inventory_api.guardrails.decorators import require_permission
from inventory_api.guardrails.permissions import Permission
from inventory_api.models.product import Product, ProductIn, ProductPublic
from inventory_api.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])

@router.get("/", response_model=List[ProductPublic])
async def list_products(
    skip: int = 0,
    limit: int = 50,
    current_user: User = Depends(require_permission(Permission.VIEW_INVENTORY))
):
    return await db.products.list(skip=skip, limit=limit, sort=[("created_at", -1)])

@router.get("/{product_id}", response_model=ProductPublic)
async def get_product(
    product_id: str,
    current_user: User = Depends(require_permission(Permission.VIEW_INVENTORY))
):
    product = await db.products.get_active(product_id)
    if not product:
        raise ProductNotFound(product_id)
    return product

@router.post("/", response_model=ProductPublic, status_code=201)
async def create_product(
    payload: ProductIn,
    current_user: User = Depends(require_permission(Permission.MANAGE_CATALOG))
):
    product = Product(**payload.to_fields())
    await db.products.create(product)
    logger.info(f"Created product {product.name} ({'variants' if product.has_variants else 'simple'})")
    return product

@router.put("/{product_id}", response_model=ProductPublic)
async def update_product(
    product_id: str,
    payload: ProductIn,
    current_user: User = Depends(require_permission(Permission.MANAGE_CATALOG))
):
    product = await db.products.get_active(product_id)
    if not product:
        raise ProductNotFound(product_id)

    # Switching modes resets the counters of the mode being left
    updated = product.model_copy(update=payload.to_fields())
    return await db.products.save(updated)

@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    current_user: User = Depends(require_permission(Permission.MANAGE_CATALOG))
):
    if not await db.products.soft_delete(product_id):
        raise ProductNotFound(product_id)
    return {"message": "Product deactivated (soft deleted) successfully"}
