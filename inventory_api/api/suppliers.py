from typing import List

from fastapi import APIRouter, Depends

from inventory_api.database import db
from inventory_api.errors import SupplierNotFound
from inventory_api.guardrails.decorators import require_permission
from inventory_api.guardrails.permissions import Permission
from inventory_api.models.supplier import Supplier, SupplierIn
from inventory_api.models.user import User

router = APIRouter(prefix="/api/suppliers", tags=["Suppliers"])

@router.get("/", response_model=List[Supplier])
async def list_suppliers(
    skip: int = 0,
    limit: int = 100,
    current_user: User = Depends(require_permission(Permission.VIEW_PURCHASE_ORDERS))
):
    return await db.suppliers.list(skip=skip, limit=limit, sort=[("name", 1)])

@router.post("/", response_model=Supplier, status_code=201)
async def create_supplier(
    payload: SupplierIn,
    current_user: User = Depends(require_permission(Permission.MANAGE_PURCHASE_ORDERS))
):
    supplier = Supplier(**payload.model_dump())
    return await db.suppliers.create(supplier)

@router.put("/{supplier_id}", response_model=Supplier)
async def update_supplier(
    supplier_id: str,
    payload: SupplierIn,
    current_user: User = Depends(require_permission(Permission.MANAGE_PURCHASE_ORDERS))
):
    supplier = await db.suppliers.get_active(supplier_id)
    if not supplier:
        raise SupplierNotFound(supplier_id)
    return await db.suppliers.update(supplier_id, payload.model_dump())

@router.delete("/{supplier_id}")
async def delete_supplier(
    supplier_id: str,
    current_user: User = Depends(require_permission(Permission.MANAGE_PURCHASE_ORDERS))
):
    if not await db.suppliers.soft_delete(supplier_id):
        raise SupplierNotFound(supplier_id)
    return {"message": "Supplier deactivated successfully"}
