from typing import List

from fastapi import APIRouter, Depends, Response

from inventory_api.database import db
from inventory_api.guardrails.decorators import require_permission
from inventory_api.guardrails.permissions import Permission
from inventory_api.models.purchase_order import PurchaseOrder, PurchaseOrderCreate, PurchaseOrderUpdate, StatusChange
from inventory_api.models.user import User
from inventory_api.services.pdf import document_renderer
from inventory_api.services.purchase_orders import purchase_order_service

router = APIRouter(prefix="/api/purchase-orders", tags=["Purchase Orders"])

@router.get("/", response_model=List[PurchaseOrder])
async def list_purchase_orders(
    skip: int = 0,
    limit: int = 50,
    current_user: User = Depends(require_permission(Permission.VIEW_PURCHASE_ORDERS))
):
    return await purchase_order_service.list_active(skip=skip, limit=limit)

@router.post("/", response_model=PurchaseOrder, status_code=201)
async def create_purchase_order(
    payload: PurchaseOrderCreate,
    current_user: User = Depends(require_permission(Permission.MANAGE_PURCHASE_ORDERS))
):
    return await purchase_order_service.create_order(
        supplier_id=payload.supplier_id,
        items=payload.items,
        notes=payload.notes,
        expected_date=payload.expected_date,
        total_amount=payload.total_amount,
        created_by=current_user.id,
    )

@router.get("/{order_id}", response_model=PurchaseOrder)
async def get_purchase_order(
    order_id: str,
    current_user: User = Depends(require_permission(Permission.VIEW_PURCHASE_ORDERS))
):
    return await purchase_order_service.get_order(order_id)

@router.put("/{order_id}", response_model=PurchaseOrder)
async def update_purchase_order(
    order_id: str,
    payload: PurchaseOrderUpdate,
    current_user: User = Depends(require_permission(Permission.MANAGE_PURCHASE_ORDERS))
):
    return await purchase_order_service.update_order(order_id, payload)

@router.put("/{order_id}/status")
async def change_purchase_order_status(
    order_id: str,
    payload: StatusChange,
    current_user: User = Depends(require_permission(Permission.MANAGE_PURCHASE_ORDERS))
):
    po = await purchase_order_service.request_transition(order_id, payload.status, current_user.id)
    return {"message": f"PO marked as {po.status.value}", "po": po.model_dump(mode="json", by_alias=True)}

@router.delete("/{order_id}")
async def delete_purchase_order(
    order_id: str,
    current_user: User = Depends(require_permission(Permission.MANAGE_PURCHASE_ORDERS))
):
    await purchase_order_service.soft_delete(order_id)
    return {"message": "Purchase Order deactivated successfully"}

@router.get("/{order_id}/pdf")
async def download_purchase_order_pdf(
    order_id: str,
    current_user: User = Depends(require_permission(Permission.VIEW_PURCHASE_ORDERS))
):
    po = await purchase_order_service.get_order(order_id)
    supplier = await db.suppliers.get(po.supplier_id)
    business = await db.settings.get_or_create()
    content = document_renderer.render_purchase_order(po, business, supplier)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{po.po_number}.pdf"'}
    )
