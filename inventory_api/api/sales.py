from typing import List

from fastapi import APIRouter, Depends, Response

from inventory_api.database import db
from inventory_api.guardrails.decorators import require_permission
from inventory_api.guardrails.permissions import Permission
from inventory_api.models.sale import Sale, SaleCreate
from inventory_api.models.user import User
from inventory_api.services.pdf import document_renderer
from inventory_api.services.sales import sales_service

router = APIRouter(prefix="/api/sales", tags=["Sales"])

@router.post("/", response_model=Sale, status_code=201)
async def create_sale(
    payload: SaleCreate,
    current_user: User = Depends(require_permission(Permission.RECORD_SALE))
):
    return await sales_service.record_sale(payload, user_id=current_user.id)

@router.get("/", response_model=List[Sale])
async def list_sales(
    skip: int = 0,
    limit: int = 50,
    current_user: User = Depends(require_permission(Permission.VIEW_SALES))
):
    return await sales_service.list_sales(skip=skip, limit=limit)

@router.get("/{sale_id}/invoice")
async def download_invoice(
    sale_id: str,
    current_user: User = Depends(require_permission(Permission.VIEW_SALES))
):
    sale = await sales_service.get_sale(sale_id)
    business = await db.settings.get_or_create()
    content = document_renderer.render_sale_invoice(sale, business)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{sale.invoice_number}.pdf"'}
    )
