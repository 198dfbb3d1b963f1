from fastapi import APIRouter, Depends

from inventory_api.config import settings
from inventory_api.database import db
from inventory_api.guardrails.decorators import require_permission
from inventory_api.guardrails.permissions import Permission
from inventory_api.models.purchase_order import POStatus
from inventory_api.models.user import User

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])

@router.get("/")
async def get_dashboard(current_user: User = Depends(require_permission(Permission.VIEW_INVENTORY))):
    """Catalog counts, low-stock alerts and purchase orders by status."""
    threshold = settings.LOW_STOCK_THRESHOLD
    low_stock = []
    for product in await db.products.low_stock(threshold):
        if product.has_variants:
            for variant in product.variants:
                if variant.stock <= threshold:
                    low_stock.append({"_id": product.id, "name": product.name, "variant": variant.name, "stock": variant.stock})
        else:
            low_stock.append({"_id": product.id, "name": product.name, "variant": None, "stock": product.stock})

    # Fill zeros
    po_stats = {status.value: 0 for status in POStatus}
    po_stats.update(await db.purchase_orders.count_by_status())

    return {
        "total_products": await db.products.count(),
        "total_brands": await db.brands.count(),
        "total_categories": await db.categories.count(),
        "low_stock_threshold": threshold,
        "low_stock_products": low_stock,
        "purchase_orders_by_status": po_stats,
    }
