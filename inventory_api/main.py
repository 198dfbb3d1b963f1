from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from inventory_api.config import settings
from inventory_api.database import db
from inventory_api.errors import InventoryError
from inventory_api.api import auth, dashboard, products, purchase_orders, sales, settings as settings_api, suppliers, users
from inventory_api.api.taxonomy import brands_router, categories_router

# Setup Logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    db.connect()
    yield
    db.close()

app = FastAPI(
    title="Inventory & POS API",
    description="Catalog, purchasing, stock and sales backend for small businesses",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Error Handling
@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message, "code": exc.code})

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Server error. Please try again later.", "code": "internal_error"})

# Router Registration
app.include_router(auth.router)
app.include_router(products.router)
app.include_router(brands_router)
app.include_router(categories_router)
app.include_router(suppliers.router)
app.include_router(purchase_orders.router)
app.include_router(sales.router)
app.include_router(users.router)
app.include_router(settings_api.router)
app.include_router(dashboard.router)

# Health Check
@app.get("/health")
async def health_check():
    return {"status": "ok", "environment": settings.ENVIRONMENT}

if __name__ == "__main__":
    uvicorn.run("inventory_api.main:app", host="0.0.0.0", port=8000, reload=True)
