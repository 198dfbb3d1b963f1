import asyncio
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING, IndexModel

from inventory_api.config import settings

MONGODB_URL = settings.MONGODB_URL
DB_NAME = settings.DB_NAME

CASE_INSENSITIVE = {"locale": "en", "strength": 2}

async def init_db():
    print(f"Connecting to {MONGODB_URL}...")
    client = AsyncIOMotorClient(MONGODB_URL)
    db = client[DB_NAME]

    # 1. Products Collection
    print("Creating indexes on 'products'...")
    await db.products.create_indexes([
        IndexModel([("active", ASCENDING)]),
        IndexModel([("category", ASCENDING), ("active", ASCENDING)]),
        IndexModel([("brand", ASCENDING), ("active", ASCENDING)]),
        IndexModel([("created_at", DESCENDING)]),
    ])

    # 2. Purchase Orders Collection
    print("Creating indexes on 'purchase_orders'...")
    await db.purchase_orders.create_indexes([
        IndexModel([("po_number", ASCENDING)], unique=True),
        IndexModel([("active", ASCENDING), ("order_date", DESCENDING)]),
        IndexModel([("status", ASCENDING)]),
        IndexModel([("supplier_id", ASCENDING)]),
    ])

    # 3. Suppliers, Brands, Categories
    print("Creating indexes on 'suppliers', 'brands', 'categories'...")
    await db.suppliers.create_indexes([
        IndexModel([("active", ASCENDING)]),
        IndexModel([("name", ASCENDING)]),
    ])
    for name in ("brands", "categories"):
        await db[name].create_indexes([
            IndexModel([("active", ASCENDING)]),
            IndexModel([("name", ASCENDING)], collation=CASE_INSENSITIVE),
        ])

    # 4. Sales Collection
    print("Creating indexes on 'sales'...")
    await db.sales.create_indexes([
        IndexModel([("invoice_number", ASCENDING)], unique=True),
        IndexModel([("user_id", ASCENDING), ("active", ASCENDING)]),
        IndexModel([("date", DESCENDING)]),
        IndexModel([("active", ASCENDING)]),
    ])

    # 5. Users Collection
    print("Creating indexes on 'users'...")
    await db.users.create_indexes([
        IndexModel([("email", ASCENDING)], unique=True),
        IndexModel([("role", ASCENDING), ("active", ASCENDING)]),
    ])

    print("Database initialization complete.")
    client.close()

if __name__ == "__main__":
    asyncio.run(init_db())
