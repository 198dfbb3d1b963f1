import asyncio
from datetime import datetime, timezone
from motor.motor_asyncio import AsyncIOMotorClient

from inventory_api.config import settings
from inventory_api.core.security import get_password_hash

MONGODB_URL = settings.MONGODB_URL
DB_NAME = settings.DB_NAME
ADMIN_EMAIL = settings.ADMIN_EMAIL or "admin@example.com"
ADMIN_PASSWORD = settings.ADMIN_PASSWORD or "change-me-now"

async def seed_db():
    print(f"Connecting to {MONGODB_URL}...")
    client = AsyncIOMotorClient(MONGODB_URL)
    db = client[DB_NAME]
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    base = {"active": True, "deleted_at": None, "created_at": now, "updated_at": now}

    # 1. Admin User
    print(f"Seeding admin user {ADMIN_EMAIL}...")
    await db.users.update_one(
        {"email": ADMIN_EMAIL.lower()},
        {"$setOnInsert": {
            **base,
            "name": "Administrator",
            "email": ADMIN_EMAIL.lower(),
            "password_hash": get_password_hash(ADMIN_PASSWORD),
            "role": "admin",
        }},
        upsert=True
    )

    # 2. Business Settings
    print("Seeding Business Settings...")
    await db.settings.update_one(
        {},
        {"$setOnInsert": {
            "business_name": "My Business",
            "business_logo_url": "",
            "business_address": "",
            "theme_mode": "light",
            "pdf_settings": {"footer_text": "Thank you for your business", "page_size": "A4", "orientation": "portrait"},
            "updated_at": now,
        }},
        upsert=True
    )

    # 3. Taxonomies
    print("Seeding Brands & Categories...")
    for name in ["Acme", "Northwind"]:
        await db.brands.update_one({"name": name}, {"$setOnInsert": {**base, "name": name, "description": None}}, upsert=True)
    for name in ["Apparel", "Accessories"]:
        await db.categories.update_one({"name": name}, {"$setOnInsert": {**base, "name": name}}, upsert=True)

    # 4. Suppliers
    print("Seeding Suppliers...")
    await db.suppliers.update_one(
        {"name": "Northwind Wholesale"},
        {"$setOnInsert": {
            **base,
            "name": "Northwind Wholesale",
            "company": "Northwind Traders Ltd",
            "contact_person": "Jane Doe",
            "phone": "+1 555 0100",
            "email": "orders@northwind.example",
            "address": "1 Harbour Road",
            "notes": None,
        }},
        upsert=True
    )

    # 5. Products
    print("Seeding Products...")
    products = [
        {
            "name": "Canvas Tote Bag", "brand": "Acme", "category": "Accessories",
            "stock": 12, "price": 14.5, "has_variants": False, "variants": [],
        },
        {
            "name": "Classic T-Shirt", "brand": "Northwind", "category": "Apparel",
            "stock": 0, "price": None, "has_variants": True,
            "variants": [
                {"name": "Red - M", "attributes": {"color": "Red", "size": "M"}, "stock": 4, "price": 19.0},
                {"name": "Red - L", "attributes": {"color": "Red", "size": "L"}, "stock": 8, "price": 19.0},
                {"name": "Black - M", "attributes": {"color": "Black", "size": "M"}, "stock": 10, "price": 21.0},
            ],
        },
    ]
    for p in products:
        await db.products.update_one(
            {"name": p["name"]},
            {"$setOnInsert": {**base, **p, "applied_receipts": []}},
            upsert=True
        )

    print("Database seeding complete.")
    client.close()

if __name__ == "__main__":
    asyncio.run(seed_db())
