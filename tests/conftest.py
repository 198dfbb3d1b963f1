import pytest
from types import SimpleNamespace
from typing import Dict, List, Optional

from bson import ObjectId
from pymongo.errors import AutoReconnect

from inventory_api.errors import DuplicateOrderNumber
from inventory_api.models.product import Product, Variant
from inventory_api.models.purchase_order import LineItemIn
from inventory_api.models.supplier import Supplier
from inventory_api.models.user import Role, User
from inventory_api.services.inventory_ledger import InventoryLedger
from inventory_api.services.purchase_orders import PurchaseOrderService
from inventory_api.services.sales import SalesService


class InMemoryRepository:
    """Dict-backed stand-in for BaseRepository. Stores copies, like a real round trip."""

    def __init__(self):
        self.docs: Dict[str, object] = {}

    def add(self, model):
        if model.id is None:
            model.id = str(ObjectId())
        self.docs[model.id] = model.model_copy(deep=True)
        return model

    def stored(self, id: str):
        return self.docs[id]

    async def get(self, id: str):
        doc = self.docs.get(id)
        return doc.model_copy(deep=True) if doc else None

    async def get_active(self, id: str):
        doc = await self.get(id)
        return doc if doc and doc.active else None

    async def create(self, model):
        return self.add(model)

    async def save(self, model):
        return self.add(model)

    async def list(self, filter=None, skip=0, limit=100, include_inactive=False, sort=None):
        docs = [d.model_copy(deep=True) for d in self.docs.values() if include_inactive or d.active]
        return docs[skip:skip + limit]

    async def count(self, filter=None, include_inactive=False):
        return len(await self.list(include_inactive=include_inactive, limit=10**6))


class FakeProductRepository(InMemoryRepository):
    def __init__(self):
        super().__init__()
        self.fail_on: set = set()
        self.inc_calls: List[tuple] = []

    async def inc_stock(self, product_id, variant_name, amount, receipt_key=None) -> bool:
        self.inc_calls.append((product_id, variant_name, amount, receipt_key))
        if product_id in self.fail_on:
            raise AutoReconnect("connection lost")
        product = self.docs.get(product_id)
        if not product:
            return False
        if receipt_key and receipt_key in product.applied_receipts:
            return False
        if variant_name:
            variant = product.find_variant(variant_name)
            if not variant:
                return False
            variant.stock += amount
        else:
            product.stock += amount
        if receipt_key:
            product.applied_receipts.append(receipt_key)
        return True

    async def dec_stock_if_available(self, product_id, variant_name, amount) -> bool:
        product = self.docs.get(product_id)
        if not product or not product.active:
            return False
        target = product.find_variant(variant_name) if variant_name else product
        if target is None or target.stock < amount:
            return False
        target.stock -= amount
        return True


class FakePurchaseOrderRepository(InMemoryRepository):
    async def find_by_id(self, order_id):
        return await self.get(order_id)

    async def insert(self, order):
        if any(o.po_number == order.po_number for o in self.docs.values()):
            raise DuplicateOrderNumber(order.po_number)
        return self.add(order)

    async def count_by_year_prefix(self, year: int, prefix: str = "PO") -> int:
        return sum(1 for o in self.docs.values() if o.po_number.startswith(f"{prefix}-{year}-"))

    async def list_active(self, skip=0, limit=100, include_inactive=False):
        return await self.list(skip=skip, limit=limit, include_inactive=include_inactive)


class FakeCounterRepository:
    def __init__(self):
        self.values: Dict[str, int] = {}

    async def next_value(self, key: str, floor: int = 0) -> int:
        self.values[key] = max(self.values.get(key, 0), floor) + 1
        return self.values[key]


class FakeSaleRepository(InMemoryRepository):
    async def list_recent(self, skip=0, limit=100):
        return await self.list(skip=skip, limit=limit)


@pytest.fixture
def fake_db():
    return SimpleNamespace(
        products=FakeProductRepository(),
        suppliers=InMemoryRepository(),
        purchase_orders=FakePurchaseOrderRepository(),
        counters=FakeCounterRepository(),
        sales=FakeSaleRepository(),
    )

@pytest.fixture
def ledger(fake_db):
    return InventoryLedger(fake_db)

@pytest.fixture
def po_service(fake_db, ledger):
    return PurchaseOrderService(fake_db, ledger)

@pytest.fixture
def sales(fake_db, ledger):
    return SalesService(fake_db, ledger)

@pytest.fixture
def supplier(fake_db):
    return fake_db.suppliers.add(Supplier(name="Northwind Wholesale", company="Northwind Traders"))

@pytest.fixture
def plain_product(fake_db):
    """Product A: simple mode."""
    return fake_db.products.add(Product(name="Canvas Tote", stock=10, price=14.5))

@pytest.fixture
def variant_product(fake_db):
    """Product B: variant mode."""
    return fake_db.products.add(Product(
        name="Classic T-Shirt",
        has_variants=True,
        variants=[
            Variant(name="Red-M", attributes={"color": "Red", "size": "M"}, stock=2, price=19.0),
            Variant(name="Black-L", attributes={"color": "Black", "size": "L"}, stock=7, price=21.0),
        ],
    ))

@pytest.fixture
def two_line_items(plain_product, variant_product):
    return [
        LineItemIn(product_id=plain_product.id, quantity=3, unit_cost=6.0),
        LineItemIn(product_id=variant_product.id, variant="Red-M", quantity=5, unit_cost=8.5),
    ]

@pytest.fixture
def admin_user():
    return User(id=str(ObjectId()), name="Admin", email="admin@example.com", password_hash="x", role=Role.ADMIN)

@pytest.fixture
def staff_user():
    return User(id=str(ObjectId()), name="Staff", email="staff@example.com", password_hash="x", role=Role.STAFF)
