import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from inventory_api.errors import DuplicateEntry, DuplicateOrderNumber
from inventory_api.models.purchase_order import LineItem, PurchaseOrder
from inventory_api.models.taxonomy import Brand
from inventory_api.models.user import User
from inventory_api.repositories.base import BaseRepository, to_object_id
from inventory_api.repositories.counter import CounterRepository
from inventory_api.repositories.purchase_order import PurchaseOrderRepository
from inventory_api.repositories.taxonomy import TaxonomyRepository
from inventory_api.repositories.user import UserRepository


def sample_order(po_number="PO-2024-0001"):
    return PurchaseOrder(
        po_number=po_number,
        supplier_id="s1",
        items=[LineItem(product_id="p1", quantity=2, unit_cost=3.0)],
    )


def test_to_object_id():
    oid = ObjectId()
    assert to_object_id(str(oid)) == oid
    assert to_object_id("not-an-id") == "not-an-id"


@pytest.mark.asyncio
async def test_insert_sets_id():
    collection = MagicMock()
    inserted = ObjectId()
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=inserted))
    repo = PurchaseOrderRepository(collection, PurchaseOrder)

    order = await repo.insert(sample_order())

    assert order.id == str(inserted)
    doc = collection.insert_one.call_args.args[0]
    assert "_id" not in doc
    assert doc["po_number"] == "PO-2024-0001"


@pytest.mark.asyncio
async def test_insert_duplicate_number():
    collection = MagicMock()
    collection.insert_one = AsyncMock(side_effect=DuplicateKeyError("E11000 duplicate key"))
    repo = PurchaseOrderRepository(collection, PurchaseOrder)

    with pytest.raises(DuplicateOrderNumber) as exc:
        await repo.insert(sample_order("PO-2024-0009"))
    assert exc.value.po_number == "PO-2024-0009"


@pytest.mark.asyncio
async def test_count_by_year_prefix_counts_all_orders():
    collection = MagicMock()
    collection.count_documents = AsyncMock(return_value=12)
    repo = PurchaseOrderRepository(collection, PurchaseOrder)

    assert await repo.count_by_year_prefix(2024) == 12
    query = collection.count_documents.call_args.args[0]
    # Soft-deleted orders still hold their number
    assert query == {"po_number": {"$regex": "^PO-2024-"}}


@pytest.mark.asyncio
async def test_list_skips_inactive_by_default():
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[{"_id": ObjectId(), **sample_order().to_mongo()}])
    collection = MagicMock()
    collection.find.return_value = cursor
    repo = PurchaseOrderRepository(collection, PurchaseOrder)

    orders = await repo.list_active()
    assert collection.find.call_args.args[0] == {"active": True}
    cursor.sort.assert_called_once_with([("order_date", -1)])
    assert orders[0].po_number == "PO-2024-0001"

    await repo.list_active(include_inactive=True)
    assert collection.find.call_args.args[0] == {}


@pytest.mark.asyncio
async def test_soft_delete_reports_missing_document():
    collection = MagicMock()
    collection.update_one = AsyncMock(return_value=MagicMock(matched_count=0))
    repo = BaseRepository(collection, Brand)

    assert await repo.soft_delete(str(ObjectId())) is False
    update = collection.update_one.call_args.args[1]
    assert update["$set"]["active"] is False


@pytest.mark.asyncio
async def test_counter_next_value_with_floor():
    collection = MagicMock()
    collection.update_one = AsyncMock()
    collection.find_one_and_update = AsyncMock(return_value={"_id": "po-2024", "seq": 8})
    counters = CounterRepository(collection)

    assert await counters.next_value("po-2024", floor=7) == 8

    collection.update_one.assert_awaited_once_with({"_id": "po-2024"}, {"$max": {"seq": 7}}, upsert=True)
    kwargs = collection.find_one_and_update.call_args.kwargs
    assert kwargs["upsert"] is True
    assert kwargs["return_document"] == ReturnDocument.AFTER


@pytest.mark.asyncio
async def test_counter_without_floor_skips_seed():
    collection = MagicMock()
    collection.update_one = AsyncMock()
    collection.find_one_and_update = AsyncMock(return_value={"_id": "po-2025", "seq": 1})

    assert await CounterRepository(collection).next_value("po-2025") == 1
    collection.update_one.assert_not_called()


@pytest.mark.asyncio
async def test_taxonomy_name_lookup_is_case_insensitive():
    existing = ObjectId()
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value={"_id": existing, "name": "Acme"})
    repo = TaxonomyRepository(collection, Brand)

    found = await repo.get_by_name(" acme ")
    assert found.name == "Acme"
    query = collection.find_one.call_args.args[0]
    assert query["name"] == {"$regex": "^acme$", "$options": "i"}

    # Renaming a brand to its own name is not a conflict
    assert await repo.get_by_name("Acme", exclude_id=str(existing)) is None


@pytest.mark.asyncio
async def test_user_email_lookup_can_include_deactivated_accounts():
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    repo = UserRepository(collection, User)

    await repo.get_by_email(" Ana@Example.com ")
    assert collection.find_one.call_args.args[0] == {"email": "ana@example.com", "active": True}

    await repo.get_by_email("ana@example.com", include_inactive=True)
    assert collection.find_one.call_args.args[0] == {"email": "ana@example.com"}


@pytest.mark.asyncio
async def test_user_email_collision_is_duplicate_entry():
    collection = MagicMock()
    collection.insert_one = AsyncMock(side_effect=DuplicateKeyError("E11000 duplicate key: email"))
    collection.update_one = AsyncMock(side_effect=DuplicateKeyError("E11000 duplicate key: email"))
    repo = UserRepository(collection, User)

    with pytest.raises(DuplicateEntry):
        await repo.create(User(name="Ana", email="ana@example.com", password_hash="x"))
    with pytest.raises(DuplicateEntry):
        await repo.update(str(ObjectId()), {"email": "ana@example.com"})
