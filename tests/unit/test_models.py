import pytest
from bson import ObjectId
from pydantic import ValidationError

from inventory_api.models.product import Product, ProductIn, ProductPublic, Variant, VariantIn, build_variant_name
from inventory_api.models.purchase_order import (
    LineItem,
    POStatus,
    PurchaseOrder,
    PurchaseOrderCreate,
    TERMINAL_STATUSES,
    can_transition,
)
from inventory_api.models.sale import SaleItem, Sale, generate_invoice_number
from inventory_api.models.user import Role, User, UserPublic


def test_transition_table():
    assert can_transition(POStatus.DRAFT, POStatus.ORDERED)
    assert can_transition(POStatus.DRAFT, POStatus.CANCELLED)
    assert can_transition(POStatus.ORDERED, POStatus.RECEIVED)
    assert can_transition(POStatus.ORDERED, POStatus.CANCELLED)

    assert not can_transition(POStatus.DRAFT, POStatus.RECEIVED)
    assert not can_transition(POStatus.ORDERED, POStatus.DRAFT)
    assert TERMINAL_STATUSES == {POStatus.RECEIVED, POStatus.CANCELLED}


def test_line_subtotal_and_order_total():
    order = PurchaseOrder(
        po_number="PO-2024-0001",
        supplier_id="s1",
        items=[
            LineItem(product_id="a", quantity=3, unit_cost=6.0),
            LineItem(product_id="b", quantity=5, unit_cost=8.5),
            LineItem(product_id="c", quantity=1, unit_cost=2.0, subtotal=1.5),
        ],
    )
    assert order.items[0].subtotal == 18.0
    assert order.calculate_total() == 62.0
    assert order.allowed_transitions == [POStatus.ORDERED, POStatus.CANCELLED]


def test_order_requires_at_least_one_line():
    with pytest.raises(ValidationError):
        PurchaseOrderCreate(supplier_id="s1", items=[])

    with pytest.raises(ValidationError):
        LineItem(product_id="a", quantity=0, unit_cost=1.0)


def test_mongo_round_trip_keeps_object_id():
    oid = ObjectId()
    order = PurchaseOrder.from_mongo({"_id": oid, "po_number": "PO-2024-0003", "supplier_id": "s1"})

    assert order.id == str(oid)
    assert order.status == POStatus.DRAFT
    assert order.to_mongo()["_id"] == oid


def test_new_model_has_no_id():
    assert "_id" not in Variant(name="x", price=1).model_dump()
    assert "_id" not in Product(name="Mug", price=4.0).to_mongo()


@pytest.mark.parametrize("name,attributes,expected", [
    ("  Large  ", {"size": "L"}, "Large"),
    (None, {"size": "M", "color": "Red"}, "Red - M"),
    ("", {}, "Variant"),
])
def test_build_variant_name(name, attributes, expected):
    assert build_variant_name(name, attributes) == expected


def test_product_in_variant_mode_ignores_base_stock():
    payload = ProductIn(
        name=" Hoodie ",
        price=30,
        stock=4,
        has_variants=True,
        variants=[VariantIn(attributes={"size": "S"}, price=30, stock=2)],
    )
    fields = payload.to_fields()
    assert fields["name"] == "Hoodie"
    assert fields["stock"] == 0
    assert fields["price"] is None
    assert fields["variants"][0].name == "S"


def test_product_in_validation():
    with pytest.raises(ValidationError):
        ProductIn(name="Hoodie", has_variants=True)
    with pytest.raises(ValidationError):
        ProductIn(name="Mug")
    with pytest.raises(ValidationError):
        VariantIn(attributes={}, price=3)

    assert ProductIn(name="Mug", price=4.5).to_fields()["stock"] == 0


def test_product_stock_helpers(variant_product, plain_product):
    assert variant_product.stock_for("Black-L") == 7
    assert variant_product.stock_for("Nope") == 0
    assert variant_product.price_for("Red-M") == 19.0
    assert variant_product.total_stock == 9
    assert plain_product.stock_for(None) == 10
    assert plain_product.price_for() == 14.5


def test_sale_total_and_invoice_number():
    sale = Sale(user_id="u1", items=[
        SaleItem(product_id="a", quantity=2, price_at_sale=3.25),
        SaleItem(product_id="b", quantity=1, price_at_sale=10),
    ])
    assert sale.calculate_total() == 16.5
    assert sale.invoice_number.startswith("INV-")

    prefix, stamp, suffix = generate_invoice_number().split("-")
    assert prefix == "INV"
    assert len(stamp) == 6
    assert 0 <= int(suffix) <= 999


def test_user_email_normalized_and_public_view():
    user = User(id="abc", name="Ana", email=" Ana@Example.COM ", password_hash="h", role=Role.ADMIN)
    assert user.email == "ana@example.com"

    public = UserPublic.from_user(user).model_dump(by_alias=True)
    assert public["_id"] == "abc"
    assert "password_hash" not in public


def test_receipt_keys_are_stored_but_not_published(plain_product):
    plain_product.applied_receipts = ["po1:0", "po2:1"]

    assert plain_product.to_mongo()["applied_receipts"] == ["po1:0", "po2:1"]
    public = ProductPublic.model_validate(plain_product.model_dump()).model_dump(by_alias=True)
    assert "applied_receipts" not in public
    assert public["_id"] == plain_product.id
    assert public["stock"] == 10
