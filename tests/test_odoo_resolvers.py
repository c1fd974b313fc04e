import asyncio

from woo_odoo.odoo.odoo_customers import (
    DEFAULT_COUNTRY_ID,
    customer_email,
    placeholder_email,
    resolve_customer,
)
from woo_odoo.odoo.odoo_products import product_code, resolve_product
from woo_odoo.sync.outcomes import ResolutionStatus
from woo_odoo.woo.order_normalizer import LineItem, normalize_order


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------

def test_existing_customer_is_found_and_not_touched(session, fake_odoo, make_order):
    partner_id = fake_odoo.seed("res.partner", email="a@b.com", name="Old Name")

    res = asyncio.run(resolve_customer(session, normalize_order(make_order(501))))

    assert res.status == ResolutionStatus.FOUND
    assert res.record_id == partner_id
    assert fake_odoo.creates() == []


def test_new_customer_values(session, fake_odoo, make_order):
    doc = make_order(501, first_name="  Awa ", last_name="Diop ")
    doc["billing"]["phone"] = ""
    doc["billing"]["city"] = "   "

    res = asyncio.run(resolve_customer(session, normalize_order(doc)))

    assert res.status == ResolutionStatus.CREATED
    assert res.notes == []
    [values] = fake_odoo.creates("res.partner")
    assert values == {
        "name": "Awa Diop",
        "email": "a@b.com",
        "phone": False,
        "street": "12 Rue Carnot",
        "city": False,
        "zip": "10200",
        "country_id": DEFAULT_COUNTRY_ID,
        "customer_rank": 1,
    }


def test_invalid_email_uses_deterministic_placeholder(session, fake_odoo, make_order):
    order = normalize_order(make_order(777, email="bad-email"))

    first = asyncio.run(resolve_customer(session, order))
    second = asyncio.run(resolve_customer(session, order))

    assert first.key == second.key == placeholder_email(777) == "no-email-777@placeholder.local"
    assert first.status == ResolutionStatus.CREATED
    assert second.status == ResolutionStatus.FOUND
    assert second.record_id == first.record_id
    assert any("bad-email" in n for n in first.notes)
    assert len(fake_odoo.creates("res.partner")) == 1


def test_missing_email_placeholder_depends_only_on_order_id(make_order):
    a = normalize_order(make_order(42, email=None, first_name="A"))
    b = normalize_order(make_order(42, email="  ", first_name="B"))
    assert customer_email(a)[0] == customer_email(b)[0] == "no-email-42@placeholder.local"


def test_missing_name_gets_placeholder(session, fake_odoo, make_order):
    order = normalize_order(make_order(9, first_name="", last_name=None))

    res = asyncio.run(resolve_customer(session, order))

    assert fake_odoo.creates("res.partner")[0]["name"] == "WooCommerce Customer #9"
    assert any("missing customer name" in n for n in res.notes)


def test_customer_create_failure(session, fake_odoo, make_order):
    fake_odoo.fail_methods.add(("res.partner", "create"))

    res = asyncio.run(resolve_customer(session, normalize_order(make_order(1))))

    assert res.status == ResolutionStatus.FAILED_REMOTE
    assert not res.ok


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

def test_existing_product_is_found(session, fake_odoo):
    product_id = fake_odoo.seed("product.product", default_code="SKU1", list_price=99.0)

    res = asyncio.run(resolve_product(session, LineItem(name="Dress", sku="SKU1", price="10")))

    assert (res.status, res.record_id) == (ResolutionStatus.FOUND, product_id)
    assert fake_odoo.creates() == []


def test_new_product_values(session, fake_odoo):
    res = asyncio.run(resolve_product(session, LineItem(name="Dress", sku="SKU1", price="10.50")))

    assert res.status == ResolutionStatus.CREATED
    assert fake_odoo.creates("product.product") == [{
        "name": "Dress",
        "list_price": 10.5,
        "default_code": "SKU1",
        "type": "consu",
        "sale_ok": True,
    }]


def test_product_code_fallbacks():
    assert product_code(LineItem(name="Dress", sku="SKU1"))[0] == "SKU1"
    assert product_code(LineItem(name="Dress", sku=None, product_id=77))[0] == "WC-77"
    assert product_code(LineItem(name="Cool Shirt", sku=None))[0] == "WC-Cool Shirt"
    assert product_code(LineItem(name="A very long product name indeed", sku=None))[0] == "WC-A very long product "
    assert product_code(LineItem(name=None, sku=None))[0] == "WC-UNNAMED"
    code, note = product_code(LineItem(name="Cool Shirt", sku=None))
    assert "missing SKU" in note


def test_invalid_price_defaults_to_zero(session, fake_odoo):
    res = asyncio.run(resolve_product(session, LineItem(name=None, sku="X1", price="free")))

    values = fake_odoo.creates("product.product")[0]
    assert values["list_price"] == 0.0
    assert values["name"] == "Unnamed product"
    assert any("invalid price" in n for n in res.notes)


def test_product_create_failure(session, fake_odoo):
    fake_odoo.fail_methods.add(("product.product", "create"))
    res = asyncio.run(resolve_product(session, LineItem(name="Dress", sku="SKU1", price="1")))
    assert res.status == ResolutionStatus.FAILED_REMOTE
    assert res.record_id is None
