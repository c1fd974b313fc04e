import asyncio

import pytest

from fake_odoo import FakeOdoo
from woo_odoo.odoo.odoo_session import OdooSession

ODOO_URL = "https://odoo.test"


@pytest.fixture
def fake_odoo():
    return FakeOdoo()


@pytest.fixture
def session(fake_odoo):
    s = OdooSession(transport=fake_odoo.transport())
    auth = asyncio.run(s.authenticate(ODOO_URL, "testdb", "bot@example.com", "secret"))
    assert auth.ok
    return s


def woo_order(order_id=501, *, email="a@b.com", first_name="Awa", last_name="Diop", line_items=None, **extra):
    """Raw WooCommerce order document, shaped like GET /wc/v3/orders."""
    doc = {
        "id": order_id,
        "date_created": "2024-06-01T12:00:00",
        "billing": {
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "phone": "+221 77 000 00 00",
            "address_1": "12 Rue Carnot",
            "city": "Dakar",
            "postcode": "10200",
        },
        "line_items": line_items if line_items is not None else [
            {"name": "Wax Dress", "sku": "SKU1", "product_id": 77, "quantity": "2", "price": "10.50"},
        ],
    }
    doc.update(extra)
    return doc


@pytest.fixture
def make_order():
    return woo_order
