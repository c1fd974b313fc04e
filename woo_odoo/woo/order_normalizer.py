from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from woo_odoo.sync.components.util import clean_str


@dataclass
class BillingContact:
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    street: str | None = None
    city: str | None = None
    postal_code: str | None = None


@dataclass
class LineItem:
    name: str | None
    sku: str | None
    product_id: Optional[int] = None
    # kept as sent by Woo (str, number, garbage); sanitized at resolution time
    price: Any = None
    quantity: Any = None


@dataclass
class WooOrder:
    order_id: int | str
    date_created: str | None
    billing: BillingContact
    line_items: List[LineItem] = field(default_factory=list)


def _get(d: Dict[str, Any] | None, key: str, default=None):
    if not isinstance(d, dict):
        return default
    return d.get(key, default)


def _product_id(v: Any) -> Optional[int]:
    try:
        pid = int(v)
    except (TypeError, ValueError):
        return None
    return pid or None


def _mk_billing(blob: Dict[str, Any] | None) -> BillingContact:
    return BillingContact(
        email=clean_str(_get(blob, "email")),
        first_name=clean_str(_get(blob, "first_name")),
        last_name=clean_str(_get(blob, "last_name")),
        phone=clean_str(_get(blob, "phone")),
        street=clean_str(_get(blob, "address_1")),
        city=clean_str(_get(blob, "city")),
        postal_code=clean_str(_get(blob, "postcode")),
    )


def _mk_line(li: Dict[str, Any]) -> LineItem:
    return LineItem(
        name=clean_str(li.get("name")),
        sku=clean_str(li.get("sku")),
        product_id=_product_id(li.get("product_id")),
        price=li.get("price"),
        quantity=li.get("quantity"),
    )


def normalize_order(order_json: Dict[str, Any]) -> WooOrder:
    if not isinstance(order_json, dict):
        raise ValueError(f"order document is not an object: {type(order_json).__name__}")
    order_id = order_json.get("id")
    if order_id is None or str(order_id).strip() == "":
        raise ValueError("order document has no id")

    return WooOrder(
        order_id=order_id,
        date_created=clean_str(order_json.get("date_created") or order_json.get("date_created_gmt")),
        billing=_mk_billing(order_json.get("billing")),
        line_items=[_mk_line(li) for li in (order_json.get("line_items") or []) if isinstance(li, dict)],
    )
