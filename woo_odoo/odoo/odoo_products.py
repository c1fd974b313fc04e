# woo_odoo/odoo/odoo_products.py
from __future__ import annotations

from typing import List, Optional, Tuple

from woo_odoo.odoo.odoo_models import ProductValues
from woo_odoo.odoo.odoo_session import OdooSession
from woo_odoo.sync.components.util import sanitize_price
from woo_odoo.sync.outcomes import Resolution, ResolutionStatus
from woo_odoo.woo.order_normalizer import LineItem

PRODUCT_MODEL = "product.product"

FALLBACK_CODE_PREFIX = "WC"
FALLBACK_NAME_CHARS = 20
DEFAULT_PRODUCT_NAME = "Unnamed product"
PRODUCT_TYPE = "consu"  # consumable: sellable, not stock-tracked


def product_code(item: LineItem) -> Tuple[str, Optional[str]]:
    """
    (default_code, note). Without a SKU, key on the Woo product id so two unnamed
    items at different prices don't collapse into one product; fall back to the name.
    """
    if item.sku:
        return item.sku, None
    if item.product_id:
        ref = str(item.product_id)
    elif item.name:
        ref = item.name[:FALLBACK_NAME_CHARS]
    else:
        ref = "UNNAMED"
    code = f"{FALLBACK_CODE_PREFIX}-{ref}"
    return code, f"missing SKU for {item.name!r}, using {code}"


async def resolve_product(session: OdooSession, item: LineItem) -> Resolution:
    """Find the product by default_code or create it. Existing name/price are left alone."""
    notes: List[str] = []
    code, note = product_code(item)
    if note:
        notes.append(note)

    existing = await session.search(PRODUCT_MODEL, [["default_code", "=", code]])
    if existing:
        return Resolution(ResolutionStatus.FOUND, code, existing[0]["id"], notes)

    price, defaulted = sanitize_price(item.price)
    if defaulted:
        notes.append(f"invalid price {item.price!r} for {item.name!r}, using 0")

    values = ProductValues(
        name=item.name or DEFAULT_PRODUCT_NAME,
        list_price=price,
        default_code=code,
        type=PRODUCT_TYPE,
        sale_ok=True,
    )
    product_id = await session.create(PRODUCT_MODEL, values.model_dump())
    if product_id is None:
        return Resolution(ResolutionStatus.FAILED_REMOTE, code, None, notes)
    return Resolution(ResolutionStatus.CREATED, code, product_id, notes)
