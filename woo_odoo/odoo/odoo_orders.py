# ----------------------------
# woo_odoo/odoo/odoo_orders.py
# ----------------------------

from __future__ import annotations

import logging
from typing import List

from woo_odoo.odoo.odoo_customers import resolve_customer
from woo_odoo.odoo.odoo_models import OrderLineValues, SaleOrderValues
from woo_odoo.odoo.odoo_products import resolve_product
from woo_odoo.odoo.odoo_session import OdooSession
from woo_odoo.sync.components.util import odoo_datetime, sanitize_price, sanitize_quantity
from woo_odoo.sync.outcomes import (
    LineOutcome,
    OrderOutcome,
    OrderStatus,
    Resolution,
)
from woo_odoo.woo.order_normalizer import LineItem, WooOrder

logger = logging.getLogger("uvicorn.error")

SALE_ORDER_MODEL = "sale.order"
ORIGIN_PREFIX = "WC"
DEFAULT_LINE_NAME = "Item"


def origin_tag(order_id) -> str:
    """Idempotency key written to sale.order.origin."""
    return f"{ORIGIN_PREFIX}-{order_id}"


def _log_notes(origin: str, notes: List[str]) -> None:
    for note in notes:
        logger.warning("[ORDER-SYNC] %s: %s", origin, note)


async def _resolve_line(session: OdooSession, origin: str, item: LineItem) -> LineOutcome:
    product: Resolution = await resolve_product(session, item)
    _log_notes(origin, product.notes)

    notes: List[str] = []
    qty, qty_defaulted = sanitize_quantity(item.quantity)
    if qty_defaulted:
        notes.append(f"invalid quantity {item.quantity!r} for {item.name!r}, using 1")
    price, price_defaulted = sanitize_price(item.price)
    price_note = f"invalid price {item.price!r} for {item.name!r}, using 0"
    if price_defaulted and price_note not in product.notes:
        notes.append(price_note)
    _log_notes(origin, notes)

    return LineOutcome(
        name=item.name or DEFAULT_LINE_NAME,
        product=product,
        quantity=qty,
        price=price,
        notes=notes,
    )


# ================ Public API (used by order_sync) ============================

async def import_order(session: OdooSession, order: WooOrder) -> OrderOutcome:
    """
    Import one Woo order as a draft sale.order, at most once per Woo id.

    Steps (each one gates the next):
      1) skip if a sale.order already carries origin "WC-<id>"
      2) customer (res.partner by email)
      3) order must have line items
      4) product per line; failed lines are dropped, not fatal
      5) at least one line must survive
      6) create the sale.order (state=draft)
    """
    origin = origin_tag(order.order_id)

    # 1) Idempotency
    existing = await session.search(SALE_ORDER_MODEL, [["origin", "=", origin]])
    if existing:
        odoo_id = existing[0]["id"]
        logger.info("[ORDER-SYNC] %s already imported (Odoo ID: %s)", origin, odoo_id)
        return OrderOutcome(order.order_id, origin, OrderStatus.ALREADY_IMPORTED, odoo_id=odoo_id)

    logger.info("[ORDER-SYNC] processing %s", origin)

    # 2) Customer
    customer = await resolve_customer(session, order)
    _log_notes(origin, customer.notes)
    if not customer.ok:
        logger.error("[ORDER-SYNC] %s: failed to find/create customer %s, skipping", origin, customer.key)
        return OrderOutcome(order.order_id, origin, OrderStatus.CUSTOMER_FAILED, customer=customer)
    logger.info("[ORDER-SYNC] %s: customer %s %s (ID: %s)", origin, customer.key, customer.status.value, customer.record_id)

    # 3) Line presence
    if not order.line_items:
        logger.warning("[ORDER-SYNC] %s has no line items, skipping", origin)
        return OrderOutcome(order.order_id, origin, OrderStatus.NO_LINE_ITEMS, customer=customer)

    # 4) Lines
    lines: List[LineOutcome] = []
    rows: List[OrderLineValues] = []
    for item in order.line_items:
        line = await _resolve_line(session, origin, item)
        lines.append(line)
        if not line.kept:
            logger.warning("[ORDER-SYNC] %s: failed to find/create product %s for %r, line dropped",
                           origin, line.product.key, line.name)
            continue
        rows.append(OrderLineValues(
            product_id=line.product.record_id,
            name=line.name,
            product_uom_qty=line.quantity,
            price_unit=line.price,
        ))
        logger.info("[ORDER-SYNC] %s: line %s x%s @ %s", origin, line.name, line.quantity, line.price)

    # 5) Line set
    if not rows:
        logger.error("[ORDER-SYNC] %s: no valid product lines, skipping", origin)
        return OrderOutcome(order.order_id, origin, OrderStatus.NO_VALID_LINES, customer=customer, lines=lines)

    # 6) Create
    values = SaleOrderValues(
        partner_id=customer.record_id,
        origin=origin,
        client_order_ref=str(order.order_id),
        state="draft",
        date_order=odoo_datetime(order.date_created),
        order_line=rows,
    )
    odoo_id = await session.create(SALE_ORDER_MODEL, values.to_odoo())
    if odoo_id is None:
        logger.error("[ORDER-SYNC] %s: could not create sale.order", origin)
        return OrderOutcome(order.order_id, origin, OrderStatus.CREATE_FAILED, customer=customer, lines=lines)

    logger.info("[ORDER-SYNC] %s created in Odoo (ID: %s, %d/%d lines)", origin, odoo_id, len(rows), len(lines))
    return OrderOutcome(order.order_id, origin, OrderStatus.CREATED, odoo_id=odoo_id, customer=customer, lines=lines)
