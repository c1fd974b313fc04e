#=================================================================
# woo_odoo/sync/order_sync.py
# One WooCommerce → Odoo order sync run.
#=================================================================
from __future__ import annotations

import logging
from functools import partial
from typing import Any, Awaitable, Callable, Dict, List, Optional

from woo_odoo.config import Settings, settings
from woo_odoo.odoo.odoo_orders import import_order, origin_tag
from woo_odoo.odoo.odoo_session import OdooSession
from woo_odoo.sync.outcomes import OrderOutcome, OrderStatus, SyncRunResult
from woo_odoo.woo.order_normalizer import normalize_order
from woo_odoo.woo.woocommerce import SourceFetchError, fetch_recent_orders

logger = logging.getLogger("uvicorn.error")

FetchOrders = Callable[[], Awaitable[List[Dict[str, Any]]]]

# Stands in for the origin tag of a document that carries no Woo id.
UNKNOWN_ORIGIN = "WC-?"


class SyncAborted(RuntimeError):
    """Run-fatal precondition failure; nothing past this point was attempted."""


def _default_fetch(cfg: Settings) -> FetchOrders:
    return partial(
        fetch_recent_orders,
        cfg.WOO_URL,
        cfg.WOO_CK,
        cfg.WOO_CS,
        per_page=cfg.WOO_PAGE_SIZE,
        timeout=cfg.WOO_TIMEOUT,
        verify=cfg.WOO_VERIFY_SSL,
    )


async def _import_isolated(session: OdooSession, doc: Any) -> OrderOutcome:
    order_id = doc.get("id") if isinstance(doc, dict) else None
    origin = origin_tag(order_id) if order_id is not None else UNKNOWN_ORIGIN
    try:
        return await import_order(session, normalize_order(doc))
    except Exception as e:
        logger.exception("[ORDER-SYNC] unexpected error processing order %s: %s", origin, e)
        return OrderOutcome(order_id, origin, OrderStatus.ERROR, error=str(e))


async def run_order_sync(
    cfg: Settings = settings,
    *,
    session: Optional[OdooSession] = None,
    fetch_orders: Optional[FetchOrders] = None,
) -> SyncRunResult:
    """
    Authenticate once, fetch one page of orders, import each in isolation.

    Raises SyncAborted for missing configuration, Odoo authentication failure,
    or a failed order fetch. Per-order failures only show up in the result.
    """
    logger.info("[ORDER-SYNC] starting WooCommerce → Odoo sync")

    missing = cfg.missing_woo_settings()
    if missing:
        raise SyncAborted(f"Missing WooCommerce credentials ({', '.join(missing)})")
    missing = cfg.missing_odoo_settings()
    if missing:
        raise SyncAborted(f"Missing Odoo credentials ({', '.join(missing)})")

    session = session or OdooSession(timeout=cfg.ODOO_TIMEOUT, verify=cfg.ODOO_VERIFY_SSL)
    auth = await session.authenticate(cfg.ODOO_URL, cfg.ODOO_DB, cfg.ODOO_USER, cfg.ODOO_PASS)
    if not auth:
        logger.error("[ORDER-SYNC] Odoo authentication failed: %s", auth.reason)
        raise SyncAborted(f"Odoo authentication failed: {auth.reason}")

    fetch = fetch_orders or _default_fetch(cfg)
    try:
        docs = await fetch()
    except SourceFetchError as e:
        logger.error("[ORDER-SYNC] %s", e)
        raise SyncAborted(str(e)) from e

    result = SyncRunResult(total=len(docs))
    if not docs:
        logger.info("[ORDER-SYNC] no orders to sync")
        return result

    logger.info("[ORDER-SYNC] found %d orders to process", len(docs))
    for doc in docs:
        result.record(await _import_isolated(session, doc))

    logger.info(
        "[ORDER-SYNC] finished: total=%d processed=%d (created=%d, already=%d) errors=%d failed_entities=%d",
        result.total, result.processed, result.created, result.already_imported,
        result.errors, result.failed_entities,
    )
    return result
