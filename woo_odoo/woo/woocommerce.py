#==========================================================================================
# woo_odoo/woo/woocommerce.py
# WooCommerce REST interface: read-only access to recent orders.
#==========================================================================================
import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger("uvicorn.error")


class SourceFetchError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


# ---- Orders ----

async def fetch_recent_orders(
    base_url: str,
    consumer_key: str,
    consumer_secret: str,
    *,
    per_page: int = 20,
    timeout: float = 30.0,
    verify: bool = True,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[Dict[str, Any]]:
    """
    Fetch ONE page of the most recent orders (no status filter, no further pages).
    Raises SourceFetchError on transport failure, non-200, or a non-list body.
    """
    url = f"{(base_url or '').rstrip('/')}/wp-json/wc/v3/orders"
    auth = (consumer_key, consumer_secret)
    async with httpx.AsyncClient(timeout=timeout, verify=verify, transport=transport) as client:
        try:
            resp = await client.get(url, auth=auth, params={"per_page": per_page})
        except httpx.HTTPError as e:
            raise SourceFetchError(f"WooCommerce request failed: {e}") from e

    if resp.status_code != 200:
        logger.error("[WOO] orders fetch failed status=%s body=%s", resp.status_code, resp.text)
        raise SourceFetchError(
            f"WooCommerce Error ({resp.status_code}): {resp.text}",
            status_code=resp.status_code,
            body=resp.text,
        )
    try:
        batch = resp.json()
    except ValueError as e:
        raise SourceFetchError(f"WooCommerce returned non-JSON body: {e}", status_code=resp.status_code) from e
    if not isinstance(batch, list):
        raise SourceFetchError(f"Unexpected WooCommerce response for /orders: {batch!r}", status_code=resp.status_code)

    logger.info("[WOO] fetched %d orders", len(batch))
    return batch
