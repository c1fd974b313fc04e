# Run one WooCommerce → Odoo order sync from the command line (cron, manual catch-up).
# Usage: python -m woo_odoo.scripts.run_order_sync
# Reads the same .env as the API (WOO_*, ODOO_*).

import asyncio
import json
import logging
import sys

from woo_odoo import logging_filters  # noqa: F401
from woo_odoo.sync.order_sync import SyncAborted, run_order_sync


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s | %(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)
    try:
        result = asyncio.run(run_order_sync())
    except SyncAborted as e:
        print(f"Sync aborted: {e}", file=sys.stderr)
        return 1
    print(json.dumps(result.as_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
