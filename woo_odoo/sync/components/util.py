# woo_odoo/sync/components/util.py
from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_ODOO_DT_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})[T ](\d{2}:\d{2}:\d{2})")

ODOO_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def clean_str(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def is_valid_email(email: str | None) -> bool:
    return bool(email) and bool(_EMAIL_RE.match(email))


def _to_number(v: Any) -> Optional[float]:
    if v is None or isinstance(v, bool):
        return None
    try:
        n = float(str(v).strip()) if isinstance(v, str) else float(v)
    except (TypeError, ValueError):
        return None
    return n if math.isfinite(n) else None


def sanitize_price(v: Any) -> Tuple[float, bool]:
    """Return (price, defaulted). Non-numeric or negative prices become 0."""
    n = _to_number(v)
    if n is None or n < 0:
        return 0.0, True
    return n, False


def sanitize_quantity(v: Any) -> Tuple[float, bool]:
    """Return (qty, defaulted). Non-numeric, zero or negative quantities become 1."""
    n = _to_number(v)
    if n is None or n <= 0:
        return 1.0, True
    return n, False


def odoo_datetime(raw: str | None, now: datetime | None = None) -> str:
    """
    Woo timestamps ("2024-06-01T12:00:00", sometimes with ".123" or "Z"/"+02:00")
    to Odoo's "YYYY-MM-DD HH:MM:SS". Fraction and zone marker are dropped, not converted.
    """
    m = _ODOO_DT_RE.match((raw or "").strip())
    if m:
        return f"{m.group(1)} {m.group(2)}"
    now = now or datetime.now(timezone.utc)
    return now.strftime(ODOO_DATETIME_FORMAT)
