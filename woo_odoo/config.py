# ----------------------------------------------------------------
# Import configuration variables to be used throughout the project
# ----------------------------------------------------------------
import os
from dotenv import load_dotenv

# Load .env (allow container env to override file values)
load_dotenv(override=True)


def _rstrip_slash(s: str) -> str:
    return (s or "").rstrip("/")


def _get_bool(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "on", "y"}


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, "") or default)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, "") or default)
    except ValueError:
        return default


class Settings:
    # ── WooCommerce (source) ─────────────────────────────────────────────────
    WOO_URL: str = _rstrip_slash(os.getenv("WOO_URL", ""))
    WOO_CK: str = os.getenv("WOO_CK", "")
    WOO_CS: str = os.getenv("WOO_CS", "")
    WOO_PAGE_SIZE: int = _get_int("WOO_PAGE_SIZE", 20)
    WOO_TIMEOUT: float = _get_float("WOO_TIMEOUT", 30.0)
    WOO_VERIFY_SSL: bool = _get_bool("WOO_VERIFY_SSL", True)

    # ── Odoo (target) ────────────────────────────────────────────────────────
    ODOO_URL: str = _rstrip_slash(os.getenv("ODOO_URL", ""))
    ODOO_DB: str = os.getenv("ODOO_DB", "")
    ODOO_USER: str = os.getenv("ODOO_EMAIL", "")  # keep the name ODOO_USER in code
    ODOO_PASS: str = os.getenv("ODOO_PASSWORD", "")
    ODOO_TIMEOUT: float = _get_float("ODOO_TIMEOUT", 30.0)
    ODOO_VERIFY_SSL: bool = _get_bool("ODOO_VERIFY_SSL", True)

    # ── Admin (HTTP Basic on the sync trigger) ──────────────────────────────
    ADMIN_USER: str = os.getenv("ADMIN_USER", "admin")
    ADMIN_PASS: str = os.getenv("ADMIN_PASS", "changeme")

    # ── CORS ─────────────────────────────────────────────────────────────────
    # Comma-separated list in .env, e.g. "https://example.com, https://foo.bar"
    CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    def missing_woo_settings(self) -> list[str]:
        pairs = [("WOO_URL", self.WOO_URL), ("WOO_CK", self.WOO_CK), ("WOO_CS", self.WOO_CS)]
        return [name for name, value in pairs if not value]

    def missing_odoo_settings(self) -> list[str]:
        pairs = [
            ("ODOO_URL", self.ODOO_URL),
            ("ODOO_DB", self.ODOO_DB),
            ("ODOO_EMAIL", self.ODOO_USER),
            ("ODOO_PASSWORD", self.ODOO_PASS),
        ]
        return [name for name, value in pairs if not value]


settings = Settings()
