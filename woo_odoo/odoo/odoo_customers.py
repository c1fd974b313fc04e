# woo_odoo/odoo/odoo_customers.py
from __future__ import annotations

from typing import List, Optional, Tuple

from woo_odoo.odoo.odoo_models import PartnerValues
from woo_odoo.odoo.odoo_session import OdooSession
from woo_odoo.sync.components.util import is_valid_email
from woo_odoo.sync.outcomes import Resolution, ResolutionStatus
from woo_odoo.woo.order_normalizer import WooOrder

PARTNER_MODEL = "res.partner"

DEFAULT_COUNTRY_ID = 195  # res.country: Senegal
PLACEHOLDER_EMAIL_DOMAIN = "placeholder.local"


# ---------------------------
# Field helpers
# ---------------------------

def placeholder_email(order_id) -> str:
    return f"no-email-{order_id}@{PLACEHOLDER_EMAIL_DOMAIN}"


def customer_email(order: WooOrder) -> Tuple[str, Optional[str]]:
    """(email, note). The placeholder depends only on the order id, so reruns dedup on it."""
    email = order.billing.email or ""
    if is_valid_email(email):
        return email, None
    substitute = placeholder_email(order.order_id)
    return substitute, f"invalid or missing email {email!r}, using {substitute}"


def customer_name(order: WooOrder) -> Tuple[str, Optional[str]]:
    b = order.billing
    full = " ".join(p for p in [b.first_name, b.last_name] if p).strip()
    if full:
        return full, None
    substitute = f"WooCommerce Customer #{order.order_id}"
    return substitute, f"missing customer name, using {substitute!r}"


def partner_values(order: WooOrder, email: str, name: str, country_id: int = DEFAULT_COUNTRY_ID) -> PartnerValues:
    b = order.billing
    return PartnerValues(
        name=name,
        email=email,
        phone=b.phone or False,
        street=b.street or False,
        city=b.city or False,
        zip=b.postal_code or False,
        country_id=country_id,
        customer_rank=1,
    )


# ---------------------------
# Public entry
# ---------------------------

async def resolve_customer(session: OdooSession, order: WooOrder) -> Resolution:
    """
    Find the partner by exact email or create it. Found partners are returned as-is,
    never updated from the order.
    """
    notes: List[str] = []
    email, note = customer_email(order)
    if note:
        notes.append(note)

    existing = await session.search(PARTNER_MODEL, [["email", "=", email]])
    if existing:
        return Resolution(ResolutionStatus.FOUND, email, existing[0]["id"], notes)

    name, note = customer_name(order)
    if note:
        notes.append(note)

    values = partner_values(order, email, name)
    partner_id = await session.create(PARTNER_MODEL, values.model_dump())
    if partner_id is None:
        return Resolution(ResolutionStatus.FAILED_REMOTE, email, None, notes)
    return Resolution(ResolutionStatus.CREATED, email, partner_id, notes)
