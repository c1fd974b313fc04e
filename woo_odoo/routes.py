#=======================================================================================
# woo_odoo/routes.py
# FastAPI routes for the WooCommerce → Odoo order sync.
#
# Canonical API lives under /api/*; /sync/* are root-level aliases.
# IMPORTANT: include with NO extra prefix in main_app.py to avoid /api/api duplication.
#=======================================================================================

import asyncio
import logging
import secrets

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from woo_odoo.config import settings
from woo_odoo.odoo.odoo_session import OdooSession
from woo_odoo.sync.order_sync import SyncAborted, run_order_sync

logger = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/api", tags=["Order Sync"])
compat_router = APIRouter(tags=["Order Sync (Compat)"])  # root-level aliases (/sync/*)

# One run per process at a time; a second trigger while one is running gets 409.
_RUN_LOCK = asyncio.Lock()

# ---------------------------
# HTTP Basic (admin)
# ---------------------------
security = HTTPBasic()

def verify_admin(credentials: HTTPBasicCredentials = Depends(security)):
    ok_user = secrets.compare_digest(credentials.username or "", settings.ADMIN_USER or "")
    ok_pass = secrets.compare_digest(credentials.password or "", settings.ADMIN_PASS or "")
    if not (ok_user and ok_pass):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Basic"},
        )

# ----------------------------------------------------------------------
# Order sync
# ----------------------------------------------------------------------

@router.post("/sync/orders", dependencies=[Depends(verify_admin)])
async def api_sync_orders():
    """
    Run one WooCommerce → Odoo order sync and wait for it.

    200: {status, total, processed, errors, created, already_imported, failed_entities}
    500 (text/plain): a precondition failed (config, Odoo login, Woo fetch)
    409 (text/plain): another run is in progress in this process
    """
    if _RUN_LOCK.locked():
        logger.warning("[ORDER-SYNC] trigger rejected: a run is already in progress")
        return PlainTextResponse("Order sync already running", status_code=409)

    async with _RUN_LOCK:
        try:
            result = await run_order_sync(settings)
        except SyncAborted as e:
            logger.error("[ORDER-SYNC] aborted: %s", e)
            return PlainTextResponse(str(e), status_code=500)

    return JSONResponse(content=result.as_dict())


@router.get("/odoo/ping", dependencies=[Depends(verify_admin)])
async def api_odoo_ping():
    """Checks that Odoo is reachable and the configured login works."""
    session = OdooSession(timeout=10.0, verify=settings.ODOO_VERIFY_SSL)
    auth = await session.authenticate(settings.ODOO_URL, settings.ODOO_DB, settings.ODOO_USER, settings.ODOO_PASS)
    if auth:
        return JSONResponse(content={"success": True, "uid": auth.uid})
    return JSONResponse(content={"success": False, "error": auth.reason})

# ----------------------------------------------------------------------
# Root-level aliases
# ----------------------------------------------------------------------

@compat_router.post("/sync/orders", dependencies=[Depends(verify_admin)])
async def compat_sync_orders():
    return await api_sync_orders()
