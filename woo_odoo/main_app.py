#=================================================================
# woo_odoo/main_app.py
# FastAPI application entry-point.
#=================================================================

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from woo_odoo import logging_filters  # noqa: F401  (installs log filters on import)
from woo_odoo.routes import router as api_router
from woo_odoo.routes import compat_router as api_compat_router  # /sync/* aliases
from woo_odoo.config import settings

# --- FastAPI instance ---
app = FastAPI(
    title="WooCommerce → Odoo Order Sync",
    description="Imports recent WooCommerce orders into Odoo as draft sales orders.",
)

# --- Logging setup (console, INFO level) ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s | %(message)s"
)
logger = logging.getLogger("uvicorn.error")
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------- Include routers ----------------
app.include_router(api_router)           # /api/*
app.include_router(api_compat_router)    # /sync/*

# --- Root endpoint ---
@app.get("/")
async def home():
    return {"status": "running", "service": "WooCommerce Odoo Order Sync"}

# --- Global error handler (keeps full stack trace in logs) ---
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": f"Sync failed: {str(exc)}"},
    )

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
