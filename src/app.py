"""Storefront FastAPI application.

Serves the public storefront (carts, checkout, tracking, catalogue reads and
the live change stream) and the admin back office (orders, status updates,
analytics, catalogue edits). Each request is wrapped in the correct domain
context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalogue.domain import catalogue
from ordering.domain import ordering
from shared.logging import add_context, clear_context, configure_logging

configure_logging()
logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV selects the config overlay (database provider).
ordering.init()
catalogue.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/carts": ordering,
    "/orders": ordering,
    "/tracking": ordering,
    "/analytics": ordering,
    "/products": catalogue,
    "/categories": catalogue,
    "/catalogue": catalogue,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Bazaar API",
    description="Cash-on-delivery storefront — Ordering & Catalogue domains",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    clear_context()
    add_context(request_id=request.headers.get("X-Request-ID") or uuid.uuid4().hex, path=request.url.path)

    domain = _resolve_domain(request.url.path)
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
        return response
    # No domain match: health check and docs
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from catalogue.api import category_router, changes_router, product_router  # noqa: E402
from ordering.api import analytics_router, cart_router, order_router, tracking_router  # noqa: E402
from shared.api_errors import register_exception_handlers  # noqa: E402

app.include_router(cart_router)
app.include_router(order_router)
app.include_router(tracking_router)
app.include_router(analytics_router)
app.include_router(product_router)
app.include_router(category_router)
app.include_router(changes_router)

register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "ordering": {"name": ordering.name},
                "catalogue": {"name": catalogue.name},
            },
        }
    )
