"""Administrator access check for admin-only routes.

Requests carry the shared admin token in the ``X-Admin-Token`` header; it is
compared with ``STOREFRONT_ADMIN_TOKEN``. With no token configured every
admin request is refused.
"""

import os
import secrets

import structlog
from fastapi import Header, HTTPException

logger = structlog.get_logger(__name__)

ADMIN_TOKEN_ENV = "STOREFRONT_ADMIN_TOKEN"


def require_admin(x_admin_token: str | None = Header(default=None)) -> str:
    """FastAPI dependency returning the acting administrator's name."""
    if not x_admin_token:
        raise HTTPException(status_code=401, detail="Admin token required")

    expected = os.getenv(ADMIN_TOKEN_ENV)
    if not expected or not secrets.compare_digest(x_admin_token.encode(), expected.encode()):
        logger.warning("Admin access denied")
        raise HTTPException(status_code=403, detail="Admin access denied")

    return "admin"
