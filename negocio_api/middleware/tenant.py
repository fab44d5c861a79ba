"""
Tenant Context Middleware

Per-negocio routes carry the negocio ID as the first path segment after
/api (/api/{negocioID}/...). This middleware copies it into request.state
so the rate limiter and error logging can attribute the request before any
route runs.

NOTE: This does not load or validate the negocio. The get_current_tenant
dependency does that and answers 404 for unknown IDs.
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Optional
import logging

logger = logging.getLogger(__name__)

API_PREFIX = "/api/"

# First segments under /api that are not negocio IDs
RESERVED_SEGMENTS = {"super-admin", "auth", "ia"}


def extract_negocio_id(path: str) -> Optional[str]:
    """"/api/neg_abc/productos" -> "neg_abc"; None for non-negocio paths."""
    if not path.startswith(API_PREFIX):
        return None
    segment = path[len(API_PREFIX):].split("/", 1)[0]
    if not segment or segment in RESERVED_SEGMENTS:
        return None
    return segment


class TenantContextMiddleware(BaseHTTPMiddleware):
    """Attach the path's negocio ID (or None) to request.state.tenant_id."""

    async def dispatch(self, request: Request, call_next):
        negocio_id = extract_negocio_id(request.url.path)
        request.state.tenant_id = negocio_id
        if negocio_id:
            logger.debug(f"Request for negocio: {negocio_id}")
        return await call_next(request)
