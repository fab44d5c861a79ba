"""
API Dependencies

Reusable FastAPI dependencies: the negocio lookup every per-negocio route
starts with, the two guards (super-admin key and negocio session), and the
pluggable blob store and text generator.
"""
from functools import lru_cache
from typing import Optional, Dict, Any
from fastapi import Depends, Header, Query, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from negocio_api.config import get_settings
from negocio_api.database import get_db
from negocio_api.models.tenant import Tenant
from negocio_api.models.resource import ResourceKind
from negocio_api.core.security import decode_access_token, verify_token_tenant
from negocio_api.core.permissions import Operation, is_public, check_super_admin_key
from negocio_api.core.exceptions import AuthenticationError, PermissionDenied
from negocio_api.services import tenant_service
from negocio_api.services.blob_storage import BlobStore, LocalBlobStore, S3BlobStore
from negocio_api.services.text_generation import TextGenerator, TemplateTextGenerator
from negocio_api.utils.logging import log_security_event, get_logger

logger = get_logger(__name__)

# Bearer token is optional at the scheme level; the guards decide
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_tenant(
    negocio_id: str,
    request: Request,
    db: Session = Depends(get_db)
) -> Tenant:
    """
    Load the negocio named in the path, 404 if it does not exist.

    Every per-negocio route depends on this, so a deleted negocio stops
    answering everywhere at once.
    """
    tenant = tenant_service.get_tenant(db, negocio_id)
    request.state.tenant = tenant
    return tenant


def require_super_admin(
    x_super_admin_key: Optional[str] = Header(None, alias="X-Super-Admin-Key"),
    super_admin_key: Optional[str] = Query(None, alias="superAdminKey"),
) -> None:
    """
    Super-admin guard.

    The key comes from the X-Super-Admin-Key header or, for older clients,
    the superAdminKey query parameter.
    """
    supplied = x_super_admin_key or super_admin_key
    try:
        check_super_admin_key(supplied, get_settings().SUPER_ADMIN_KEY)
    except (AuthenticationError, PermissionDenied) as exc:
        log_security_event(
            "super_admin_rejected",
            {"reason": "missing_key" if not supplied else "wrong_key"},
            logger
        )
        raise exc


def ensure_tenant_session(
    credentials: Optional[HTTPAuthorizationCredentials],
    tenant: Tenant
) -> Optional[Dict[str, Any]]:
    """
    Check that the bearer token was issued for this negocio.

    With REQUIRE_TENANT_TOKEN disabled only the negocio's existence has been
    checked and this returns None.
    """
    if not get_settings().REQUIRE_TENANT_TOKEN:
        return None

    if credentials is None:
        raise AuthenticationError("Sesión requerida")

    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise AuthenticationError("Sesión inválida o expirada")

    # CRITICAL: a token from one negocio must not work on another
    if not verify_token_tenant(payload, tenant.id):
        log_security_event(
            "tenant_isolation_violation",
            {"token_tenant": payload.get("tenant_id"), "request_tenant": tenant.id},
            logger
        )
        raise PermissionDenied("La sesión no corresponde a este negocio")

    return payload


def require_tenant_session(
    tenant: Tenant = Depends(get_current_tenant),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Tenant:
    """Negocio admin guard for configuration, media and collection writes."""
    ensure_tenant_session(credentials, tenant)
    return tenant


def authorize_collection_access(
    kind: ResourceKind,
    operation: Operation,
    tenant: Tenant,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> None:
    """Apply the collection access policy: public operations pass, the rest need a session."""
    if is_public(kind, operation):
        return
    ensure_tenant_session(credentials, tenant)


@lru_cache()
def get_blob_store() -> BlobStore:
    settings = get_settings()
    if settings.BLOB_BACKEND == "s3":
        if not settings.S3_BUCKET:
            raise RuntimeError("S3_BUCKET must be set when BLOB_BACKEND=s3")
        return S3BlobStore(settings.S3_BUCKET, settings.S3_REGION, settings.S3_PUBLIC_URL)
    return LocalBlobStore(settings.LOCAL_MEDIA_DIR, settings.PUBLIC_BASE_URL)


@lru_cache()
def get_text_generator() -> TextGenerator:
    return TemplateTextGenerator()
