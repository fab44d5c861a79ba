"""
Authentication Endpoints

Negocio admin login with the username/PIN pair issued at creation. A
successful login returns a session token scoped to that negocio.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from datetime import timedelta

from negocio_api.database import get_db
from negocio_api.schemas.auth import LoginRequest, LoginResponse
from negocio_api.core.security import create_access_token
from negocio_api.core.exceptions import AuthenticationError, PermissionDenied
from negocio_api.services import tenant_service
from negocio_api.config import get_settings
from negocio_api.utils.logging import log_security_event, get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate a negocio admin.

    SECURITY: Wrong user and wrong PIN produce the same 401 so usernames
    cannot be probed. An inactive negocio gets 403.
    """
    settings = get_settings()
    try:
        tenant = tenant_service.authenticate(
            db, credentials.user, credentials.pin, credentials.negocio_id
        )
    except AuthenticationError:
        log_security_event(
            "failed_login",
            {"user": credentials.user, "negocio_id": credentials.negocio_id},
            logger
        )
        raise
    except PermissionDenied:
        log_security_event("failed_login", {"reason": "negocio_inactive", "user": credentials.user}, logger)
        raise

    access_token = create_access_token(
        {"sub": tenant.id, "tenant_id": tenant.id, "user": tenant.user},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    logger.info(f"Successful login: negocio={tenant.id}", extra={"tenant_id": tenant.id})

    return LoginResponse(
        negocio_id=tenant.id,
        nombre_negocio=tenant.nombre_negocio,
        brief_completado=tenant.brief_completado,
        access_token=access_token,
    )
