"""
Custom Exceptions

Centralized exception definitions for better error handling.
FastAPI automatically converts these to appropriate HTTP responses.
"""
from fastapi import HTTPException, status


class TenantNotFoundError(HTTPException):
    """Raised when a negocio cannot be found."""

    def __init__(self, negocio_id: str = ""):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Negocio no encontrado: {negocio_id}" if negocio_id else "Negocio no encontrado"
        )


class ResourceNotFoundError(HTTPException):
    """Raised when a nested document cannot be found in its tenant."""

    def __init__(self, kind: str = "", resource_id: str = ""):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No encontrado: {kind}/{resource_id}" if resource_id else "Documento no encontrado"
        )


class AuthenticationError(HTTPException):
    """Raised when credentials or the session token are missing or wrong."""

    def __init__(self, detail: str = "Credenciales inválidas"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class PermissionDenied(HTTPException):
    """Raised when the caller is identified but not allowed."""

    def __init__(self, detail: str = "No autorizado"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )


class RateLimitExceeded(HTTPException):
    """Raised when rate limit is exceeded."""

    def __init__(self, retry_after: int = 60):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Demasiadas solicitudes. Intenta de nuevo más tarde.",
            headers={"Retry-After": str(retry_after)}
        )


class InvalidInputError(HTTPException):
    """Raised when input validation fails."""

    def __init__(self, detail: str = "Datos inválidos"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )
