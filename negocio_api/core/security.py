"""
Security Module

Handles tenant session tokens (JWT via python-jose) and secret comparisons.

SECURITY NOTES:
- Tokens carry the negocio ID; a token is only honoured on routes for that negocio
- Tokens expire (ACCESS_TOKEN_EXPIRE_MINUTES)
- Super-admin key and PIN checks use constant-time comparison
"""
from datetime import datetime, timedelta
from typing import Optional, Dict, Any
import secrets
from jose import JWTError, jwt
from negocio_api.config import get_settings


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Token payload includes:
    - sub: negocio ID
    - tenant_id: negocio ID, checked against the path on every guarded route
    - exp / iat
    """
    settings = get_settings()
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({
        "exp": expire,
        "iat": datetime.utcnow()
    })

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode and verify a JWT token.

    Returns the payload if valid, None if invalid/expired.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None


def verify_token_tenant(token_payload: Dict[str, Any], expected_tenant_id: str) -> bool:
    """Verify that the token was issued for the negocio being accessed."""
    return token_payload.get("tenant_id") == expected_tenant_id


def secrets_match(supplied: Optional[str], expected: str) -> bool:
    """Constant-time string comparison; None never matches."""
    if supplied is None:
        return False
    return secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))
