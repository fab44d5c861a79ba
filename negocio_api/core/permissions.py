"""
Access Policy

Two kinds of caller exist: the super-admin (one shared key) and a negocio
admin (session token from /api/auth/login). Storefront visitors are
anonymous.

DESIGN: Reads of nested collections are public because the storefront
renders them. Writes need a negocio session, except orders, which
visitors place from the public site.
"""
from typing import Optional
import enum

from negocio_api.models.resource import ResourceKind
from negocio_api.core.exceptions import AuthenticationError, PermissionDenied
from negocio_api.core.security import secrets_match


class Operation(str, enum.Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


PUBLIC_OPERATIONS = {
    (kind, Operation.READ) for kind in ResourceKind
} | {(ResourceKind.PEDIDOS, Operation.CREATE)}


def is_public(kind: ResourceKind, operation: Operation) -> bool:
    """True when anonymous callers may perform the operation on the collection."""
    return (kind, operation) in PUBLIC_OPERATIONS


def check_super_admin_key(supplied_key: Optional[str], expected_key: str) -> None:
    """
    Fail closed on a missing or wrong super-admin key.

    Missing key -> 401, wrong key -> 403.
    """
    if not supplied_key:
        raise AuthenticationError("Super-admin key requerida")
    if not secrets_match(supplied_key, expected_key):
        raise PermissionDenied("No autorizado")
