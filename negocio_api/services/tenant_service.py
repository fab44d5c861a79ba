"""
Negocio Service

Identity and lifecycle operations on negocios: creation with generated
credentials, listing, configuration updates, login checks and cascading
deletion.
"""
from typing import Any, Dict, List, Optional
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from negocio_api.models.tenant import Tenant
from negocio_api.models.resource import TenantResource, ResourceKind
from negocio_api.core.credentials import generate_negocio_id, generate_username, generate_pin
from negocio_api.core.exceptions import (
    TenantNotFoundError,
    AuthenticationError,
    PermissionDenied,
)
from negocio_api.core.security import secrets_match
from negocio_api.services.collections import new_document

logger = logging.getLogger(__name__)

DEFAULT_COLORS = {
    "primario": "#3B82F6",
    "secundario": "#10B981",
}

# Concurrent creations can race for the same username
MAX_CREATE_ATTEMPTS = 5

DEFAULT_SECTIONS = (
    "productos",
    "servicios",
    "testimonios",
    "casosExito",
    "galeria",
    "pedidos",
    "sobreNosotros",
    "contacto",
)


def default_config(nombre_negocio: str, email: str) -> Dict[str, Any]:
    """Storefront configuration seeded for a new negocio."""
    return {
        "nombre": nombre_negocio,
        "slogan": "",
        "colores": dict(DEFAULT_COLORS),
        "contacto": {
            "email": email,
            "telefono": "",
            "whatsapp": "",
            "direccion": "",
            "redesSociales": {},
        },
        "contenido": {
            "sobreNosotros": "",
            "mision": "",
            "vision": "",
        },
    }


def default_sections() -> Dict[str, bool]:
    return {name: True for name in DEFAULT_SECTIONS}


def _unique_username(db: Session, base: str) -> str:
    """Append -2, -3, ... until the username is free."""
    candidate = base
    suffix = 2
    while db.query(Tenant.id).filter(Tenant.user == candidate).first() is not None:
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


def create_tenant(db: Session, nombre_negocio: str, email: str) -> Tenant:
    """
    Create a negocio with a fresh ID, admin username and PIN.

    The returned instance carries the plain credentials; the caller shows
    them to the super-admin once. If another request takes the chosen
    username first, the insert is retried with the next free suffix.
    """
    base = generate_username(nombre_negocio)
    for attempt in range(1, MAX_CREATE_ATTEMPTS + 1):
        tenant = Tenant(
            id=generate_negocio_id(),
            nombre_negocio=nombre_negocio,
            email=email,
            user=_unique_username(db, base),
            pin=generate_pin(),
            activo=True,
            brief_completado=False,
            config=default_config(nombre_negocio, email),
            secciones_activas=default_sections(),
        )
        db.add(tenant)
        try:
            db.commit()
            break
        except IntegrityError:
            db.rollback()
            logger.warning(f"Username {tenant.user} taken concurrently (attempt {attempt})")
            if attempt == MAX_CREATE_ATTEMPTS:
                raise
    db.refresh(tenant)

    logger.info(f"Negocio created: {tenant.id} (user={tenant.user})", extra={"tenant_id": tenant.id})
    return tenant


def get_tenant(db: Session, negocio_id: str) -> Tenant:
    """Load a negocio or raise TenantNotFoundError."""
    tenant = db.query(Tenant).filter(Tenant.id == negocio_id).first()
    if tenant is None:
        raise TenantNotFoundError(negocio_id)
    return tenant


def list_tenants(db: Session) -> List[Tenant]:
    return db.query(Tenant).order_by(Tenant.created_at.desc()).all()


def to_summary(tenant: Tenant) -> Dict[str, Any]:
    """
    Normalized projection for the super-admin listing.

    Missing flags fall back to their defaults (activo -> True,
    briefCompletado -> False).
    """
    return {
        "id": tenant.id,
        "negocio_id": tenant.id,
        "nombre_negocio": tenant.nombre_negocio or "",
        "email": tenant.email or "",
        "user": tenant.user,
        "pin": tenant.pin,
        "activo": True if tenant.activo is None else tenant.activo,
        "brief_completado": bool(tenant.brief_completado),
        "secciones_activas": tenant.secciones_activas or default_sections(),
        "fecha_creacion": tenant.created_at,
        "fecha_actualizacion": tenant.updated_at,
    }


def update_tenant(db: Session, negocio_id: str, fields: Dict[str, Any]) -> Tenant:
    """Super-admin update of identity and status fields."""
    tenant = get_tenant(db, negocio_id)
    for name, value in fields.items():
        setattr(tenant, name, value)
    db.commit()
    db.refresh(tenant)

    logger.info(f"Negocio updated: {negocio_id} fields={sorted(fields)}", extra={"tenant_id": negocio_id})
    return tenant


def reset_pin(db: Session, negocio_id: str) -> Tenant:
    tenant = get_tenant(db, negocio_id)
    tenant.pin = generate_pin()
    db.commit()
    db.refresh(tenant)

    logger.info(f"PIN reset for negocio {negocio_id}", extra={"tenant_id": negocio_id})
    return tenant


def get_tenant_config(db: Session, negocio_id: str) -> Dict[str, Any]:
    return dict(get_tenant(db, negocio_id).config or {})


def update_tenant_config(db: Session, negocio_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge fields into the config document.

    Field names and types are not validated; whatever structure is sent is
    stored.
    """
    tenant = get_tenant(db, negocio_id)
    tenant.config = {**(tenant.config or {}), **fields}
    db.commit()
    db.refresh(tenant)

    logger.info(f"Config updated for negocio {negocio_id}", extra={"tenant_id": negocio_id})
    return dict(tenant.config)


def get_active_sections(db: Session, negocio_id: str) -> Dict[str, bool]:
    return dict(get_tenant(db, negocio_id).secciones_activas or {})


def update_active_sections(db: Session, negocio_id: str, sections: Dict[str, bool]) -> Dict[str, bool]:
    """Replace the whole toggle map."""
    tenant = get_tenant(db, negocio_id)
    tenant.secciones_activas = dict(sections)
    db.commit()
    db.refresh(tenant)

    logger.info(f"Sections replaced for negocio {negocio_id}", extra={"tenant_id": negocio_id})
    return dict(tenant.secciones_activas)


def submit_brief(
    db: Session,
    negocio_id: str,
    config: Dict[str, Any],
    productos_iniciales: List[Dict[str, Any]],
) -> int:
    """
    Store the onboarding brief: merge its config, add the initial products
    and mark the brief as completed. Returns the number of products added.
    """
    tenant = get_tenant(db, negocio_id)
    tenant.config = {**(tenant.config or {}), **config}
    tenant.brief_completado = True

    for producto in productos_iniciales:
        db.add(new_document(negocio_id, ResourceKind.PRODUCTOS, producto))

    db.commit()

    logger.info(
        f"Brief stored for negocio {negocio_id} with {len(productos_iniciales)} productos",
        extra={"tenant_id": negocio_id}
    )
    return len(productos_iniciales)


def delete_tenant(db: Session, negocio_id: str) -> Dict[str, int]:
    """
    Delete a negocio and every nested collection.

    Runs in a single transaction: collections are bulk-deleted kind by kind,
    then the negocio row. Any failure rolls the whole sequence back.
    Returns the number of documents removed per kind.
    """
    tenant = get_tenant(db, negocio_id)
    removed = {}
    try:
        for kind in ResourceKind:
            removed[kind.value] = db.query(TenantResource).filter(
                TenantResource.negocio_id == negocio_id,
                TenantResource.tipo == kind.value
            ).delete(synchronize_session=False)
        db.delete(tenant)
        db.commit()
    except Exception:
        db.rollback()
        logger.error(f"Cascading delete failed for negocio {negocio_id}", extra={"tenant_id": negocio_id})
        raise

    logger.info(f"Negocio deleted: {negocio_id} removed={removed}", extra={"tenant_id": negocio_id})
    return removed


def authenticate(db: Session, user: str, pin: str, negocio_id: Optional[str] = None) -> Tenant:
    """
    Check admin credentials.

    With negocio_id the pair is checked against that negocio only; without
    it the username is looked up across all negocios. Any mismatch raises
    the same AuthenticationError. An inactive negocio raises PermissionDenied.
    """
    query = db.query(Tenant).filter(Tenant.user == user)
    if negocio_id is not None:
        query = query.filter(Tenant.id == negocio_id)
    tenant = query.first()

    if tenant is None or not secrets_match(pin, tenant.pin):
        raise AuthenticationError("Credenciales inválidas")

    if tenant.activo is False:
        raise PermissionDenied("Negocio inactivo")

    return tenant
