"""
Nested Resource Service

The one CRUD implementation behind all six per-negocio collections.
Every query filters by negocio_id AND tipo; a document ID from one negocio
never resolves inside another.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from negocio_api.models.resource import TenantResource, ResourceKind, OrderStatus
from negocio_api.core.exceptions import ResourceNotFoundError, InvalidInputError
from negocio_api.services.collections import (
    ORDER_BY_ORDEN,
    ORDER_BY_NEWEST,
    get_spec,
    clean_fields,
    extract_orden,
    new_document,
    serialize,
)
from negocio_api.services.tenant_service import get_tenant

logger = logging.getLogger(__name__)


def _base_query(db: Session, negocio_id: str, kind: ResourceKind):
    return db.query(TenantResource).filter(
        TenantResource.negocio_id == negocio_id,  # CRITICAL: tenant isolation
        TenantResource.tipo == ResourceKind(kind).value
    )


def _get_document(db: Session, negocio_id: str, kind: ResourceKind, resource_id: str) -> TenantResource:
    doc = _base_query(db, negocio_id, kind).filter(TenantResource.id == resource_id).first()
    if doc is None:
        raise ResourceNotFoundError(ResourceKind(kind).value, resource_id)
    return doc


def _validate_order_status(fields: Dict[str, Any]) -> None:
    if "estado" not in fields:
        return
    try:
        OrderStatus(fields["estado"])
    except ValueError:
        allowed = ", ".join(status.value for status in OrderStatus)
        raise InvalidInputError(f"Estado inválido: {fields['estado']!r}. Valores permitidos: {allowed}")


def list_resources(
    db: Session,
    negocio_id: str,
    kind: ResourceKind,
    filtro: Optional[Tuple[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """
    List a collection in its defined order.

    `filtro` is an optional (field, value) equality filter on the document
    fields, e.g. ("activo", True).
    """
    get_tenant(db, negocio_id)
    spec = get_spec(kind)
    query = _base_query(db, negocio_id, kind)

    if spec.order == ORDER_BY_ORDEN:
        # Documents without `orden` go last
        query = query.order_by(
            TenantResource.orden.is_(None),
            TenantResource.orden.asc(),
            TenantResource.created_at.asc()
        )
    elif spec.order == ORDER_BY_NEWEST:
        query = query.order_by(TenantResource.created_at.desc())
    else:
        query = query.order_by(TenantResource.created_at.asc())

    docs = query.all()

    if filtro is not None:
        field_name, value = filtro
        docs = [doc for doc in docs if (doc.datos or {}).get(field_name) == value]

    logger.debug(f"Listed {len(docs)} {spec.kind.value} for negocio {negocio_id}")
    return [serialize(doc) for doc in docs]


def get_resource(db: Session, negocio_id: str, kind: ResourceKind, resource_id: str) -> Dict[str, Any]:
    get_tenant(db, negocio_id)
    return serialize(_get_document(db, negocio_id, kind, resource_id))


def create_resource(db: Session, negocio_id: str, kind: ResourceKind, fields: Dict[str, Any]) -> str:
    """Append a document to the collection. Returns the generated ID."""
    get_tenant(db, negocio_id)
    doc = new_document(negocio_id, kind, fields)
    db.add(doc)
    db.commit()

    logger.info(f"{doc.tipo} created: {doc.id} in negocio {negocio_id}", extra={"tenant_id": negocio_id})
    return doc.id


def update_resource(
    db: Session,
    negocio_id: str,
    kind: ResourceKind,
    resource_id: str,
    fields: Dict[str, Any],
) -> Dict[str, Any]:
    """
    Merge fields into a document and stamp fechaActualizacion.

    Fields not mentioned keep their current values.
    """
    get_tenant(db, negocio_id)
    fields = clean_fields(fields)
    if ResourceKind(kind) == ResourceKind.PEDIDOS:
        _validate_order_status(fields)

    doc = _get_document(db, negocio_id, kind, resource_id)
    # Reassign so SQLAlchemy sees the JSON change
    doc.datos = {**(doc.datos or {}), **fields}
    doc.orden = extract_orden(doc.datos)
    doc.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(doc)

    logger.info(f"{doc.tipo} updated: {doc.id} in negocio {negocio_id}", extra={"tenant_id": negocio_id})
    return serialize(doc)


def delete_resource(db: Session, negocio_id: str, kind: ResourceKind, resource_id: str) -> None:
    """Hard delete. A missing document raises ResourceNotFoundError."""
    get_tenant(db, negocio_id)
    doc = _get_document(db, negocio_id, kind, resource_id)
    db.delete(doc)
    db.commit()

    logger.info(f"{doc.tipo} deleted: {resource_id} in negocio {negocio_id}", extra={"tenant_id": negocio_id})


def set_order_status(db: Session, negocio_id: str, order_id: str, estado: OrderStatus) -> Dict[str, Any]:
    return update_resource(
        db, negocio_id, ResourceKind.PEDIDOS, order_id, {"estado": OrderStatus(estado).value}
    )
