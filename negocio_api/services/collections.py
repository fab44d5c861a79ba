"""
Nested Collection Definitions

One table of per-kind behaviour replaces six copies of the same CRUD
handlers: which key the list response uses, how the collection is ordered
and which fields the system stamps on new documents.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from negocio_api.models.resource import ResourceKind, OrderStatus, TenantResource

ORDER_BY_ORDEN = "orden"
ORDER_BY_NEWEST = "newest"

# Fields owned by the system; callers cannot overwrite them
RESERVED_FIELDS = {"id", "fechaCreacion", "fechaActualizacion"}


@dataclass(frozen=True)
class CollectionSpec:
    kind: ResourceKind
    response_key: str
    order: Optional[str] = None
    defaults: Dict[str, Any] = field(default_factory=dict)


COLLECTIONS: Dict[ResourceKind, CollectionSpec] = {
    ResourceKind.PRODUCTOS: CollectionSpec(
        ResourceKind.PRODUCTOS, "productos", defaults={"activo": True}
    ),
    ResourceKind.SERVICIOS: CollectionSpec(ResourceKind.SERVICIOS, "servicios", ORDER_BY_ORDEN),
    ResourceKind.TESTIMONIOS: CollectionSpec(ResourceKind.TESTIMONIOS, "testimonios", ORDER_BY_ORDEN),
    ResourceKind.CASOS_EXITO: CollectionSpec(ResourceKind.CASOS_EXITO, "casosExito", ORDER_BY_ORDEN),
    ResourceKind.GALERIA: CollectionSpec(ResourceKind.GALERIA, "galeria", ORDER_BY_ORDEN),
    ResourceKind.PEDIDOS: CollectionSpec(
        ResourceKind.PEDIDOS, "pedidos", ORDER_BY_NEWEST,
        defaults={"estado": OrderStatus.PENDIENTE.value}
    ),
}


def get_spec(kind: ResourceKind) -> CollectionSpec:
    return COLLECTIONS[ResourceKind(kind)]


def clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Drop system-owned keys from caller input."""
    return {key: value for key, value in fields.items() if key not in RESERVED_FIELDS}


def extract_orden(fields: Dict[str, Any]) -> Optional[float]:
    """Numeric sort key from the `orden` field, or None when absent or not a number."""
    value = fields.get("orden")
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def new_document(negocio_id: str, kind: ResourceKind, fields: Dict[str, Any]) -> TenantResource:
    """Build (but do not add) a document with the kind's defaults applied."""
    spec = get_spec(kind)
    datos = {**clean_fields(fields), **spec.defaults}
    return TenantResource(
        negocio_id=negocio_id,
        tipo=spec.kind.value,
        datos=datos,
        orden=extract_orden(datos),
        created_at=datetime.utcnow(),
    )


def serialize(doc: TenantResource) -> Dict[str, Any]:
    """Render a document as {id, ...fields, fechaCreacion[, fechaActualizacion]}."""
    rendered = {"id": doc.id, **(doc.datos or {}), "fechaCreacion": doc.created_at}
    if doc.updated_at is not None:
        rendered["fechaActualizacion"] = doc.updated_at
    return rendered
