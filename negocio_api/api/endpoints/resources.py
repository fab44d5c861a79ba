"""
Nested Collection Endpoints

One set of CRUD routes serves all six collections; `kind` in the path
selects productos, servicios, testimonios, casos-exito, galeria or pedidos.

ACCESS (see core.permissions):
- Reads: public (storefront)
- Create: negocio session, except pedidos (placed by visitors)
- Update/delete: negocio session
"""
from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Depends, Query
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from negocio_api.database import get_db
from negocio_api.models.tenant import Tenant
from negocio_api.models.resource import ResourceKind
from negocio_api.schemas.resource import ResourceCreatedResponse, OrderStatusUpdate
from negocio_api.schemas.tenant import SuccessResponse
from negocio_api.api.deps import (
    get_current_tenant,
    require_tenant_session,
    authorize_collection_access,
    bearer_scheme,
)
from negocio_api.core.permissions import Operation
from negocio_api.services import resource_service
from negocio_api.services.collections import get_spec

router = APIRouter(prefix="/{negocio_id}", tags=["collections"])


@router.patch("/pedidos/{resource_id}/estado")
async def update_order_status(
    resource_id: str,
    body: OrderStatusUpdate,
    tenant: Tenant = Depends(require_tenant_session),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """Move an order to another status."""
    return resource_service.set_order_status(db, tenant.id, resource_id, body.estado)


@router.get("/{kind}")
async def list_collection(
    kind: ResourceKind,
    solo_activos: bool = Query(False, alias="soloActivos"),
    tenant: Tenant = Depends(get_current_tenant),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    List a collection in its defined order.

    soloActivos=true keeps only products whose `activo` flag is true.
    """
    filtro = None
    if solo_activos and kind == ResourceKind.PRODUCTOS:
        filtro = ("activo", True)
    items = resource_service.list_resources(db, tenant.id, kind, filtro)
    return {get_spec(kind).response_key: items}


@router.get("/{kind}/{resource_id}")
async def get_collection_item(
    kind: ResourceKind,
    resource_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    return resource_service.get_resource(db, tenant.id, kind, resource_id)


@router.post("/{kind}", response_model=ResourceCreatedResponse)
async def create_collection_item(
    kind: ResourceKind,
    fields: Dict[str, Any] = Body(...),
    tenant: Tenant = Depends(get_current_tenant),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
):
    authorize_collection_access(kind, Operation.CREATE, tenant, credentials)
    resource_id = resource_service.create_resource(db, tenant.id, kind, fields)
    return ResourceCreatedResponse(id=resource_id)


@router.put("/{kind}/{resource_id}")
async def update_collection_item(
    kind: ResourceKind,
    resource_id: str,
    fields: Dict[str, Any] = Body(...),
    tenant: Tenant = Depends(get_current_tenant),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """Partial merge: only the sent fields change."""
    authorize_collection_access(kind, Operation.UPDATE, tenant, credentials)
    return resource_service.update_resource(db, tenant.id, kind, resource_id, fields)


@router.delete("/{kind}/{resource_id}", response_model=SuccessResponse)
async def delete_collection_item(
    kind: ResourceKind,
    resource_id: str,
    tenant: Tenant = Depends(get_current_tenant),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
):
    authorize_collection_access(kind, Operation.DELETE, tenant, credentials)
    resource_service.delete_resource(db, tenant.id, kind, resource_id)
    return SuccessResponse()
