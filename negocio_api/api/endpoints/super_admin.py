"""
Super-Admin Endpoints

Negocio provisioning: create, list, inspect, update, reset PIN and delete.
Every route requires the super-admin key.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from negocio_api.database import get_db
from negocio_api.schemas.tenant import (
    TenantCreate,
    TenantCreatedResponse,
    TenantCredentials,
    TenantSummary,
    TenantListResponse,
    TenantAdminUpdate,
    PinResetResponse,
    SuccessResponse,
)
from negocio_api.api.deps import require_super_admin
from negocio_api.services import tenant_service
from negocio_api.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    prefix="/super-admin/negocios",
    tags=["super-admin"],
    dependencies=[Depends(require_super_admin)]
)


@router.post("", response_model=TenantCreatedResponse)
async def create_negocio(
    negocio_data: TenantCreate,
    db: Session = Depends(get_db)
):
    """
    Create a negocio.

    The generated user and PIN are returned here; afterwards they are only
    visible through the super-admin read endpoints.
    """
    tenant = tenant_service.create_tenant(db, negocio_data.nombre_negocio, negocio_data.email)
    return TenantCreatedResponse(
        negocio=TenantCredentials(
            negocio_id=tenant.id,
            user=tenant.user,
            pin=tenant.pin,
            nombre_negocio=tenant.nombre_negocio,
            email=tenant.email,
        )
    )


@router.get("", response_model=TenantListResponse)
async def list_negocios(db: Session = Depends(get_db)):
    tenants = tenant_service.list_tenants(db)
    return TenantListResponse(
        negocios=[TenantSummary(**tenant_service.to_summary(t)) for t in tenants]
    )


@router.get("/{negocio_id}", response_model=TenantSummary)
async def get_negocio(negocio_id: str, db: Session = Depends(get_db)):
    return TenantSummary(**tenant_service.to_summary(tenant_service.get_tenant(db, negocio_id)))


@router.put("/{negocio_id}", response_model=SuccessResponse)
async def update_negocio(
    negocio_id: str,
    negocio_data: TenantAdminUpdate,
    db: Session = Depends(get_db)
):
    """Partial update; only the fields sent are changed."""
    update_data = {
        field: value
        for field, value in negocio_data.model_dump(exclude_unset=True).items()
        if value is not None
    }
    tenant_service.update_tenant(db, negocio_id, update_data)
    return SuccessResponse()


@router.post("/{negocio_id}/reset-pin", response_model=PinResetResponse)
async def reset_negocio_pin(negocio_id: str, db: Session = Depends(get_db)):
    tenant = tenant_service.reset_pin(db, negocio_id)
    return PinResetResponse(negocio_id=tenant.id, user=tenant.user, pin=tenant.pin)


@router.delete("/{negocio_id}", response_model=SuccessResponse)
async def delete_negocio(negocio_id: str, db: Session = Depends(get_db)):
    """Delete the negocio together with every nested collection."""
    tenant_service.delete_tenant(db, negocio_id)
    return SuccessResponse()
