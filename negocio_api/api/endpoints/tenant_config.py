"""
Negocio Configuration Endpoints

Storefront configuration, section toggles and the onboarding brief.
Reads are public (the storefront needs them); writes need a negocio session.
"""
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from negocio_api.database import get_db
from negocio_api.models.tenant import Tenant
from negocio_api.schemas.tenant import (
    SectionsUpdate,
    SectionsResponse,
    BriefRequest,
    SuccessResponse,
)
from negocio_api.api.deps import require_tenant_session
from negocio_api.services import tenant_service

router = APIRouter(prefix="/{negocio_id}", tags=["config"])


@router.get("/config")
async def get_config(negocio_id: str, db: Session = Depends(get_db)) -> Dict[str, Any]:
    return tenant_service.get_tenant_config(db, negocio_id)


@router.put("/config")
async def update_config(
    updates: Dict[str, Any] = Body(...),
    tenant: Tenant = Depends(require_tenant_session),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """Merge the sent keys into the config; other keys are kept."""
    config = tenant_service.update_tenant_config(db, tenant.id, updates)
    return {"success": True, "config": config}


@router.get("/secciones", response_model=SectionsResponse)
async def get_secciones(negocio_id: str, db: Session = Depends(get_db)):
    return SectionsResponse(secciones=tenant_service.get_active_sections(db, negocio_id))


@router.put("/secciones", response_model=SectionsResponse)
async def update_secciones(
    body: SectionsUpdate,
    tenant: Tenant = Depends(require_tenant_session),
    db: Session = Depends(get_db)
):
    """Replace the toggle map as a whole."""
    secciones = tenant_service.update_active_sections(db, tenant.id, body.secciones)
    return SectionsResponse(secciones=secciones)


@router.post("/brief", response_model=SuccessResponse)
async def submit_brief(
    brief: BriefRequest,
    tenant: Tenant = Depends(require_tenant_session),
    db: Session = Depends(get_db)
):
    tenant_service.submit_brief(db, tenant.id, brief.config, brief.productos_iniciales)
    return SuccessResponse()
