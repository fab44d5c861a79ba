"""
Negocio Schemas

Request/response models for super-admin negocio management and the
per-negocio configuration endpoints. JSON field names follow the admin
panel's camelCase.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Dict, Any, List
from datetime import datetime


class SuccessResponse(BaseModel):
    success: bool = True


class TenantCreate(BaseModel):
    """Body of POST /api/super-admin/negocios."""
    nombre_negocio: str = Field(..., min_length=1, max_length=255, alias="nombreNegocio")
    email: EmailStr

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "nombreNegocio": "Café Luna",
                "email": "hola@cafeluna.com"
            }
        }


class TenantCredentials(BaseModel):
    """Credentials shown once, right after creation."""
    negocio_id: str = Field(..., alias="negocioID")
    user: str
    pin: str
    nombre_negocio: str = Field(..., alias="nombreNegocio")
    email: str

    class Config:
        populate_by_name = True
        from_attributes = True


class TenantCreatedResponse(BaseModel):
    success: bool = True
    negocio: TenantCredentials


class TenantSummary(BaseModel):
    """Normalized projection used by the super-admin listing."""
    id: str
    negocio_id: str = Field(..., alias="negocioID")
    nombre_negocio: str = Field(..., alias="nombreNegocio")
    email: str
    user: str
    pin: str
    activo: bool = True
    brief_completado: bool = Field(False, alias="briefCompletado")
    secciones_activas: Dict[str, bool] = Field(default_factory=dict, alias="seccionesActivas")
    fecha_creacion: Optional[datetime] = Field(None, alias="fechaCreacion")
    fecha_actualizacion: Optional[datetime] = Field(None, alias="fechaActualizacion")

    class Config:
        populate_by_name = True


class TenantListResponse(BaseModel):
    negocios: List[TenantSummary]


class TenantAdminUpdate(BaseModel):
    """Super-admin partial update. All fields optional."""
    nombre_negocio: Optional[str] = Field(None, min_length=1, max_length=255, alias="nombreNegocio")
    email: Optional[EmailStr] = None
    activo: Optional[bool] = None
    brief_completado: Optional[bool] = Field(None, alias="briefCompletado")

    class Config:
        populate_by_name = True


class PinResetResponse(BaseModel):
    success: bool = True
    negocio_id: str = Field(..., alias="negocioID")
    user: str
    pin: str

    class Config:
        populate_by_name = True


class SectionsUpdate(BaseModel):
    """The whole toggle map; it replaces the stored one."""
    secciones: Dict[str, bool]


class SectionsResponse(BaseModel):
    secciones: Dict[str, bool]


class BriefRequest(BaseModel):
    """Initial questionnaire filled in by the negocio on first login."""
    config: Dict[str, Any] = Field(default_factory=dict)
    productos_iniciales: List[Dict[str, Any]] = Field(default_factory=list, alias="productosIniciales")

    class Config:
        populate_by_name = True
