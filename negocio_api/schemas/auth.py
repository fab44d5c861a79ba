"""
Authentication Schemas

Request/response models for the negocio admin login.
"""
from typing import Optional
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """
    Login request body.

    negocioID is optional: when given, the credentials are checked against
    that negocio only; otherwise every negocio is searched.
    """
    user: str = Field(..., min_length=1)
    pin: str = Field(..., min_length=1)
    negocio_id: Optional[str] = Field(None, alias="negocioID")

    class Config:
        populate_by_name = True


class LoginResponse(BaseModel):
    """Successful login: identity plus a session token scoped to the negocio."""
    success: bool = True
    negocio_id: str = Field(..., alias="negocioID")
    nombre_negocio: str = Field(..., alias="nombreNegocio")
    brief_completado: bool = Field(..., alias="briefCompletado")
    access_token: str = Field(..., alias="accessToken")
    token_type: str = Field("bearer", alias="tokenType")

    class Config:
        populate_by_name = True
