"""
Image Upload Schemas
"""
from typing import Optional
from pydantic import BaseModel, Field

from negocio_api.models.resource import ResourceKind


class ImageUploadRequest(BaseModel):
    """
    Base64 image, optionally as a data URL ("data:image/png;base64,...").

    When tipo and recursoID are given, the public URL is also written into
    that document under `campo`.
    """
    imagen: str = Field(..., min_length=1)
    nombre: str = Field("imagen", max_length=100)
    content_type: Optional[str] = Field(None, alias="contentType")
    tipo: Optional[ResourceKind] = None
    recurso_id: Optional[str] = Field(None, alias="recursoID")
    campo: str = Field("imagen", min_length=1, max_length=50)

    class Config:
        populate_by_name = True


class ImageUploadResponse(BaseModel):
    success: bool = True
    url: str
    file_name: str = Field(..., alias="fileName")

    class Config:
        populate_by_name = True


class ImageDeleteRequest(BaseModel):
    file_name: str = Field(..., min_length=1, alias="fileName")

    class Config:
        populate_by_name = True
