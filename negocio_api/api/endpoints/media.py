"""
Image Endpoints

Upload and delete storefront images. Objects are stored under the
negocio's own key prefix.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from negocio_api.config import get_settings
from negocio_api.database import get_db
from negocio_api.models.tenant import Tenant
from negocio_api.schemas.media import ImageUploadRequest, ImageUploadResponse, ImageDeleteRequest
from negocio_api.schemas.tenant import SuccessResponse
from negocio_api.api.deps import require_tenant_session, get_blob_store
from negocio_api.services.blob_storage import BlobStore
from negocio_api.services import media_service

router = APIRouter(prefix="/{negocio_id}", tags=["media"])


@router.post("/upload-imagen", response_model=ImageUploadResponse)
async def upload_imagen(
    upload: ImageUploadRequest,
    tenant: Tenant = Depends(require_tenant_session),
    store: BlobStore = Depends(get_blob_store),
    db: Session = Depends(get_db)
):
    url, key = media_service.upload_image(
        db,
        store,
        tenant.id,
        upload.imagen,
        nombre=upload.nombre,
        content_type=upload.content_type,
        max_bytes=get_settings().MAX_IMAGE_BYTES,
        tipo=upload.tipo,
        recurso_id=upload.recurso_id,
        campo=upload.campo,
    )
    return ImageUploadResponse(url=url, file_name=key)


@router.delete("/delete-imagen", response_model=SuccessResponse)
async def delete_imagen(
    body: ImageDeleteRequest,
    tenant: Tenant = Depends(require_tenant_session),
    store: BlobStore = Depends(get_blob_store),
    db: Session = Depends(get_db)
):
    media_service.delete_image(db, store, tenant.id, body.file_name)
    return SuccessResponse()
