"""
Image Upload Service

Decodes base64 uploads, builds the object key and hands the bytes to the
configured BlobStore. Keys always live under the negocio's own prefix:

    {negocioID}/{timestamp}-{nombre}.{ext}
"""
from datetime import datetime, timezone
from typing import Optional, Tuple
import base64
import binascii
import logging
import re

from sqlalchemy.orm import Session

from negocio_api.models.resource import ResourceKind
from negocio_api.core.credentials import strip_accents
from negocio_api.core.exceptions import InvalidInputError, PermissionDenied
from negocio_api.services.blob_storage import BlobStore
from negocio_api.services.collections import RESERVED_FIELDS
from negocio_api.services import resource_service
from negocio_api.services.tenant_service import get_tenant

logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r"^data:(?P<content_type>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}

DEFAULT_CONTENT_TYPE = "image/jpeg"


def decode_image(imagen: str, content_type: Optional[str] = None) -> Tuple[bytes, str]:
    """
    Decode a base64 payload or data URL.

    The data URL's media type wins over `content_type`. Only the image types
    in EXTENSIONS are accepted.
    """
    payload = imagen.strip()
    match = DATA_URL_PATTERN.match(payload)
    if match:
        content_type = match.group("content_type")
        payload = match.group("payload")

    content_type = (content_type or DEFAULT_CONTENT_TYPE).lower()
    if content_type not in EXTENSIONS:
        raise InvalidInputError(f"Tipo de imagen no soportado: {content_type}")

    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidInputError("Imagen base64 inválida")

    if not data:
        raise InvalidInputError("Imagen vacía")
    return data, content_type


def build_object_key(negocio_id: str, nombre: str, content_type: str, now: Optional[datetime] = None) -> str:
    """
    Deterministic key: {negocioID}/{epoch millis}-{safe name}.{ext}

    A naive `now` is read as UTC.
    """
    if now is not None and now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    timestamp = int(now.timestamp() * 1000)
    stem = nombre.rsplit(".", 1)[0] if "." in nombre else nombre
    safe = re.sub(r"[^a-z0-9]+", "-", strip_accents(stem).lower()).strip("-") or "imagen"
    return f"{negocio_id}/{timestamp}-{safe[:60]}.{EXTENSIONS[content_type]}"


def upload_image(
    db: Session,
    store: BlobStore,
    negocio_id: str,
    imagen: str,
    nombre: str = "imagen",
    content_type: Optional[str] = None,
    max_bytes: Optional[int] = None,
    tipo: Optional[ResourceKind] = None,
    recurso_id: Optional[str] = None,
    campo: str = "imagen",
) -> Tuple[str, str]:
    """
    Store an image for a negocio. Returns (url, object key).

    With tipo and recurso_id the URL is merged into that document under
    `campo`. The document and field are checked before uploading, and the
    object is deleted again if the document rejects the URL, so a bad
    reference leaves nothing behind in storage.
    """
    get_tenant(db, negocio_id)
    data, content_type = decode_image(imagen, content_type)
    if max_bytes is not None and len(data) > max_bytes:
        raise InvalidInputError(f"Imagen demasiado grande ({len(data)} bytes, máximo {max_bytes})")

    if (tipo is None) != (recurso_id is None):
        raise InvalidInputError("tipo y recursoID deben enviarse juntos")
    if tipo is not None:
        if campo in RESERVED_FIELDS:
            raise InvalidInputError(f"El campo {campo!r} no se puede modificar")
        resource_service.get_resource(db, negocio_id, tipo, recurso_id)

    key = build_object_key(negocio_id, nombre, content_type)
    url = store.store(key, data, content_type)
    logger.info(f"Image stored: {key} ({len(data)} bytes)", extra={"tenant_id": negocio_id})

    if tipo is not None:
        try:
            resource_service.update_resource(db, negocio_id, tipo, recurso_id, {campo: url})
        except Exception:
            # The document rejected the URL; do not leave an orphaned object
            store.delete(key)
            logger.info(f"Image removed after failed attach: {key}", extra={"tenant_id": negocio_id})
            raise

    return url, key


def delete_image(db: Session, store: BlobStore, negocio_id: str, file_name: str) -> None:
    """Delete an image, refusing keys outside the negocio's prefix."""
    get_tenant(db, negocio_id)
    if not file_name.startswith(f"{negocio_id}/") or ".." in file_name.split("/"):
        raise PermissionDenied("La imagen no pertenece a este negocio")

    store.delete(file_name)
    logger.info(f"Image deleted: {file_name}", extra={"tenant_id": negocio_id})
