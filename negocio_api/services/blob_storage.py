"""
Blob Storage Backends

Images are stored outside the database. The service only needs two
operations, so backends implement a small interface:

- LocalBlobStore: files under a directory, served by the app at /media
- S3BlobStore: objects in an S3 bucket (boto3)
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
import logging

import boto3

logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """Storage for uploaded images, addressed by object key."""

    @abstractmethod
    def store(self, key: str, data: bytes, content_type: str) -> str:
        """Persist `data` under `key` and return its public URL."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove the object. Deleting a missing key is not an error."""


class LocalBlobStore(BlobStore):
    """Development backend writing into LOCAL_MEDIA_DIR."""

    def __init__(self, root_dir: str, public_base_url: str):
        self.root = Path(root_dir).resolve()
        self.public_base_url = public_base_url.rstrip("/")

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if self.root not in path.parents:
            raise ValueError(f"Object key escapes media root: {key}")
        return path

    def store(self, key: str, data: bytes, content_type: str) -> str:
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.debug(f"Stored {len(data)} bytes at {path}")
        return f"{self.public_base_url}/media/{key}"

    def delete(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)


class S3BlobStore(BlobStore):
    """Production backend; objects are uploaded with their content type."""

    def __init__(self, bucket: str, region: Optional[str] = None, public_url: Optional[str] = None, client=None):
        self.bucket = bucket
        self.client = client or boto3.client("s3", region_name=region)
        if public_url:
            self.public_url = public_url.rstrip("/")
        elif region:
            self.public_url = f"https://{bucket}.s3.{region}.amazonaws.com"
        else:
            self.public_url = f"https://{bucket}.s3.amazonaws.com"

    def store(self, key: str, data: bytes, content_type: str) -> str:
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
        logger.info(f"Uploaded s3://{self.bucket}/{key}")
        return f"{self.public_url}/{key}"

    def delete(self, key: str) -> None:
        self.client.delete_object(Bucket=self.bucket, Key=key)
        logger.info(f"Deleted s3://{self.bucket}/{key}")
