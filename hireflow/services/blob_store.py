"""
Append-only storage for uploaded files.

Every ``put`` writes under a fresh random key and returns a URL; nothing is
ever overwritten or deleted through this interface.
"""
import logging
from functools import lru_cache
from pathlib import Path
from typing import Protocol
from uuid import uuid4

import boto3

from hireflow.config import settings

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def put(self, data: bytes, suffix: str, content_type: str | None = None) -> str:
        ...


def _object_name(suffix: str) -> str:
    suffix = (suffix or "").lstrip(".").lower()
    return f"{uuid4().hex}.{suffix}" if suffix else uuid4().hex


class LocalBlobStore:
    def __init__(self, root: str | Path, public_base_url: str):
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")

    def put(self, data: bytes, suffix: str, content_type: str | None = None) -> str:
        self.root.mkdir(parents=True, exist_ok=True)
        name = _object_name(suffix)
        (self.root / name).write_bytes(data)
        logger.info("Stored upload locally: %s (%d bytes)", name, len(data))
        return f"{self.public_base_url}/{name}"


@lru_cache(maxsize=1)
def _s3_client():
    return boto3.client("s3", region_name=settings.aws_region)


class S3BlobStore:
    def __init__(self, bucket: str, key_prefix: str = "", region: str = "us-east-1", client=None):
        self.bucket = bucket
        self.key_prefix = key_prefix
        self.region = region
        self._client = client

    @property
    def client(self):
        return self._client or _s3_client()

    def put(self, data: bytes, suffix: str, content_type: str | None = None) -> str:
        key = f"{self.key_prefix}{_object_name(suffix)}"
        extra = {"ContentType": content_type} if content_type else {}
        try:
            self.client.put_object(Bucket=self.bucket, Key=key, Body=data, **extra)
        except Exception as e:
            logger.exception("S3 upload failed: bucket=%s key=%s: %s", self.bucket, key, e)
            raise
        logger.info("Stored upload in S3: s3://%s/%s (%d bytes)", self.bucket, key, len(data))
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"


def get_blob_store() -> BlobStore:
    """FastAPI dependency selecting the configured backend."""
    backend = (settings.blob_backend or "local").lower()
    if backend == "s3":
        if not settings.s3_bucket:
            raise RuntimeError("BLOB_BACKEND=s3 requires S3_BUCKET")
        return S3BlobStore(settings.s3_bucket, settings.s3_key_prefix, settings.aws_region)
    return LocalBlobStore(settings.upload_dir, settings.upload_public_base_url)
