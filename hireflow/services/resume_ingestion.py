import logging
from typing import NamedTuple

from hireflow.core.errors import ValidationError
from hireflow.services.blob_store import BlobStore

logger = logging.getLogger(__name__)

MAX_RESUME_BYTES = 5 * 1024 * 1024

ALLOWED_RESUME_TYPES = {
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}


class ResumeUpload(NamedTuple):
    data: bytes
    content_type: str | None
    filename: str | None = None

    @property
    def size_bytes(self) -> int:
        return len(self.data)


def validate(content_type: str | None, size_bytes: int) -> str:
    """Check type and size; returns the file extension for the stored object."""
    content_type = (content_type or "").split(";")[0].strip().lower()
    suffix = ALLOWED_RESUME_TYPES.get(content_type)
    if suffix is None:
        raise ValidationError("Only PDF, DOC, or DOCX files are allowed.")
    if size_bytes <= 0:
        raise ValidationError("Resume file is empty.")
    if size_bytes > MAX_RESUME_BYTES:
        raise ValidationError("File too large. Max allowed is 5MB.")
    return suffix


def read_upload(stream, content_type: str | None, declared_size: int | None = None) -> bytes:
    """Read an uploaded file, rejecting it before reading when its declared size is already too big."""
    if declared_size is not None:
        validate(content_type, declared_size)
    data = stream.read(MAX_RESUME_BYTES + 1)
    if len(data) > MAX_RESUME_BYTES:
        raise ValidationError("File too large. Max allowed is 5MB.")
    return data


def ingest(
    store: BlobStore,
    data: bytes,
    content_type: str | None,
    size_bytes: int | None = None,
    filename: str | None = None,
) -> str:
    """Validate a resume and hand it to the blob store. Returns the stored URL."""
    size_bytes = len(data) if size_bytes is None else size_bytes
    suffix = validate(content_type, size_bytes)
    url = store.put(data, suffix, content_type=content_type)
    logger.info("Resume ingested: filename=%s size=%d url=%s", filename, size_bytes, url)
    return url
