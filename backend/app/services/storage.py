"""Local disk storage for uploaded files."""
import logging
import secrets
import time
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

from app.config import get_settings
from app.errors import ValidationError

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"


@dataclass
class StoredFile:
    filename: str
    original_name: str
    content_type: str
    url: str
    size: int


def upload_dir() -> Path:
    path = Path(get_settings().upload_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _stored_name(field: str, original_name: str) -> str:
    suffix = Path(original_name).suffix.lower()
    return f"{field}-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{suffix}"


def public_url(filename: str, base_url: str | None = None) -> str:
    path = f"{UPLOADS_URL_PREFIX}/{filename}"
    if base_url:
        return base_url.rstrip("/") + path
    return path


async def save_upload(file: UploadFile, field: str, base_url: str | None = None) -> StoredFile:
    """Validate type and size, then write the upload under the upload directory."""
    settings = get_settings()
    allowed = settings.allowed_upload_types
    content_type = file.content_type or ""
    if content_type not in allowed:
        raise ValidationError(f"Invalid file type. Allowed types: {', '.join(allowed)}")
    content = await file.read()
    if len(content) > settings.max_file_size:
        max_mb = settings.max_file_size // (1024 * 1024)
        raise ValidationError(f"File size too large. Maximum size is {max_mb}MB.")
    original_name = file.filename or field
    filename = _stored_name(field, original_name)
    (upload_dir() / filename).write_bytes(content)
    return StoredFile(
        filename=filename,
        original_name=original_name,
        content_type=content_type,
        url=public_url(filename, base_url),
        size=len(content),
    )


def delete_upload(url: str | None) -> bool:
    """Remove the file behind a public upload URL. Missing files are ignored."""
    if not url:
        return False
    # Only the basename is trusted; it always lives directly in the upload dir
    name = Path(url.split("?", 1)[0]).name
    if not name:
        return False
    path = upload_dir() / name
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError:
        logger.error("Error deleting uploaded file %s", path, exc_info=True)
        return False
    return True
