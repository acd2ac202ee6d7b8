"""Local filesystem storage for avatars and consult attachments"""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

from fastapi import HTTPException, UploadFile

from .config import MAX_UPLOAD_SIZE, UPLOAD_DIR

logger = logging.getLogger(__name__)

IMAGE_TYPES = {
    "image/png": ("png",),
    "image/jpeg": ("jpg", "jpeg"),
    "image/webp": ("webp",),
    "image/gif": ("gif",),
}

ATTACHMENT_TYPES = {
    **IMAGE_TYPES,
    "application/pdf": ("pdf",),
    "text/plain": ("txt",),
}

DANGEROUS_CHARS = ["..", "/", "\\", "<", ">", ":", '"', "|", "?", "*"]


@dataclass
class StoredFile:
    path: str
    size: int
    mime_type: str


def validate_filename(filename: str, allowed_extensions: tuple[str, ...]) -> str:
    """Reject path tricks and unexpected extensions. Returns the lowercase extension."""
    if not filename:
        raise HTTPException(status_code=400, detail="Invalid filename - a filename is required")

    for char in DANGEROUS_CHARS:
        if char in filename:
            logger.warning(f"❌ Dangerous character '{char}' detected in filename: '{filename}'")
            raise HTTPException(
                status_code=400, detail=f"Invalid filename - contains dangerous character '{char}'"
            )

    if len(filename) > 255:
        raise HTTPException(status_code=400, detail="Filename too long - maximum 255 characters")

    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if ext not in allowed_extensions:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid filename - extension must be one of {', '.join(allowed_extensions)}",
        )
    return ext


async def save_upload(file: UploadFile, folder: str, allowed_types: dict[str, tuple[str, ...]]) -> StoredFile:
    """
    Validate and write an upload under UPLOAD_DIR/folder.

    The stored name is a fresh uuid so user supplied names never reach the
    filesystem. Returns the path relative to UPLOAD_DIR.
    """
    logger.info(f"📤 Uploading '{file.filename}' to {folder}")

    if file.content_type not in allowed_types:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type. Allowed types: {', '.join(allowed_types)}",
        )

    ext = validate_filename(file.filename or "", allowed_types[file.content_type])

    contents = await file.read()
    if len(contents) > MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=413,
            detail=(
                f"File size exceeds {MAX_UPLOAD_SIZE / (1024 * 1024):.0f}MB limit. "
                f"Your file is {len(contents) / (1024 * 1024):.2f}MB."
            ),
        )

    relative = f"{folder}/{uuid.uuid4()}.{ext}"
    target = Path(UPLOAD_DIR) / relative
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(contents)
    except OSError as e:
        logger.error(f"❌ Upload failed: {str(e)}")
        raise HTTPException(status_code=500, detail="Upload failed") from e

    logger.info(f"✅ Stored upload at {relative} ({len(contents)} bytes)")
    return StoredFile(path=relative, size=len(contents), mime_type=file.content_type)


def delete_upload(relative: str) -> None:
    """Remove a stored upload whose database row was never written"""
    target = Path(UPLOAD_DIR) / relative
    try:
        target.unlink(missing_ok=True)
    except OSError as e:
        logger.error(f"❌ Failed to remove orphaned upload {relative}: {e}")
