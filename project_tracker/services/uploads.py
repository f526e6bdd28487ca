"""
Upload Storage

Accepts a student file, stores it under the flat upload directory as
``<epoch-millis>-<original name>`` and records the stored path on the field
chosen by the file extension.
"""
import logging
import mimetypes
import os
import re
import shutil
import time
from typing import BinaryIO, Optional

from sqlmodel import Session

from project_tracker.core.exceptions import UnsupportedFileTypeError
from project_tracker.models.user import User

logger = logging.getLogger(__name__)

# Matched anywhere in the extension, so ".pdfa" passes and lands on document_path
ALLOWED_TYPES = re.compile(r"zip|pdf|mp4|mov|avi|mkv")

VIDEO_EXTENSIONS = (".mp4", ".mov", ".avi", ".mkv")

# Stored paths are relative to the static mount, e.g. "uploads/1700000000000-report.pdf"
MOUNT_PREFIX = "uploads"


def file_extension(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lower()


def is_allowed(filename: str) -> bool:
    """The extension alone decides; the MIME type is never consulted."""
    return bool(ALLOWED_TYPES.search(file_extension(filename)))


def target_field(filename: str) -> str:
    ext = file_extension(filename)
    if ext == ".pdf":
        return "pdf_path"
    if ext == ".zip":
        return "zip_path"
    if ext in VIDEO_EXTENSIONS:
        return "video_path"
    return "document_path"


def check_file_type(filename: str, content_type: Optional[str] = None) -> None:
    if not is_allowed(filename):
        raise UnsupportedFileTypeError()

    mime = content_type or mimetypes.guess_type(filename)[0] or ""
    if not ALLOWED_TYPES.search(mime):
        logger.debug("Accepting %s despite MIME type %r", filename, mime)


def store_file(upload_dir: str, filename: str, stream: BinaryIO) -> str:
    """Write ``stream`` into ``upload_dir`` and return its path under the static mount."""
    stored_name = f"{int(time.time() * 1000)}-{os.path.basename(filename)}"
    with open(os.path.join(upload_dir, stored_name), "wb") as buffer:
        shutil.copyfileobj(stream, buffer)
    return f"{MOUNT_PREFIX}/{stored_name}"


def attach_upload(
    db: Session,
    user: User,
    upload_dir: str,
    filename: str,
    stream: BinaryIO,
) -> str:
    """
    Store and record one uploaded file. Returns the stored path.

    Callers reject unsupported files with ``check_file_type`` first.
    """
    path = store_file(upload_dir, filename, stream)
    field = target_field(filename)
    setattr(user, field, path)
    user.touch()

    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Stored %s for user %s as %s", filename, user.id, field)
    return path
