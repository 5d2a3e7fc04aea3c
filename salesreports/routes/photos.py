"""
Photo Routes

Photos are stored on local disk under UPLOAD_DIR/<report_id>/ and served
from /uploads. Uploading for a (director, month) with no report yet
creates an empty draft to attach to.
"""

import logging
import os
import shutil
import time

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from salesreports.database import get_db
from salesreports.schemas import PhotoDeleteRequest
from salesreports.services.report_persistence import add_photo, delete_photo, get_or_create_draft
from salesreports.services.validators import ValidationResult, validate_photo_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/photos", tags=["photos"])

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "./uploads")
UPLOAD_URL_PREFIX = "/uploads/"
MAX_PHOTO_BYTES = int(os.getenv("MAX_PHOTO_BYTES", str(5 * 1024 * 1024)))


def _file_size(upload: UploadFile) -> int:
    upload.file.seek(0, os.SEEK_END)
    size = upload.file.tell()
    upload.file.seek(0)
    return size


@router.post("")
async def upload_photo(
    file: UploadFile = File(None),
    directorId: str = Form(None),
    month: str = Form(None),
    db: Session = Depends(get_db),
):
    """Upload a photo to the report for a director and month."""
    missing = ValidationResult()
    if file is None:
        missing.add_error("No file provided")
    if not directorId or not month:
        missing.add_error("Director ID and month are required")
    missing.raise_if_invalid()

    validate_photo_upload(file.content_type, _file_size(file), MAX_PHOTO_BYTES).raise_if_invalid()

    report = get_or_create_draft(db, directorId, month)

    # Generate unique filename
    original_filename = file.filename or "photo"
    ext = os.path.splitext(original_filename)[1] if "." in original_filename else ""
    stored_name = f"{int(time.time() * 1000)}{ext}"
    report_dir = os.path.join(UPLOAD_DIR, report.id)
    os.makedirs(report_dir, exist_ok=True)

    # Save file
    with open(os.path.join(report_dir, stored_name), "wb") as buffer:
        shutil.copyfileobj(file.file, buffer)

    photo = add_photo(
        db,
        report_id=report.id,
        filename=original_filename,
        url=f"{UPLOAD_URL_PREFIX}{report.id}/{stored_name}",
    )
    logger.info(f"Uploaded photo {photo.id} to report {report.id}")

    return {
        "success": True,
        "photo": {"id": photo.id, "filename": photo.filename, "url": photo.url},
    }


@router.delete("")
async def remove_photo(data: PhotoDeleteRequest, db: Session = Depends(get_db)):
    """Delete a photo record and its file."""
    if not data.photo_id:
        missing = ValidationResult()
        missing.add_error("No photo ID provided")
        missing.raise_if_invalid()

    photo = delete_photo(db, data.photo_id)

    # Delete file from disk
    if photo.url.startswith(UPLOAD_URL_PREFIX):
        file_path = os.path.join(UPLOAD_DIR, photo.url[len(UPLOAD_URL_PREFIX):])
        if os.path.exists(file_path):
            os.remove(file_path)

    return {"success": True}
