"""
Faculty record editor (admin side).

Creating a faculty with a photo is one operation: the upload must succeed
before the row is written, and an upload whose row insert then fails is
removed again.
"""
import time
from typing import Optional

from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from feedback_app.backend import BackendError, get_backend
from feedback_app.observability import log_event
from feedback_app.utils.validators import clean_str, is_valid_email
from .directory import FACULTY

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}


class FacultyRejected(ValueError):
    """Invalid admin input; no backend call was made."""


def photo_object_name(filename: str, now_ms: Optional[int] = None) -> str:
    """Timestamp-prefixed, filesystem-safe object name."""
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    return f"{now_ms}_{secure_filename(filename or '') or 'photo'}"


def _has_file(image: Optional[FileStorage]) -> bool:
    return image is not None and bool(image.filename)


def upload_photo(image: FileStorage) -> tuple[str, str]:
    """Upload to the photo bucket; returns (object name, public url)."""
    storage = get_backend().storage
    bucket = current_app.config["FACULTY_PHOTO_BUCKET"]
    name = photo_object_name(image.filename)
    storage.upload(bucket, name, image.read(), image.mimetype or None)
    return name, storage.get_public_url(bucket, name)


def create_faculty(name: Optional[str], department: Optional[str] = None,
                   email: Optional[str] = None, phone: Optional[str] = None,
                   image: Optional[FileStorage] = None) -> dict:
    name = clean_str(name)
    if not name:
        raise FacultyRejected("Name is required")
    email = clean_str(email)
    if not is_valid_email(email):
        raise FacultyRejected("Please enter a valid email address")
    if _has_file(image) and image.mimetype not in ALLOWED_IMAGE_TYPES:
        raise FacultyRejected("Photo must be a JPEG, PNG, GIF or WebP image")

    uploaded = None
    image_url = None
    if _has_file(image):
        try:
            uploaded, image_url = upload_photo(image)
        except BackendError as exc:
            raise BackendError(f"Image upload error: {exc.message}", status=exc.status) from exc

    row = {
        "name": name,
        "department": clean_str(department),
        "email": email,
        "phone": clean_str(phone, max_len=50),
        "image_url": image_url,
    }
    try:
        stored = get_backend().records.insert(FACULTY, row)
    except BackendError:
        if uploaded:
            _discard_photo(uploaded)
        raise

    log_event("faculty.created", faculty_id=stored.get("id"), has_photo=bool(uploaded))
    return stored


def _discard_photo(object_name: str) -> None:
    bucket = current_app.config["FACULTY_PHOTO_BUCKET"]
    try:
        get_backend().storage.remove(bucket, object_name)
    except BackendError as exc:
        # The insert error is what the caller needs to see
        current_app.logger.error("Orphaned photo %s/%s not removed: %s", bucket, object_name, exc)


def delete_faculty(faculty_id: str) -> None:
    """
    Remove one faculty row. Its photo and its feedback rows are left in place;
    feedback keeps the name/department snapshot taken at submission.
    """
    if not (faculty_id or "").strip():
        raise FacultyRejected("Faculty id is required")
    get_backend().records.delete(FACULTY, {"id": faculty_id})
    log_event("faculty.deleted", faculty_id=faculty_id)
