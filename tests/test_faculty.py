import io

import pytest
from werkzeug.datastructures import FileStorage

from feedback_app.backend import BackendError, get_backend
from feedback_app.models import StoredObject
from feedback_app.extensions import db
from feedback_app.services.directory import find_faculty, load_directory
from feedback_app.services.faculty import (
    FacultyRejected, create_faculty, delete_faculty, photo_object_name,
)

def _photo(filename="my photo.png", content_type="image/png"):
    return FileStorage(stream=io.BytesIO(b"\x89PNG fake"), filename=filename, content_type=content_type)

def _stored_objects():
    return db.session.execute(db.select(StoredObject)).scalars().all()

def test_photo_object_name_is_prefixed_and_safe():
    assert photo_object_name("my photo.png", now_ms=1700000000000) == "1700000000000_my_photo.png"
    assert photo_object_name("../../", now_ms=5) == "5_photo"

def test_create_without_photo(app_ctx):
    row = create_faculty("  Dr.  Mehta ", "Maths", "mehta@uni.test", "555-0101")
    assert row["name"] == "Dr. Mehta"
    assert row["image_url"] is None
    assert [f.name for f in load_directory().faculty] == ["Dr. Mehta"]

def test_create_with_photo_stores_public_url(app_ctx):
    row = create_faculty("Dr. Mehta", image=_photo())
    assert row["image_url"].startswith("/storage/faculty-photos/")
    assert row["image_url"].endswith("_my_photo.png")
    assert len(_stored_objects()) == 1

def test_name_is_required(app_ctx):
    with pytest.raises(FacultyRejected, match="Name is required"):
        create_faculty("   ")
    assert load_directory().is_empty

def test_non_image_upload_is_rejected(app_ctx):
    with pytest.raises(FacultyRejected):
        create_faculty("Dr. Mehta", image=_photo("notes.txt", "text/plain"))
    assert _stored_objects() == []

def test_invalid_email_is_rejected(app_ctx):
    with pytest.raises(FacultyRejected, match="email"):
        create_faculty("Dr. Mehta", email="nope")

def test_upload_failure_writes_no_row(app_ctx, monkeypatch):
    def refuse(*a, **kw):
        raise BackendError("Bucket not found", status=404)
    monkeypatch.setattr(get_backend().storage, "upload", refuse)

    with pytest.raises(BackendError) as ei:
        create_faculty("Dr. Mehta", image=_photo())
    assert ei.value.message == "Image upload error: Bucket not found"
    assert load_directory().is_empty

def test_insert_failure_removes_uploaded_photo(app_ctx, monkeypatch):
    def refuse(*a, **kw):
        raise BackendError("new row violates row-level security policy")
    monkeypatch.setattr(get_backend().records, "insert", refuse)

    with pytest.raises(BackendError, match="row-level security"):
        create_faculty("Dr. Mehta", image=_photo())
    assert _stored_objects() == []

def test_delete_removes_only_that_faculty(app_ctx):
    keep = create_faculty("Dr. Keep")
    gone = create_faculty("Dr. Gone")
    delete_faculty(gone["id"])
    assert find_faculty(gone["id"]) is None
    assert find_faculty(keep["id"]).name == "Dr. Keep"

def test_delete_requires_id(app_ctx):
    with pytest.raises(FacultyRejected):
        delete_faculty("  ")

def test_directory_read_failure_degrades(app_ctx, monkeypatch):
    def boom(*a, **kw):
        raise BackendError("timeout")
    monkeypatch.setattr(get_backend().records, "select", boom)
    directory = load_directory()
    assert directory.is_empty
    assert directory.error == "timeout"

def test_optional_fields_may_be_blank(app_ctx):
    row = create_faculty("Dr. Mehta", department="", email="  ", phone="")
    assert (row["department"], row["email"], row["phone"]) == (None, None, None)
