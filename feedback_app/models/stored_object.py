from sqlalchemy import func, UniqueConstraint

from feedback_app.extensions import db
from ._base import utcnow

class StoredObject(db.Model):
    """Blob rows backing the local object store."""
    __tablename__ = "stored_objects"

    id = db.Column(db.Integer, primary_key=True)
    bucket = db.Column(db.String(63), nullable=False)
    name = db.Column(db.String(512), nullable=False)
    content_type = db.Column(db.String(255), nullable=True)
    data = db.Column(db.LargeBinary, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("bucket", "name", name="uq_stored_objects_bucket_name"),
    )
