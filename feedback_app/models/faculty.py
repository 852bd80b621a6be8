import uuid

from sqlalchemy import func, Index

from feedback_app.extensions import db
from ._base import RowMixin, utcnow

class Faculty(db.Model, RowMixin):
    __tablename__ = "faculty_profiles"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(255), nullable=False)
    department = db.Column(db.String(255), nullable=True)
    email = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    image_url = db.Column(db.String(1024), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    __table_args__ = (
        Index("ix_faculty_profiles_lower_name", func.lower(name)),
    )

    def __repr__(self) -> str:
        return f"<Faculty id={self.id} name={self.name!r}>"
