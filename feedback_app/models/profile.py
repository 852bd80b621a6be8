from sqlalchemy import func

from feedback_app.extensions import db
from ._base import RowMixin, utcnow

class Profile(db.Model, RowMixin):
    __tablename__ = "profiles"

    # Same id as the identity; no FK so the table mirrors the hosted schema
    id = db.Column(db.String(36), primary_key=True)
    email = db.Column(db.String(255), nullable=True)
    name = db.Column(db.String(255), nullable=True)
    username = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow,
                           onupdate=utcnow, server_default=func.now())
