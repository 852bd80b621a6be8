import uuid

from sqlalchemy import func, CheckConstraint

from feedback_app.extensions import db
from ._base import RowMixin, utcnow

class FacultyFeedback(db.Model, RowMixin):
    __tablename__ = "faculty_feedbacks"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Plain id, no FK: feedback outlives the faculty row it was written for
    faculty_id = db.Column(db.String(36), nullable=False, index=True)
    # Snapshot taken at submission time
    faculty_name = db.Column(db.String(255), nullable=True)
    faculty_department = db.Column(db.String(255), nullable=True)

    user_email = db.Column(db.String(255), nullable=False)
    class_management = db.Column(db.Text, nullable=False, default="")
    discipline = db.Column(db.Text, nullable=False, default="")
    punctuality = db.Column(db.Text, nullable=False, default="")
    rating = db.Column(db.Integer, nullable=False, default=5)
    feedback_message = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_faculty_feedbacks_rating_range"),
        db.Index("ix_faculty_feedbacks_faculty_created_at", "faculty_id", "created_at"),
    )
