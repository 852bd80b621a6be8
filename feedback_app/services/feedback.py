"""
Feedback submission workflow.

One submission writes exactly one ``faculty_feedbacks`` row. Preconditions
(a selected faculty, a known submitter email) are checked before any write;
the rating is clamped rather than rejected so the form is always valid.
"""
from dataclasses import asdict, dataclass, field
from typing import List, Mapping, Optional

from flask import current_app

from feedback_app.backend import BackendError, get_backend
from feedback_app.observability import log_event
from feedback_app.utils.validators import RATING_DEFAULT, clamp_rating, clean_text
from .directory import find_faculty

FEEDBACKS = "faculty_feedbacks"

TEXT_FIELDS = ("class_management", "discipline", "punctuality", "feedback_message")


class FeedbackRejected(ValueError):
    """A submission that failed a precondition; nothing was written."""


@dataclass
class FeedbackForm:
    class_management: str = ""
    discipline: str = ""
    punctuality: str = ""
    rating: int = RATING_DEFAULT
    feedback_message: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping) -> "FeedbackForm":
        values = {name: clean_text(data.get(name)) for name in TEXT_FIELDS}
        return cls(rating=clamp_rating(data.get("rating")), **values)

    def as_row(self) -> dict:
        row = asdict(self)
        row["rating"] = clamp_rating(self.rating)
        # Optional column: store NULL rather than an empty message
        row["feedback_message"] = self.feedback_message or None
        return row


def submit_feedback(faculty_id: Optional[str], user_email: Optional[str], form: FeedbackForm) -> dict:
    """
    Write one feedback row for the selected faculty. Raises FeedbackRejected
    on a failed precondition and BackendError when the store refuses.
    """
    if not (faculty_id or "").strip():
        raise FeedbackRejected("Please select a faculty")
    if not (user_email or "").strip():
        raise FeedbackRejected("Please login to submit feedback")

    faculty = find_faculty(faculty_id.strip())
    if faculty is None:
        raise FeedbackRejected("The selected faculty no longer exists")

    row = {
        "faculty_id": faculty.id,
        "user_email": user_email,
        # Snapshot so the entry stays readable after the faculty row is deleted
        "faculty_name": faculty.name,
        "faculty_department": faculty.department,
        **form.as_row(),
    }
    stored = get_backend().records.insert(FEEDBACKS, row)
    log_event("feedback.submitted", faculty_id=faculty.id, rating=row["rating"])
    return stored


@dataclass
class FeedbackList:
    entries: List[dict] = field(default_factory=list)
    error: Optional[str] = None


def list_feedback(faculty_id: str) -> FeedbackList:
    """Every entry for one faculty id, newest first; read failures degrade to empty."""
    try:
        rows = get_backend().records.select(
            FEEDBACKS, {"faculty_id": faculty_id}, order_by="created_at", descending=True
        )
    except BackendError as exc:
        current_app.logger.warning("Error fetching feedbacks for %s: %s", faculty_id, exc)
        return FeedbackList(error=exc.message)
    return FeedbackList(entries=rows)
