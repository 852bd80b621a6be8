from dataclasses import dataclass, field
from typing import List, Optional

from flask import current_app

from feedback_app.backend import BackendError, get_backend

FACULTY = "faculty_profiles"


@dataclass
class FacultyMember:
    id: str
    name: str
    department: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    image_url: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "FacultyMember":
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            department=row.get("department"),
            email=row.get("email"),
            phone=row.get("phone"),
            image_url=row.get("image_url"),
        )


@dataclass
class Directory:
    faculty: List[FacultyMember] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.faculty


def load_directory() -> Directory:
    """
    Every faculty row, in whatever order the store returns them. A failed
    read degrades to an empty directory carrying the error message.
    """
    try:
        rows = get_backend().records.select(FACULTY)
    except BackendError as exc:
        current_app.logger.warning("Faculty directory fetch failed: %s", exc)
        return Directory(error=exc.message)
    return Directory(faculty=[FacultyMember.from_row(r) for r in rows])


def find_faculty(faculty_id: str) -> Optional[FacultyMember]:
    if not faculty_id:
        return None
    row = get_backend().records.select_one(FACULTY, {"id": faculty_id})
    return FacultyMember.from_row(row) if row else None
