from .auth_user import AuthUser, ROLE_ADMIN, ROLE_STUDENT
from .profile import Profile
from .faculty import Faculty
from .faculty_feedback import FacultyFeedback
from .stored_object import StoredObject

__all__ = [
    "AuthUser", "Profile", "Faculty", "FacultyFeedback", "StoredObject",
    "ROLE_ADMIN", "ROLE_STUDENT",
]
