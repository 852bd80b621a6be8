from dataclasses import dataclass
from typing import Optional

from feedback_app.backend import Identity, get_backend
from feedback_app.observability import log_event
from feedback_app.utils.validators import clean_str

PROFILES = "profiles"


@dataclass
class Profile:
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    username: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "Profile":
        return cls(
            id=row["id"],
            email=row.get("email"),
            name=row.get("name"),
            username=row.get("username"),
            phone=row.get("phone"),
        )

    @property
    def is_complete(self) -> bool:
        return bool((self.name or "").strip() and (self.username or "").strip())


def ensure_profile(identity: Identity) -> Profile:
    """
    Fetch the identity's profile, creating an empty (id + email) row the first
    time it is missing. Existing rows are never rewritten here.
    """
    records = get_backend().records
    row = records.select_one(PROFILES, {"id": identity.id})
    if row is None:
        row = records.insert(PROFILES, {"id": identity.id, "email": identity.email})
        log_event("profile.created", user_id=identity.id)
    return Profile.from_row(row)


def save_profile(identity: Identity, name: Optional[str], username: Optional[str],
                 phone: Optional[str]) -> Profile:
    """Upsert the whole form keyed by id; completes or edits through the same path."""
    row = get_backend().records.upsert(PROFILES, {
        "id": identity.id,
        "email": identity.email,
        "name": clean_str(name),
        "username": clean_str(username, max_len=64),
        "phone": clean_str(phone, max_len=50),
    })
    profile = Profile.from_row(row)
    log_event("profile.saved", user_id=identity.id, complete=profile.is_complete)
    return profile
