from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"


class BackendError(Exception):
    """Any failed call to the identity provider, record store or object store."""

    def __init__(self, message: str, *, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Identity:
    id: str
    email: str
    role: str = ROLE_STUDENT

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    user: Identity


class IdentityProvider:
    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        raise NotImplementedError

    def sign_up(self, email: str, password: str) -> Identity:
        raise NotImplementedError

    def sign_out(self, access_token: str) -> None:
        raise NotImplementedError

    def get_user(self, access_token: str) -> Identity:
        raise NotImplementedError

    def create_user(self, email: str, password: str, role: str = ROLE_STUDENT) -> Identity:
        raise NotImplementedError


class RecordStore:
    """
    Generic CRUD over named collections. Rows are plain dicts; filters are
    equality matches on column names.
    """

    def select(self, collection: str, filters: Optional[Dict[str, Any]] = None,
               order_by: Optional[str] = None, descending: bool = False) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def insert(self, collection: str, row: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def upsert(self, collection: str, row: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def delete(self, collection: str, filters: Dict[str, Any]) -> None:
        raise NotImplementedError

    def select_one(self, collection: str, filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        rows = self.select(collection, filters)
        return rows[0] if rows else None


class ObjectStore:
    def upload(self, bucket: str, name: str, data: bytes, content_type: Optional[str] = None) -> None:
        raise NotImplementedError

    def download(self, bucket: str, name: str) -> Tuple[bytes, Optional[str]]:
        raise NotImplementedError

    def remove(self, bucket: str, name: str) -> None:
        raise NotImplementedError

    def get_public_url(self, bucket: str, name: str) -> str:
        raise NotImplementedError


class Backend:
    """The three capabilities the app delegates to its managed backend."""

    name = "abstract"

    def __init__(self, auth: IdentityProvider, records: RecordStore, storage: ObjectStore):
        self.auth = auth
        self.records = records
        self.storage = storage

    def __repr__(self) -> str:
        return f"<Backend {self.name}>"
