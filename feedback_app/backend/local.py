"""
Local backend: the managed-backend contract implemented over the app's own
tables. Used for development and tests; production normally points at the
hosted project instead (see ``hosted.py``).
"""
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from feedback_app.extensions import db
from feedback_app.models import AuthUser, Profile, Faculty, FacultyFeedback, StoredObject
from feedback_app.services import tokens
from .base import (
    AuthSession, Backend, BackendError, Identity, IdentityProvider, ObjectStore,
    RecordStore, ROLE_ADMIN, ROLE_STUDENT,
)

COLLECTIONS = {
    "profiles": Profile,
    "faculty_profiles": Faculty,
    "faculty_feedbacks": FacultyFeedback,
}

MIN_PASSWORD_LENGTH = 6


def _identity(user: AuthUser) -> Identity:
    return Identity(id=user.id, email=user.email, role=user.role or ROLE_STUDENT)


def _find_user(email: str) -> Optional[AuthUser]:
    return db.session.execute(
        db.select(AuthUser).where(func.lower(AuthUser.email) == func.lower(email))
    ).scalar_one_or_none()


class LocalIdentityProvider(IdentityProvider):

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        email = (email or "").strip()
        user = _find_user(email) if email else None
        if not user or not user.check_password(password or ""):
            raise BackendError("Invalid login credentials", status=400)
        token = tokens.generate(user.id, user.token_version or 0)
        return AuthSession(access_token=token, user=_identity(user))

    def sign_up(self, email: str, password: str) -> Identity:
        return self.create_user(email, password, ROLE_STUDENT)

    def create_user(self, email: str, password: str, role: str = ROLE_STUDENT) -> Identity:
        email = (email or "").strip().lower()
        if not email:
            raise BackendError("Email is required", status=422)
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise BackendError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters", status=422)
        if role not in (ROLE_STUDENT, ROLE_ADMIN):
            raise BackendError(f"Unknown role: {role}", status=422)
        if _find_user(email):
            raise BackendError("User already registered", status=422)

        user = AuthUser(email=email, role=role)
        user.set_password(password)
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise BackendError("User already registered", status=422)
        return _identity(user)

    def get_user(self, access_token: str) -> Identity:
        data = tokens.verify(access_token)
        if not data:
            raise BackendError("Invalid or expired session", status=401)
        user = db.session.get(AuthUser, data["u"])
        if not user or (user.token_version or 0) != data.get("v", 0):
            raise BackendError("Invalid or expired session", status=401)
        return _identity(user)

    def sign_out(self, access_token: str) -> None:
        data = tokens.verify(access_token)
        if not data:
            return
        user = db.session.get(AuthUser, data["u"])
        if user:
            user.token_version = (user.token_version or 0) + 1
            db.session.commit()


class LocalRecordStore(RecordStore):

    def _model(self, collection: str):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise BackendError(f'relation "{collection}" does not exist', status=404)

    def _check_columns(self, model, keys) -> None:
        unknown = set(keys) - model.column_names()
        if unknown:
            raise BackendError(
                f"column {sorted(unknown)[0]!r} of {model.__tablename__!r} does not exist", status=400
            )

    def select(self, collection: str, filters: Optional[Dict[str, Any]] = None,
               order_by: Optional[str] = None, descending: bool = False) -> List[Dict[str, Any]]:
        model = self._model(collection)
        filters = filters or {}
        self._check_columns(model, list(filters) + ([order_by] if order_by else []))

        query = db.select(model).filter_by(**filters)
        if order_by:
            col = getattr(model, order_by)
            query = query.order_by(col.desc() if descending else col.asc())
        try:
            rows = db.session.execute(query).scalars().all()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise BackendError(str(exc.__cause__ or exc))
        return [r.to_dict() for r in rows]

    def insert(self, collection: str, row: Dict[str, Any]) -> Dict[str, Any]:
        model = self._model(collection)
        self._check_columns(model, row)
        obj = model()
        obj.apply(row)
        db.session.add(obj)
        self._commit()
        return obj.to_dict()

    def upsert(self, collection: str, row: Dict[str, Any]) -> Dict[str, Any]:
        model = self._model(collection)
        self._check_columns(model, row)
        if not row.get("id"):
            raise BackendError("upsert requires an id", status=400)
        obj = db.session.get(model, row["id"])
        if obj is None:
            obj = model()
            db.session.add(obj)
        obj.apply(row)
        self._commit()
        return obj.to_dict()

    def delete(self, collection: str, filters: Dict[str, Any]) -> None:
        model = self._model(collection)
        if not filters:
            raise BackendError("DELETE requires a filter", status=400)
        self._check_columns(model, filters)
        try:
            db.session.execute(db.delete(model).filter_by(**filters))
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise BackendError(str(exc.__cause__ or exc))
        self._commit()

    def _commit(self) -> None:
        try:
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise BackendError(str(getattr(exc, "orig", None) or exc), status=400)


class LocalObjectStore(ObjectStore):

    def _find(self, bucket: str, name: str) -> Optional[StoredObject]:
        return db.session.execute(
            db.select(StoredObject).filter_by(bucket=bucket, name=name)
        ).scalar_one_or_none()

    def upload(self, bucket: str, name: str, data: bytes, content_type: Optional[str] = None) -> None:
        if not name:
            raise BackendError("Object name is required", status=400)
        if self._find(bucket, name):
            raise BackendError("The resource already exists", status=409)
        db.session.add(StoredObject(bucket=bucket, name=name, content_type=content_type, data=data))
        try:
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise BackendError(str(getattr(exc, "orig", None) or exc))

    def download(self, bucket: str, name: str) -> Tuple[bytes, Optional[str]]:
        obj = self._find(bucket, name)
        if not obj:
            raise BackendError("Object not found", status=404)
        return obj.data, obj.content_type

    def remove(self, bucket: str, name: str) -> None:
        obj = self._find(bucket, name)
        if obj:
            db.session.delete(obj)
            try:
                db.session.commit()
            except SQLAlchemyError as exc:
                db.session.rollback()
                raise BackendError(str(getattr(exc, "orig", None) or exc))

    def get_public_url(self, bucket: str, name: str) -> str:
        base = current_app.config.get("STORAGE_PUBLIC_PATH", "/storage").rstrip("/")
        return f"{base}/{quote(bucket)}/{quote(name)}"


class LocalBackend(Backend):
    name = "sql"

    def __init__(self):
        super().__init__(LocalIdentityProvider(), LocalRecordStore(), LocalObjectStore())
