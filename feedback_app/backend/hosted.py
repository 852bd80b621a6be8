"""
Hosted backend: a Supabase project providing auth, Postgres tables and
object storage. Every driver exception is translated to BackendError.
"""
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Tuple

import httpx
from flask import g, has_request_context
from flask_login import current_user
from supabase import AuthError, Client, ClientOptions, PostgrestAPIError, StorageException, create_client

from .base import (
    AuthSession, Backend, BackendError, Identity, IdentityProvider, ObjectStore,
    RecordStore, ROLE_ADMIN, ROLE_STUDENT,
)


@contextmanager
def _translated():
    try:
        yield
    except AuthError as exc:
        raise BackendError(getattr(exc, "message", None) or str(exc), status=getattr(exc, "status", None)) from exc
    except PostgrestAPIError as exc:
        raise BackendError(exc.message or str(exc), status=None) from exc
    except StorageException as exc:
        # storage3 packs the JSON error body into args[0]
        detail = exc.args[0] if exc.args else {}
        message = detail.get("message") if isinstance(detail, dict) else str(detail)
        raise BackendError(message or "Storage request failed") from exc
    except httpx.HTTPError as exc:
        raise BackendError(f"Backend unreachable: {exc}") from exc


def _identity(user) -> Identity:
    meta = getattr(user, "app_metadata", None) or {}
    role = meta.get("role") if meta.get("role") in (ROLE_STUDENT, ROLE_ADMIN) else ROLE_STUDENT
    return Identity(id=str(user.id), email=user.email or "", role=role)


class HostedIdentityProvider(IdentityProvider):
    """
    Sign-in and sign-up use a throwaway client so one visitor's session is
    never stored on the client shared by every request.
    """

    def __init__(self, url: str, key: str, service_role_key: Optional[str] = None):
        self._url = url
        self._key = key
        self._service_role_key = service_role_key

    def _client(self, key: Optional[str] = None) -> Client:
        return _new_client(self._url, key or self._key)

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        with _translated():
            res = self._client().auth.sign_in_with_password({"email": email, "password": password})
        if not res.session or not res.user:
            raise BackendError("Invalid login credentials", status=400)
        return AuthSession(access_token=res.session.access_token, user=_identity(res.user))

    def sign_up(self, email: str, password: str) -> Identity:
        with _translated():
            res = self._client().auth.sign_up({"email": email, "password": password})
        if not res.user:
            raise BackendError("Sign up failed")
        return _identity(res.user)

    def sign_out(self, access_token: str) -> None:
        if not self._service_role_key:
            # Without the admin API the token simply expires on its own
            return
        with _translated():
            self._client(self._service_role_key).auth.admin.sign_out(access_token)

    def get_user(self, access_token: str) -> Identity:
        if not access_token:
            raise BackendError("Invalid or expired session", status=401)
        with _translated():
            res = self._client().auth.get_user(access_token)
        if not res or not res.user:
            raise BackendError("Invalid or expired session", status=401)
        return _identity(res.user)

    def create_user(self, email: str, password: str, role: str = ROLE_STUDENT) -> Identity:
        if not self._service_role_key:
            raise BackendError("SUPABASE_SERVICE_ROLE_KEY is required to create users")
        with _translated():
            res = self._client(self._service_role_key).auth.admin.create_user({
                "email": email,
                "password": password,
                "email_confirm": True,
                "app_metadata": {"role": role},
            })
        return _identity(res.user)


def _new_client(url: str, key: str) -> Client:
    # Server-side clients never hold a GoTrue session of their own
    options = ClientOptions(persist_session=False, auto_refresh_token=False)
    return create_client(url, key, options=options)


def _act_as(client: Client, access_token: str) -> Client:
    """Send the user's JWT instead of the anon key so row-level security sees auth.uid()."""
    client.options.headers["Authorization"] = f"Bearer {access_token}"
    client.postgrest.auth(access_token)
    return client


class RequestClients:
    """
    One data client per request, acting as whoever is signed in: admins use
    the service role (when configured), everyone else the anon key plus their
    own access token. Outside a request (CLI) the anon key is used as is.
    """

    def __init__(self, url: str, key: str, service_role_key: Optional[str] = None):
        self._url = url
        self._key = key
        self._service_role_key = service_role_key

    def current(self) -> Client:
        if not has_request_context():
            return _new_client(self._url, self._key)
        client = g.get("_supabase_data_client")
        if client is None:
            client = self._for_user(current_user)
            g._supabase_data_client = client
        return client

    def _for_user(self, user) -> Client:
        if not getattr(user, "is_authenticated", False):
            return _new_client(self._url, self._key)
        if user.is_admin and self._service_role_key:
            return _new_client(self._url, self._service_role_key)
        return _act_as(_new_client(self._url, self._key), user.access_token)


class HostedRecordStore(RecordStore):

    def __init__(self, clients: RequestClients):
        self._clients = clients

    @property
    def _client(self) -> Client:
        return self._clients.current()

    def select(self, collection: str, filters: Optional[Dict[str, Any]] = None,
               order_by: Optional[str] = None, descending: bool = False) -> List[Dict[str, Any]]:
        with _translated():
            query = self._client.table(collection).select("*")
            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            if order_by:
                query = query.order(order_by, desc=descending)
            return query.execute().data or []

    def insert(self, collection: str, row: Dict[str, Any]) -> Dict[str, Any]:
        with _translated():
            data = self._client.table(collection).insert(row).execute().data
        return data[0] if data else dict(row)

    def upsert(self, collection: str, row: Dict[str, Any]) -> Dict[str, Any]:
        with _translated():
            data = self._client.table(collection).upsert(row, on_conflict="id").execute().data
        return data[0] if data else dict(row)

    def delete(self, collection: str, filters: Dict[str, Any]) -> None:
        if not filters:
            raise BackendError("DELETE requires a filter", status=400)
        with _translated():
            query = self._client.table(collection).delete()
            for column, value in filters.items():
                query = query.eq(column, value)
            query.execute()


class HostedObjectStore(ObjectStore):

    def __init__(self, clients: RequestClients):
        self._clients = clients

    @property
    def _client(self) -> Client:
        return self._clients.current()

    def upload(self, bucket: str, name: str, data: bytes, content_type: Optional[str] = None) -> None:
        options = {"content-type": content_type} if content_type else None
        with _translated():
            self._client.storage.from_(bucket).upload(path=name, file=data, file_options=options)

    def download(self, bucket: str, name: str) -> Tuple[bytes, Optional[str]]:
        with _translated():
            return self._client.storage.from_(bucket).download(name), None

    def remove(self, bucket: str, name: str) -> None:
        with _translated():
            self._client.storage.from_(bucket).remove([name])

    def get_public_url(self, bucket: str, name: str) -> str:
        with _translated():
            url = self._client.storage.from_(bucket).get_public_url(name)
        return url.rstrip("?")


class HostedBackend(Backend):
    name = "supabase"

    def __init__(self, url: str, key: str, service_role_key: Optional[str] = None):
        if not url or not key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY are required for the hosted backend")
        clients = RequestClients(url, key, service_role_key)
        super().__init__(
            HostedIdentityProvider(url, key, service_role_key),
            HostedRecordStore(clients),
            HostedObjectStore(clients),
        )
