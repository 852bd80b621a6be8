"""
Session guard.

The only session marker is the access token issued by the identity provider;
Flask-Login stores it as the user id and the loader re-validates it against
the provider on every request. A failed check is the same as no session.
"""
from typing import Optional

from flask import current_app, flash, redirect, request, url_for
from flask_login import UserMixin, current_user, login_user, logout_user

from feedback_app.backend import AuthSession, BackendError, Identity, ROLE_ADMIN, get_backend
from feedback_app.extensions import login_manager

AUDIENCE_STUDENT = "student"
AUDIENCE_ADMIN = "admin"

LOGIN_ENDPOINTS = {
    AUDIENCE_STUDENT: "auth.login_get",
    AUDIENCE_ADMIN: "admin.login_get",
}


class SessionUser(UserMixin):
    def __init__(self, identity: Identity, access_token: str):
        self.identity = identity
        self.access_token = access_token

    @property
    def id(self) -> str:
        return self.identity.id

    @property
    def email(self) -> str:
        return self.identity.email

    @property
    def is_admin(self) -> bool:
        return self.identity.role == ROLE_ADMIN

    def get_id(self) -> str:
        return self.access_token


@login_manager.user_loader
def load_user(access_token: str):
    try:
        identity = get_backend().auth.get_user(access_token)
    except BackendError as exc:
        current_app.logger.info("Session check failed: %s", exc)
        return None
    return SessionUser(identity, access_token)


# Only allow internal paths like "/feedback" (no external URLs or "//" protocol-relative).
def safe_next_path(next_raw: Optional[str], default: str) -> str:
    next_raw = (next_raw or "").strip()
    if next_raw.startswith("/") and not next_raw.startswith("//"):
        return next_raw
    return default


def entry_point_for(user) -> str:
    if getattr(user, "is_admin", False):
        return url_for("admin.dashboard")
    return url_for("dashboard.index")


def require_session(audience: str = AUDIENCE_STUDENT):
    """
    before_request helper: returns a redirect to the audience's login screen
    when the check fails, None when the request may proceed.
    """
    login_endpoint = LOGIN_ENDPOINTS[audience]
    if not current_user.is_authenticated:
        return redirect(url_for(login_endpoint, next=request.path))
    if audience == AUDIENCE_ADMIN and not current_user.is_admin:
        flash("Please sign in with an administrator account.", "danger")
        return redirect(url_for(login_endpoint, next=request.path))
    return None


def sign_in(email: str, password: str) -> AuthSession:
    """Authenticate against the identity provider and start the Flask session."""
    auth_session = get_backend().auth.sign_in_with_password(email, password)
    login_user(SessionUser(auth_session.user, auth_session.access_token))
    return auth_session


def sign_out() -> None:
    if not current_user.is_authenticated:
        return
    token = current_user.access_token
    try:
        get_backend().auth.sign_out(token)
    except BackendError as exc:
        # The local session still ends; the token expires on its own.
        current_app.logger.warning("Sign-out at identity provider failed: %s", exc)
    logout_user()
