from flask import Blueprint, request

from feedback_app.services.guard import require_session, AUDIENCE_ADMIN

bp = Blueprint("admin", __name__)

# Reachable without an admin session
_PUBLIC_ENDPOINTS = {"admin.index", "admin.login_get", "admin.login_post", "admin.logout_post"}

@bp.before_request
def _require_admin_session():
    if request.endpoint in _PUBLIC_ENDPOINTS:
        return None
    return require_session(AUDIENCE_ADMIN)

from . import routes  # noqa: E402,F401
