from flask import Blueprint

from feedback_app.services.guard import require_session, AUDIENCE_STUDENT

bp = Blueprint("dashboard", __name__)

@bp.before_request
def _require_session_dashboard():
    return require_session(AUDIENCE_STUDENT)

from . import routes  # noqa: E402,F401 (import after bp to avoid circulars)
