from flask import Blueprint

from feedback_app.services.guard import require_session, AUDIENCE_STUDENT

bp = Blueprint("feedback", __name__)

@bp.before_request
def _require_session_feedback():
    return require_session(AUDIENCE_STUDENT)

from . import routes  # noqa: E402,F401
