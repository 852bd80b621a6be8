from flask import Response, abort, current_app, redirect, url_for
from flask_login import current_user

from feedback_app.backend import BackendError, get_backend
from feedback_app.services.guard import entry_point_for
from . import bp

@bp.get("/")
def root():
    if current_user.is_authenticated:
        return redirect(entry_point_for(current_user))
    return redirect(url_for("auth.login_get"))

@bp.get("/storage/<bucket>/<path:name>")
def storage_object(bucket: str, name: str):
    """Serve objects held by the local object store (hosted URLs never land here)."""
    try:
        data, content_type = get_backend().storage.download(bucket, name)
    except BackendError as exc:
        current_app.logger.info("Storage miss %s/%s: %s", bucket, name, exc)
        abort(404)
    resp = Response(data, mimetype=content_type or "application/octet-stream")
    resp.headers["Cache-Control"] = "public, max-age=86400"
    return resp
