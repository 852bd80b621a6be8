from flask import current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user

from feedback_app.backend import BackendError
from feedback_app.services.directory import find_faculty, load_directory
from feedback_app.services.faculty import FacultyRejected, create_faculty, delete_faculty
from feedback_app.services.feedback import list_feedback
from feedback_app.services.guard import safe_next_path, sign_in, sign_out
from . import bp

FACULTY_FIELDS = ("name", "department", "email", "phone")


def _is_admin_session() -> bool:
    return current_user.is_authenticated and current_user.is_admin


@bp.get("/")
def index():
    if _is_admin_session():
        return redirect(url_for("admin.dashboard"))
    return redirect(url_for("admin.login_get"))

# ---- Admin identity -------------------------------------------------------

@bp.get("/auth/login")
def login_get():
    if _is_admin_session():
        return redirect(safe_next_path(request.args.get("next"), url_for("admin.dashboard")))
    return render_template("admin/login.html")

@bp.post("/auth/login")
def login_post():
    email = (request.form.get("email") or "").strip()
    password = request.form.get("password") or ""
    if not email or not password:
        return render_template("admin/login.html", error="Email and password are required", email=email), 400

    try:
        auth_session = sign_in(email, password)
    except BackendError as exc:
        return render_template("admin/login.html", error=exc.message, email=email), 400

    if not auth_session.user.is_admin:
        # Valid credentials, wrong audience: do not leave a session behind
        sign_out()
        return render_template("admin/login.html", error="This account is not an administrator", email=email), 403

    return redirect(safe_next_path(request.args.get("next"), url_for("admin.dashboard")))

@bp.post("/auth/logout")
def logout_post():
    sign_out()
    return redirect(url_for("admin.login_get"))

# ---- Faculty directory + editor -------------------------------------------

@bp.get("/dashboard")
def dashboard():
    return render_template("admin/dashboard.html", directory=load_directory(), draft={})

@bp.post("/faculty")
def faculty_create():
    draft = {k: (request.form.get(k) or "") for k in FACULTY_FIELDS}
    image = request.files.get("image")

    try:
        create_faculty(image=image, **draft)
    except FacultyRejected as exc:
        flash(str(exc), "danger")
        return render_template("admin/dashboard.html", directory=load_directory(), draft=draft, open_form=True), 400
    except BackendError as exc:
        flash(exc.message, "danger")
        return render_template("admin/dashboard.html", directory=load_directory(), draft=draft, open_form=True), 502

    flash("Faculty added successfully!", "success")
    # Full reload of the directory on the next GET
    return redirect(url_for("admin.dashboard"))

@bp.get("/faculty/<faculty_id>/delete")
def faculty_delete_confirm(faculty_id: str):
    try:
        faculty = find_faculty(faculty_id)
    except BackendError as exc:
        flash(exc.message, "danger")
        return redirect(url_for("admin.dashboard"))
    if faculty is None:
        flash("Faculty not found.", "danger")
        return redirect(url_for("admin.dashboard"))
    return render_template("admin/confirm_delete.html", faculty=faculty)

@bp.post("/faculty/<faculty_id>/delete")
def faculty_delete(faculty_id: str):
    if request.form.get("confirm") != "yes":
        flash("Please confirm the deletion.", "info")
        return redirect(url_for("admin.faculty_delete_confirm", faculty_id=faculty_id))

    try:
        delete_faculty(faculty_id)
    except (BackendError, FacultyRejected) as exc:
        flash(str(exc), "danger")
        return redirect(url_for("admin.dashboard"))

    flash("Faculty deleted.", "success")
    return redirect(url_for("admin.dashboard"))

@bp.get("/faculty/<faculty_id>/feedback")
def faculty_feedback(faculty_id: str):
    feedback = list_feedback(faculty_id)
    faculty = None
    try:
        faculty = find_faculty(faculty_id)
    except BackendError as exc:
        current_app.logger.warning("Faculty lookup failed for %s: %s", faculty_id, exc)
    return render_template("admin/feedbacks.html", faculty_id=faculty_id, faculty=faculty, feedback=feedback)
