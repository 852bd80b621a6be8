from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user

from feedback_app.backend import BackendError
from feedback_app.services.directory import FacultyMember, find_faculty, load_directory
from feedback_app.services.feedback import FeedbackForm, FeedbackRejected, submit_feedback
from . import bp

@bp.get("/")
def index():
    return render_template("feedback/index.html", directory=load_directory())

@bp.get("/<faculty_id>")
def form(faculty_id: str):
    try:
        faculty = find_faculty(faculty_id)
    except BackendError as exc:
        flash(exc.message, "danger")
        return redirect(url_for("feedback.index"))
    if faculty is None:
        flash("That faculty member no longer exists.", "danger")
        return redirect(url_for("feedback.index"))
    return render_template("feedback/form.html", faculty=faculty, form=FeedbackForm())

@bp.post("/")
def submit():
    faculty_id = (request.form.get("faculty_id") or "").strip()
    form = FeedbackForm.from_mapping(request.form)
    # Display-only; the stored snapshot comes from the faculty row
    faculty = FacultyMember(id=faculty_id, name=(request.form.get("faculty_name") or "").strip())

    try:
        submit_feedback(faculty_id, current_user.email, form)
    except FeedbackRejected as exc:
        flash(str(exc), "danger")
        if not faculty_id:
            return redirect(url_for("feedback.index"))
        return render_template("feedback/form.html", faculty=faculty, form=form), 400
    except BackendError as exc:
        flash(exc.message, "danger")
        return render_template("feedback/form.html", faculty=faculty, form=form), 502

    flash("Feedback submitted!", "success")
    return redirect(url_for("feedback.index"))
