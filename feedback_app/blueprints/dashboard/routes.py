from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user

from feedback_app.backend import BackendError
from feedback_app.services.profiles import Profile, ensure_profile, save_profile
from . import bp

@bp.get("/")
def index():
    try:
        profile = ensure_profile(current_user.identity)
    except BackendError as exc:
        flash(exc.message, "danger")
        profile = None
    return render_template("dashboard/index.html", profile=profile)

@bp.get("/profile")
def profile_get():
    try:
        profile = ensure_profile(current_user.identity)
    except BackendError as exc:
        flash(exc.message, "danger")
        return redirect(url_for("dashboard.index"))
    return render_template("dashboard/profile.html", profile=profile)

@bp.post("/profile")
def profile_post():
    identity = current_user.identity
    name = request.form.get("name")
    username = request.form.get("username")
    phone = request.form.get("phone")

    try:
        save_profile(identity, name, username, phone)
    except BackendError as exc:
        flash(exc.message, "danger")
        # Show what was typed, not what is stored
        draft = Profile(id=identity.id, email=identity.email, name=name, username=username, phone=phone)
        return render_template("dashboard/profile.html", profile=draft), 502

    flash("Profile saved successfully!", "success")
    return redirect(url_for("dashboard.index"))
