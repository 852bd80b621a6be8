from flask import flash, redirect, render_template, request, url_for
from flask_login import current_user

from feedback_app.backend import BackendError, get_backend
from feedback_app.services.guard import entry_point_for, safe_next_path, sign_in, sign_out
from feedback_app.utils.validators import is_valid_email
from . import bp

@bp.get("/login")
def login_get():
    if current_user.is_authenticated:
        return redirect(safe_next_path(request.args.get("next"), entry_point_for(current_user)))
    return render_template("auth/login.html")

@bp.post("/login")
def login_post():
    email = (request.form.get("email") or "").strip()
    password = request.form.get("password") or ""

    if not email or not password:
        return render_template("auth/login.html", error="Email and password are required", email=email), 400

    try:
        auth_session = sign_in(email, password)
    except BackendError as exc:
        return render_template("auth/login.html", error=exc.message, email=email), 400

    default = url_for("dashboard.index")
    if auth_session.user.is_admin:
        default = url_for("admin.dashboard")
    return redirect(safe_next_path(request.args.get("next"), default))

@bp.get("/signup")
def signup_get():
    if current_user.is_authenticated:
        return redirect(entry_point_for(current_user))
    return render_template("auth/signup.html")

@bp.post("/signup")
def signup_post():
    email = (request.form.get("email") or "").strip().lower()
    password = request.form.get("password") or ""
    confirm = request.form.get("confirm") or ""

    errors = []
    if not email or not is_valid_email(email):
        errors.append("A valid email is required.")
    if not password:
        errors.append("Password is required.")
    elif password != confirm:
        errors.append("Passwords do not match.")
    if errors:
        return render_template("auth/signup.html", errors=errors, email=email), 400

    try:
        get_backend().auth.sign_up(email, password)
    except BackendError as exc:
        return render_template("auth/signup.html", errors=[exc.message], email=email), 400

    flash("Account created. Please sign in.", "success")
    return redirect(url_for("auth.login_get"))

@bp.post("/logout")
def logout_post():
    sign_out()
    return redirect(url_for("auth.login_get"))
