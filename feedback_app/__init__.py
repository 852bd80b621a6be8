import os
from datetime import datetime, timezone

from flask import Flask, render_template, request
from flask_wtf.csrf import CSRFError

# Local/dev reads .env; the platform supplies env vars in production
if os.getenv("APP_ENV", "development") != "production":
    from dotenv import load_dotenv
    load_dotenv(".env", override=True)

from .backend import init_backend
from .config import get_config
from .extensions import csrf, db, login_manager, migrate
from .observability import init_logging, init_sentry
from .security import init_security

PROD_LIKE = ("staging", "production")


def _check_required_settings(app, env_key: str) -> None:
    """Fail at boot, not on the first request, when a prod-like env is misconfigured."""
    if env_key not in PROD_LIKE:
        return
    required = ["SECRET_KEY"]
    if app.config.get("BACKEND") == "supabase":
        required += ["SUPABASE_URL", "SUPABASE_KEY"]
    else:
        required.append("DATABASE_URL")
    missing = [name for name in required if not (os.getenv(name) or app.config.get(name))]
    if missing:
        raise RuntimeError(f"Missing required environment variable: {', '.join(missing)}")


def _register_blueprints(app) -> None:
    from .blueprints.admin import bp as admin_bp
    from .blueprints.auth import bp as auth_bp
    from .blueprints.dashboard import bp as dashboard_bp
    from .blueprints.feedback import bp as feedback_bp
    from .blueprints.main import bp as main_bp

    app.register_blueprint(main_bp)                          # "/", "/storage/..."
    app.register_blueprint(auth_bp, url_prefix="/auth")      # student identity
    app.register_blueprint(dashboard_bp, url_prefix="/dashboard")
    app.register_blueprint(feedback_bp, url_prefix="/feedback")
    app.register_blueprint(admin_bp, url_prefix="/admin")


def _register_error_handlers(app) -> None:
    @app.errorhandler(403)
    def forbidden(e):
        if "application/json" in (request.headers.get("Accept") or "").lower():
            return {"error": "forbidden", "code": 403}, 403
        return render_template("errors/403.html"), 403

    @app.errorhandler(404)
    def not_found(e):
        return "Not Found", 404

    @app.errorhandler(413)
    def too_large(e):
        limit_mb = (app.config.get("MAX_CONTENT_LENGTH") or 0) // (1024 * 1024)
        return f"Upload too large (limit {limit_mb} MB)", 413

    @app.errorhandler(CSRFError)
    def csrf_failed(e):
        return f"CSRF validation failed: {e.description}", 400

    @app.errorhandler(500)
    def server_error(e):
        return "Internal Server Error", 500


def create_app(config_overrides=None):
    app = Flask(__name__, template_folder="templates", static_folder="static")
    app.config.from_object(get_config())
    if config_overrides:
        app.config.update(config_overrides)

    env_key = (os.getenv("APP_ENV", "development") or "development").lower()
    _check_required_settings(app, env_key)

    init_logging(app)
    init_sentry(app)
    if env_key in PROD_LIKE:
        init_security(app)

    # Local backend tables live in db; harmless when the hosted backend is selected
    db.init_app(app)
    migrate.init_app(app, db, directory="migrations")
    csrf.init_app(app)
    login_manager.init_app(app)

    init_backend(app)
    from .services import guard  # noqa: F401 (registers the Flask-Login user_loader)

    _register_blueprints(app)
    _register_error_handlers(app)

    from .utils.helpers import format_timestamp
    app.add_template_filter(format_timestamp, "timestamp")

    @app.context_processor
    def inject_globals():
        return {
            "current_year": datetime.now(timezone.utc).year,
            "SITE_NAME": app.config.get("SITE_NAME", "Feedback System"),
            "APP_ENV": env_key,
        }

    @app.get("/healthz")
    def healthz():
        return {"status": "ok", "backend": app.extensions["backend"].name}, 200

    from .cli import register_cli
    register_cli(app)

    return app
