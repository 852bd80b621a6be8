import os
import json
from logging.config import dictConfig

import sentry_sdk
from flask import current_app
from pythonjsonlogger import jsonlogger
from sentry_sdk.integrations.flask import FlaskIntegration

JSON_LOG_ENVS = ("staging", "production")


def _app_env() -> str:
    return (os.getenv("APP_ENV", "development") or "development").lower()


def init_logging(app):
    """
    Staging/production: one JSON object per log line on stderr, root logger.
    Development and tests keep Flask's console handler at LOG_LEVEL.
    """
    level = app.config.get("LOG_LEVEL", "INFO")
    if _app_env() not in JSON_LOG_ENVS:
        app.logger.setLevel(level)
        return
    dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": jsonlogger.JsonFormatter,
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            },
        },
        "handlers": {"stderr": {"class": "logging.StreamHandler", "formatter": "json"}},
        "root": {"level": level, "handlers": ["stderr"]},
    })


def init_sentry(app):
    """No DSN, no Sentry."""
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return
    sentry_sdk.init(
        dsn=dsn,
        integrations=[FlaskIntegration()],
        traces_sample_rate=float(os.getenv("SENTRY_TRACES", "0.0")),
        environment=_app_env(),
        send_default_pii=False,
    )
    app.logger.info("Sentry enabled for %s", _app_env())


def log_event(event: str, level: str = "info", **fields):
    """Domain events as JSON on the app logger. Ids and counts only, never free text."""
    payload = {"event": event, **fields}
    getattr(current_app.logger, level)(json.dumps(payload, default=str))
