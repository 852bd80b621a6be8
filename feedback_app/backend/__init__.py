from flask import current_app

from .base import (
    AuthSession, Backend, BackendError, Identity, IdentityProvider, ObjectStore,
    RecordStore, ROLE_ADMIN, ROLE_STUDENT,
)

def init_backend(app) -> Backend:
    """Build the configured backend once and park it on app.extensions."""
    kind = (app.config.get("BACKEND") or "sql").lower()
    if kind == "supabase":
        from .hosted import HostedBackend
        backend = HostedBackend(
            app.config.get("SUPABASE_URL"),
            app.config.get("SUPABASE_KEY"),
            app.config.get("SUPABASE_SERVICE_ROLE_KEY"),
        )
    elif kind == "sql":
        from .local import LocalBackend
        backend = LocalBackend()
    else:
        raise RuntimeError(f"Unknown BACKEND {kind!r}; expected 'sql' or 'supabase'")
    app.extensions["backend"] = backend
    app.logger.info("Backend initialised: %s", backend.name)
    return backend

def get_backend() -> Backend:
    return current_app.extensions["backend"]
