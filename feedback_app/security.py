from flask_talisman import Talisman

SELF = "'self'"


def content_security_policy(supabase_url=None) -> dict:
    """
    Same-origin everything, except faculty photos which may be served
    straight from the hosted object store. Templates carry no inline JS.
    """
    photos = [SELF, "data:", "blob:"]
    if supabase_url:
        photos.append(supabase_url.rstrip("/"))
    policy = {key: [SELF] for key in (
        "default-src", "script-src", "connect-src", "frame-ancestors", "base-uri", "form-action",
    )}
    policy.update({
        "img-src": photos,
        "style-src": [SELF, "'unsafe-inline'"],
        "font-src": [SELF, "data:"],
    })
    return policy


def init_security(app):
    """HTTPS redirect, HSTS, CSP and friends; only wired in staging/production."""
    Talisman(
        app,
        content_security_policy=content_security_policy(app.config.get("SUPABASE_URL")),
        force_https=True,
        strict_transport_security=True,
        session_cookie_secure=True,
        frame_options="SAMEORIGIN",
        referrer_policy="strict-origin-when-cross-origin",
    )
