from typing import Optional
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from flask import current_app

def _serializer() -> URLSafeTimedSerializer:
    secret = current_app.config["SECRET_KEY"]
    salt = current_app.config.get("ACCESS_TOKEN_SALT", "access-token-v1")
    return URLSafeTimedSerializer(secret_key=secret, salt=salt)

def generate(user_id: str, version: int = 0) -> str:
    """
    Access token for the local identity provider.
    version: the user's token_version; bumping it revokes older tokens.
    """
    return _serializer().dumps({"u": user_id, "v": version})

def verify(token: str, max_age_seconds: Optional[int] = None) -> Optional[dict]:
    """Return {"u": user_id, "v": version} or None when the token is bad or expired."""
    if not token:
        return None
    if max_age_seconds is None:
        max_age_seconds = current_app.config.get("ACCESS_TOKEN_MAX_AGE", 12 * 3600)
    try:
        data = _serializer().loads(token, max_age=max_age_seconds)
    except (BadSignature, SignatureExpired):
        return None
    if not isinstance(data, dict) or not data.get("u"):
        return None
    return data
