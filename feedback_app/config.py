import os

from dotenv import dotenv_values

# Values from .env are only a fallback for DATABASE_URL when the shell has none
_DOTENV = dotenv_values(".env")


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name) or default)


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-not-secure")
    WTF_CSRF_SECRET_KEY = SECRET_KEY
    WTF_CSRF_TIME_LIMIT = None  # long feedback forms should not expire mid-edit

    # "sql" keeps identities, rows and photos in SQLALCHEMY_DATABASE_URI;
    # "supabase" delegates all three to the hosted project
    BACKEND = os.getenv("BACKEND", "sql").lower()
    SUPABASE_URL = os.getenv("SUPABASE_URL")
    SUPABASE_KEY = os.getenv("SUPABASE_KEY")
    SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")  # CLI user admin only

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL") or _DOTENV.get("DATABASE_URL") or "sqlite:///feedback.db"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    FACULTY_PHOTO_BUCKET = os.getenv("FACULTY_PHOTO_BUCKET", "faculty-photos")
    STORAGE_PUBLIC_PATH = "/storage"
    MAX_CONTENT_LENGTH = _env_int("MAX_UPLOAD_BYTES", 5 * 1024 * 1024)

    # Local identity provider
    ACCESS_TOKEN_SALT = os.getenv("ACCESS_TOKEN_SALT", "access-token-v1")
    ACCESS_TOKEN_MAX_AGE = _env_int("ACCESS_TOKEN_MAX_AGE", 12 * 3600)

    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    REMEMBER_COOKIE_HTTPONLY = True

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    SITE_NAME = os.getenv("SITE_NAME", "Feedback System")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False


class ProductionConfig(BaseConfig):
    DEBUG = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
    # No default secret; create_app refuses to boot without one
    SECRET_KEY = os.getenv("SECRET_KEY")
    WTF_CSRF_SECRET_KEY = SECRET_KEY
    BACKEND = os.getenv("BACKEND", "supabase").lower()
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_SAMESITE = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")
    REMEMBER_COOKIE_SECURE = True


class TestingConfig(BaseConfig):
    TESTING = True
    DEBUG = True
    BACKEND = "sql"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False


_ENV_MAP = {
    "development": DevelopmentConfig,
    "staging": ProductionConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config():
    return _ENV_MAP.get(os.getenv("APP_ENV", "development").lower(), DevelopmentConfig)
