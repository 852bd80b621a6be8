import pytest

from feedback_app import _check_required_settings
from feedback_app import models
from feedback_app.config import DevelopmentConfig, ProductionConfig, TestingConfig, get_config

def test_app_env_selects_config(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    assert get_config() is TestingConfig
    monkeypatch.setenv("APP_ENV", "staging")
    assert get_config() is ProductionConfig
    monkeypatch.setenv("APP_ENV", "nonsense")
    assert get_config() is DevelopmentConfig

def test_testing_config_runs_on_local_backend(app):
    assert app.config["BACKEND"] == "sql"
    assert app.config["FACULTY_PHOTO_BUCKET"] == "faculty-photos"

def test_only_live_settings_are_defined(app):
    assert "APP_BASE_URL" not in app.config
    assert not hasattr(models, "ROLE_CHOICES")

def test_prod_like_env_fails_fast_without_hosted_keys(app, monkeypatch):
    for name in ("SUPABASE_URL", "SUPABASE_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setitem(app.config, "BACKEND", "supabase")
    monkeypatch.setitem(app.config, "SUPABASE_URL", None)
    monkeypatch.setitem(app.config, "SUPABASE_KEY", None)
    with pytest.raises(RuntimeError, match="SUPABASE_URL, SUPABASE_KEY"):
        _check_required_settings(app, "production")
    # development never checks
    _check_required_settings(app, "development")
