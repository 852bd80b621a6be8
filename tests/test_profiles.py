from feedback_app.backend import Identity, get_backend
from feedback_app.services.profiles import ensure_profile, save_profile

def _ident():
    return Identity(id="user-1", email="s@example.test")

def test_first_visit_creates_empty_profile(app_ctx):
    profile = ensure_profile(_ident())
    assert profile.id == "user-1"
    assert profile.email == "s@example.test"
    assert profile.name is None and not profile.is_complete
    assert len(get_backend().records.select("profiles")) == 1

def test_ensure_profile_never_rewrites_existing(app_ctx):
    save_profile(_ident(), "Asha Rao", "asha", "555")
    profile = ensure_profile(_ident())
    assert profile.name == "Asha Rao"
    assert profile.is_complete
    assert len(get_backend().records.select("profiles")) == 1

def test_save_profile_upserts_by_id(app_ctx):
    save_profile(_ident(), "Asha", "asha", None)
    updated = save_profile(_ident(), "Asha Rao", "  asha_r ", "")
    assert updated.username == "asha_r"
    assert updated.phone is None
    rows = get_backend().records.select("profiles", {"id": "user-1"})
    assert len(rows) == 1 and rows[0]["name"] == "Asha Rao"

def test_profile_without_username_is_incomplete(app_ctx):
    assert not save_profile(_ident(), "Asha", "   ", None).is_complete
