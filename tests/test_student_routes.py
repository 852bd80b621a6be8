from conftest import add_faculty
from feedback_app.backend import BackendError, get_backend

def _feedback_rows(app):
    with app.app_context():
        return get_backend().records.select("faculty_feedbacks")

def test_protected_pages_redirect_anonymous_with_next(client):
    for path in ("/dashboard/", "/dashboard/profile", "/feedback/"):
        r = client.get(path)
        assert r.status_code == 302
        assert "/auth/login" in r.headers["Location"]
        assert "next=" in r.headers["Location"]

def test_dashboard_creates_profile_and_hides_feedback_link(app, student_client):
    r = student_client.get("/dashboard/")
    body = r.get_data(as_text=True)
    assert r.status_code == 200
    assert "Your profile is incomplete" in body
    assert "Give Feedback Now" not in body
    with app.app_context():
        assert len(get_backend().records.select("profiles")) == 1

def test_completing_profile_unlocks_feedback_link(student_client):
    r = student_client.post("/dashboard/profile", data={
        "name": "Asha Rao", "username": "asha", "phone": "555-0100",
    }, follow_redirects=True)
    body = r.get_data(as_text=True)
    assert "Profile saved successfully!" in body
    assert "Give Feedback Now" in body
    assert "Asha Rao" in body

def test_profile_form_shows_stored_values(student_client):
    student_client.post("/dashboard/profile", data={"name": "Asha Rao", "username": "asha", "phone": ""})
    body = student_client.get("/dashboard/profile").get_data(as_text=True)
    assert 'value="Asha Rao"' in body

def test_faculty_list_and_form(app, student_client):
    fac = add_faculty(app)
    body = student_client.get("/feedback/").get_data(as_text=True)
    assert "Dr. Rao" in body and f"/feedback/{fac['id']}" in body

    body = student_client.get(f"/feedback/{fac['id']}").get_data(as_text=True)
    assert "Feedback for Dr. Rao" in body

def test_empty_directory(student_client):
    body = student_client.get("/feedback/").get_data(as_text=True)
    assert "No faculty members yet." in body

def test_form_for_unknown_faculty_redirects(student_client):
    r = student_client.get("/feedback/does-not-exist")
    assert r.status_code == 302 and r.headers["Location"].endswith("/feedback/")

def test_submit_clamps_rating_and_resets(app, student_client):
    fac = add_faculty(app)
    r = student_client.post("/feedback/", data={
        "faculty_id": fac["id"], "faculty_name": "Dr. Rao",
        "class_management": "Good", "discipline": "Good", "punctuality": "Late sometimes",
        "rating": "7", "feedback_message": "Thanks",
    })
    assert r.status_code == 302 and r.headers["Location"].endswith("/feedback/")

    rows = _feedback_rows(app)
    assert len(rows) == 1
    assert rows[0]["rating"] == 5
    assert rows[0]["user_email"] == "student@example.test"

    body = student_client.get("/feedback/").get_data(as_text=True)
    assert "Feedback submitted!" in body

    # a fresh form starts from the defaults again
    body = student_client.get(f"/feedback/{fac['id']}").get_data(as_text=True)
    assert 'name="rating" min="1" max="5" step="1" placeholder="Rating out of 5" value="5"' in body
    assert "Late sometimes" not in body

def test_submit_without_selection_writes_nothing(app, student_client):
    r = student_client.post("/feedback/", data={"rating": "3"}, follow_redirects=True)
    assert "Please select a faculty" in r.get_data(as_text=True)
    assert _feedback_rows(app) == []

def test_submit_for_deleted_faculty_keeps_draft(app, student_client):
    r = student_client.post("/feedback/", data={
        "faculty_id": "gone", "faculty_name": "Dr. Gone", "class_management": "Draft text", "rating": "2",
    })
    body = r.get_data(as_text=True)
    assert r.status_code == 400
    assert "Draft text" in body
    assert _feedback_rows(app) == []

def test_stored_photo_is_served(app, client):
    with app.app_context():
        get_backend().storage.upload("faculty-photos", "1_a.png", b"img", "image/png")
    r = client.get("/storage/faculty-photos/1_a.png")
    assert r.status_code == 200
    assert r.data == b"img" and r.mimetype == "image/png"
    assert client.get("/storage/faculty-photos/missing.png").status_code == 404

def test_profile_save_failure_keeps_what_was_typed(app, student_client, monkeypatch):
    def refuse(*a, **kw):
        raise BackendError("write refused")
    with app.app_context():
        monkeypatch.setattr(get_backend().records, "upsert", refuse)

    r = student_client.post("/dashboard/profile", data={"name": "Asha", "username": "asha", "phone": "555"})
    body = r.get_data(as_text=True)
    assert r.status_code == 502
    assert "write refused" in body
    assert 'value="Asha"' in body and 'value="asha"' in body

def test_feedback_store_failure_keeps_form_for_retry(app, student_client, monkeypatch):
    fac = add_faculty(app)
    def refuse(*a, **kw):
        raise BackendError("insert refused")
    with app.app_context():
        monkeypatch.setattr(get_backend().records, "insert", refuse)

    r = student_client.post("/feedback/", data={
        "faculty_id": fac["id"], "faculty_name": "Dr. Rao",
        "class_management": "Kept text", "rating": "9",
    })
    body = r.get_data(as_text=True)
    assert r.status_code == 502
    assert "insert refused" in body
    assert "Kept text" in body
    assert 'value="5"' in body
    assert f'name="faculty_id" value="{fac["id"]}"' in body
    monkeypatch.undo()
    assert _feedback_rows(app) == []
