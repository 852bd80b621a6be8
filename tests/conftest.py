import os
# Ensure the app factory picks the Testing config, the local backend & SQLite memory DB
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("TEST_DATABASE_URL", "sqlite:///:memory:")

import pytest
from feedback_app import create_app
from feedback_app.backend import ROLE_ADMIN, ROLE_STUDENT, get_backend
from feedback_app.extensions import db

STUDENT_EMAIL = "student@example.test"
ADMIN_EMAIL = "admin@example.test"
PASSWORD = "secret123"

@pytest.fixture(scope="session")
def app():
    app = create_app({
        "TESTING": True,
        "BACKEND": "sql",
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "SECRET_KEY": "test-secret",
        "WTF_CSRF_ENABLED": False,
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()

@pytest.fixture()
def client(app):
    return app.test_client()

@pytest.fixture()
def app_ctx(app):
    with app.app_context():
        yield app

def _wipe_tables(app):
    with app.app_context():
        db.session.rollback()
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

@pytest.fixture(autouse=True)
def _db_clean(app):
    # Wiped on both sides so a test that dies mid-transaction cannot leak rows
    _wipe_tables(app)
    yield
    _wipe_tables(app)

def make_user(app, email=STUDENT_EMAIL, password=PASSWORD, role=ROLE_STUDENT):
    with app.app_context():
        return get_backend().auth.create_user(email, password, role)

def login(client, email=STUDENT_EMAIL, password=PASSWORD):
    return client.post("/auth/login", data={"email": email, "password": password})

@pytest.fixture()
def student(app):
    return make_user(app)

@pytest.fixture()
def admin(app):
    return make_user(app, ADMIN_EMAIL, role=ROLE_ADMIN)

@pytest.fixture()
def student_client(client, student):
    resp = login(client)
    assert resp.status_code == 302
    return client

@pytest.fixture()
def admin_client(client, admin):
    resp = client.post("/admin/auth/login", data={"email": ADMIN_EMAIL, "password": PASSWORD})
    assert resp.status_code == 302
    return client

def add_faculty(app, **fields):
    row = {"name": "Dr. Rao", "department": "Physics", **fields}
    with app.app_context():
        return get_backend().records.insert("faculty_profiles", row)
