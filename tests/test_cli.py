from feedback_app.backend import get_backend

def test_users_create_admin(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=[
        "users", "create", "--email", "boss@example.test", "--password", "secret123", "--role", "admin",
    ])
    assert result.exit_code == 0, result.output
    assert "role=admin" in result.output
    with app.app_context():
        session = get_backend().auth.sign_in_with_password("boss@example.test", "secret123")
        assert session.user.is_admin

def test_users_create_reports_backend_errors(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["users", "create", "--email", "x@example.test", "--password", "123"])
    assert result.exit_code != 0
    assert "at least 6" in result.output
