import click
from flask.cli import with_appcontext

from feedback_app.backend import BackendError, ROLE_ADMIN, ROLE_STUDENT, get_backend

@click.group()
def users():
    """Identity management (works against either backend)."""

@users.command("create")
@click.option("--email", required=True)
@click.option("--password", required=True)
@click.option("--role", type=click.Choice([ROLE_STUDENT, ROLE_ADMIN]), default=ROLE_STUDENT)
@with_appcontext
def users_create(email, password, role):
    try:
        identity = get_backend().auth.create_user(email, password, role)
    except BackendError as exc:
        raise click.ClickException(exc.message)
    click.echo(f"User created id={identity.id} email={identity.email} role={identity.role}")

def register_cli(app):
    app.cli.add_command(users)
