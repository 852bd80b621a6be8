import uuid

from sqlalchemy import func, CheckConstraint, Index
from werkzeug.security import generate_password_hash, check_password_hash

from feedback_app.extensions import db
from ._base import RowMixin, utcnow

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"

class AuthUser(db.Model, RowMixin):
    """Identity rows of the local identity provider."""
    __tablename__ = "auth_users"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = db.Column(db.String(255), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, server_default=ROLE_STUDENT, default=ROLE_STUDENT)
    # Bumped on sign-out; tokens minted for an older version stop verifying
    token_version = db.Column(db.Integer, nullable=False, server_default="0", default=0)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    __table_args__ = (
        Index("ix_auth_users_lower_email", func.lower(email), unique=True),
        CheckConstraint("role IN ('student','admin')", name="ck_auth_users_role_valid"),
    )

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def __repr__(self) -> str:
        return f"<AuthUser id={self.id} email={self.email!r} role={self.role}>"
