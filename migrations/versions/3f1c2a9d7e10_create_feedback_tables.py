"""create identity, profile, faculty, feedback and object tables

Revision ID: 3f1c2a9d7e10
Revises:
Create Date: 2026-10-19 09:00:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "3f1c2a9d7e10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "auth_users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="student"),
        sa.Column("token_version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("role IN ('student','admin')", name="ck_auth_users_role_valid"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_auth_users_lower_email", "auth_users", [sa.text("lower(email)")], unique=True)

    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("username", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "faculty_profiles",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("department", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("image_url", sa.String(length=1024), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_faculty_profiles_lower_name", "faculty_profiles", [sa.text("lower(name)")], unique=False)

    op.create_table(
        "faculty_feedbacks",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("faculty_id", sa.String(length=36), nullable=False),
        sa.Column("faculty_name", sa.String(length=255), nullable=True),
        sa.Column("faculty_department", sa.String(length=255), nullable=True),
        sa.Column("user_email", sa.String(length=255), nullable=False),
        sa.Column("class_management", sa.Text(), nullable=False),
        sa.Column("discipline", sa.Text(), nullable=False),
        sa.Column("punctuality", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("feedback_message", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_faculty_feedbacks_rating_range"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_faculty_feedbacks_faculty_id", "faculty_feedbacks", ["faculty_id"], unique=False)
    op.create_index(
        "ix_faculty_feedbacks_faculty_created_at", "faculty_feedbacks", ["faculty_id", "created_at"], unique=False
    )

    op.create_table(
        "stored_objects",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("bucket", sa.String(length=63), nullable=False),
        sa.Column("name", sa.String(length=512), nullable=False),
        sa.Column("content_type", sa.String(length=255), nullable=True),
        sa.Column("data", sa.LargeBinary(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("bucket", "name", name="uq_stored_objects_bucket_name"),
    )


def downgrade():
    op.drop_table("stored_objects")
    op.drop_index("ix_faculty_feedbacks_faculty_created_at", table_name="faculty_feedbacks")
    op.drop_index("ix_faculty_feedbacks_faculty_id", table_name="faculty_feedbacks")
    op.drop_table("faculty_feedbacks")
    op.drop_index("ix_faculty_profiles_lower_name", table_name="faculty_profiles")
    op.drop_table("faculty_profiles")
    op.drop_table("profiles")
    op.drop_index("ix_auth_users_lower_email", table_name="auth_users")
    op.drop_table("auth_users")
