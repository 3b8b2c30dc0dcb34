"""Initial migration

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _string(length: int) -> sqlmodel.sql.sqltypes.AutoString:
    return sqlmodel.sql.sqltypes.AutoString(length=length)


def _request_columns() -> list[sa.Column]:
    """Columns shared by the three request tables."""
    return [
        sa.Column("message", _string(5000), nullable=False, server_default=""),
        sa.Column("status", _string(20), nullable=False, server_default="pending"),
        sa.Column("decided_by_user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("decided_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    # 1. Users (identity mirror)
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", _string(255), nullable=False),
        sa.Column("full_name", _string(100), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("is_superuser", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # 2. Organizations and memberships
    op.create_table(
        "organizations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", _string(200), nullable=False),
        sa.Column("description", _string(5000), nullable=True),
        sa.Column("status", _string(20), nullable=False, server_default="pending_approval"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_organizations_owner_id", "organizations", ["owner_id"])
    op.create_index("ix_organizations_name", "organizations", ["name"])
    op.create_index("ix_organizations_status", "organizations", ["status"])
    op.create_index("ix_organizations_created_at", "organizations", ["created_at"])

    op.create_table(
        "organization_members",
        sa.Column(
            "organization_id", sa.Uuid(), sa.ForeignKey("organizations.id"), nullable=False
        ),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("role", _string(20), nullable=False, server_default="member"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("organization_id", "user_id"),
    )

    op.create_table(
        "partnership_interests",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "organization_id", sa.Uuid(), sa.ForeignKey("organizations.id"), nullable=False
        ),
        sa.Column("partnership_type", _string(20), nullable=False),
        sa.Column("description", _string(2000), nullable=False),
        sa.Column("is_open", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_partnership_interests_organization_id", "partnership_interests", ["organization_id"]
    )

    # 3. Projects
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("organizer_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "organization_id", sa.Uuid(), sa.ForeignKey("organizations.id"), nullable=True
        ),
        sa.Column("title", _string(200), nullable=False),
        sa.Column("description", _string(5000), nullable=True),
        sa.Column("status", _string(20), nullable=False, server_default="draft"),
        sa.Column(
            "applications_enabled", sa.Boolean(), nullable=False, server_default=sa.text("true")
        ),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("partnership_types_sought", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_organizer_id", "projects", ["organizer_id"])
    op.create_index("ix_projects_organization_id", "projects", ["organization_id"])
    op.create_index("ix_projects_status", "projects", ["status"])
    op.create_index("ix_projects_created_at", "projects", ["created_at"])

    # 4. Requests
    op.create_table(
        "project_applications",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), sa.ForeignKey("projects.id"), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "organization_id", sa.Uuid(), sa.ForeignKey("organizations.id"), nullable=True
        ),
        sa.Column("partnership_type", _string(20), nullable=False),
        *_request_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_project_applications_project_id", "project_applications", ["project_id"])
    op.create_index("ix_project_applications_user_id", "project_applications", ["user_id"])
    op.create_index("ix_project_applications_status", "project_applications", ["status"])
    op.create_index(
        "ix_project_applications_created_at", "project_applications", ["created_at"]
    )

    op.create_table(
        "organization_join_requests",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "organization_id", sa.Uuid(), sa.ForeignKey("organizations.id"), nullable=False
        ),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        *_request_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_organization_join_requests_organization_id",
        "organization_join_requests",
        ["organization_id"],
    )
    op.create_index(
        "ix_organization_join_requests_user_id", "organization_join_requests", ["user_id"]
    )
    op.create_index(
        "ix_organization_join_requests_status", "organization_join_requests", ["status"]
    )
    op.create_index(
        "ix_organization_join_requests_created_at", "organization_join_requests", ["created_at"]
    )

    op.create_table(
        "partnership_applications",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "organization_id", sa.Uuid(), sa.ForeignKey("organizations.id"), nullable=False
        ),
        sa.Column(
            "interest_id", sa.Uuid(), sa.ForeignKey("partnership_interests.id"), nullable=False
        ),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("partnership_type", _string(20), nullable=False),
        sa.Column("project_id", sa.Uuid(), sa.ForeignKey("projects.id"), nullable=True),
        *_request_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_partnership_applications_organization_id",
        "partnership_applications",
        ["organization_id"],
    )
    op.create_index(
        "ix_partnership_applications_interest_id", "partnership_applications", ["interest_id"]
    )
    op.create_index(
        "ix_partnership_applications_user_id", "partnership_applications", ["user_id"]
    )
    op.create_index("ix_partnership_applications_status", "partnership_applications", ["status"])
    op.create_index(
        "ix_partnership_applications_created_at", "partnership_applications", ["created_at"]
    )

    # 5. Partnerships (non-unique pair index; legacy duplicates may exist)
    op.create_table(
        "partnerships",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("project_id", sa.Uuid(), sa.ForeignKey("projects.id"), nullable=False),
        sa.Column("partner_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "organization_id", sa.Uuid(), sa.ForeignKey("organizations.id"), nullable=True
        ),
        sa.Column("partnership_type", _string(20), nullable=False),
        sa.Column("status", _string(20), nullable=False, server_default="active"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_partnerships_project_id", "partnerships", ["project_id"])
    op.create_index("ix_partnerships_partner_id", "partnerships", ["partner_id"])
    op.create_index("ix_partnerships_created_at", "partnerships", ["created_at"])
    op.create_index(
        "ix_partnerships_project_partner", "partnerships", ["project_id", "partner_id"]
    )

    # 6. Notifications
    op.create_table(
        "notifications",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("title", _string(200), nullable=False),
        sa.Column("message", _string(2000), nullable=False),
        sa.Column("link", _string(500), nullable=True),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])
    op.create_index("ix_notifications_created_at", "notifications", ["created_at"])

    # 7. System settings
    op.create_table(
        "system_settings",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("key", _string(100), nullable=False),
        sa.Column("value", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("description", _string(500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_system_settings_key", "system_settings", ["key"], unique=True)


def downgrade() -> None:
    op.drop_table("system_settings")
    op.drop_table("notifications")
    op.drop_table("partnerships")
    op.drop_table("partnership_applications")
    op.drop_table("organization_join_requests")
    op.drop_table("project_applications")
    op.drop_table("projects")
    op.drop_table("partnership_interests")
    op.drop_table("organization_members")
    op.drop_table("organizations")
    op.drop_table("users")
