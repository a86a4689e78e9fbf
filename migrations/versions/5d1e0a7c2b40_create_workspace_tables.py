"""create_workspace_tables

Create the workspace model: stages, roles, handoffs, activity categories,
activities, their assignment tables and role progressions.

Revision ID: 5d1e0a7c2b40
Revises:
Create Date: 2026-10-17 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect as sa_inspect


# revision identifiers, used by Alembic.
revision = "5d1e0a7c2b40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    existing_tables = set(sa_inspect(bind).get_table_names())

    if "workspaces" not in existing_tables:
        op.create_table(
            "workspaces",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.String(length=200), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
            sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )

    if "stages" not in existing_tables:
        op.create_table(
            "stages",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("workspace_id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.String(length=200), nullable=False),
            sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
            sa.ForeignKeyConstraint(["workspace_id"], ["workspaces.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("idx_stages_workspace", "stages", ["workspace_id", "sort_order"])

    if "team_roles" not in existing_tables:
        op.create_table(
            "team_roles",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("workspace_id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.String(length=200), nullable=False),
            sa.Column("job_title", sa.String(length=200), nullable=False),
            sa.Column("core_purpose", sa.Text(), nullable=True),
            sa.Column("owns", sa.JSON(), nullable=True),
            sa.Column("does_not_own", sa.JSON(), nullable=True),
            sa.Column("oversees_stage_ids", sa.JSON(), nullable=True),
            sa.Column("belbin_primary", sa.String(length=40), nullable=True),
            sa.Column("belbin_secondary", sa.String(length=40), nullable=True),
            sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
            sa.ForeignKeyConstraint(["workspace_id"], ["workspaces.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_team_roles_workspace_id", "team_roles", ["workspace_id"])

    if "stage_role_assignments" not in existing_tables:
        op.create_table(
            "stage_role_assignments",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("stage_id", sa.String(length=36), nullable=False),
            sa.Column("role_id", sa.String(length=36), nullable=False),
            sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
            sa.ForeignKeyConstraint(["stage_id"], ["stages.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["role_id"], ["team_roles.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("stage_id", "role_id", name="uq_stage_role"),
        )
        op.create_index("ix_stage_role_assignments_stage_id", "stage_role_assignments", ["stage_id"])
        op.create_index("ix_stage_role_assignments_role_id", "stage_role_assignments", ["role_id"])

    if "handoffs" not in existing_tables:
        op.create_table(
            "handoffs",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("workspace_id", sa.String(length=36), nullable=False),
            sa.Column("from_stage_id", sa.String(length=36), nullable=False),
            sa.Column("to_stage_id", sa.String(length=36), nullable=False),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("tensions", sa.JSON(), nullable=True),
            sa.Column("sla", sa.Text(), nullable=True),
            sa.Column("sla_owner", sa.String(length=200), nullable=True),
            sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
            sa.ForeignKeyConstraint(["workspace_id"], ["workspaces.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["from_stage_id"], ["stages.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["to_stage_id"], ["stages.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_handoffs_workspace_id", "handoffs", ["workspace_id"])

    if "activity_categories" not in existing_tables:
        op.create_table(
            "activity_categories",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("workspace_id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.String(length=200), nullable=False),
            sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("belbin_ideal", sa.JSON(), nullable=True),
            sa.Column("belbin_fit_reason", sa.Text(), nullable=True),
            sa.ForeignKeyConstraint(["workspace_id"], ["workspaces.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_activity_categories_workspace_id", "activity_categories", ["workspace_id"])

    if "activities" not in existing_tables:
        op.create_table(
            "activities",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("workspace_id", sa.String(length=36), nullable=False),
            sa.Column("name", sa.String(length=300), nullable=False),
            sa.Column("category_id", sa.String(length=36), nullable=True),
            sa.Column("stage_id", sa.String(length=36), nullable=True),
            sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
            sa.ForeignKeyConstraint(["workspace_id"], ["workspaces.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["category_id"], ["activity_categories.id"], ondelete="SET NULL"),
            sa.ForeignKeyConstraint(["stage_id"], ["stages.id"], ondelete="SET NULL"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_activities_workspace_id", "activities", ["workspace_id"])
        op.create_index("ix_activities_category_id", "activities", ["category_id"])

    if "activity_assignments" not in existing_tables:
        op.create_table(
            "activity_assignments",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("activity_id", sa.String(length=36), nullable=False),
            sa.Column("role_id", sa.String(length=36), nullable=False),
            sa.ForeignKeyConstraint(["activity_id"], ["activities.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["role_id"], ["team_roles.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("activity_id", "role_id", name="uq_activity_role"),
        )
        op.create_index("ix_activity_assignments_activity_id", "activity_assignments", ["activity_id"])
        op.create_index("ix_activity_assignments_role_id", "activity_assignments", ["role_id"])

    if "role_progressions" not in existing_tables:
        op.create_table(
            "role_progressions",
            sa.Column("id", sa.String(length=36), nullable=False),
            sa.Column("role_id", sa.String(length=36), nullable=False),
            sa.Column("tier", sa.String(length=20), nullable=True),
            sa.Column("growth_track", sa.String(length=20), nullable=True),
            sa.Column("growth_activity_ids", sa.JSON(), nullable=True),
            sa.ForeignKeyConstraint(["role_id"], ["team_roles.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_role_progressions_role_id", "role_progressions", ["role_id"])


def downgrade():
    for table in (
        "role_progressions",
        "activity_assignments",
        "activities",
        "activity_categories",
        "handoffs",
        "stage_role_assignments",
        "team_roles",
        "stages",
        "workspaces",
    ):
        op.drop_table(table)
