"""
Workspace snapshot loader.

Reads everything the analysis engine needs for one workspace in a handful
of ordered queries and hands it to WorkspaceSnapshot.from_dict, so rows
from the database pass the same shape checks as a posted snapshot.

Ordering:
    roles, stages, handoffs,
    categories, activities  — sort_order, then created_at where present, then id
    assignment tables       — sort_order where present, then integer PK
Collection order matters: overlap owners, boundary owners and the
first-outgoing-handoff rule all depend on it.

Layer contract:
    - Read-only. No db.session.commit() here.
    - Raises NotFoundError for an unknown workspace; blueprints map it to 404.
"""

import logging

from sqlalchemy import select

from orgforge.core.exceptions import NotFoundError
from orgforge.models import db
from orgforge.models.workspace import (
    Activity,
    ActivityAssignment,
    ActivityCategory,
    Handoff,
    RoleProgression,
    Stage,
    StageRoleAssignment,
    TeamRole,
    Workspace,
)
from orgforge.services.analysis import WorkspaceSnapshot

logger = logging.getLogger(__name__)


def get_workspace(workspace_id: str) -> Workspace:
    """Fetch a workspace by id or raise NotFoundError."""
    ws = db.session.get(Workspace, workspace_id)
    if ws is None:
        raise NotFoundError(resource="Workspace", resource_id=workspace_id)
    return ws


def _rows(stmt) -> list[dict]:
    return [row.to_dict() for row in db.session.execute(stmt).scalars()]


def load_workspace_snapshot(workspace_id: str) -> WorkspaceSnapshot:
    """Build a validated WorkspaceSnapshot from the stored workspace.

    Raises:
        NotFoundError: workspace does not exist.
        ValidationError: stored JSON columns have the wrong shape.
    """
    get_workspace(workspace_id)

    stage_ids = select(Stage.id).where(Stage.workspace_id == workspace_id)
    role_ids = select(TeamRole.id).where(TeamRole.workspace_id == workspace_id)
    activity_ids = select(Activity.id).where(Activity.workspace_id == workspace_id)

    payload = {
        "workspace_id": workspace_id,
        "roles": _rows(
            select(TeamRole)
            .where(TeamRole.workspace_id == workspace_id)
            .order_by(TeamRole.sort_order, TeamRole.created_at, TeamRole.id)
        ),
        "stages": _rows(
            select(Stage)
            .where(Stage.workspace_id == workspace_id)
            .order_by(Stage.sort_order, Stage.id)
        ),
        "stage_assignments": _rows(
            select(StageRoleAssignment)
            .where(StageRoleAssignment.stage_id.in_(stage_ids))
            .order_by(StageRoleAssignment.sort_order, StageRoleAssignment.id)
        ),
        "handoffs": _rows(
            select(Handoff)
            .where(Handoff.workspace_id == workspace_id)
            .order_by(Handoff.sort_order, Handoff.created_at, Handoff.id)
        ),
        "categories": _rows(
            select(ActivityCategory)
            .where(ActivityCategory.workspace_id == workspace_id)
            .order_by(ActivityCategory.sort_order, ActivityCategory.id)
        ),
        "activities": _rows(
            select(Activity)
            .where(Activity.workspace_id == workspace_id)
            .order_by(Activity.sort_order, Activity.created_at, Activity.id)
        ),
        "activity_assignments": _rows(
            select(ActivityAssignment)
            .where(ActivityAssignment.activity_id.in_(activity_ids))
            .order_by(ActivityAssignment.id)
        ),
        "progressions": _rows(
            select(RoleProgression)
            .where(RoleProgression.role_id.in_(role_ids))
            .order_by(RoleProgression.id)
        ),
    }

    snapshot = WorkspaceSnapshot.from_dict(payload)
    logger.debug(
        "Loaded snapshot: %d roles, %d stages, %d activities",
        len(snapshot.roles), len(snapshot.stages), len(snapshot.activities),
        extra={"workspace_id": workspace_id},
    )
    return snapshot
