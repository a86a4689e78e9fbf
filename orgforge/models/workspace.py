"""
OrgForge
Workspace domain models.

Models:
    - Workspace: one modelled organisation (the snapshot scope)
    - Stage: pipeline stage, ordered by sort_order
    - TeamRole: role definition with ownership model, Belbin typing and oversight
    - StageRoleAssignment: many-to-many staffing of stages by roles
    - Handoff: directed transition between two stages (SLA, tensions)
    - ActivityCategory: activity grouping with ideal Belbin types
    - Activity: unit of work, optionally in a category and stage
    - ActivityAssignment: many-to-many activity ↔ role
    - RoleProgression: career tier / growth track and stretch activities

Nested structures (owns, does_not_own, oversees_stage_ids, ...) are stored
as JSON columns. Their shape is checked once when a snapshot is built
(see orgforge.services.analysis.snapshot), never at the use site.
"""

import uuid
from datetime import datetime, timezone

from orgforge.models import db


def _uuid():
    return str(uuid.uuid4())


def _utcnow():
    return datetime.now(timezone.utc)


# ── Workspace ────────────────────────────────────────────────────────────────


class Workspace(db.Model):
    """Top-level container; every diagnostic runs against one workspace."""

    __tablename__ = "workspaces"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, default="")
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # ── Relationships ────────────────────────────────────────────────────
    stages = db.relationship(
        "Stage", backref="workspace", lazy="dynamic",
        cascade="all, delete-orphan", order_by="Stage.sort_order",
    )
    roles = db.relationship(
        "TeamRole", backref="workspace", lazy="dynamic",
        cascade="all, delete-orphan",
    )
    handoffs = db.relationship(
        "Handoff", backref="workspace", lazy="dynamic",
        cascade="all, delete-orphan",
    )
    categories = db.relationship(
        "ActivityCategory", backref="workspace", lazy="dynamic",
        cascade="all, delete-orphan", order_by="ActivityCategory.sort_order",
    )
    activities = db.relationship(
        "Activity", backref="workspace", lazy="dynamic",
        cascade="all, delete-orphan",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Workspace {self.id}: {self.name}>"


# ── Pipeline ─────────────────────────────────────────────────────────────────


class Stage(db.Model):
    """A pipeline stage. sort_order defines the pipeline sequence."""

    __tablename__ = "stages"
    __table_args__ = (
        db.Index("idx_stages_workspace", "workspace_id", "sort_order"),
    )

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    workspace_id = db.Column(
        db.String(36), db.ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False,
    )
    name = db.Column(db.String(200), nullable=False)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "sort_order": self.sort_order,
        }


class TeamRole(db.Model):
    """A role in the modelled organisation.

    A role with at least one entry in oversees_stage_ids is an oversight
    (leadership) role; otherwise it is operational.
    """

    __tablename__ = "team_roles"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    workspace_id = db.Column(
        db.String(36), db.ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    name = db.Column(db.String(200), nullable=False)
    job_title = db.Column(db.String(200), nullable=False)
    core_purpose = db.Column(db.Text, nullable=True)

    # Ownership model
    owns = db.Column(db.JSON, default=list, comment="[{title, items: [str]}]")
    does_not_own = db.Column(db.JSON, default=list, comment="[str]")

    # Oversight (leadership roles)
    oversees_stage_ids = db.Column(db.JSON, default=list, comment="[stage_id]")

    # Belbin
    belbin_primary = db.Column(db.String(40), nullable=True)
    belbin_secondary = db.Column(db.String(40), nullable=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "job_title": self.job_title,
            "owns": self.owns or [],
            "does_not_own": self.does_not_own or [],
            "belbin_primary": self.belbin_primary,
            "belbin_secondary": self.belbin_secondary,
            "oversees_stage_ids": self.oversees_stage_ids or [],
        }


class StageRoleAssignment(db.Model):
    __tablename__ = "stage_role_assignments"
    __table_args__ = (
        db.UniqueConstraint("stage_id", "role_id", name="uq_stage_role"),
    )

    id = db.Column(db.Integer, primary_key=True)
    stage_id = db.Column(
        db.String(36), db.ForeignKey("stages.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    role_id = db.Column(
        db.String(36), db.ForeignKey("team_roles.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    sort_order = db.Column(db.Integer, nullable=False, default=0)

    def to_dict(self):
        return {"stage_id": self.stage_id, "role_id": self.role_id}


class Handoff(db.Model):
    """Directed transition between two stages."""

    __tablename__ = "handoffs"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    workspace_id = db.Column(
        db.String(36), db.ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    from_stage_id = db.Column(
        db.String(36), db.ForeignKey("stages.id", ondelete="CASCADE"), nullable=False,
    )
    to_stage_id = db.Column(
        db.String(36), db.ForeignKey("stages.id", ondelete="CASCADE"), nullable=False,
    )
    notes = db.Column(db.Text, nullable=True)
    tensions = db.Column(db.JSON, default=list, comment="[str]")
    sla = db.Column(db.Text, nullable=True)
    sla_owner = db.Column(db.String(200), nullable=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "from_stage_id": self.from_stage_id,
            "to_stage_id": self.to_stage_id,
            "sla": self.sla,
            "sla_owner": self.sla_owner,
            "notes": self.notes,
            "tensions": self.tensions or [],
        }


# ── Activities ───────────────────────────────────────────────────────────────


class ActivityCategory(db.Model):
    __tablename__ = "activity_categories"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    workspace_id = db.Column(
        db.String(36), db.ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    name = db.Column(db.String(200), nullable=False)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    belbin_ideal = db.Column(db.JSON, default=list, comment="[belbin key]")
    belbin_fit_reason = db.Column(db.Text, nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "belbin_ideal": self.belbin_ideal or [],
            "belbin_fit_reason": self.belbin_fit_reason,
        }


class Activity(db.Model):
    __tablename__ = "activities"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    workspace_id = db.Column(
        db.String(36), db.ForeignKey("workspaces.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    name = db.Column(db.String(300), nullable=False)
    category_id = db.Column(
        db.String(36), db.ForeignKey("activity_categories.id", ondelete="SET NULL"),
        nullable=True, index=True,
    )
    stage_id = db.Column(
        db.String(36), db.ForeignKey("stages.id", ondelete="SET NULL"), nullable=True,
    )
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category_id": self.category_id,
            "stage_id": self.stage_id,
        }


class ActivityAssignment(db.Model):
    __tablename__ = "activity_assignments"
    __table_args__ = (
        db.UniqueConstraint("activity_id", "role_id", name="uq_activity_role"),
    )

    id = db.Column(db.Integer, primary_key=True)
    activity_id = db.Column(
        db.String(36), db.ForeignKey("activities.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    role_id = db.Column(
        db.String(36), db.ForeignKey("team_roles.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )

    def to_dict(self):
        return {"activity_id": self.activity_id, "role_id": self.role_id}


# ── Career progression ───────────────────────────────────────────────────────


class RoleProgression(db.Model):
    __tablename__ = "role_progressions"

    id = db.Column(db.String(36), primary_key=True, default=_uuid)
    role_id = db.Column(
        db.String(36), db.ForeignKey("team_roles.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    tier = db.Column(
        db.String(20), nullable=True,
        comment="entry | mid | senior | lead | head | director",
    )
    growth_track = db.Column(
        db.String(20), nullable=True,
        comment="steep | steady | either",
    )
    growth_activity_ids = db.Column(db.JSON, default=list, comment="[activity_id]")

    def to_dict(self):
        return {
            "id": self.id,
            "role_id": self.role_id,
            "tier": self.tier,
            "growth_track": self.growth_track,
            "growth_activity_ids": self.growth_activity_ids or [],
        }
