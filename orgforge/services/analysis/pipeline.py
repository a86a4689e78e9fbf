"""
Pipeline views — tensions aggregation, responsibility matrix, sanity table.

Presentation-ready reshapes of the pipeline for the diagnostics dashboard.
Stages are shown in pipeline order (sort_order, ties kept in snapshot order).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from orgforge.services.analysis.snapshot import Handoff, Role, Stage, StageRoleAssignment

UNKNOWN_STAGE = "Unknown"


def sorted_stages(stages: Sequence[Stage]) -> list[Stage]:
    return sorted(stages, key=lambda s: s.sort_order)


def _stage_names(stages: Sequence[Stage]) -> dict[str, str]:
    names: dict[str, str] = {}
    for stage in stages:
        names.setdefault(stage.id, stage.name)
    return names


# ── Result types ─────────────────────────────────────────────────────────────


@dataclass
class HandoffTension:
    text: str
    from_stage: str
    to_stage: str

    def to_dict(self) -> dict:
        return {"text": self.text, "from_stage": self.from_stage, "to_stage": self.to_stage}


@dataclass
class ResponsibilityRow:
    """One role across all stages: staffed (operational) or overseen (oversight)."""
    role: Role
    stages: dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "role_id": self.role.id,
            "title": self.role.title,
            "stages": dict(self.stages),
        }


@dataclass
class ResponsibilityMatrix:
    stages: list[Stage] = field(default_factory=list)
    operational: list[ResponsibilityRow] = field(default_factory=list)
    oversight: list[ResponsibilityRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "stages": [s.to_dict() for s in self.stages],
            "operational": [r.to_dict() for r in self.operational],
            "oversight": [r.to_dict() for r in self.oversight],
        }


@dataclass
class SanityRow:
    stage: Stage
    roles: list[str] = field(default_factory=list)
    hands_off_to: str | None = None
    sla: str | None = None

    @property
    def is_staffed(self) -> bool:
        return len(self.roles) > 0

    def to_dict(self) -> dict:
        return {
            "stage": self.stage.to_dict(),
            "roles": list(self.roles),
            "hands_off_to": self.hands_off_to,
            "sla": self.sla,
            "is_staffed": self.is_staffed,
        }


# ── Tensions ─────────────────────────────────────────────────────────────────


def aggregate_tensions(handoffs: Sequence[Handoff], stages: Sequence[Stage]) -> list[HandoffTension]:
    """Flatten every handoff's tension notes, labelled with the stage names."""
    names = _stage_names(stages)
    return [
        HandoffTension(
            text=text,
            from_stage=names.get(h.from_stage_id, UNKNOWN_STAGE),
            to_stage=names.get(h.to_stage_id, UNKNOWN_STAGE),
        )
        for h in handoffs
        for text in h.tensions
    ]


# ── Responsibility matrix ────────────────────────────────────────────────────


def build_responsibility_matrix(
    roles: Sequence[Role],
    stages: Sequence[Stage],
    stage_assignments: Sequence[StageRoleAssignment],
) -> ResponsibilityMatrix:
    """Which roles operate in, or oversee, which stages."""
    ordered = sorted_stages(stages)
    staffed = {(sa.stage_id, sa.role_id) for sa in stage_assignments}

    matrix = ResponsibilityMatrix(stages=ordered)
    for role in roles:
        if role.is_oversight:
            overseen = set(role.oversees_stage_ids)
            matrix.oversight.append(ResponsibilityRow(
                role=role,
                stages={s.id: s.id in overseen for s in ordered},
            ))
        else:
            matrix.operational.append(ResponsibilityRow(
                role=role,
                stages={s.id: (s.id, role.id) in staffed for s in ordered},
            ))
    return matrix


# ── Sanity table ─────────────────────────────────────────────────────────────


def build_sanity_table(
    stages: Sequence[Stage],
    roles: Sequence[Role],
    handoffs: Sequence[Handoff],
    stage_assignments: Sequence[StageRoleAssignment],
) -> list[SanityRow]:
    """Pipeline overview: per stage its staff, next stage and outgoing SLA.

    Only the first outgoing handoff of a stage (snapshot order) is shown.
    """
    names = _stage_names(stages)
    rows = []
    for stage in sorted_stages(stages):
        role_ids = {sa.role_id for sa in stage_assignments if sa.stage_id == stage.id}
        handoff = next((h for h in handoffs if h.from_stage_id == stage.id), None)
        rows.append(SanityRow(
            stage=stage,
            roles=[r.title for r in roles if r.id in role_ids],
            hands_off_to=names.get(handoff.to_stage_id) if handoff else None,
            sla=handoff.sla if handoff else None,
        ))
    return rows
