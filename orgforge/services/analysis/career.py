"""
Career and coverage analyses — stretch gaps, activity summary, role coverage.

Read-only statistics over activity assignments. Unresolved references
(a progression for an unknown role, a growth activity id with no activity)
degrade to "unknown" instead of failing.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

from orgforge.services.analysis.snapshot import (
    Activity,
    ActivityAssignment,
    ActivityCategory,
    Role,
    RoleProgression,
)


def _first_by_id(records) -> dict:
    index = {}
    for record in records:
        index.setdefault(record.id, record)
    return index


# ── Result types ─────────────────────────────────────────────────────────────


@dataclass
class StretchGap:
    """A declared growth activity the role is not assigned to yet."""
    role: Role
    activity_id: str
    activity: Activity | None = None

    def to_dict(self) -> dict:
        return {
            "role": self.role.to_dict(),
            "activity": self.activity.to_dict() if self.activity else None,
            "activity_id": self.activity_id,
        }


@dataclass
class ActivitySummary:
    total: int = 0
    owned: int = 0
    shared: int = 0
    unassigned: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "owned": self.owned,
            "shared": self.shared,
            "unassigned": self.unassigned,
        }


@dataclass
class RoleCoverage:
    role: Role
    total_activities: int = 0
    solo_owned: int = 0
    shared: int = 0
    categories: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "role": self.role.to_dict(),
            "total_activities": self.total_activities,
            "solo_owned": self.solo_owned,
            "shared": self.shared,
            "categories": list(self.categories),
        }


# ── 8. Stretch gaps ──────────────────────────────────────────────────────────


def find_stretch_gaps(
    roles: Sequence[Role],
    progressions: Sequence[RoleProgression],
    activities: Sequence[Activity],
    activity_assignments: Sequence[ActivityAssignment],
) -> list[StretchGap]:
    """List growth activities each role has declared but is not doing.

    Progressions whose role does not resolve are skipped. A growth activity
    id that does not resolve is still reported, with ``activity=None``.
    """
    roles_by_id = _first_by_id(roles)
    activities_by_id = _first_by_id(activities)
    assigned_pairs = {(aa.activity_id, aa.role_id) for aa in activity_assignments}

    gaps: list[StretchGap] = []
    for prog in progressions:
        role = roles_by_id.get(prog.role_id)
        if role is None:
            continue
        for activity_id in prog.growth_activity_ids:
            if (activity_id, role.id) not in assigned_pairs:
                gaps.append(StretchGap(
                    role=role,
                    activity_id=activity_id,
                    activity=activities_by_id.get(activity_id),
                ))
    return gaps


# ── 9. Activity assignment summary ───────────────────────────────────────────


def summarise_activity_assignments(
    activities: Sequence[Activity],
    activity_assignments: Sequence[ActivityAssignment],
) -> ActivitySummary:
    """Classify activities by number of assigned roles: 0, 1, or 2+."""
    counts = Counter(aa.activity_id for aa in activity_assignments)
    summary = ActivitySummary(total=len(activities))

    for act in activities:
        count = counts[act.id]
        if count == 0:
            summary.unassigned += 1
        elif count == 1:
            summary.owned += 1
        else:
            summary.shared += 1
    return summary


# ── 10. Role coverage ────────────────────────────────────────────────────────


def analyse_role_coverage(
    roles: Sequence[Role],
    activities: Sequence[Activity],
    activity_assignments: Sequence[ActivityAssignment],
    categories: Sequence[ActivityCategory],
) -> list[RoleCoverage]:
    """Per role: assigned activities, solo vs shared, and category names touched."""
    counts = Counter(aa.activity_id for aa in activity_assignments)
    activities_by_id = _first_by_id(activities)
    categories_by_id = _first_by_id(categories)

    coverage = []
    for role in roles:
        assigned_ids = [aa.activity_id for aa in activity_assignments if aa.role_id == role.id]

        category_ids: dict[str, None] = {}
        for activity_id in assigned_ids:
            activity = activities_by_id.get(activity_id)
            if activity is not None and activity.category_id:
                category_ids[activity.category_id] = None

        category_names = []
        for category_id in category_ids:
            category = categories_by_id.get(category_id)
            if category is not None and category.name:
                category_names.append(category.name)

        coverage.append(RoleCoverage(
            role=role,
            total_activities=len(assigned_ids),
            solo_owned=sum(1 for a in assigned_ids if counts[a] == 1),
            shared=sum(1 for a in assigned_ids if counts[a] > 1),
            categories=category_names,
        ))
    return coverage
