"""
Belbin analyses — activity fit, mismatch detection, team composition.

Three independent views over the same Belbin typing data: the ideal types
declared on activity categories, and the primary / secondary types declared
on roles. Type keys refer to orgforge.frameworks.belbin.BELBIN_ROLES.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from orgforge.frameworks.belbin import BELBIN_BY_CATEGORY, BELBIN_CATEGORIES
from orgforge.services.analysis.snapshot import (
    Activity,
    ActivityAssignment,
    ActivityCategory,
    Role,
)

logger = logging.getLogger(__name__)


def _matches_ideal(role: Role, ideal: Sequence[str]) -> bool:
    # An unset type compares as "" so it only matches a blank ideal entry.
    primary = role.belbin_primary if role.belbin_primary is not None else ""
    secondary = role.belbin_secondary if role.belbin_secondary is not None else ""
    return primary in ideal or secondary in ideal


# ── Result types ─────────────────────────────────────────────────────────────


@dataclass
class BelbinActivityFit:
    category: str
    ideal_types: list[str]
    best_fit_roles: list[Role] = field(default_factory=list)
    reason: str | None = None

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "ideal_types": list(self.ideal_types),
            "best_fit_roles": [r.to_dict() for r in self.best_fit_roles],
            "reason": self.reason,
        }


@dataclass
class BelbinMismatch:
    """A role doing work in a category its Belbin types do not suit."""
    role: Role
    category: str
    ideal_types: list[str]

    def to_dict(self) -> dict:
        return {
            "role": self.role.to_dict(),
            "category": self.category,
            "ideal_types": list(self.ideal_types),
        }


@dataclass
class BelbinCompositionRole:
    key: str
    label: str
    primary_count: int
    secondary_count: int

    @property
    def has_coverage(self) -> bool:
        return self.primary_count > 0 or self.secondary_count > 0

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            "primary_count": self.primary_count,
            "secondary_count": self.secondary_count,
            "has_coverage": self.has_coverage,
        }


@dataclass
class BelbinCompositionCategory:
    category: str
    roles: list[BelbinCompositionRole] = field(default_factory=list)

    @property
    def uncovered_roles(self) -> list[str]:
        return [r.label for r in self.roles if not r.has_coverage]

    @property
    def total_assignments(self) -> int:
        return sum(r.primary_count + r.secondary_count for r in self.roles)

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "roles": [r.to_dict() for r in self.roles],
            "uncovered_roles": self.uncovered_roles,
            "total_assignments": self.total_assignments,
        }


# ── 5. Activity fit ──────────────────────────────────────────────────────────


def analyse_belbin_activity_fit(
    categories: Sequence[ActivityCategory],
    roles: Sequence[Role],
) -> list[BelbinActivityFit]:
    """For every category with ideal types, list the roles whose types fit it."""
    return [
        BelbinActivityFit(
            category=cat.name,
            ideal_types=list(cat.belbin_ideal),
            best_fit_roles=[r for r in roles if _matches_ideal(r, cat.belbin_ideal)],
            reason=cat.belbin_fit_reason,
        )
        for cat in categories
        if cat.belbin_ideal
    ]


# ── 6. Mismatches ────────────────────────────────────────────────────────────


def detect_belbin_mismatches(
    categories: Sequence[ActivityCategory],
    activities: Sequence[Activity],
    activity_assignments: Sequence[ActivityAssignment],
    roles: Sequence[Role],
) -> list[BelbinMismatch]:
    """Flag roles assigned to a category's activities without a fitting type.

    Each (role, category) pair is reported once, however many of the
    category's activities the role holds. Assigned role ids that do not
    resolve to a role are skipped.
    """
    roles_by_id: dict[str, Role] = {}
    for role in roles:
        roles_by_id.setdefault(role.id, role)

    results: list[BelbinMismatch] = []
    for cat in categories:
        ideal = cat.belbin_ideal
        if not ideal:
            continue

        cat_activity_ids = {a.id for a in activities if a.category_id == cat.id}
        # ordered, de-duplicated role ids
        assigned_role_ids = dict.fromkeys(
            aa.role_id for aa in activity_assignments if aa.activity_id in cat_activity_ids
        )

        for role_id in assigned_role_ids:
            role = roles_by_id.get(role_id)
            if role is None:
                continue
            if not _matches_ideal(role, ideal):
                results.append(BelbinMismatch(role=role, category=cat.name, ideal_types=list(ideal)))

    logger.debug("Belbin mismatches: %d", len(results))
    return results


# ── 7. Team composition ──────────────────────────────────────────────────────


def analyse_belbin_composition(roles: Sequence[Role]) -> list[BelbinCompositionCategory]:
    """Count primary and secondary holders of each of the nine Belbin types.

    Returns one entry per category (Action, People, Thinking), each listing
    its three types in reference-table order.
    """
    result = []
    for category in BELBIN_CATEGORIES:
        result.append(BelbinCompositionCategory(
            category=category,
            roles=[
                BelbinCompositionRole(
                    key=belbin.key,
                    label=belbin.label,
                    primary_count=sum(1 for r in roles if r.belbin_primary == belbin.key),
                    secondary_count=sum(1 for r in roles if r.belbin_secondary == belbin.key),
                )
                for belbin in BELBIN_BY_CATEGORY[category]
            ],
        ))
    return result
