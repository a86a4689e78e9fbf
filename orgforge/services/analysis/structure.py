"""
Structural diagnostics — ownership overlaps, gaps, health score, boundaries.

All functions are pure: they read snapshot records and return newly built
result objects. Oversight (leadership) roles are excluded from ownership
accounting in both the overlap detector and the boundary cross-reference.

Health severity policy (fixed, compatibility-relevant):
    issue_count == 0      -> green
    1 <= issue_count <= 3 -> yellow
    issue_count > 3       -> red
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Literal, Sequence

from orgforge.services.analysis.snapshot import (
    Activity,
    ActivityAssignment,
    Handoff,
    Role,
    Stage,
    StageRoleAssignment,
)

logger = logging.getLogger(__name__)

Severity = Literal["green", "yellow", "red"]

# Highest issue count still reported as "yellow"
YELLOW_MAX_ISSUES = 3

# Boundary words must be longer than this to count (skips "and", "the", "of", ...)
BOUNDARY_MIN_WORD_LEN = 3


def operational_roles(roles: Iterable[Role]) -> list[Role]:
    """Roles that oversee no stage, in snapshot order."""
    return [r for r in roles if not r.is_oversight]


# ── Result types ─────────────────────────────────────────────────────────────


@dataclass
class OwnershipOverlap:
    """A normalised item claimed by two or more operational roles."""
    item: str
    owners: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"item": self.item, "owners": list(self.owners)}


@dataclass
class GapDetectionResult:
    empty_stages: list[Stage] = field(default_factory=list)
    missing_slas: list[Handoff] = field(default_factory=list)
    unassigned_activities: list[Activity] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "empty_stages": [s.to_dict() for s in self.empty_stages],
            "missing_slas": [h.to_dict() for h in self.missing_slas],
            "unassigned_activities": [a.to_dict() for a in self.unassigned_activities],
        }


@dataclass
class HealthScore:
    issue_count: int
    sla_ratio: str
    staffing_ratio: str
    severity: Severity

    def to_dict(self) -> dict:
        return {
            "issue_count": self.issue_count,
            "sla_ratio": self.sla_ratio,
            "staffing_ratio": self.staffing_ratio,
            "severity": self.severity,
        }


@dataclass
class BoundaryCrossRef:
    """One does-not-own entry and the first other role that appears to own it."""
    item: str
    excluded_by: str
    owned_by: str | None = None

    @property
    def is_potential_gap(self) -> bool:
        return self.owned_by is None

    def to_dict(self) -> dict:
        return {
            "item": self.item,
            "excluded_by": self.excluded_by,
            "owned_by": self.owned_by,
            "potential_gap": self.is_potential_gap,
        }


# ── 1. Ownership overlaps ────────────────────────────────────────────────────


def detect_ownership_overlaps(roles: Sequence[Role]) -> list[OwnershipOverlap]:
    """Find owned items claimed by more than one operational role.

    Items are compared after lower-casing and trimming, so "Pipeline Reports "
    and "pipeline reports" are the same claim. Output is in order of each
    item's first occurrence; owners are in first-seen order.
    """
    # normalised item -> ordered set of role titles
    item_owners: dict[str, dict[str, None]] = {}

    for role in operational_roles(roles):
        for category in role.owns:
            for item in category.items:
                normalised = item.lower().strip()
                item_owners.setdefault(normalised, {})[role.title] = None

    overlaps = [
        OwnershipOverlap(item=item, owners=list(owners))
        for item, owners in item_owners.items()
        if len(owners) > 1
    ]
    logger.debug("Ownership overlaps: %d of %d distinct items", len(overlaps), len(item_owners))
    return overlaps


# ── 2. Gaps ──────────────────────────────────────────────────────────────────


def detect_gaps(
    stages: Sequence[Stage],
    stage_assignments: Sequence[StageRoleAssignment],
    handoffs: Sequence[Handoff],
    activities: Sequence[Activity],
    activity_assignments: Sequence[ActivityAssignment],
) -> GapDetectionResult:
    """Report empty stages, SLA-less handoffs and unassigned activities.

    The three lists are computed independently; one never suppresses another.
    """
    staffed_stage_ids = {sa.stage_id for sa in stage_assignments}
    assigned_activity_ids = {aa.activity_id for aa in activity_assignments}

    return GapDetectionResult(
        empty_stages=[s for s in stages if s.id not in staffed_stage_ids],
        missing_slas=[h for h in handoffs if not h.has_sla],
        unassigned_activities=[a for a in activities if a.id not in assigned_activity_ids],
    )


# ── 3. Health score ──────────────────────────────────────────────────────────


def classify_severity(issue_count: int) -> Severity:
    if issue_count == 0:
        return "green"
    if issue_count <= YELLOW_MAX_ISSUES:
        return "yellow"
    return "red"


def calculate_health_score(
    roles: Sequence[Role],
    stages: Sequence[Stage],
    stage_assignments: Sequence[StageRoleAssignment],
    handoffs: Sequence[Handoff],
    activities: Sequence[Activity],
    activity_assignments: Sequence[ActivityAssignment],
) -> HealthScore:
    """Combine overlaps and gaps into a single severity signal.

    Ratios are display strings ("x/y"); no division happens, so "0/0" is a
    valid result for an empty pipeline.
    """
    overlaps = detect_ownership_overlaps(roles)
    gaps = detect_gaps(stages, stage_assignments, handoffs, activities, activity_assignments)

    issue_count = (
        len(overlaps)
        + len(gaps.empty_stages)
        + len(gaps.missing_slas)
        + len(gaps.unassigned_activities)
    )

    handoffs_with_sla = sum(1 for h in handoffs if h.has_sla)
    stages_with_roles = len(stages) - len(gaps.empty_stages)

    return HealthScore(
        issue_count=issue_count,
        sla_ratio=f"{handoffs_with_sla}/{len(handoffs)}",
        staffing_ratio=f"{stages_with_roles}/{len(stages)}",
        severity=classify_severity(issue_count),
    )


# ── 4. Boundary cross-reference ──────────────────────────────────────────────


def _boundary_words(excluded_item: str) -> list[str]:
    return [w for w in excluded_item.lower().split() if len(w) > BOUNDARY_MIN_WORD_LEN]


def _first_owner(words: list[str], role: Role, candidates: list[Role]) -> str | None:
    # Snapshot order of roles, then categories, then items; first hit wins.
    for other in candidates:
        if other.id == role.id:
            continue
        for category in other.owns:
            for owned_item in category.items:
                owned_lower = owned_item.lower()
                if any(word in owned_lower for word in words):
                    return other.title
    return None


def cross_reference_boundaries(roles: Sequence[Role]) -> list[BoundaryCrossRef]:
    """Resolve each operational role's exclusions against other roles' ownership.

    Word-overlap substring matching: an exclusion is considered owned by the
    first other operational role having an owned item that contains any of the
    exclusion's words (lower-cased, longer than three characters). Results are
    candidates for human review, not assertions.
    """
    operational = operational_roles(roles)
    results: list[BoundaryCrossRef] = []

    for role in operational:
        for excluded_item in role.does_not_own:
            words = _boundary_words(excluded_item)
            results.append(BoundaryCrossRef(
                item=excluded_item,
                excluded_by=role.title,
                owned_by=_first_owner(words, role, operational),
            ))

    logger.debug(
        "Boundary cross-reference: %d exclusions, %d unresolved",
        len(results), sum(1 for r in results if r.is_potential_gap),
    )
    return results
