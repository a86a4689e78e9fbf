"""
Workspace analysis engine.

Pure, synchronous functions: workspace snapshot in, diagnostics out.
No I/O, no shared state; safe to call concurrently with separate snapshots.

Usage:
    from orgforge.services.analysis import WorkspaceSnapshot, calculate_health_score

    snap = WorkspaceSnapshot.from_dict(payload)
    health = calculate_health_score(
        snap.roles, snap.stages, snap.stage_assignments,
        snap.handoffs, snap.activities, snap.activity_assignments,
    )
"""

from orgforge.services.analysis.belbin import (
    BelbinActivityFit,
    BelbinCompositionCategory,
    BelbinCompositionRole,
    BelbinMismatch,
    analyse_belbin_activity_fit,
    analyse_belbin_composition,
    detect_belbin_mismatches,
)
from orgforge.services.analysis.career import (
    ActivitySummary,
    RoleCoverage,
    StretchGap,
    analyse_role_coverage,
    find_stretch_gaps,
    summarise_activity_assignments,
)
from orgforge.services.analysis.pipeline import (
    HandoffTension,
    ResponsibilityMatrix,
    ResponsibilityRow,
    SanityRow,
    aggregate_tensions,
    build_responsibility_matrix,
    build_sanity_table,
)
from orgforge.services.analysis.snapshot import (
    Activity,
    ActivityAssignment,
    ActivityCategory,
    Handoff,
    OwnershipCategory,
    Role,
    RoleProgression,
    Stage,
    StageRoleAssignment,
    WorkspaceSnapshot,
)
from orgforge.services.analysis.structure import (
    BoundaryCrossRef,
    GapDetectionResult,
    HealthScore,
    OwnershipOverlap,
    calculate_health_score,
    classify_severity,
    cross_reference_boundaries,
    detect_gaps,
    detect_ownership_overlaps,
    operational_roles,
)

__all__ = [
    # snapshot
    "Activity",
    "ActivityAssignment",
    "ActivityCategory",
    "Handoff",
    "OwnershipCategory",
    "Role",
    "RoleProgression",
    "Stage",
    "StageRoleAssignment",
    "WorkspaceSnapshot",
    # structure
    "BoundaryCrossRef",
    "GapDetectionResult",
    "HealthScore",
    "OwnershipOverlap",
    "calculate_health_score",
    "classify_severity",
    "cross_reference_boundaries",
    "detect_gaps",
    "detect_ownership_overlaps",
    "operational_roles",
    # belbin
    "BelbinActivityFit",
    "BelbinCompositionCategory",
    "BelbinCompositionRole",
    "BelbinMismatch",
    "analyse_belbin_activity_fit",
    "analyse_belbin_composition",
    "detect_belbin_mismatches",
    # career
    "ActivitySummary",
    "RoleCoverage",
    "StretchGap",
    "analyse_role_coverage",
    "find_stretch_gaps",
    "summarise_activity_assignments",
    # pipeline
    "HandoffTension",
    "ResponsibilityMatrix",
    "ResponsibilityRow",
    "SanityRow",
    "aggregate_tensions",
    "build_responsibility_matrix",
    "build_sanity_table",
]
