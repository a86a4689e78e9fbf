"""
OrgForge
Workspace analysis tool for the AI assistant.

The assistant reaches the analysis engine through one tool,
``analyse_workspace``, which takes a focus area and runs the matching
subset of analysers over a workspace snapshot:

    full        — everything below (default)
    health      — health_score
    gaps        — gaps
    overlaps    — overlaps
    belbin      — belbin_composition, belbin_mismatches, belbin_activity_fit
    boundaries  — boundaries
    career      — stretch_gaps, activity_summary, role_coverage

Results are JSON-serialisable so they can be returned to the LLM as a
tool result unchanged.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from orgforge.core.exceptions import ValidationError
from orgforge.services.analysis import (
    WorkspaceSnapshot,
    analyse_belbin_activity_fit,
    analyse_belbin_composition,
    analyse_role_coverage,
    calculate_health_score,
    cross_reference_boundaries,
    detect_belbin_mismatches,
    detect_gaps,
    detect_ownership_overlaps,
    find_stretch_gaps,
    summarise_activity_assignments,
)

logger = logging.getLogger(__name__)

DEFAULT_FOCUS_AREA = "full"


def _to_json(value: Any) -> Any:
    if isinstance(value, list):
        return [_to_json(v) for v in value]
    return value.to_dict()


# ── Analyser registry ─────────────────────────────────────────────────────
# result key -> analyser over a snapshot. Insertion order is result order.

ANALYSERS: dict[str, Callable[[WorkspaceSnapshot], Any]] = {
    "health_score": lambda s: calculate_health_score(
        s.roles, s.stages, s.stage_assignments,
        s.handoffs, s.activities, s.activity_assignments,
    ),
    "gaps": lambda s: detect_gaps(
        s.stages, s.stage_assignments, s.handoffs,
        s.activities, s.activity_assignments,
    ),
    "overlaps": lambda s: detect_ownership_overlaps(s.roles),
    "belbin_composition": lambda s: analyse_belbin_composition(s.roles),
    "belbin_mismatches": lambda s: detect_belbin_mismatches(
        s.categories, s.activities, s.activity_assignments, s.roles,
    ),
    "belbin_activity_fit": lambda s: analyse_belbin_activity_fit(s.categories, s.roles),
    "boundaries": lambda s: cross_reference_boundaries(s.roles),
    "stretch_gaps": lambda s: find_stretch_gaps(
        s.roles, s.progressions, s.activities, s.activity_assignments,
    ),
    "activity_summary": lambda s: summarise_activity_assignments(
        s.activities, s.activity_assignments,
    ),
    "role_coverage": lambda s: analyse_role_coverage(
        s.roles, s.activities, s.activity_assignments, s.categories,
    ),
}

# ── Focus-area dispatch table ─────────────────────────────────────────────

FOCUS_AREAS: dict[str, tuple[str, ...]] = {
    "full": tuple(ANALYSERS),
    "health": ("health_score",),
    "gaps": ("gaps",),
    "overlaps": ("overlaps",),
    "belbin": ("belbin_composition", "belbin_mismatches", "belbin_activity_fit"),
    "boundaries": ("boundaries",),
    "career": ("stretch_gaps", "activity_summary", "role_coverage"),
}

# Tool definition handed to the LLM gateway
ANALYSE_WORKSPACE_TOOL: dict = {
    "name": "analyse_workspace",
    "description": (
        "Run diagnostic analysis on the workspace: gaps, overlaps, Belbin, "
        "health, boundaries and career coverage. Use this before giving any "
        "advice about the team structure."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "focus_area": {
                "type": "string",
                "enum": list(FOCUS_AREAS),
                "description": "Which analyses to run. Defaults to 'full' (all of them).",
            },
        },
    },
}


def analyse_workspace(snapshot: WorkspaceSnapshot, focus_area: str | None = None) -> dict:
    """Run the analysers selected by ``focus_area`` over ``snapshot``.

    Args:
        snapshot: The workspace read to analyse.
        focus_area: One of FOCUS_AREAS; only None means "full".

    Returns:
        {success: True, analysis: {result_key: json}, message: str}

    Raises:
        ValidationError: focus area is not one of FOCUS_AREAS.
    """
    focus = DEFAULT_FOCUS_AREA if focus_area is None else focus_area
    if not isinstance(focus, str) or focus not in FOCUS_AREAS:
        raise ValidationError(
            f"Unknown focus_area {focus!r}",
            details={"focus_area": f"Must be one of: {', '.join(FOCUS_AREAS)}."},
        )

    analysis = {key: _to_json(ANALYSERS[key](snapshot)) for key in FOCUS_AREAS[focus]}

    logger.info(
        "Workspace analysis complete",
        extra={"workspace_id": snapshot.workspace_id, "focus_area": focus},
    )
    return {
        "success": True,
        "analysis": analysis,
        "message": f"Workspace analysis complete (focus: {focus})",
    }


def execute_tool_call(name: str, tool_input: dict | None, snapshot: WorkspaceSnapshot) -> dict:
    """Dispatch a tool call from the assistant to the analysis engine.

    Errors are returned as tool results so the assistant can explain them
    instead of the conversation failing.
    """
    if name != ANALYSE_WORKSPACE_TOOL["name"]:
        return {"success": False, "error": f"Unknown tool '{name}'"}

    tool_input = tool_input or {}
    if not isinstance(tool_input, dict):
        return {"success": False, "error": "Tool input must be an object"}
    focus_area = tool_input.get("focus_area", tool_input.get("focusArea"))
    try:
        return analyse_workspace(snapshot, focus_area)
    except ValidationError as exc:
        logger.warning("analyse_workspace rejected: %s", exc)
        return {"success": False, "error": str(exc), "details": exc.details}
