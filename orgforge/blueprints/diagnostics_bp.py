"""
Diagnostics Blueprint.

Endpoints:
    GET  /api/v1/workspaces/<ws_id>/diagnostics           — analysis of a stored workspace
    GET  /api/v1/workspaces/<ws_id>/diagnostics/pipeline  — tensions, matrix, sanity table
    POST /api/v1/diagnostics/analyse                      — analysis of a posted snapshot
    GET  /api/v1/frameworks                               — management framework catalogue
    GET  /api/v1/frameworks/belbin                        — Belbin reference table

Layer contract:
    - No ORM calls here — loading is delegated to snapshot_service.
    - NotFoundError / ValidationError propagate to the app-level handlers
      (404 / 422). Only the body shape and focus_area are validated here (400).
"""

import logging

from flask import Blueprint, jsonify, request

from orgforge.ai.tools import FOCUS_AREAS, analyse_workspace
from orgforge.frameworks.belbin import reference_table
from orgforge.frameworks.catalog import catalogue
from orgforge.services import snapshot_service
from orgforge.services.analysis import (
    WorkspaceSnapshot,
    aggregate_tensions,
    build_responsibility_matrix,
    build_sanity_table,
)
from orgforge.utils.errors import E, api_error

logger = logging.getLogger(__name__)

diagnostics_bp = Blueprint("diagnostics", __name__, url_prefix="/api/v1")


# ── Private helper ────────────────────────────────────────────────────────────


def _focus_area(value):
    """Return (focus_area, err_response). None means the default focus."""
    if value is None or value == "":
        return None, None
    if not isinstance(value, str) or value not in FOCUS_AREAS:
        return None, api_error(
            E.VALIDATION_INVALID,
            f"Invalid focus_area {value!r}.",
            details={"valid_values": list(FOCUS_AREAS)},
        )
    return value, None


# ── Routes ────────────────────────────────────────────────────────────────────


@diagnostics_bp.route("/workspaces/<workspace_id>/diagnostics", methods=["GET"])
def get_workspace_diagnostics(workspace_id):
    """Run the analysis engine over a stored workspace.

    Query params:
        focus_area (str, optional): full|gaps|overlaps|belbin|health|boundaries|career.
    """
    focus_area, err = _focus_area(request.args.get("focus_area"))
    if err:
        return err

    snapshot = snapshot_service.load_workspace_snapshot(workspace_id)
    return jsonify(analyse_workspace(snapshot, focus_area)), 200


@diagnostics_bp.route("/workspaces/<workspace_id>/diagnostics/pipeline", methods=["GET"])
def get_pipeline_views(workspace_id):
    """Return the pipeline views of a stored workspace."""
    snap = snapshot_service.load_workspace_snapshot(workspace_id)
    return jsonify({
        "tensions": [t.to_dict() for t in aggregate_tensions(snap.handoffs, snap.stages)],
        "responsibility_matrix": build_responsibility_matrix(
            snap.roles, snap.stages, snap.stage_assignments,
        ).to_dict(),
        "sanity_table": [
            row.to_dict()
            for row in build_sanity_table(
                snap.stages, snap.roles, snap.handoffs, snap.stage_assignments,
            )
        ],
    }), 200


@diagnostics_bp.route("/diagnostics/analyse", methods=["POST"])
def analyse_snapshot():
    """Run the analysis engine over a caller-supplied snapshot.

    Body (JSON):
        snapshot (object, required): roles, stages, stage_assignments, handoffs,
            categories, activities, activity_assignments, progressions.
        focus_area (str, optional): defaults to "full".
    """
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return api_error(E.VALIDATION_INVALID, "Request body must be a JSON object.")

    focus_area, err = _focus_area(data.get("focus_area", data.get("focusArea")))
    if err:
        return err

    if "snapshot" not in data:
        return api_error(
            E.VALIDATION_REQUIRED,
            "snapshot is required.",
            details={"snapshot": "required"},
        )

    snapshot = WorkspaceSnapshot.from_dict(data["snapshot"])
    return jsonify(analyse_workspace(snapshot, focus_area)), 200


@diagnostics_bp.route("/frameworks", methods=["GET"])
def list_frameworks():
    """Return the six management frameworks behind the diagnostics."""
    items = catalogue()
    return jsonify({"items": items, "total": len(items)}), 200


@diagnostics_bp.route("/frameworks/belbin", methods=["GET"])
def get_belbin_reference():
    """Return the nine Belbin team-role types."""
    return jsonify({"items": reference_table()}), 200
