"""
Tests: analyse_workspace tool — focus-area dispatch and tool definition.
"""

import json

import pytest

from orgforge.ai.tools import (
    ANALYSE_WORKSPACE_TOOL,
    FOCUS_AREAS,
    analyse_workspace,
    execute_tool_call,
)
from orgforge.core.exceptions import ValidationError
from orgforge.services.analysis import WorkspaceSnapshot

ALL_KEYS = [
    "health_score", "gaps", "overlaps",
    "belbin_composition", "belbin_mismatches", "belbin_activity_fit",
    "boundaries", "stretch_gaps", "activity_summary", "role_coverage",
]


class TestAnalyseWorkspace:

    def test_full_runs_everything(self, scenario_snapshot):
        result = analyse_workspace(scenario_snapshot)
        assert result["success"] is True
        assert list(result["analysis"]) == ALL_KEYS
        assert result["message"] == "Workspace analysis complete (focus: full)"

    def test_result_is_json_serialisable(self, scenario_snapshot):
        json.dumps(analyse_workspace(scenario_snapshot, "full"))

    @pytest.mark.parametrize("focus,keys", [
        ("health", ["health_score"]),
        ("gaps", ["gaps"]),
        ("overlaps", ["overlaps"]),
        ("belbin", ["belbin_composition", "belbin_mismatches", "belbin_activity_fit"]),
        ("boundaries", ["boundaries"]),
        ("career", ["stretch_gaps", "activity_summary", "role_coverage"]),
    ])
    def test_focus_selects_analyses(self, scenario_snapshot, focus, keys):
        result = analyse_workspace(scenario_snapshot, focus)
        assert list(result["analysis"]) == keys
        assert result["message"] == f"Workspace analysis complete (focus: {focus})"

    def test_scenario_values(self, scenario_snapshot):
        analysis = analyse_workspace(scenario_snapshot)["analysis"]
        assert analysis["health_score"] == {
            "issue_count": 4, "sla_ratio": "0/1", "staffing_ratio": "0/1", "severity": "red",
        }
        assert analysis["overlaps"] == [{"item": "invoicing", "owners": ["R1", "R2"]}]
        assert analysis["activity_summary"]["unassigned"] == 1

    def test_empty_snapshot(self):
        analysis = analyse_workspace(WorkspaceSnapshot())["analysis"]
        assert analysis["health_score"]["severity"] == "green"
        assert analysis["gaps"] == {"empty_stages": [], "missing_slas": [], "unassigned_activities": []}
        assert len(analysis["belbin_composition"]) == 3

    def test_unknown_focus_raises(self, scenario_snapshot):
        with pytest.raises(ValidationError) as exc_info:
            analyse_workspace(scenario_snapshot, "vibes")
        assert "focus_area" in exc_info.value.details

    @pytest.mark.parametrize("focus", [["gaps"], {"area": "gaps"}, 3])
    def test_non_string_focus_raises(self, scenario_snapshot, focus):
        with pytest.raises(ValidationError):
            analyse_workspace(scenario_snapshot, focus)

    def test_empty_focus_is_not_full(self, scenario_snapshot):
        with pytest.raises(ValidationError):
            analyse_workspace(scenario_snapshot, "")


class TestToolDefinition:

    def test_enum_matches_focus_areas(self):
        prop = ANALYSE_WORKSPACE_TOOL["input_schema"]["properties"]["focus_area"]
        assert prop["enum"] == list(FOCUS_AREAS)
        assert ANALYSE_WORKSPACE_TOOL["name"] == "analyse_workspace"

    def test_execute_tool_call(self, scenario_snapshot):
        result = execute_tool_call("analyse_workspace", {"focusArea": "gaps"}, scenario_snapshot)
        assert list(result["analysis"]) == ["gaps"]

    def test_execute_tool_call_reports_errors(self, scenario_snapshot):
        result = execute_tool_call("analyse_workspace", {"focus_area": "vibes"}, scenario_snapshot)
        assert result["success"] is False
        assert "vibes" in result["error"]

    def test_unknown_tool(self, scenario_snapshot):
        assert execute_tool_call("delete_everything", None, scenario_snapshot)["success"] is False

    def test_execute_tool_call_list_focus(self, scenario_snapshot):
        result = execute_tool_call("analyse_workspace", {"focus_area": ["gaps"]}, scenario_snapshot)
        assert result["success"] is False
        assert "focus_area" in result["details"]

    def test_execute_tool_call_non_object_input(self, scenario_snapshot):
        result = execute_tool_call("analyse_workspace", ["gaps"], scenario_snapshot)
        assert result["success"] is False
