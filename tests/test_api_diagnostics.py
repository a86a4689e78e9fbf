"""
Tests: Diagnostics API.

Endpoints:
    GET  /api/v1/workspaces/<id>/diagnostics
    GET  /api/v1/workspaces/<id>/diagnostics/pipeline
    POST /api/v1/diagnostics/analyse
    GET  /api/v1/frameworks
    GET  /api/v1/frameworks/belbin

All stored test data is created via ORM helpers.
The `session` autouse fixture rolls back after every test.
"""

from orgforge.models import db as _db
from orgforge.models.workspace import (
    Activity,
    ActivityAssignment,
    ActivityCategory,
    Handoff,
    RoleProgression,
    Stage,
    StageRoleAssignment,
    TeamRole,
)
from orgforge.services import snapshot_service


# ── ORM helpers ───────────────────────────────────────────────────────────────


def _make_stage(workspace_id, name, sort_order=0) -> Stage:
    s = Stage(workspace_id=workspace_id, name=name, sort_order=sort_order)
    _db.session.add(s)
    _db.session.flush()
    return s


def _make_role(workspace_id, title, owns=None, does_not_own=None, oversees=None, **kw) -> TeamRole:
    r = TeamRole(
        workspace_id=workspace_id,
        name=title,
        job_title=title,
        owns=owns or [],
        does_not_own=does_not_own or [],
        oversees_stage_ids=oversees or [],
        **kw,
    )
    _db.session.add(r)
    _db.session.flush()
    return r


def _make_handoff(workspace_id, from_stage, to_stage, sla=None, tensions=None) -> Handoff:
    h = Handoff(
        workspace_id=workspace_id,
        from_stage_id=from_stage.id,
        to_stage_id=to_stage.id,
        sla=sla,
        tensions=tensions or [],
    )
    _db.session.add(h)
    _db.session.flush()
    return h


def _make_activity(workspace_id, name, category=None) -> Activity:
    a = Activity(workspace_id=workspace_id, name=name, category_id=category.id if category else None)
    _db.session.add(a)
    _db.session.flush()
    return a


def _seed_scenario(workspace):
    """Two roles claiming the same item, one unstaffed stage, one handoff
    without SLA and one unassigned activity."""
    _make_role(workspace.id, "R1", owns=[{"title": "Finance", "items": ["Invoicing"]}], sort_order=0)
    _make_role(workspace.id, "R2", owns=[{"title": "Ops", "items": ["invoicing "]}], sort_order=1)
    stage = _make_stage(workspace.id, "Intake")
    _make_handoff(workspace.id, stage, stage)
    _make_activity(workspace.id, "Reconcile")
    _db.session.commit()


# ═════════════════════════════════════════════════════════════════════════════
# Snapshot loader
# ═════════════════════════════════════════════════════════════════════════════


class TestSnapshotLoader:

    def test_loads_every_collection(self, workspace):
        intake = _make_stage(workspace.id, "Intake", 1)
        build = _make_stage(workspace.id, "Build", 0)
        role = _make_role(workspace.id, "Engineer", belbin_primary="implementer")
        cat = ActivityCategory(workspace_id=workspace.id, name="Delivery", belbin_ideal=["implementer"])
        _db.session.add(cat)
        _db.session.flush()
        act = _make_activity(workspace.id, "Deploy", category=cat)
        _db.session.add_all([
            StageRoleAssignment(stage_id=intake.id, role_id=role.id),
            ActivityAssignment(activity_id=act.id, role_id=role.id),
            RoleProgression(role_id=role.id, tier="mid", growth_activity_ids=[act.id]),
        ])
        _make_handoff(workspace.id, build, intake, sla="2 days", tensions=["Late specs"])
        _db.session.commit()

        snap = snapshot_service.load_workspace_snapshot(workspace.id)

        assert snap.workspace_id == workspace.id
        assert [s.name for s in snap.stages] == ["Build", "Intake"]
        assert snap.roles[0].belbin_primary == "implementer"
        assert snap.stage_assignments[0].stage_id == intake.id
        assert snap.handoffs[0].tensions == ("Late specs",)
        assert snap.categories[0].belbin_ideal == ("implementer",)
        assert snap.activities[0].category_id == cat.id
        assert snap.activity_assignments[0].activity_id == act.id
        assert snap.progressions[0].growth_activity_ids == (act.id,)

    def test_other_workspaces_are_not_included(self, workspace):
        from orgforge.models.workspace import Workspace
        other = Workspace(name="Other")
        _db.session.add(other)
        _db.session.flush()
        _make_role(other.id, "Stranger")
        _make_stage(other.id, "Elsewhere")
        _db.session.commit()

        snap = snapshot_service.load_workspace_snapshot(workspace.id)
        assert snap.roles == ()
        assert snap.stages == ()


# ═════════════════════════════════════════════════════════════════════════════
# GET /workspaces/<id>/diagnostics
# ═════════════════════════════════════════════════════════════════════════════


class TestWorkspaceDiagnostics:

    def test_full_analysis(self, client, workspace):
        _seed_scenario(workspace)
        res = client.get(f"/api/v1/workspaces/{workspace.id}/diagnostics")
        assert res.status_code == 200

        data = res.get_json()
        assert data["success"] is True
        assert data["message"] == "Workspace analysis complete (focus: full)"
        assert data["analysis"]["health_score"] == {
            "issue_count": 4, "sla_ratio": "0/1", "staffing_ratio": "0/1", "severity": "red",
        }
        assert data["analysis"]["overlaps"] == [{"item": "invoicing", "owners": ["R1", "R2"]}]

    def test_focus_area(self, client, workspace):
        _seed_scenario(workspace)
        res = client.get(f"/api/v1/workspaces/{workspace.id}/diagnostics?focus_area=belbin")
        assert res.status_code == 200
        assert set(res.get_json()["analysis"]) == {
            "belbin_composition", "belbin_mismatches", "belbin_activity_fit",
        }

    def test_invalid_focus_area_returns_400(self, client, workspace):
        res = client.get(f"/api/v1/workspaces/{workspace.id}/diagnostics?focus_area=vibes")
        assert res.status_code == 400
        data = res.get_json()
        assert data["code"] == "ERR_VALIDATION_INVALID"
        assert "career" in data["details"]["valid_values"]

    def test_empty_focus_area_means_full(self, client, workspace):
        res = client.get(f"/api/v1/workspaces/{workspace.id}/diagnostics?focus_area=")
        assert res.status_code == 200
        assert res.get_json()["message"] == "Workspace analysis complete (focus: full)"

    def test_unknown_workspace_returns_404(self, client):
        res = client.get("/api/v1/workspaces/does-not-exist/diagnostics")
        assert res.status_code == 404
        assert res.get_json()["code"] == "ERR_NOT_FOUND"

    def test_stored_shape_errors_return_422(self, client, workspace):
        _make_role(workspace.id, "Broken", owns=["not-a-category"])
        _db.session.commit()
        res = client.get(f"/api/v1/workspaces/{workspace.id}/diagnostics")
        assert res.status_code == 422
        assert "roles[0].owns[0]" in res.get_json()["details"]

    def test_timing_headers(self, client, workspace):
        res = client.get(
            f"/api/v1/workspaces/{workspace.id}/diagnostics",
            headers={"X-Request-ID": "trace-123"},
        )
        assert res.headers["X-Request-ID"] == "trace-123"
        assert "X-Request-Duration-Ms" in res.headers


# ═════════════════════════════════════════════════════════════════════════════
# GET /workspaces/<id>/diagnostics/pipeline
# ═════════════════════════════════════════════════════════════════════════════


class TestPipelineViews:

    def test_pipeline_views(self, client, workspace):
        intake = _make_stage(workspace.id, "Intake", 0)
        ship = _make_stage(workspace.id, "Ship", 1)
        eng = _make_role(workspace.id, "Engineer")
        _make_role(workspace.id, "Head of Delivery", oversees=[ship.id])
        _db.session.add(StageRoleAssignment(stage_id=intake.id, role_id=eng.id))
        _make_handoff(workspace.id, intake, ship, sla="1 day", tensions=["Scope creep"])
        _db.session.commit()

        res = client.get(f"/api/v1/workspaces/{workspace.id}/diagnostics/pipeline")
        assert res.status_code == 200
        data = res.get_json()

        assert data["tensions"] == [{"text": "Scope creep", "from_stage": "Intake", "to_stage": "Ship"}]
        matrix = data["responsibility_matrix"]
        assert matrix["operational"][0]["stages"] == {intake.id: True, ship.id: False}
        assert matrix["oversight"][0]["stages"] == {intake.id: False, ship.id: True}
        assert data["sanity_table"][0]["roles"] == ["Engineer"]
        assert data["sanity_table"][0]["hands_off_to"] == "Ship"
        assert data["sanity_table"][1]["is_staffed"] is False

    def test_unknown_workspace_returns_404(self, client):
        assert client.get("/api/v1/workspaces/nope/diagnostics/pipeline").status_code == 404


# ═════════════════════════════════════════════════════════════════════════════
# POST /diagnostics/analyse
# ═════════════════════════════════════════════════════════════════════════════


class TestAnalyseSnapshot:

    def test_posted_snapshot(self, client, scenario_snapshot):
        res = client.post(
            "/api/v1/diagnostics/analyse",
            json={"focus_area": "health", "snapshot": scenario_snapshot.to_dict()},
        )
        assert res.status_code == 200
        assert res.get_json()["analysis"]["health_score"]["issue_count"] == 4

    def test_camel_case_body(self, client):
        res = client.post(
            "/api/v1/diagnostics/analyse",
            json={
                "focusArea": "overlaps",
                "snapshot": {"roles": [
                    {"id": 1, "jobTitle": "A", "owns": [{"title": "x", "items": ["Budget"]}]},
                    {"id": 2, "jobTitle": "B", "owns": [{"title": "y", "items": ["budget"]}]},
                ]},
            },
        )
        assert res.status_code == 200
        assert res.get_json()["analysis"]["overlaps"][0]["owners"] == ["A", "B"]

    def test_missing_snapshot_returns_400(self, client):
        res = client.post("/api/v1/diagnostics/analyse", json={"focus_area": "full"})
        assert res.status_code == 400
        assert res.get_json()["code"] == "ERR_VALIDATION_REQUIRED"

    def test_malformed_snapshot_returns_422(self, client):
        res = client.post(
            "/api/v1/diagnostics/analyse",
            json={"snapshot": {"stages": [{"name": "No id"}], "handoffs": "nope"}},
        )
        assert res.status_code == 422
        data = res.get_json()
        assert data["code"] == "ERR_VALIDATION_SNAPSHOT"
        assert set(data["details"]) == {"stages[0].id", "handoffs"}

    def test_invalid_focus_area_returns_400(self, client):
        res = client.post("/api/v1/diagnostics/analyse", json={"focus_area": "x", "snapshot": {}})
        assert res.status_code == 400

    def test_non_json_body_returns_415(self, client):
        res = client.post("/api/v1/diagnostics/analyse", data="snapshot", content_type="text/plain")
        assert res.status_code == 415

    def test_list_focus_area_returns_400(self, client):
        res = client.post(
            "/api/v1/diagnostics/analyse",
            json={"focus_area": ["gaps"], "snapshot": {}},
        )
        assert res.status_code == 400
        assert res.get_json()["code"] == "ERR_VALIDATION_INVALID"

    def test_non_object_body_returns_400(self, client):
        res = client.post("/api/v1/diagnostics/analyse", json=[{"snapshot": {}}])
        assert res.status_code == 400
        assert res.get_json()["code"] == "ERR_VALIDATION_INVALID"


# ═════════════════════════════════════════════════════════════════════════════
# Reference data & health
# ═════════════════════════════════════════════════════════════════════════════


def test_belbin_reference(client):
    res = client.get("/api/v1/frameworks/belbin")
    assert res.status_code == 200
    items = res.get_json()["items"]
    assert sum(len(c["roles"]) for c in items) == 9


def test_framework_catalogue(client):
    res = client.get("/api/v1/frameworks")
    assert res.status_code == 200
    data = res.get_json()
    assert data["total"] == 6
    assert [f["key"] for f in data["items"]] == [
        "belbin", "radical-candor", "drive", "job-characteristics", "rapid", "working-genius",
    ]
    assert data["items"][4]["author"] == "Bain & Company"


class TestHealthEndpoints:

    def test_health_ready(self, client):
        res = client.get("/api/v1/health/ready")
        assert res.status_code == 200
        assert res.get_json()["status"] == "ok"

    def test_health_live(self, client):
        res = client.get("/api/v1/health/live")
        assert res.status_code == 200
        data = res.get_json()
        assert data["status"] == "healthy"
        assert data["checks"]["database"]["status"] == "ok"

    def test_unknown_api_path(self, client):
        assert client.get("/api/v1/nothing-here").status_code == 404

    def test_method_not_allowed(self, client):
        assert client.delete("/api/v1/frameworks/belbin").status_code == 405
