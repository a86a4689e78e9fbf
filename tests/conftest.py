"""
Shared pytest fixtures for the OrgForge test suite.

Provides:
    - app: Flask application (session-scoped)
    - _setup_db: Database table creation/teardown (session-scoped)
    - session: Per-test DB cleanup w/ rollback + recreate (autouse)
    - client: Flask test client (function-scoped)
    - workspace: Pre-created, empty Workspace entity
    - scenario_snapshot: the two-role / one-stage reference workspace
"""

import pytest

from orgforge import create_app
from orgforge.models import db as _db
from orgforge.models.workspace import Workspace
from orgforge.services.analysis import (
    Activity,
    Handoff,
    OwnershipCategory,
    Role,
    Stage,
    WorkspaceSnapshot,
)


# ── App & DB fixtures ────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    application = create_app("testing")
    return application


@pytest.fixture(scope="session")
def _setup_db(app):
    """Create all tables at session start, drop at end."""
    with app.app_context():
        _db.create_all()
    yield
    with app.app_context():
        _db.drop_all()


@pytest.fixture(autouse=True)
def session(app, _setup_db):
    """Per-test: open app context, rollback after test, recreate tables."""
    with app.app_context():
        yield
        _db.session.rollback()
        _db.drop_all()
        _db.create_all()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


# ── Convenience fixtures ─────────────────────────────────────────────────


@pytest.fixture()
def workspace():
    """Create and return an empty Workspace."""
    ws = Workspace(name="Test Workspace")
    _db.session.add(ws)
    _db.session.commit()
    return ws


@pytest.fixture()
def scenario_snapshot():
    """Two operational roles claiming the same item, one unstaffed stage,
    one handoff without SLA and one unassigned activity."""
    return WorkspaceSnapshot(
        roles=(
            Role(id="r1", job_title="R1", owns=(OwnershipCategory("Finance", ("Invoicing",)),)),
            Role(id="r2", job_title="R2", owns=(OwnershipCategory("Ops", ("invoicing ",)),)),
        ),
        stages=(Stage(id="s1", name="Intake", sort_order=0),),
        handoffs=(Handoff(id="h1", from_stage_id="s1", to_stage_id="s1"),),
        activities=(Activity(id="a1", name="Reconcile"),),
    )
