"""
Tests: platform plumbing — logging formatters, error envelope, config,
exception types, rate limiter wiring.
"""

import json
import logging
import os

import pytest
from flask import Flask

from orgforge.config import ProductionConfig, TestingConfig, config
from orgforge.core.exceptions import NotFoundError, ValidationError
from orgforge.middleware.logging_config import JSONFormatter, ReadableFormatter
from orgforge.middleware.rate_limiter import init_rate_limits
from orgforge.utils.errors import E, api_error


def _record(msg="hello", **extra):
    record = logging.LogRecord("orgforge.test", logging.INFO, __file__, 10, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLogging:

    def test_json_formatter_includes_extras(self):
        out = json.loads(JSONFormatter().format(
            _record(workspace_id="w1", focus_area="gaps", status=200, unrelated="x"),
        ))
        assert out["message"] == "hello"
        assert out["level"] == "INFO"
        assert out["workspace_id"] == "w1"
        assert out["focus_area"] == "gaps"
        assert out["status"] == 200
        assert "unrelated" not in out

    def test_readable_formatter_shows_duration(self):
        line = ReadableFormatter().format(_record(duration_ms=12.4))
        assert "orgforge.test: hello" in line
        assert "[12ms]" in line

    def test_readable_formatter_shows_analysis_context(self):
        line = ReadableFormatter(colour=False).format(_record(workspace_id="w1", focus_area="belbin"))
        assert line.endswith("orgforge.test: hello ws=w1 focus=belbin")

    def test_json_formatter_records_source(self):
        out = json.loads(JSONFormatter().format(_record()))
        assert out["source"].endswith(":10")
        assert out["logger"] == "orgforge.test"

    def test_configure_logging_replaces_root_handler(self, app):
        from orgforge.middleware.logging_config import configure_logging

        configure_logging(app)
        configure_logging(app)
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, ReadableFormatter)
        assert handlers[0].formatter.colour is False

    def test_analysis_logs_workspace_context(self, caplog, scenario_snapshot):
        from orgforge.ai.tools import analyse_workspace

        with caplog.at_level(logging.INFO, logger="orgforge.ai.tools"):
            analyse_workspace(scenario_snapshot, "gaps")
        record = next(r for r in caplog.records if r.name == "orgforge.ai.tools")
        assert record.focus_area == "gaps"


class TestErrorEnvelope:

    def test_default_status(self, app):
        with app.test_request_context():
            resp, status = api_error(E.NOT_FOUND, "Workspace not found")
        assert status == 404
        assert resp.get_json() == {"error": "Workspace not found", "code": "ERR_NOT_FOUND"}

    def test_details_and_override(self, app):
        with app.test_request_context():
            resp, status = api_error(E.VALIDATION_SNAPSHOT, "bad", status=400, details={"roles": "x"})
        assert status == 400
        assert resp.get_json()["details"] == {"roles": "x"}

    def test_unknown_code_falls_back_to_400(self, app):
        with app.test_request_context():
            _resp, status = api_error("ERR_SOMETHING", "?")
        assert status == 400


class TestExceptions:

    def test_not_found_message(self):
        err = NotFoundError(resource="Workspace", resource_id="abc")
        assert str(err) == "Workspace id=abc not found"
        assert str(NotFoundError("Workspace")) == "Workspace not found"

    def test_validation_details_default(self):
        assert ValidationError("nope").details == {}


class TestConfig:

    def test_testing_config(self, app):
        assert app.config["TESTING"] is True
        assert app.config["SQLALCHEMY_DATABASE_URI"] == TestingConfig.SQLALCHEMY_DATABASE_URI

    def test_rate_limit_storage_from_config(self, app):
        assert app.config["RATELIMIT_STORAGE_URI"] == os.getenv("REDIS_URL", "memory://")
        assert "REDIS_URL" not in app.config

    def test_config_mapping(self):
        assert set(config) == {"development", "testing", "production", "default"}

    def test_production_requires_database_url(self, monkeypatch):
        monkeypatch.setattr(ProductionConfig, "SQLALCHEMY_DATABASE_URI", None)
        with pytest.raises(RuntimeError):
            ProductionConfig()


class TestRateLimiter:

    def test_disabled_when_testing(self):
        calls = []

        class _Limiter:
            def limit(self, value):
                calls.append(value)
                return lambda bp: bp

            def exempt(self, bp):
                calls.append("exempt")

        test_app = Flask(__name__)
        test_app.config["TESTING"] = True
        init_rate_limits(test_app, _Limiter())
        assert calls == []

    def test_limits_diagnostics_and_exempts_health(self):
        from flask import Blueprint

        calls = []

        class _Limiter:
            def limit(self, value):
                calls.append(("limit", value))
                return lambda bp: bp

            def exempt(self, bp):
                calls.append(("exempt", bp.name))

        prod_app = Flask(__name__)
        prod_app.config["DIAGNOSTICS_RATE_LIMIT"] = "5/minute"
        prod_app.register_blueprint(Blueprint("diagnostics", __name__))
        prod_app.register_blueprint(Blueprint("health", __name__))
        init_rate_limits(prod_app, _Limiter())
        assert calls == [("limit", "5/minute"), ("exempt", "health")]
