"""
Logging setup for OrgForge.

Two kinds of records carry structured context:
    - request records from middleware.timing (method, path, status, duration_ms, ...)
    - analysis records from ai.tools (workspace_id, focus_area)

JSON lines go out in production. Development and tests get one readable line
per record, with that context appended. LOG_LEVEL overrides the level.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

REQUEST_FIELDS = ("request_id", "method", "path", "status", "duration_ms", "remote_addr")
ANALYSIS_FIELDS = ("workspace_id", "focus_area")


def _context(record: logging.LogRecord) -> dict:
    """Structured extras present on ``record``, in a fixed order."""
    return {
        key: getattr(record, key)
        for key in REQUEST_FIELDS + ANALYSIS_FIELDS
        if getattr(record, key, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}:{record.lineno}",
            **_context(record),
        }
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class ReadableFormatter(logging.Formatter):
    """``HH:MM:SS LEVEL logger: message [12ms] ws=… focus=…``"""

    _LEVEL_COLOURS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }

    def __init__(self, colour: bool = True):
        super().__init__("%(asctime)s %(levelname)-8s %(name)s: %(message)s", datefmt="%H:%M:%S")
        self.colour = colour

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        tags = []
        if getattr(record, "duration_ms", None) is not None:
            tags.append(f"[{record.duration_ms:.0f}ms]")
        if getattr(record, "workspace_id", None):
            tags.append(f"ws={record.workspace_id}")
        if getattr(record, "focus_area", None):
            tags.append(f"focus={record.focus_area}")
        if tags:
            head, sep, tail = line.partition("\n")
            line = f"{head} {' '.join(tags)}{sep}{tail}"
        if self.colour:
            line = f"{self._LEVEL_COLOURS.get(record.levelno, '')}{line}\033[0m"
        return line


def configure_logging(app):
    """Install a single root handler for ``app``.

    Production (neither DEBUG nor TESTING) logs JSON at INFO; otherwise
    readable lines at DEBUG, uncoloured under TESTING.
    """
    testing = app.config.get("TESTING", False)
    production = not (app.config.get("DEBUG", False) or testing)

    level_name = os.getenv("LOG_LEVEL", "INFO" if production else "DEBUG").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JSONFormatter() if production else ReadableFormatter(colour=not testing))

    # replaced, not appended: the test suite creates the app more than once
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)
    app.logger.setLevel(level)

    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug("Logging configured: level=%s json=%s", level_name, production)
