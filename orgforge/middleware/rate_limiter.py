"""
Rate limiting configuration.

Applies per-blueprint rate limits using Flask-Limiter.
The Limiter instance is created in orgforge/__init__.py with no default
limits; this module applies limits per blueprint.

Usage:
    from orgforge.middleware.rate_limiter import init_rate_limits
    init_rate_limits(app, limiter)
"""

import logging

logger = logging.getLogger(__name__)


def init_rate_limits(app, limiter):
    """
    Apply rate limits to API blueprints.

    Limits (per remote IP):
        - Diagnostics:  DIAGNOSTICS_RATE_LIMIT (default 120/minute)
        - Health check: exempt

    Rate limiting is disabled in testing mode.
    """

    if app.config.get("TESTING"):
        app.logger.info("Rate limiter disabled (TESTING=True)")
        return

    diagnostics_limit = app.config.get("DIAGNOSTICS_RATE_LIMIT", "120/minute")
    bp = app.blueprints.get("diagnostics")
    if bp:
        limiter.limit(diagnostics_limit)(bp)

    bp = app.blueprints.get("health")
    if bp:
        limiter.exempt(bp)

    app.logger.info("Rate limiter configured — diagnostics: %s", diagnostics_limit)
