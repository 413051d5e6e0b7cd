"""
Rate limiting configuration.

Applies a per-remote-address limit to the auth blueprint (register/login)
using Flask-Limiter.  The Limiter instance is created in smartstart/__init__.py
with no default limits; this module attaches the limit after blueprints are
registered.

Usage:
    from smartstart.middleware.rate_limiter import init_rate_limits
    init_rate_limits(app, limiter)
"""

import logging

logger = logging.getLogger(__name__)

DEFAULT_AUTH_LIMIT = "10/minute"


def init_rate_limits(app, limiter):
    """
    Apply rate limits to API blueprints.

    Limits (per remote IP):
        - Auth endpoints:  AUTH_RATE_LIMIT (default 10/minute)
        - Health check:    exempt
        - Everything else: unlimited

    Rate limiting is disabled when RATELIMIT_ENABLED is False (testing).
    """

    if not app.config.get("RATELIMIT_ENABLED", True):
        logger.debug("Rate limiter disabled (RATELIMIT_ENABLED=False)")
        return

    auth_limit = app.config.get("AUTH_RATE_LIMIT", DEFAULT_AUTH_LIMIT)
    bp = app.blueprints.get("auth_bp")
    if bp:
        limiter.limit(auth_limit)(bp)

    bp = app.blueprints.get("health_bp")
    if bp:
        limiter.exempt(bp)

    logger.info("Rate limiter configured — auth: %s", auth_limit)
