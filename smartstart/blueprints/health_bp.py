"""
Health check blueprint.

Endpoints:
    GET /api/health  — liveness with a database ping (no auth)
"""

import logging
import time
from datetime import datetime, timezone

from flask import Blueprint

from smartstart.models import db
from smartstart.utils.errors import E, api_error, api_success

logger = logging.getLogger(__name__)

health_bp = Blueprint("health_bp", __name__, url_prefix="/api/health")


@health_bp.route("", methods=["GET"])
def health():
    """Liveness probe. 503 when the database cannot answer ``SELECT 1``."""
    try:
        t0 = time.perf_counter()
        db.session.execute(db.text("SELECT 1"))
        db_ms = (time.perf_counter() - t0) * 1000
    except Exception as exc:
        logger.error("Health check — database failed: %s", exc)
        db.session.rollback()
        return api_error("Database unavailable", E.DATABASE, status=503)

    return api_success({
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": {"status": "ok", "latency_ms": round(db_ms, 1)},
    })
