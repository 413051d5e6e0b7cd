"""
Audit Blueprint — the caller's audit trail.

  GET /api/audit-trails?limit=50
"""

from flask import Blueprint

from smartstart.blueprints import limit_arg
from smartstart.middleware.jwt_auth import current_user_id
from smartstart.services import audit_service
from smartstart.utils.errors import api_success

audit_bp = Blueprint("audit_bp", __name__, url_prefix="/api/audit-trails")


@audit_bp.route("", methods=["GET"])
def list_audit_trails():
    limit = limit_arg(audit_service.DEFAULT_LIMIT, audit_service.MAX_LIMIT)
    return api_success(audit_service.list_audit_trail(current_user_id(), limit))
