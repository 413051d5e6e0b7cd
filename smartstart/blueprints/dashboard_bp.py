"""
Dashboard Blueprint — per-user dashboard counts.
"""

from flask import Blueprint

from smartstart.middleware.jwt_auth import current_user_id
from smartstart.services import dashboard_service as svc
from smartstart.utils.errors import api_success

dashboard_bp = Blueprint("dashboard_bp", __name__, url_prefix="/api/dashboard")


@dashboard_bp.route("/stats", methods=["GET"])
def stats():
    """Venture, document and activity counts for the caller."""
    return api_success(svc.get_dashboard_stats(current_user_id()))
