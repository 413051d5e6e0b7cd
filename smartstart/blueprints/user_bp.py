"""
User Blueprint — current user profile.
"""

from flask import Blueprint

from smartstart.core.exceptions import NotFoundError
from smartstart.middleware.jwt_auth import current_user_id
from smartstart.services.auth_service import get_user_by_id
from smartstart.utils.errors import api_success

user_bp = Blueprint("user_bp", __name__, url_prefix="/api/users")


@user_bp.route("/profile", methods=["GET"])
def profile():
    user_id = current_user_id()
    user = get_user_by_id(user_id)
    if user is None:
        # Token outlived its account
        raise NotFoundError("User", user_id)
    return api_success(user.to_dict())
