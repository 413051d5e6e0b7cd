"""
Auth Blueprint — account registration and login.

  POST /api/auth/register  — email + password + names → user + JWT
  POST /api/auth/login     — email + password → user + JWT
"""

from flask import Blueprint

from smartstart.blueprints import json_body
from smartstart.services import auth_service
from smartstart.utils.errors import api_success

auth_bp = Blueprint("auth_bp", __name__, url_prefix="/api/auth")


# ═══════════════════════════════════════════════════════════════
# POST /api/auth/register
# ═══════════════════════════════════════════════════════════════
@auth_bp.route("/register", methods=["POST"])
def register():
    """
    Create an account and sign the user in.

    Body: { "email": "...", "password": "...", "firstName": "...", "lastName": "..." }
    """
    data = json_body()
    result = auth_service.register(
        data.get("email"),
        data.get("password"),
        data.get("firstName"),
        data.get("lastName"),
    )
    return api_success(result)


# ═══════════════════════════════════════════════════════════════
# POST /api/auth/login
# ═══════════════════════════════════════════════════════════════
@auth_bp.route("/login", methods=["POST"])
def login():
    """
    Authenticate with email + password.

    Body: { "email": "...", "password": "..." }
    """
    data = json_body()
    return api_success(auth_service.login(data.get("email"), data.get("password")))
