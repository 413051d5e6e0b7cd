"""
Venture Blueprint — owner-scoped venture CRUD + platform analytics.

  GET    /api/ventures              — ventures owned by the caller
  POST   /api/ventures              — create venture
  GET    /api/ventures/<id>         — owned venture detail
  PUT    /api/ventures/<id>         — update owned venture
  DELETE /api/ventures/<id>         — delete owned venture
  GET    /api/ventures/analytics    — platform-wide aggregates
"""

from flask import Blueprint

from smartstart.blueprints import json_body
from smartstart.middleware.jwt_auth import current_user_id
from smartstart.services import venture_service as svc
from smartstart.utils.errors import api_success

venture_bp = Blueprint("venture_bp", __name__, url_prefix="/api/ventures")


@venture_bp.route("", methods=["GET"])
def list_ventures():
    return api_success(svc.list_ventures(current_user_id()))


@venture_bp.route("", methods=["POST"])
def create_venture():
    return api_success(svc.create_venture(current_user_id(), json_body()), 201)


@venture_bp.route("/analytics", methods=["GET"])
def analytics():
    """Aggregates across every user's ventures."""
    return api_success(svc.get_venture_analytics())


@venture_bp.route("/<int:venture_id>", methods=["GET"])
def get_venture(venture_id):
    return api_success(svc.get_venture(current_user_id(), venture_id))


@venture_bp.route("/<int:venture_id>", methods=["PUT"])
def update_venture(venture_id):
    return api_success(svc.update_venture(current_user_id(), venture_id, json_body()))


@venture_bp.route("/<int:venture_id>", methods=["DELETE"])
def delete_venture(venture_id):
    svc.delete_venture(current_user_id(), venture_id)
    return api_success({"id": venture_id, "deleted": True})
