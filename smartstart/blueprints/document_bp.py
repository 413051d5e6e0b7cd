"""
Document Blueprint — the caller's documents and signatures.

  GET  /api/documents             — list own documents
  POST /api/documents             — create document
  POST /api/documents/<id>/sign   — sign an owned document
"""

from flask import Blueprint

from smartstart.blueprints import json_body
from smartstart.middleware.jwt_auth import current_user_id
from smartstart.services import document_service as svc
from smartstart.utils.errors import api_success

document_bp = Blueprint("document_bp", __name__, url_prefix="/api/documents")


@document_bp.route("", methods=["GET"])
def list_documents():
    return api_success(svc.list_documents(current_user_id()))


@document_bp.route("", methods=["POST"])
def create_document():
    return api_success(svc.create_document(current_user_id(), json_body()), 201)


@document_bp.route("/<int:document_id>/sign", methods=["POST"])
def sign_document(document_id):
    """Body: { "signatureData": "..." }"""
    data = json_body()
    return api_success(
        svc.sign_document(current_user_id(), document_id, data.get("signatureData")),
        201,
    )
