"""
Document Service — owner-scoped documents and signatures.
"""

import logging

from sqlalchemy import select

from smartstart.core.exceptions import NotFoundError, ValidationError
from smartstart.models import db
from smartstart.models.audit import write_audit
from smartstart.models.document import Document, Signature
from smartstart.services.storage import storage_errors

logger = logging.getLogger(__name__)


def list_documents(user_id: int) -> list[dict]:
    stmt = (
        select(Document)
        .where(Document.user_id == user_id)
        .order_by(Document.created_at.desc(), Document.id.desc())
    )
    with storage_errors("list_documents"):
        return [d.to_dict() for d in db.session.execute(stmt).scalars().all()]


def create_document(user_id: int, data: dict) -> dict:
    name = data.get("name")
    doc_type = data.get("type")
    content = data.get("content")

    errors = {}
    if not isinstance(name, str) or not name.strip():
        errors["name"] = "required"
    if not isinstance(doc_type, str) or not doc_type.strip():
        errors["type"] = "required"
    if content is not None and not isinstance(content, str):
        errors["content"] = "must be a string or null"
    if errors:
        raise ValidationError("Invalid document data", details=errors)

    document = Document(user_id=user_id, name=name.strip(), type=doc_type.strip(), content=content)
    with storage_errors("create_document"):
        db.session.add(document)
        db.session.flush()
        write_audit(user_id=user_id, action="document.created",
                    details=f"Created document '{document.name}' (id={document.id})")
        db.session.commit()
    return document.to_dict()


def sign_document(user_id: int, document_id: int, signature_data: str | None) -> dict:
    """Record a signature on an owned document and mark it signed."""
    if signature_data is not None and not isinstance(signature_data, str):
        raise ValidationError("signatureData must be a string")

    stmt = select(Document).where(Document.id == document_id, Document.user_id == user_id)
    with storage_errors("get_document"):
        document = db.session.execute(stmt).scalar_one_or_none()
    if document is None:
        raise NotFoundError("Document", document_id)

    signature = Signature(user_id=user_id, document_id=document.id, signature_data=signature_data)
    with storage_errors("sign_document"):
        db.session.add(signature)
        document.status = "signed"
        db.session.flush()
        write_audit(user_id=user_id, action="document.signed",
                    details=f"Signed document '{document.name}' (id={document.id})")
        db.session.commit()
    logger.info("Document %s signed by user %s", document.id, user_id)
    return {"document": document.to_dict(), "signature": signature.to_dict()}
