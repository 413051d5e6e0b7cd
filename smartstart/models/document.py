"""
Document and signature models.
"""

from smartstart.models import db, isoformat, utcnow


class Document(db.Model):
    __tablename__ = "documents"
    __table_args__ = (
        db.Index("idx_documents_user", "userId"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        "userId", db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    name = db.Column(db.String(200), nullable=False)
    type = db.Column(db.String(50), nullable=False)
    content = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default="draft")  # draft, signed
    created_at = db.Column("createdAt", db.DateTime, default=utcnow)
    updated_at = db.Column("updatedAt", db.DateTime, default=utcnow, onupdate=utcnow)

    signatures = db.relationship("Signature", back_populates="document", lazy="dynamic")

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "type": self.type,
            "content": self.content,
            "status": self.status,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


class Signature(db.Model):
    __tablename__ = "signatures"
    __table_args__ = (
        db.Index("idx_signatures_user", "userId"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        "userId", db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    document_id = db.Column(
        "documentId", db.Integer,
        db.ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
    )
    signature_data = db.Column("signatureData", db.Text)
    signed_at = db.Column("signedAt", db.DateTime, default=utcnow)

    document = db.relationship("Document", back_populates="signatures")

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "documentId": self.document_id,
            "signatureData": self.signature_data,
            "signedAt": isoformat(self.signed_at),
        }
