"""
SmartStart API
Audit domain model.

Models:
    - AuditEntry: immutable, append-only record of a user action.
"""

from smartstart.models import db, isoformat, utcnow
from smartstart.utils.crypto import sha256_hex


class AuditEntry(db.Model):
    """
    One row per user action.  ``audit_hash`` is a SHA-256 digest over the
    entry's own fields, fixed at write time.
    """

    __tablename__ = "audit_trails"
    __table_args__ = (
        db.Index("idx_audit_user", "userId"),
        db.Index("idx_audit_created", "createdAt"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        "userId", db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    action = db.Column(db.String(60), nullable=False)
    details = db.Column(db.Text)
    audit_hash = db.Column("auditHash", db.String(64))
    created_at = db.Column("createdAt", db.DateTime, nullable=False, default=utcnow)

    def compute_hash(self) -> str:
        return sha256_hex(self.user_id, self.action, self.details, isoformat(self.created_at))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "action": self.action,
            "details": self.details,
            "auditHash": self.audit_hash,
            "createdAt": isoformat(self.created_at),
        }

    def __repr__(self):
        return f"<AuditEntry {self.id}: {self.action} by {self.user_id}>"


# ── Convenience writer ───────────────────────────────────────────────────────

def write_audit(*, user_id: int, action: str, details: str | None = None) -> AuditEntry:
    """
    Append a single audit row.  Uses ``flush`` so callers keep
    transaction control.

    Returns the (flushed) AuditEntry instance.
    """
    # Stored without tzinfo by SQLite; hash the naive value so reads verify
    entry = AuditEntry(
        user_id=user_id,
        action=action,
        details=details,
        created_at=utcnow().replace(tzinfo=None),
    )
    entry.audit_hash = entry.compute_hash()
    db.session.add(entry)
    db.session.flush()
    return entry
