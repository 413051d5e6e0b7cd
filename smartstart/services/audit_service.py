"""
Audit Service — per-user audit trail reads and hash verification.
"""

from sqlalchemy import select

from smartstart.models import db
from smartstart.models.audit import AuditEntry
from smartstart.models.auth import User
from smartstart.services.storage import storage_errors

DEFAULT_LIMIT = 50
MAX_LIMIT = 200


def list_audit_trail(user_id: int, limit: int = DEFAULT_LIMIT) -> list[dict]:
    """Most recent audit entries for one user, with the actor's name."""
    limit = max(1, min(int(limit), MAX_LIMIT))
    stmt = (
        select(AuditEntry, User.first_name, User.last_name)
        .join(User, AuditEntry.user_id == User.id)
        .where(AuditEntry.user_id == user_id)
        .order_by(AuditEntry.created_at.desc(), AuditEntry.id.desc())
        .limit(limit)
    )
    with storage_errors("list_audit_trail"):
        rows = db.session.execute(stmt).all()

    result = []
    for entry, first_name, last_name in rows:
        d = entry.to_dict()
        d.update({"firstName": first_name, "lastName": last_name})
        result.append(d)
    return result


def find_tampered_entries() -> list[int]:
    """IDs of audit entries whose stored hash no longer matches their fields."""
    with storage_errors("find_tampered_entries"):
        entries = db.session.execute(select(AuditEntry).order_by(AuditEntry.id)).scalars().all()
    return [e.id for e in entries if e.audit_hash != e.compute_hash()]
