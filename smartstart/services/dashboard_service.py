"""
Dashboard Metrics Service

Per-user counts for the founder dashboard:
  - ventures (total and per stage)
  - documents and signatures
  - activity derived from the user's audit entries
"""

import logging

from sqlalchemy import distinct, func, select

from smartstart.models import db
from smartstart.models.audit import AuditEntry
from smartstart.models.document import Document, Signature
from smartstart.models.venture import VENTURE_STAGES, Venture
from smartstart.services.storage import storage_errors

logger = logging.getLogger(__name__)


def _count(operation, stmt) -> int:
    with storage_errors(operation):
        return db.session.execute(stmt).scalar() or 0


def get_stage_counts(user_id: int) -> dict:
    """Venture count per lifecycle stage, every stage present."""
    stmt = (
        select(Venture.stage, func.count(Venture.id))
        .where(Venture.user_id == user_id)
        .group_by(Venture.stage)
    )
    with storage_errors("dashboard.stages"):
        rows = db.session.execute(stmt).all()
    counts = {stage: 0 for stage in VENTURE_STAGES}
    counts.update({stage: count for stage, count in rows})
    return counts


def get_dashboard_stats(user_id: int) -> dict:
    ventures = _count("dashboard.ventures",
                      select(func.count(Venture.id)).where(Venture.user_id == user_id))
    documents = _count("dashboard.documents",
                       select(func.count(Document.id)).where(Document.user_id == user_id))
    signatures = _count("dashboard.signatures",
                        select(func.count(Signature.id)).where(Signature.user_id == user_id))
    audit_entries = _count("dashboard.audit_entries",
                           select(func.count(AuditEntry.id)).where(AuditEntry.user_id == user_id))
    days_active = _count(
        "dashboard.days_active",
        select(func.count(distinct(func.date(AuditEntry.created_at))))
        .where(AuditEntry.user_id == user_id),
    )
    by_stage = get_stage_counts(user_id)

    return {
        "ventures": {
            "total": ventures,
            "byStage": by_stage,
        },
        "activity": {
            "auditEntries": audit_entries,
            "daysActive": days_active,
            "completedStages": by_stage.get("launch", 0),
        },
        "documents": {
            "total": documents,
            "signed": signatures,
        },
    }
