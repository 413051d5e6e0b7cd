"""
Venture Service — owner-scoped CRUD and platform-wide analytics.

Reads never cross owners: every lookup filters on ``Venture.user_id``.
A venture owned by someone else is reported as not found.

Analytics are computed from independent queries with no snapshot
isolation; a write landing between two of them can make the composite
inconsistent (e.g. the stage histogram not summing to the total).
"""

import logging
import math

from sqlalchemy import func, select

from smartstart.core.exceptions import NotFoundError, ValidationError
from smartstart.models import db
from smartstart.models.audit import AuditEntry, write_audit
from smartstart.models.auth import User
from smartstart.models.venture import VENTURE_STAGES, Venture
from smartstart.services.storage import storage_errors

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 10

# SQLite INTEGER is a signed 64-bit value
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# Request field → model attribute
_FIELDS = {
    "name": "name",
    "description": "description",
    "stage": "stage",
    "status": "status",
    "progress": "progress",
    "valuation": "valuation",
    "industry": "industry",
    "isPublic": "is_public",
}


# ═══════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════
def _validate(data: dict, *, partial: bool) -> dict:
    """Map a request body onto model attributes, rejecting bad values."""
    errors = {}
    values = {}

    for key, attr in _FIELDS.items():
        if key in data:
            values[attr] = data[key]

    if not partial or "name" in values:
        name = values.get("name")
        if not isinstance(name, str) or not name.strip():
            errors["name"] = "required"
        else:
            values["name"] = name.strip()

    if "stage" in values and values["stage"] not in VENTURE_STAGES:
        errors["stage"] = f"must be one of {', '.join(VENTURE_STAGES)}"

    if "status" in values and (not isinstance(values["status"], str) or not values["status"].strip()):
        errors["status"] = "must be a non-empty string"

    if "progress" in values:
        progress = values["progress"]
        if isinstance(progress, bool) or not isinstance(progress, int):
            errors["progress"] = "must be an integer"
        elif not INT64_MIN <= progress <= INT64_MAX:
            errors["progress"] = "out of range"

    if "valuation" in values:
        valuation = values["valuation"]
        if valuation is not None and (isinstance(valuation, bool) or not isinstance(valuation, (int, float))):
            errors["valuation"] = "must be a number or null"
        elif isinstance(valuation, int) and not INT64_MIN <= valuation <= INT64_MAX:
            errors["valuation"] = "out of range"
        elif isinstance(valuation, float) and not math.isfinite(valuation):
            errors["valuation"] = "must be a finite number"

    if "is_public" in values and not isinstance(values["is_public"], bool):
        errors["isPublic"] = "must be a boolean"

    for attr in ("description", "industry"):
        if values.get(attr) is not None and not isinstance(values[attr], str):
            errors[attr] = "must be a string or null"

    if errors:
        raise ValidationError("Invalid venture data", details=errors)
    return values


# ═══════════════════════════════════════════════════════════════
# Reads
# ═══════════════════════════════════════════════════════════════
def list_ventures(user_id: int) -> list[dict]:
    """Ventures owned by *user_id*, newest first, with owner name/email."""
    stmt = (
        select(Venture, User.first_name, User.last_name, User.email)
        .join(User, Venture.user_id == User.id)
        .where(Venture.user_id == user_id)
        .order_by(Venture.created_at.desc(), Venture.id.desc())
    )
    with storage_errors("list_ventures"):
        rows = db.session.execute(stmt).all()

    result = []
    for venture, first_name, last_name, email in rows:
        d = venture.to_dict()
        d.update({"firstName": first_name, "lastName": last_name, "email": email})
        result.append(d)
    return result


def _get_owned(user_id: int, venture_id: int) -> Venture:
    stmt = select(Venture).where(Venture.id == venture_id, Venture.user_id == user_id)
    with storage_errors("get_venture"):
        venture = db.session.execute(stmt).scalar_one_or_none()
    if venture is None:
        raise NotFoundError("Venture", venture_id)
    return venture


def get_venture(user_id: int, venture_id: int) -> dict:
    return _get_owned(user_id, venture_id).to_dict()


# ═══════════════════════════════════════════════════════════════
# Writes: entity and audit entry committed together
# ═══════════════════════════════════════════════════════════════
def create_venture(user_id: int, data: dict) -> dict:
    values = _validate(data, partial=False)
    venture = Venture(user_id=user_id, **values)
    with storage_errors("create_venture"):
        db.session.add(venture)
        db.session.flush()
        write_audit(user_id=user_id, action="venture.created",
                    details=f"Created venture '{venture.name}' (id={venture.id})")
        db.session.commit()
    logger.info("Venture %s created by user %s", venture.id, user_id)
    return venture.to_dict()


def update_venture(user_id: int, venture_id: int, data: dict) -> dict:
    values = _validate(data, partial=True)
    venture = _get_owned(user_id, venture_id)
    changed = sorted(k for k, v in values.items() if getattr(venture, k) != v)
    with storage_errors("update_venture"):
        for attr, value in values.items():
            setattr(venture, attr, value)
        write_audit(user_id=user_id, action="venture.updated",
                    details=f"Updated venture id={venture.id}: {', '.join(changed) or 'no changes'}")
        db.session.commit()
    return venture.to_dict()


def delete_venture(user_id: int, venture_id: int) -> None:
    venture = _get_owned(user_id, venture_id)
    with storage_errors("delete_venture"):
        write_audit(user_id=user_id, action="venture.deleted",
                    details=f"Deleted venture '{venture.name}' (id={venture.id})")
        db.session.delete(venture)
        db.session.commit()
    logger.info("Venture %s deleted by user %s", venture_id, user_id)


# ═══════════════════════════════════════════════════════════════
# Analytics (platform-wide)
# ═══════════════════════════════════════════════════════════════
def _scalar(operation: str, stmt):
    with storage_errors(operation):
        return db.session.execute(stmt).scalar()


def _histogram(operation: str, column, *conditions) -> dict:
    stmt = select(column, func.count(Venture.id)).where(*conditions).group_by(column)
    with storage_errors(operation):
        return {key: count for key, count in db.session.execute(stmt).all()}


def _round_half_up(value) -> int:
    return int(math.floor(float(value) + 0.5)) if value is not None else 0


def get_venture_analytics() -> dict:
    """Aggregates over every venture on the platform."""
    total = _scalar("analytics.total", select(func.count(Venture.id)))
    active = _scalar("analytics.active",
                     select(func.count(Venture.id)).where(Venture.status == "active"))
    completed = _scalar("analytics.completed",
                        select(func.count(Venture.id)).where(Venture.status == "completed"))
    total_value = _scalar("analytics.total_value",
                          select(func.sum(Venture.valuation)).where(Venture.valuation.isnot(None)))
    avg_progress = _scalar("analytics.average_progress", select(func.avg(Venture.progress)))

    stages = _histogram("analytics.stages", Venture.stage)
    industries = _histogram("analytics.industries", Venture.industry, Venture.industry.isnot(None))

    activity_stmt = (
        select(
            AuditEntry.action.label("action"),
            AuditEntry.details.label("details"),
            AuditEntry.created_at.label("created_at"),
            User.first_name.label("first_name"),
            User.last_name.label("last_name"),
        )
        .join(User, AuditEntry.user_id == User.id)
        .order_by(AuditEntry.created_at.desc(), AuditEntry.id.desc())
        .limit(RECENT_ACTIVITY_LIMIT)
    )
    with storage_errors("analytics.recent_activity"):
        activity_rows = db.session.execute(activity_stmt).all()

    return {
        "totalVentures": total or 0,
        "activeVentures": active or 0,
        "completedVentures": completed or 0,
        "totalValue": total_value or 0,
        "averageProgress": _round_half_up(avg_progress),
        "stageDistribution": stages,
        "industryDistribution": industries,
        "recentActivity": [
            {
                "action": r.action,
                "details": r.details,
                "createdAt": r.created_at.isoformat() if r.created_at else None,
                "firstName": r.first_name,
                "lastName": r.last_name,
            }
            for r in activity_rows
        ],
    }
