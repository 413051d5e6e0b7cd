"""
Database security check — baseline conditions for the SQLite store.

Checks:
  - database file mode is 0600 or stricter
  - every stored password is a bcrypt hash longer than 32 characters
  - an injection payload passed through a parameterized lookup is inert
  - the required tables exist
  - every audit entry still matches its stored hash

Run via ``flask --app smartstart security-check``.
"""

import logging
import os
import stat
from dataclasses import dataclass

from flask import current_app
from sqlalchemy import func, inspect as sa_inspect, select

from smartstart.core.exceptions import StorageError
from smartstart.models import db
from smartstart.models.auth import User
from smartstart.services.audit_service import find_tampered_entries
from smartstart.services.storage import sqlite_file_path, storage_errors

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("users", "ventures", "documents", "signatures", "audit_trails")
INJECTION_PAYLOAD = "'; DROP TABLE users; --"
MIN_HASH_LENGTH = 32


@dataclass
class CheckResult:
    name: str
    passed: bool
    detail: str = ""


def check_file_permissions() -> CheckResult:
    path = sqlite_file_path(current_app.config["SQLALCHEMY_DATABASE_URI"])
    if path is None:
        return CheckResult("file_permissions", True, "not a file-backed SQLite database")
    if not os.path.exists(path):
        return CheckResult("file_permissions", False, f"{path} does not exist")
    mode = stat.S_IMODE(os.stat(path).st_mode)
    if mode & 0o077:
        return CheckResult("file_permissions", False, f"{path} has mode {mode:o}, expected 600")
    return CheckResult("file_permissions", True, f"mode {mode:o}")


def check_password_hashes() -> CheckResult:
    with storage_errors("security.password_hashes"):
        hashes = db.session.execute(select(User.id, User.password_hash)).all()
    weak = [
        user_id for user_id, pw in hashes
        if not pw or len(pw) <= MIN_HASH_LENGTH or not pw.startswith(("$2b$", "$2a$", "$2y$"))
    ]
    if weak:
        return CheckResult("password_hashes", False, f"weak or plain passwords for user ids {weak}")
    return CheckResult("password_hashes", True, f"{len(hashes)} bcrypt hashes")


def check_injection_resistance() -> CheckResult:
    tables_before = set(sa_inspect(db.engine).get_table_names())
    with storage_errors("security.injection"):
        users_before = db.session.execute(select(func.count(User.id))).scalar()
        match = db.session.execute(
            select(User.id).where(User.email == INJECTION_PAYLOAD)
        ).first()
        users_after = db.session.execute(select(func.count(User.id))).scalar()
    tables_after = set(sa_inspect(db.engine).get_table_names())

    if match is not None or tables_before != tables_after or users_before != users_after:
        return CheckResult("injection_resistance", False, "payload altered schema or matched rows")
    return CheckResult("injection_resistance", True, "payload bound as literal value")


def check_schema() -> CheckResult:
    tables = set(sa_inspect(db.engine).get_table_names())
    missing = [t for t in REQUIRED_TABLES if t not in tables]
    if missing:
        return CheckResult("schema", False, f"missing tables: {', '.join(missing)}")
    return CheckResult("schema", True, f"{len(REQUIRED_TABLES)} tables present")


def check_audit_integrity() -> CheckResult:
    tampered = find_tampered_entries()
    if tampered:
        return CheckResult("audit_integrity", False, f"hash mismatch for entry ids {tampered}")
    return CheckResult("audit_integrity", True, "all audit hashes match")


CHECKS = (
    check_file_permissions,
    check_password_hashes,
    check_injection_resistance,
    check_schema,
    check_audit_integrity,
)


def run_security_checks() -> list[CheckResult]:
    """Run every check in order on the current app's database."""
    results = []
    for check in CHECKS:
        try:
            result = check()
        except StorageError as exc:
            result = CheckResult(check.__name__.removeprefix("check_"), False, exc.public_message(True))
        logger.debug("Security check %s: %s", result.name, "pass" if result.passed else "FAIL")
        results.append(result)
    return results
