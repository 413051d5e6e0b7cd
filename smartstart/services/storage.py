"""
Storage guard — request deadline and driver-error translation.

Every SQLite connection gets a progress handler that aborts the running
statement once the current thread's deadline has passed.  The deadline is
armed per request by the timing middleware (``STORAGE_TIMEOUT_SECONDS``) and
can be armed explicitly with ``query_deadline()`` in CLI code and tests.

Services wrap their queries in ``storage_errors(operation)``:

    with storage_errors("list_ventures"):
        rows = db.session.execute(stmt).all()

which rolls the session back and raises ``StorageTimeout`` for interrupted
or lock-starved statements and ``StorageError`` for anything else the driver
reports.
"""

import logging
import os
import stat
import threading
import time
from contextlib import contextmanager

from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from smartstart.core.exceptions import StorageError, StorageTimeout
from smartstart.models import db

logger = logging.getLogger(__name__)

# SQLite VM instructions between deadline checks
PROGRESS_INTERVAL = 1000

_TIMEOUT_MARKERS = ("interrupted", "database is locked", "database table is locked")

_state = threading.local()


# ═══════════════════════════════════════════════════════════════
# Deadline
# ═══════════════════════════════════════════════════════════════
def arm_deadline(seconds: float | None) -> None:
    """Set the current thread's storage deadline ``seconds`` from now."""
    _state.deadline = None if seconds is None else time.monotonic() + seconds


def disarm_deadline() -> None:
    _state.deadline = None


def deadline_exceeded() -> bool:
    deadline = getattr(_state, "deadline", None)
    return deadline is not None and time.monotonic() >= deadline


@contextmanager
def query_deadline(seconds: float | None):
    """Arm a deadline for the enclosed block, restoring the previous one."""
    previous = getattr(_state, "deadline", None)
    arm_deadline(seconds)
    try:
        yield
    finally:
        _state.deadline = previous


def _progress_handler() -> int:
    # Non-zero return makes SQLite abort the statement with "interrupted"
    return 1 if deadline_exceeded() else 0


def install_connection_guards(dbapi_conn, connection_record) -> None:
    """Engine ``connect`` hook: FK enforcement + deadline progress handler."""
    if "sqlite" not in type(dbapi_conn).__module__:
        return
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    dbapi_conn.set_progress_handler(_progress_handler, PROGRESS_INTERVAL)


# ═══════════════════════════════════════════════════════════════
# Error translation
# ═══════════════════════════════════════════════════════════════
def _driver_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)


def is_timeout(exc: SQLAlchemyError) -> bool:
    if not isinstance(exc, OperationalError):
        return False
    message = _driver_message(exc).lower()
    return any(marker in message for marker in _TIMEOUT_MARKERS)


@contextmanager
def storage_errors(operation: str):
    """Translate SQLAlchemy failures raised in the block into storage errors."""
    try:
        yield
    except SQLAlchemyError as exc:
        with query_deadline(None):
            db.session.rollback()
        detail = _driver_message(exc)
        if is_timeout(exc):
            logger.warning("Storage timeout in %s: %s", operation, detail)
            raise StorageTimeout(operation, detail=detail) from exc
        logger.error("Storage failure in %s: %s", operation, detail)
        raise StorageError(operation, detail=detail) from exc


# ═══════════════════════════════════════════════════════════════
# Database file
# ═══════════════════════════════════════════════════════════════
def sqlite_file_path(uri: str) -> str | None:
    """Filesystem path of a file-backed SQLite URI, else None."""
    url = make_url(uri)
    if not url.drivername.startswith("sqlite"):
        return None
    if not url.database or url.database == ":memory:":
        return None
    return os.path.abspath(url.database)


def prepare_database_file(uri: str) -> str | None:
    """Create the parent directory of a SQLite file before first connect."""
    path = sqlite_file_path(uri)
    if path:
        os.makedirs(os.path.dirname(path), exist_ok=True)
    return path


def restrict_database_file(uri: str) -> None:
    """Limit the SQLite file to owner read/write (0600)."""
    path = sqlite_file_path(uri)
    if not path or not os.path.exists(path):
        return
    mode = stat.S_IMODE(os.stat(path).st_mode)
    if mode & 0o077:
        os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)
        logger.info("Restricted database file %s to 0600 (was %o)", path, mode)
