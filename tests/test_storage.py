"""
Storage guard tests: deadline interruption, error translation, file mode.
"""

import os
import sqlite3
import stat

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError

from smartstart.core.exceptions import StorageError, StorageTimeout
from smartstart.models import db
from smartstart.services import venture_service
from smartstart.services.storage import (
    deadline_exceeded,
    is_timeout,
    prepare_database_file,
    query_deadline,
    restrict_database_file,
    sqlite_file_path,
    storage_errors,
)

# Enough VM work to trip the progress handler many times over
SLOW_QUERY = text(
    "WITH RECURSIVE c(x) AS (SELECT 1 UNION ALL SELECT x + 1 FROM c WHERE x < 5000000) "
    "SELECT count(*) FROM c"
)


class TestDeadline:
    def test_expired_deadline_interrupts_query(self):
        with query_deadline(0):
            with pytest.raises(StorageTimeout) as exc:
                with storage_errors("slow_query"):
                    db.session.execute(SLOW_QUERY).scalar()
        assert exc.value.status_code == 503
        assert "interrupted" in exc.value.detail

    def test_session_usable_after_timeout(self):
        with query_deadline(0):
            with pytest.raises(StorageTimeout):
                with storage_errors("slow_query"):
                    db.session.execute(SLOW_QUERY).scalar()
        assert db.session.execute(text("SELECT 1")).scalar() == 1

    def test_query_deadline_restores_previous(self):
        assert deadline_exceeded() is False
        with query_deadline(0):
            assert deadline_exceeded() is True
            with query_deadline(None):
                assert deadline_exceeded() is False
            assert deadline_exceeded() is True
        assert deadline_exceeded() is False

    def test_no_deadline_outside_requests(self, client, alice):
        _, headers = alice
        client.get("/api/ventures", headers=headers)
        assert deadline_exceeded() is False


class TestErrorTranslation:
    @pytest.mark.parametrize("message", [
        "interrupted",
        "database is locked",
        "database table is locked",
    ])
    def test_timeout_markers(self, message):
        exc = OperationalError("SELECT 1", {}, sqlite3.OperationalError(message))
        assert is_timeout(exc) is True

    def test_other_errors_are_not_timeouts(self):
        assert is_timeout(OperationalError("SELECT 1", {}, sqlite3.OperationalError("no such table: x"))) is False
        assert is_timeout(IntegrityError("INSERT", {}, sqlite3.IntegrityError("UNIQUE"))) is False

    def test_generic_failure_becomes_storage_error(self):
        with pytest.raises(StorageError) as exc:
            with storage_errors("bad_sql"):
                db.session.execute(text("SELECT * FROM no_such_table"))
        assert not isinstance(exc.value, StorageTimeout)
        assert exc.value.status_code == 500
        assert "no_such_table" in exc.value.detail
        assert exc.value.public_message(False) == "Database error"
        assert exc.value.public_message(True).startswith("Database error: ")


class TestErrorResponses:
    def _fail_with(self, monkeypatch, error):
        def boom(*args, **kwargs):
            raise error
        monkeypatch.setattr(venture_service, "list_ventures", boom)

    def test_detail_hidden_when_not_exposed(self, app, client, alice, monkeypatch):
        _, headers = alice
        monkeypatch.setitem(app.config, "EXPOSE_ERROR_DETAILS", False)
        self._fail_with(monkeypatch, StorageError("list_ventures", detail="disk I/O error"))
        res = client.get("/api/ventures", headers=headers)
        assert res.status_code == 500
        assert res.get_json() == {"success": False, "error": "Database error", "code": "ERR_DATABASE"}

    def test_detail_shown_when_exposed(self, app, client, alice, monkeypatch):
        _, headers = alice
        monkeypatch.setitem(app.config, "EXPOSE_ERROR_DETAILS", True)
        self._fail_with(monkeypatch, StorageError("list_ventures", detail="disk I/O error"))
        res = client.get("/api/ventures", headers=headers)
        assert res.status_code == 500
        assert res.get_json()["error"] == "Database error: disk I/O error"

    def test_timeout_is_503(self, client, alice, monkeypatch):
        _, headers = alice
        self._fail_with(monkeypatch, StorageTimeout("list_ventures", detail="interrupted"))
        res = client.get("/api/ventures", headers=headers)
        assert res.status_code == 503
        assert res.get_json()["code"] == "ERR_TIMEOUT"


class TestDatabaseFile:
    def test_memory_database_has_no_file(self):
        assert sqlite_file_path("sqlite:///:memory:") is None
        assert sqlite_file_path("sqlite://") is None

    def test_prepare_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "app.db"
        assert prepare_database_file(f"sqlite:///{path}") == str(path)
        assert path.parent.is_dir()

    def test_restrict_sets_owner_only_mode(self, tmp_path):
        path = tmp_path / "app.db"
        path.write_bytes(b"")
        os.chmod(path, 0o644)
        restrict_database_file(f"sqlite:///{path}")
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    def test_restrict_ignores_missing_file(self, tmp_path):
        restrict_database_file(f"sqlite:///{tmp_path / 'absent.db'}")
        assert not (tmp_path / "absent.db").exists()
