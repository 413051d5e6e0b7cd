"""
Database security check tests (service + ``flask security-check`` CLI).
"""

import pytest

from smartstart.cli import DEMO_EMAIL, DEMO_VENTURES
from smartstart.models import db
from smartstart.models.audit import AuditEntry
from smartstart.models.auth import User
from smartstart.models.venture import Venture
from smartstart.services.security_audit import (
    REQUIRED_TABLES,
    check_injection_resistance,
    check_password_hashes,
    check_schema,
    run_security_checks,
)


def _results(results):
    return {r.name: r.passed for r in results}


class TestChecks:
    def test_clean_database_passes(self, client, alice):
        _, headers = alice
        client.post("/api/ventures", json={"name": "Acme"}, headers=headers)
        results = _results(run_security_checks())
        assert results == {
            "file_permissions": True,
            "password_hashes": True,
            "injection_resistance": True,
            "schema": True,
            "audit_integrity": True,
        }

    def test_plaintext_password_fails(self, alice):
        db.session.add(User(email="plain@x.com", password_hash="hunter2", first_name="P", last_name="T"))
        db.session.commit()
        result = check_password_hashes()
        assert result.passed is False
        assert "weak or plain" in result.detail

    def test_injection_check_leaves_schema_intact(self, alice):
        assert check_injection_resistance().passed is True
        assert check_schema().passed is True
        assert User.query.count() == 1

    def test_missing_table_fails_schema(self):
        db.session.execute(db.text("DROP TABLE signatures"))
        db.session.commit()
        result = check_schema()
        assert result.passed is False
        assert "signatures" in result.detail

    def test_tampered_audit_fails(self, client, alice):
        _, headers = alice
        client.post("/api/ventures", json={"name": "Acme"}, headers=headers)
        entry = AuditEntry.query.first()
        entry.action = "venture.deleted"
        db.session.commit()
        assert _results(run_security_checks())["audit_integrity"] is False

    def test_required_tables(self):
        assert set(REQUIRED_TABLES) == {"users", "ventures", "documents", "signatures", "audit_trails"}


class TestCli:
    @pytest.fixture()
    def runner(self, app):
        return app.test_cli_runner()

    def test_security_check_passes(self, runner, alice):
        result = runner.invoke(args=["security-check"])
        assert result.exit_code == 0, result.output
        assert "[PASS] password_hashes" in result.output
        assert "5/5 checks passed" in result.output

    def test_security_check_fails_on_plain_password(self, runner):
        db.session.add(User(email="plain@x.com", password_hash="hunter2", first_name="P", last_name="T"))
        db.session.commit()
        result = runner.invoke(args=["security-check"])
        assert result.exit_code == 1
        assert "[FAIL] password_hashes" in result.output

    def test_seed_demo(self, runner):
        result = runner.invoke(args=["seed-demo"])
        assert result.exit_code == 0, result.output
        user = User.query.filter_by(email=DEMO_EMAIL).one()
        assert Venture.query.filter_by(user_id=user.id).count() == len(DEMO_VENTURES)

        again = runner.invoke(args=["seed-demo"])
        assert again.exit_code == 0
        assert "already exists" in again.output
        assert User.query.filter_by(email=DEMO_EMAIL).count() == 1
