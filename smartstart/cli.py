"""
Flask CLI commands.

    flask --app smartstart security-check
    flask --app smartstart seed-demo
"""

import logging

import click

from smartstart.core.exceptions import ConflictError
from smartstart.services import auth_service, document_service, venture_service
from smartstart.services.security_audit import run_security_checks

logger = logging.getLogger(__name__)

DEMO_EMAIL = "founder@smartstart.dev"
DEMO_PASSWORD = "demo-password-123"

DEMO_VENTURES = (
    {"name": "GreenLoop", "description": "Circular packaging marketplace",
     "stage": "discovery", "progress": 15, "industry": "Sustainability"},
    {"name": "LedgerLite", "description": "Bookkeeping for micro-businesses",
     "stage": "development", "progress": 55, "valuation": 250000.0, "industry": "Fintech"},
    {"name": "MediMatch", "description": "Clinic scheduling assistant",
     "stage": "launch", "progress": 90, "valuation": 1200000.0, "industry": "Health"},
)


def register_cli(app):
    """Attach the project's CLI commands to *app*."""

    @app.cli.command("security-check")
    def security_check_cmd():
        """Run the database security checks; exit 1 on any failure."""
        results = run_security_checks()
        for r in results:
            mark = "PASS" if r.passed else "FAIL"
            click.echo(f"[{mark}] {r.name}: {r.detail}")
        failed = [r for r in results if not r.passed]
        click.echo(f"{len(results) - len(failed)}/{len(results)} checks passed")
        if failed:
            raise SystemExit(1)

    @app.cli.command("seed-demo")
    def seed_demo_cmd():
        """Create a demo founder with ventures, a document and audit history."""
        try:
            session = auth_service.register(DEMO_EMAIL, DEMO_PASSWORD, "Demo", "Founder")
        except ConflictError:
            click.echo(f"Demo user {DEMO_EMAIL} already exists; nothing to do.")
            return
        user_id = session["user"]["id"]
        for venture in DEMO_VENTURES:
            venture_service.create_venture(user_id, venture)
        doc = document_service.create_document(
            user_id, {"name": "Founders Agreement", "type": "legal", "content": "Draft terms"},
        )
        document_service.sign_document(user_id, doc["id"], "Demo Founder")
        logger.info("Seeded demo data for user %s", user_id)
        click.echo(f"Seeded demo user {DEMO_EMAIL} / {DEMO_PASSWORD} with {len(DEMO_VENTURES)} ventures.")
