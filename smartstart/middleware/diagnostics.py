"""
Startup diagnostics — runs once when the Flask app starts.

Checks critical dependencies and logs a summary banner.
"""

import logging
import os
import sys

from flask import Flask

from smartstart.models import db
from smartstart.services.storage import sqlite_file_path

logger = logging.getLogger(__name__)


def run_startup_diagnostics(app: Flask):
    """Run diagnostic checks during app startup (inside app context)."""
    if app.config.get("TESTING"):
        return  # skip during tests for speed

    issues: list[str] = []

    with app.app_context():
        py = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"

        # ── Database connectivity ────────────────────────────────────
        db_status = "ok"
        db_uri = str(app.config.get("SQLALCHEMY_DATABASE_URI", ""))
        db_path = sqlite_file_path(db_uri) or db_uri.split("://", 1)[0]
        try:
            db.session.execute(db.text("SELECT 1"))
        except Exception as exc:
            db_status = "FAILED"
            issues.append(f"Database unreachable: {exc}")

        try:
            from sqlalchemy import inspect as sa_inspect
            table_count = len(sa_inspect(db.engine).get_table_names())
        except Exception:
            table_count = "?"

        # ── Auth ─────────────────────────────────────────────────────
        if not os.getenv("JWT_SECRET"):
            issues.append("JWT_SECRET not set — tokens are signed with a per-process dev secret")

        limiter = "ENABLED" if app.config.get("RATELIMIT_ENABLED") else "DISABLED"

        banner = f"""
╔══════════════════════════════════════════════════════════════╗
║  SmartStart API — Startup Diagnostics                        ║
╠══════════════════════════════════════════════════════════════╣
║  Python      : {py:<46s}║
║  Debug       : {str(app.debug):<46s}║
║  Database    : {db_status:<46s}║
║  DB file     : {db_path[-46:]:<46s}║
║  Tables      : {str(table_count):<46s}║
║  Timeout     : {str(app.config.get('STORAGE_TIMEOUT_SECONDS')) + 's':<46s}║
║  Rate limit  : {limiter:<46s}║
╚══════════════════════════════════════════════════════════════╝"""
        logger.info(banner)

        if issues:
            logger.warning("Startup issues detected:")
            for issue in issues:
                logger.warning("  ⚠ %s", issue)
        else:
            logger.info("✅ All startup checks passed")
