"""
SmartStart API
Flask Application Factory.

Usage:
    from smartstart import create_app
    app = create_app()           # defaults to "development"
    app = create_app("testing")  # explicit config
"""

import logging
import os

from flask import Flask, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from sqlalchemy import engine as _sa_engine, event as _sa_event
from werkzeug.exceptions import HTTPException

from smartstart.config import config
from smartstart.core.exceptions import SmartStartError
from smartstart.middleware.diagnostics import run_startup_diagnostics
from smartstart.middleware.jwt_auth import init_jwt_middleware
from smartstart.middleware.logging_config import configure_logging
from smartstart.middleware.rate_limiter import init_rate_limits
from smartstart.middleware.timing import init_request_timing
from smartstart.models import db
from smartstart.services.storage import (
    install_connection_guards,
    prepare_database_file,
    restrict_database_file,
)
from smartstart.utils.errors import E, api_error

logger = logging.getLogger(__name__)

# ── SQLite FK enforcement + storage deadline (global engine event) ──────
_sa_event.listen(_sa_engine.Engine, "connect", install_connection_guards)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],                     # auth blueprint only
)

_HTTP_CODES = {
    404: E.NOT_FOUND,
    405: E.METHOD,
    413: E.TOO_LARGE,
    415: E.UNSUPPORTED_MEDIA,
    429: E.RATE_LIMIT,
}


def create_app(config_name=None):
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     One of: "development", "testing", "production".
                     Defaults to APP_ENV env var, or "development" if unset.

    Returns:
        Configured Flask application instance.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "development")

    app = Flask(__name__, instance_relative_config=True)
    # Instantiate so environment checks in config __init__ run
    app.config.from_object(config[config_name]())

    # ── Structured logging (must be first) ───────────────────────────────
    configure_logging(app)

    # ── Extensions ───────────────────────────────────────────────────────
    prepare_database_file(app.config["SQLALCHEMY_DATABASE_URI"])
    db.init_app(app)
    limiter.init_app(app)
    cors_origins = app.config.get("CORS_ORIGINS", "*")
    if cors_origins and cors_origins != "*":
        CORS(app, origins=[o.strip() for o in cors_origins.split(",") if o.strip()])
    else:
        CORS(app)

    # ── Request timing + storage deadline (before auth) ─────────────────
    init_request_timing(app)

    # ── Bearer token verification ───────────────────────────────────────
    init_jwt_middleware(app)

    # ── Request guards (input length + Content-Type) ─────────────────────
    app.config.setdefault("MAX_CONTENT_LENGTH", 2 * 1024 * 1024)  # 2 MB

    @app.before_request
    def _guard_request():
        from flask import abort
        if request.method in ("POST", "PUT", "PATCH") and request.path.startswith("/api/"):
            ct = request.content_type or ""
            if request.get_data(cache=True) and "json" not in ct:
                abort(415, description="Content-Type must be application/json")

    # ── Tables (CREATE IF NOT EXISTS) ────────────────────────────────────
    from smartstart.models import audit as _audit_models        # noqa: F401
    from smartstart.models import auth as _auth_models          # noqa: F401
    from smartstart.models import document as _document_models  # noqa: F401
    from smartstart.models import venture as _venture_models    # noqa: F401

    with app.app_context():
        db.create_all()
        restrict_database_file(app.config["SQLALCHEMY_DATABASE_URI"])

    # ── Blueprints ───────────────────────────────────────────────────────
    from smartstart.blueprints.audit_bp import audit_bp
    from smartstart.blueprints.auth_bp import auth_bp
    from smartstart.blueprints.dashboard_bp import dashboard_bp
    from smartstart.blueprints.document_bp import document_bp
    from smartstart.blueprints.health_bp import health_bp
    from smartstart.blueprints.user_bp import user_bp
    from smartstart.blueprints.venture_bp import venture_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(venture_bp)
    app.register_blueprint(audit_bp)
    app.register_blueprint(document_bp)
    app.register_blueprint(user_bp)

    # ── CLI commands ─────────────────────────────────────────────────────
    from smartstart.cli import register_cli
    register_cli(app)

    # ── Error handlers ───────────────────────────────────────────────────
    @app.errorhandler(SmartStartError)
    def app_error(e):
        expose = app.config.get("EXPOSE_ERROR_DETAILS", False)
        if e.status_code >= 500:
            logger.error("%s on %s %s: %s", type(e).__name__, request.method, request.path,
                         getattr(e, "detail", None) or e.message)
        return api_error(e.public_message(expose), e.code, status=e.status_code,
                         details=getattr(e, "details", None))

    @app.errorhandler(HTTPException)
    def http_error(e):
        if e.code == 429:
            return api_error(f"Too many requests: {e.description}", E.RATE_LIMIT, status=429)
        if e.code is not None and e.code >= 500:
            return _internal_error(e)
        message = e.description if e.code in (413, 415) else e.name
        return api_error(message, _HTTP_CODES.get(e.code, E.INTERNAL), status=e.code)

    @app.errorhandler(500)
    def _internal_error(e):
        original = getattr(e, "original_exception", None) or e
        logger.error("500 error: %s", original, exc_info=original)
        message = "Internal server error"
        if app.config.get("EXPOSE_ERROR_DETAILS", False):
            message = f"{message}: {original}"
        return api_error(message, E.INTERNAL, status=500)

    # ── Startup diagnostics ──────────────────────────────────────────────
    run_startup_diagnostics(app)

    # ── Rate limiting (after blueprints registered) ──────────────────────
    init_rate_limits(app, limiter)

    return app
