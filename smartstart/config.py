"""
SmartStart API
Configuration classes for Flask App Factory.

Usage:
    config_name = os.getenv("APP_ENV", "development")
    app.config.from_object(config[config_name])
"""

import os
import secrets

basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))

_SQLITE_DEV = f"sqlite:///{os.path.join(basedir, 'instance', 'smartstart_dev.db')}"
_SQLITE_PROD = f"sqlite:///{os.path.join(basedir, 'data', 'smartstart.db')}"
_SQLITE_TEST = "sqlite:///:memory:"

# Generate a random key for development; production MUST use a stable env var
_DEV_SECRET = secrets.token_hex(32)

# Storage engine busy timeout / request deadline (seconds)
_STORAGE_TIMEOUT = float(os.getenv("STORAGE_TIMEOUT_SECONDS", "5"))


class Config:
    """Base configuration shared across all environments."""

    SECRET_KEY = os.getenv("SECRET_KEY", _DEV_SECRET)
    JWT_SECRET_KEY = os.getenv("JWT_SECRET", _DEV_SECRET)
    JWT_ACCESS_EXPIRES = int(os.getenv("JWT_ACCESS_EXPIRES", "86400"))  # 24 hours
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))
    DEBUG = False
    TESTING = False

    # Raw storage/driver messages in error responses
    EXPOSE_ERROR_DETAILS = False

    # SQLAlchemy: one bounded pool over the single SQLite file
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 0,
        "pool_timeout": _STORAGE_TIMEOUT,
        "connect_args": {
            "timeout": _STORAGE_TIMEOUT,
            "check_same_thread": False,
        },
    }
    STORAGE_TIMEOUT_SECONDS = _STORAGE_TIMEOUT

    # CORS
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    # Flask-Limiter (auth endpoints only)
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv("REDIS_URL", "memory://")
    AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "10/minute")


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG = True
    EXPOSE_ERROR_DETAILS = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", _SQLITE_DEV)


class TestingConfig(Config):
    """Testing environment configuration."""

    TESTING = True
    EXPOSE_ERROR_DETAILS = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", _SQLITE_TEST)
    # In-memory SQLite gets a StaticPool from Flask-SQLAlchemy; pool sizing does not apply
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = "test-jwt-secret-0123456789abcdef-smartstart"
    RATELIMIT_ENABLED = False


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", _SQLITE_PROD)
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "")  # Must be set explicitly in production

    def __init__(self):
        if not os.getenv("JWT_SECRET"):
            raise RuntimeError("JWT_SECRET environment variable must be set in production")


# Configuration mapping: environment name -> config class
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}
