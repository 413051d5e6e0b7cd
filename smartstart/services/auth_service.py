"""
Auth Service — registration and credential checks.

Unknown email, wrong password and inactive account all fail with the same
``AuthError("Invalid credentials")`` so responses never reveal which
emails are registered.
"""

import logging

from email_validator import EmailNotValidError, validate_email
from flask import current_app
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from smartstart.core.exceptions import AuthError, ConflictError, ValidationError
from smartstart.models import db
from smartstart.models.auth import User
from smartstart.services.jwt_service import generate_access_token
from smartstart.services.storage import storage_errors
from smartstart.utils.crypto import DEFAULT_ROUNDS, hash_password, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"

_REGISTER_FIELDS = ("email", "password", "firstName", "lastName")


def _clean(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def _session_payload(user: User) -> dict:
    return {
        "user": user.to_dict(),
        "token": generate_access_token(user.token_claims()),
    }


def get_user_by_email(email: str) -> User | None:
    """Exact, case-sensitive email lookup."""
    with storage_errors("get_user_by_email"):
        return db.session.execute(
            select(User).where(User.email == email)
        ).scalar_one_or_none()


def get_user_by_id(user_id: int) -> User | None:
    with storage_errors("get_user_by_id"):
        return db.session.get(User, user_id)


def register(email, password, first_name, last_name) -> dict:
    """Create an account and return ``{"user": ..., "token": ...}``."""
    values = {
        "email": _clean(email),
        # Passwords are taken verbatim; only emptiness is checked
        "password": password if isinstance(password, str) else "",
        "firstName": _clean(first_name),
        "lastName": _clean(last_name),
    }
    missing = {f: "required" for f in _REGISTER_FIELDS if not values[f].strip()}
    if missing:
        raise ValidationError("All fields are required", details=missing)

    try:
        validate_email(values["email"], check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError(f"Invalid email: {e}", details={"email": "invalid"})

    if get_user_by_email(values["email"]) is not None:
        raise ConflictError("User", "email", values["email"])

    rounds = current_app.config.get("BCRYPT_ROUNDS", DEFAULT_ROUNDS)
    user = User(
        email=values["email"],
        password_hash=hash_password(values["password"], rounds=rounds),
        first_name=values["firstName"],
        last_name=values["lastName"],
    )
    db.session.add(user)
    with storage_errors("register"):
        try:
            db.session.commit()
        except IntegrityError:
            # Lost a race against a concurrent insert of the same email
            db.session.rollback()
            raise ConflictError("User", "email", values["email"])

    logger.info("Registered user id=%s", user.id)
    return _session_payload(user)


def login(email, password) -> dict:
    """Check credentials and return ``{"user": ..., "token": ...}``."""
    email = _clean(email)
    password = password if isinstance(password, str) else ""
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = get_user_by_email(email)
    if user is None or not user.is_active or not verify_password(password, user.password_hash):
        logger.info("Failed login attempt")
        raise AuthError(INVALID_CREDENTIALS, 401)

    return _session_payload(user)
