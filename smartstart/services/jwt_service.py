"""
JWT Service — token generation and verification.

Access token:  24 hours (configurable via JWT_ACCESS_EXPIRES)
Algorithm:     HS256

Token payload:
{
    "id": <user_id>,
    "email": <email>,
    "firstName": <first name>,
    "lastName": <last name>,
    "iat": <issued_at>,
    "exp": <expires_at>
}
"""

from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app

from smartstart.core.exceptions import AuthError


# ─── Defaults ────────────────────────────────────────────────
DEFAULT_ACCESS_EXPIRES = 86400     # 24 hours
ALGORITHM = "HS256"

_CLAIM_KEYS = ("id", "email", "firstName", "lastName")


def _get_secret():
    """Get the JWT secret key from app config."""
    return current_app.config.get("JWT_SECRET_KEY") or current_app.config["SECRET_KEY"]


def _get_access_expires():
    return current_app.config.get("JWT_ACCESS_EXPIRES", DEFAULT_ACCESS_EXPIRES)


# ═══════════════════════════════════════════════════════════════
# Token Generation
# ═══════════════════════════════════════════════════════════════
def generate_access_token(claims: dict) -> str:
    """Sign an access token carrying the user's identity claims."""
    now = datetime.now(timezone.utc)
    payload = {key: claims[key] for key in _CLAIM_KEYS}
    payload["iat"] = now
    payload["exp"] = now + timedelta(seconds=_get_access_expires())
    return jwt.encode(payload, _get_secret(), algorithm=ALGORITHM)


# ═══════════════════════════════════════════════════════════════
# Token Verification
# ═══════════════════════════════════════════════════════════════
def decode_access_token(token: str) -> dict:
    """
    Decode and verify a JWT token.

    Returns the payload dict on success.
    Raises jwt.exceptions on failure (ExpiredSignatureError, InvalidTokenError, etc.)
    """
    return jwt.decode(
        token,
        _get_secret(),
        algorithms=[ALGORITHM],
        options={"require": ["exp", "iat"]},
    )


def verify_token(token: str | None) -> dict:
    """
    Verify a bearer token and return its claims.

    Raises AuthError(401) when no token is supplied and AuthError(403) when
    the token fails signature, structure or expiry checks.
    """
    if not token:
        raise AuthError("Access token required", 401)
    try:
        payload = decode_access_token(token)
    except jwt.InvalidTokenError:
        raise AuthError("Invalid token", 403)
    if payload.get("id") is None:
        raise AuthError("Invalid token", 403)
    return payload


def bearer_token(auth_header: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    return auth_header[7:].strip() or None
