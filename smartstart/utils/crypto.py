"""
Crypto utilities — bcrypt password hashing and audit digests.

bcrypt only reads the first 72 bytes of a password; both helpers truncate
the UTF-8 encoding to that length so longer passwords hash and verify
instead of raising.
"""

import hashlib

import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt input limit (bytes)
BCRYPT_MAX_BYTES = 72


def _password_bytes(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain_password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a plain-text password with bcrypt (salted, adaptive cost)."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(plain_password), salt).decode("utf-8")


def verify_password(plain_password: str, password_hash: str | None) -> bool:
    """Verify a plain-text password against its bcrypt hash."""
    if not password_hash or not password_hash.startswith(("$2b$", "$2a$", "$2y$")):
        return False
    return bcrypt.checkpw(
        _password_bytes(plain_password),
        password_hash.encode("utf-8"),
    )


def sha256_hex(*parts) -> str:
    """SHA-256 over the ``|``-joined string form of *parts*."""
    raw = "|".join("" if p is None else str(p) for p in parts)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()
