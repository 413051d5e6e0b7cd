"""Standardised JSON envelope responses.

Every API response is ``{"success": bool, "data": ..., "error": ...}``.

Usage
-----
    from smartstart.utils.errors import api_error, api_success, E

    return api_success({"token": token})
    return api_error("Venture not found", E.NOT_FOUND)
"""

from __future__ import annotations

from flask import jsonify


# ── Error code constants ──────────────────────────────────────────────
class E:
    """Machine-readable error code constants."""

    # HTTP 400
    VALIDATION = "ERR_VALIDATION"
    CONFLICT = "ERR_CONFLICT"

    # HTTP 401 / 403
    AUTH = "ERR_AUTH"

    # HTTP 404 / 405
    NOT_FOUND = "ERR_NOT_FOUND"
    METHOD = "ERR_METHOD"

    # HTTP 413 / 415 / 429
    TOO_LARGE = "ERR_TOO_LARGE"
    UNSUPPORTED_MEDIA = "ERR_UNSUPPORTED_MEDIA"
    RATE_LIMIT = "ERR_RATE_LIMIT"

    # HTTP 500 / 503
    DATABASE = "ERR_DATABASE"
    TIMEOUT = "ERR_TIMEOUT"
    INTERNAL = "ERR_INTERNAL"


# ── Default HTTP status mapping ───────────────────────────────────────
_DEFAULT_STATUS: dict[str, int] = {
    E.VALIDATION: 400,
    E.CONFLICT: 400,
    E.AUTH: 401,
    E.NOT_FOUND: 404,
    E.METHOD: 405,
    E.TOO_LARGE: 413,
    E.UNSUPPORTED_MEDIA: 415,
    E.RATE_LIMIT: 429,
    E.DATABASE: 500,
    E.TIMEOUT: 503,
    E.INTERNAL: 500,
}


def api_success(data=None, status: int = 200):
    """Return ``(jsonify({"success": True, "data": data}), status)``."""
    return jsonify({"success": True, "data": data}), status


def api_error(
    message: str,
    code: str = E.INTERNAL,
    *,
    status: int | None = None,
    details: dict | None = None,
):
    """Return a standard JSON error envelope.

    Parameters
    ----------
    message : str
        Human-readable explanation, shown to the client as ``error``.
    code : str
        Machine-readable error code (use ``E.*`` constants).
    status : int, optional
        HTTP status override.  Falls back to ``_DEFAULT_STATUS[code]``,
        then to ``400``.
    details : dict, optional
        Field-level validation breakdown.

    Returns
    -------
    tuple[Response, int]
        ``(jsonify(body), http_status)`` – drop-in for Flask views.
    """

    http_status = status or _DEFAULT_STATUS.get(code, 400)

    body: dict = {
        "success": False,
        "error": message,
        "code": code,
    }
    if details:
        body["details"] = details

    return jsonify(body), http_status
