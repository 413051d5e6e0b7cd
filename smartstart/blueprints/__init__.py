"""
SmartStart API
Blueprint helpers shared by the route modules.
"""

from flask import request


def json_body() -> dict:
    """Request JSON object, or an empty dict for missing/invalid/non-object bodies."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def limit_arg(default_limit=50, max_limit=200) -> int:
    """Parse the ``limit`` query param.

    Falls back to ``default_limit`` for missing or non-integer values and
    clamps to ``[1, max_limit]``.
    """
    try:
        limit = int(request.args.get("limit", default_limit))
    except (ValueError, TypeError):
        limit = default_limit
    return max(1, min(limit, max_limit))
