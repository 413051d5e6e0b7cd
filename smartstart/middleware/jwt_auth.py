"""
JWT Auth Middleware — verifies the bearer token on every protected API route.

Public routes (no token): /api/health, /api/auth/register, /api/auth/login.
Everything else under /api/ requires ``Authorization: Bearer <token>``:

  - header missing / not Bearer   →  AuthError 401 "Access token required"
  - bad signature / expired token →  AuthError 403 "Invalid token"
  - valid token                   →  g.current_user = decoded claims

Unmatched paths are left alone so they fall through to the 404 handler.
"""

from flask import g, request

from smartstart.services.jwt_service import bearer_token, verify_token

# Paths that skip JWT auth entirely
PUBLIC_PATHS = frozenset({
    "/api/health",
    "/api/auth/register",
    "/api/auth/login",
})


def init_jwt_middleware(app):
    """Register JWT middleware as a before_request hook."""

    @app.before_request
    def _jwt_auth():
        g.current_user = None

        path = request.path.rstrip("/") or "/"
        if not path.startswith("/api/") or path in PUBLIC_PATHS:
            return
        if request.method == "OPTIONS":
            return  # CORS preflight
        if request.url_rule is None:
            return  # unmatched route → 404 / 405 handler

        token = bearer_token(request.headers.get("Authorization"))
        g.current_user = verify_token(token)


def current_user_id() -> int:
    """Authenticated user id for the current request."""
    return g.current_user["id"]
