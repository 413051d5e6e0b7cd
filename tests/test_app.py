"""
App-level tests: health probe, JSON envelope for framework errors,
request guards and response headers.
"""

from smartstart.blueprints import limit_arg
from smartstart.utils.errors import E


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is True
    assert body["data"]["status"] == "healthy"
    assert body["data"]["database"]["status"] == "ok"
    assert body["data"]["timestamp"]


def test_health_needs_no_token(client):
    assert client.get("/api/health", headers={"Authorization": "Bearer junk"}).status_code == 200


def test_unknown_route_is_enveloped_404(client):
    res = client.get("/api/does-not-exist")
    assert res.status_code == 404
    assert res.get_json() == {"success": False, "error": "Not Found", "code": E.NOT_FOUND}


def test_wrong_method_is_405(client):
    res = client.delete("/api/health")
    assert res.status_code == 405
    assert res.get_json()["code"] == E.METHOD


def test_non_json_body_is_415(client):
    res = client.post("/api/auth/login", data="email=a&password=b",
                      content_type="application/x-www-form-urlencoded")
    assert res.status_code == 415
    assert res.get_json()["code"] == E.UNSUPPORTED_MEDIA


def test_request_id_headers(client):
    res = client.get("/api/health", headers={"X-Request-ID": "req-123"})
    assert res.headers["X-Request-ID"] == "req-123"
    assert float(res.headers["X-Request-Duration-Ms"]) >= 0

    generated = client.get("/api/health").headers["X-Request-ID"]
    assert len(generated) == 12


def test_unhandled_error_is_enveloped_500(app, client, alice, monkeypatch):
    from smartstart.services import dashboard_service

    def boom(user_id):
        raise RuntimeError("kaboom")

    _, headers = alice
    monkeypatch.setattr(dashboard_service, "get_dashboard_stats", boom)
    monkeypatch.setitem(app.config, "EXPOSE_ERROR_DETAILS", False)
    monkeypatch.setitem(app.config, "PROPAGATE_EXCEPTIONS", False)
    res = client.get("/api/dashboard/stats", headers=headers)
    assert res.status_code == 500
    assert res.get_json() == {"success": False, "error": "Internal server error", "code": E.INTERNAL}


def test_limit_arg(app):
    cases = {"": 50, "?limit=7": 7, "?limit=x": 50, "?limit=0": 1, "?limit=999": 200}
    for query, expected in cases.items():
        with app.test_request_context(f"/api/audit-trails{query}"):
            assert limit_arg() == expected


def test_rate_limits_wired_to_auth_blueprint(app, monkeypatch):
    from unittest.mock import MagicMock

    from smartstart.middleware.rate_limiter import init_rate_limits

    limiter = MagicMock()
    monkeypatch.setitem(app.config, "RATELIMIT_ENABLED", True)
    init_rate_limits(app, limiter)
    limiter.limit.assert_called_once_with("10/minute")
    limiter.limit.return_value.assert_called_once_with(app.blueprints["auth_bp"])
    limiter.exempt.assert_called_once_with(app.blueprints["health_bp"])


def test_rate_limits_skipped_in_testing(app):
    from unittest.mock import MagicMock

    from smartstart.middleware.rate_limiter import init_rate_limits

    limiter = MagicMock()
    init_rate_limits(app, limiter)
    limiter.limit.assert_not_called()
