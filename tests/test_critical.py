"""
Critical Integration Tests for Newsdesk
======================================

Focused tests covering the integration points most likely to break.
Run with: pytest tests/test_critical.py -v

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import os

import pytest

from flask import Flask

from newsdesk import Newsdesk, create_app
from newsdesk.core.logging_service import LoggingService


# ---------------------------------------------------------------------------
# 1. Framework initialisation -- Newsdesk(app) does not raise
# ---------------------------------------------------------------------------

def test_framework_initialisation(app_config):
    """Newsdesk(app) boots without errors and stores itself on the app."""
    app = Flask(__name__)
    app.config["TESTING"] = True

    newsdesk = Newsdesk(app, app_config)

    assert "newsdesk" in app.extensions
    assert app.extensions["newsdesk"] is newsdesk
    assert newsdesk.repository is not None


def test_init_app_later(app_config):
    """The extension also supports the deferred init_app pattern."""
    newsdesk = Newsdesk(config=app_config)
    app = Flask(__name__)

    newsdesk.init_app(app)

    assert app.extensions["newsdesk"] is newsdesk


# ---------------------------------------------------------------------------
# 2. Config resolution -- explicit config beats app.config beats environment
# ---------------------------------------------------------------------------

def test_config_precedence(tmp_dir):
    app = Flask(__name__)
    app.config["ADMIN_USER"] = "from-app-config"
    app.config["ADMIN_PASSWORD"] = "from-app-config"

    Newsdesk(app, {"ADMIN_PASSWORD": "from-extension", "DATA_PATH": os.path.join(tmp_dir, "d.json"), "LOG_DB": ""})

    assert app.config["ADMIN_USER"] == "from-app-config"
    assert app.config["ADMIN_PASSWORD"] == "from-extension"


def test_cache_cap_below_one_refuses_to_boot(app_config):
    app = Flask(__name__)

    with pytest.raises(ValueError, match="max_cache_items"):
        Newsdesk(app, dict(app_config, NEWS_CACHE_MAX_ITEMS=0))
    assert app.config["JWT_SECRET"]


# ---------------------------------------------------------------------------
# 3. Blueprint registration -- every module is registered
# ---------------------------------------------------------------------------

EXPECTED_MODULES = ["ops", "auth", "news", "upload", "ops_admin"]


def test_all_blueprints_registered(app):
    registered = app.extensions["newsdesk"].get_registered_modules()

    assert registered == EXPECTED_MODULES


def test_expected_routes(app):
    rules = {}
    for rule in app.url_map.iter_rules():
        rules.setdefault(rule.rule, set()).update(rule.methods)

    assert "GET" in rules["/health"]
    assert "POST" in rules["/login"]
    assert {"GET", "POST"} <= rules["/news"]
    assert "POST" in rules["/upload"]
    assert "GET" in rules["/ops/errors"]


# ---------------------------------------------------------------------------
# 4. Health endpoint
# ---------------------------------------------------------------------------

def test_health_endpoint(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "status": "up"}


# ---------------------------------------------------------------------------
# 5. Unmatched routes -- JSON 404, including wrong methods
# ---------------------------------------------------------------------------

def test_unknown_path_is_json_404(client):
    response = client.get("/bogus")

    assert response.status_code == 404
    assert response.get_json() == {"ok": False, "error": "Not found"}


def test_wrong_method_is_json_404(client):
    response = client.get("/login")

    assert response.status_code == 404
    assert response.get_json() == {"ok": False, "error": "Not found"}


# ---------------------------------------------------------------------------
# 6. CORS -- preflight is 204 with headers, normal responses carry the origin
# ---------------------------------------------------------------------------

def test_options_preflight_returns_204(client):
    response = client.options(
        "/news",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type, Authorization",
        },
    )

    assert response.status_code == 204
    assert response.data == b""
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    allowed_methods = response.headers["Access-Control-Allow-Methods"]
    assert "POST" in allowed_methods and "GET" in allowed_methods
    allowed_headers = response.headers["Access-Control-Allow-Headers"].lower()
    assert "authorization" in allowed_headers and "content-type" in allowed_headers


def test_options_on_unknown_path_is_204(client):
    response = client.options("/anything/at/all")

    assert response.status_code == 204


def test_cors_header_on_regular_response(client):
    response = client.get("/news", headers={"Origin": "https://example.com"})

    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_cors_header_on_error_response(client):
    response = client.get("/bogus", headers={"Origin": "https://example.com"})

    assert response.headers["Access-Control-Allow-Origin"] == "*"


# ---------------------------------------------------------------------------
# 7. API prefix -- routes mount under API_PREFIX
# ---------------------------------------------------------------------------

def test_api_prefix(app_config):
    app = Flask(__name__)
    Newsdesk(app, dict(app_config, API_PREFIX="/api"))
    client = app.test_client()

    assert client.get("/api/health").get_json() == {"ok": True, "status": "up"}
    assert client.get("/api/news").status_code == 200
    assert client.get("/health").status_code == 404


# ---------------------------------------------------------------------------
# 8. Unhandled errors -- logged and rendered as JSON 500
# ---------------------------------------------------------------------------

def test_unhandled_exception_is_json_500(app, client):
    @app.route("/explode")
    def explode():
        raise RuntimeError("boom")

    response = client.get("/explode")

    assert response.status_code == 500
    assert response.get_json() == {"ok": False, "error": "Internal server error"}
    errors = LoggingService.recent(level="ERROR")
    assert any("RuntimeError" in e["message"] for e in errors)


# ---------------------------------------------------------------------------
# 9. Default secret -- booting with the development secret is flagged
# ---------------------------------------------------------------------------

def test_default_secret_warning(tmp_dir):
    log_db = os.path.join(tmp_dir, "boot.db")

    create_app({
        "JWT_SECRET": "dev_secret_change_me",
        "DATA_PATH": os.path.join(tmp_dir, "d.json"),
        "LOG_DB": log_db,
    })

    warnings = LoggingService.recent(level="WARNING")
    assert any("JWT_SECRET" in e["message"] for e in warnings)


# ---------------------------------------------------------------------------
# 10. Error feed -- admin-only view over stored ERROR logs
# ---------------------------------------------------------------------------

def test_error_feed_requires_token(client):
    response = client.get("/ops/errors")

    assert response.status_code == 401
    assert response.get_json() == {"ok": False, "error": "Unauthorized"}


def test_error_feed_lists_recent_errors(app, client):
    @app.route("/explode")
    def explode():
        raise RuntimeError("boom")

    login = client.post("/login", json={"username": "admin", "password": "password"})
    auth_headers = {"Authorization": f"Bearer {login.get_json()['token']}"}

    client.get("/explode")
    client.get("/explode")
    LoggingService.warning("news", "not an error")

    response = client.get("/ops/errors", headers=auth_headers)

    assert response.status_code == 200
    body = response.get_json()
    assert body["ok"] is True
    assert body["count"] == 2
    assert all(e["level"] == "ERROR" for e in body["errors"])
    assert "RuntimeError" in body["errors"][0]["message"]

    limited = client.get("/ops/errors?limit=1", headers=auth_headers).get_json()
    assert limited["count"] == 1


# ---------------------------------------------------------------------------
# 11. Log isolation -- each app writes to its own LOG_DB
# ---------------------------------------------------------------------------

def test_logs_follow_the_active_app(tmp_dir):
    first_db = os.path.join(tmp_dir, "first.db")
    second_db = os.path.join(tmp_dir, "second.db")
    first = create_app({"JWT_SECRET": "first-app-secret-value", "LOG_DB": first_db,
                        "DATA_PATH": os.path.join(tmp_dir, "first.json")})
    second = create_app({"JWT_SECRET": "second-app-secret-value", "LOG_DB": second_db,
                         "DATA_PATH": os.path.join(tmp_dir, "second.json")})

    with first.app_context():
        LoggingService.info("app", "logged by first")
    with second.app_context():
        LoggingService.info("app", "logged by second")

    with first.app_context():
        first_messages = [e["message"] for e in LoggingService.recent()]
    with second.app_context():
        second_messages = [e["message"] for e in LoggingService.recent()]

    assert "logged by first" in first_messages
    assert "logged by second" not in first_messages
    assert "logged by second" in second_messages
    assert "logged by first" not in second_messages
