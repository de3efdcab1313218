import os
import shutil
import tempfile

import pytest
from flask import Flask

from newsdesk import Newsdesk


@pytest.fixture
def tmp_dir():
    """Temporary directory for the news document, logs and uploads."""
    d = tempfile.mkdtemp(prefix="newsdesk-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app_config(tmp_dir):
    return {
        "JWT_SECRET": "test-secret-0123456789abcdef",
        "ADMIN_USER": "admin",
        "ADMIN_PASSWORD": "password",
        "API_PREFIX": "",
        "DATA_PATH": os.path.join(tmp_dir, "data.json"),
        "LOG_DB": os.path.join(tmp_dir, "logs.db"),
        "NEWS_WRITE_ASYNC": False,
        "NEWS_CACHE_MAX_ITEMS": None,
        "STORAGE_BACKEND": "local",
        "UPLOAD_SUBFOLDER": "uploads",
    }


@pytest.fixture
def app(tmp_dir, app_config):
    """Fully initialised Flask app with every Newsdesk module registered."""
    app = Flask(__name__, static_folder=os.path.join(tmp_dir, "static"))
    app.config["TESTING"] = True
    Newsdesk(app, app_config)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def repository(app):
    return app.extensions["newsdesk"].repository


@pytest.fixture
def token(client):
    response = client.post("/login", json={"username": "admin", "password": "password"})
    assert response.status_code == 200
    return response.get_json()["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
