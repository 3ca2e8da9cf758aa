"""
Fixture condivise: app Flask su un database SQLite temporaneo, helper per
l'API e una sessione compatibile con requests che inoltra le chiamate di
ApiClient al test client.
"""

from urllib.parse import urlsplit

import pytest

from config import TestConfig
from znote import create_app
from znote.extensions import db


@pytest.fixture
def app(tmp_path):
    class _Config(TestConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'znote-test.db'}"

    app = create_app(_Config)
    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


def register(client, email="alice@example.com", password="s3cret-pass", name=None):
    response = client.post(
        "/api/auth/register", json={"email": email, "password": password, "name": name}
    )
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client):
    data = register(client, "alice@example.com", "alice-pass", "Alice")
    return {"user": data["user"], "token": data["token"], "headers": bearer(data["token"])}


@pytest.fixture
def bob(client):
    data = register(client, "bob@example.com", "bob-pass", "Bob")
    return {"user": data["user"], "token": data["token"], "headers": bearer(data["token"])}


class _FlaskResponse:
    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code

    def json(self):
        data = self._response.get_json(silent=True)
        if data is None:
            raise ValueError("Response body is not JSON")
        return data


class FlaskSession:
    """Sostituisce requests.Session inoltrando ogni chiamata al test client Flask."""

    def __init__(self, test_client):
        self.test_client = test_client
        self.calls = []

    def request(self, method, url, json=None, params=None, headers=None, timeout=None):
        path = urlsplit(url).path
        self.calls.append((method, path))
        response = self.test_client.open(
            path, method=method, json=json, query_string=params, headers=headers
        )
        return _FlaskResponse(response)


API_URL = "http://testserver/api"


@pytest.fixture
def flask_session(client):
    return FlaskSession(client)
