import pytest
from fastapi.testclient import TestClient

from kcnotes.config import Settings
from kcnotes.main import create_app

SECRET = "dev-secret-for-tests"


@pytest.fixture()
def settings(tmp_path):
    # one database file per test
    return Settings(secret=SECRET, database_url=str(tmp_path / "notes.db"))


@pytest.fixture()
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture()
def services(client):
    return client.app.state.services


@pytest.fixture()
def signup(client):
    def _signup(username="userA", password="StrongPassw0rd"):
        return client.post("/auth/signup", json={"username": username, "password": password})

    return _signup


@pytest.fixture()
def auth_headers(signup):
    def _headers(username="userA", password="StrongPassw0rd"):
        r = signup(username, password)
        assert r.status_code == 201
        return {"Authorization": f"Bearer {r.json()['data']['token']}"}

    return _headers
