import os

os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ["DB_URL"] = "sqlite://"

import pytest
import requests
from fastapi.testclient import TestClient

from slotboard.core.security import create_access_token, hash_password
from slotboard.database import Base, SessionLocal, engine
from slotboard.main import app
from slotboard.models.user import User
from slotboard.services.credentials import create_admin

SUNDAY = "2024-06-09"


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def api(db):
    return TestClient(app)


@pytest.fixture
def admin(db):
    return create_admin(db, "admin", "admin123")


@pytest.fixture
def member(db):
    user = User(username="visitor", password_hash=hash_password("visitor123"), is_admin=False)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": f"Bearer {create_access_token(admin.id, True)}"}


@pytest.fixture
def member_headers(member):
    return {"Authorization": f"Bearer {create_access_token(member.id, False)}"}


class AppTransport:
    """Stessa interfaccia di requests.Session.request, servita dall'app in-process."""

    def __init__(self, test_client: TestClient):
        self.test_client = test_client
        self.calls: list[tuple[str, str]] = []
        # (method, path prefix) -> status forzato
        self.fail: dict[tuple[str, str], int] = {}

    def request(self, method, url, headers=None, timeout=None, json=None):
        self.calls.append((method, url))
        for (m, prefix), code in self.fail.items():
            if m == method and prefix in url:
                return _response(code, b'{"detail": "forced"}', url)
        resp = self.test_client.request(method, url, headers=headers, json=json)
        return _response(resp.status_code, resp.content, url)


class DownTransport:
    """Ogni richiesta fallisce a livello di rete."""

    def __init__(self):
        self.calls = 0

    def request(self, method, url, **kwargs):
        self.calls += 1
        raise requests.ConnectionError(f"connection refused: {url}")


def _response(status: int, content: bytes, url: str) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    r._content = content
    r.url = url
    r.headers["Content-Type"] = "application/json"
    return r


@pytest.fixture
def transport(api):
    return AppTransport(api)
