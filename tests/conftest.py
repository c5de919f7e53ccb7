import os

# in-memory databases before any app module builds its engines
os.environ["AUTH_DATABASE_URL"] = "sqlite://"
os.environ["ASSET_DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shared.core.config import settings
from shared.core.database import AuthBase, Base, get_asset_db, get_auth_db
from shared.models.users import Users
from shared.utils.enums import UserRole, UserStatus
from auth_service.app.main import app as auth_app
from asset_service.app.main import app as asset_app
from asset_service.app.services.tag_renderer import TagRenderer, get_tag_renderer

ADMIN_PASSWORD = "admin-secret"
STAFF_PASSWORD = "staff-secret"

# smallest valid PNG signature plus a marker, enough for content checks
FAKE_PNG = b"\x89PNG\r\n\x1a\n" + b"fake-tag"


class FakeTagRenderer(TagRenderer):

    def __init__(self):
        self.rendered = []

    def render(self, text: str) -> bytes:
        self.rendered.append(text)
        return FAKE_PNG + text.encode()


def _memory_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def auth_session_factory():
    engine = _memory_engine()
    AuthBase.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def asset_session_factory():
    engine = _memory_engine()
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def auth_db(auth_session_factory):
    db = auth_session_factory()
    yield db
    db.close()


@pytest.fixture
def asset_db(asset_session_factory):
    db = asset_session_factory()
    yield db
    db.close()


@pytest.fixture
def tag_renderer():
    return FakeTagRenderer()


@pytest.fixture
def tag_storage(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "TAG_STORAGE_DIR", str(tmp_path))
    return tmp_path


def _session_override(factory):
    def override():
        db = factory()
        try:
            yield db
        finally:
            db.close()
    return override


@pytest.fixture
def auth_client(auth_session_factory):
    auth_app.dependency_overrides[get_auth_db] = _session_override(auth_session_factory)
    with TestClient(auth_app) as client:
        yield client
    auth_app.dependency_overrides.clear()


@pytest.fixture
def asset_client(auth_session_factory, asset_session_factory, tag_renderer, tag_storage):
    asset_app.dependency_overrides[get_auth_db] = _session_override(auth_session_factory)
    asset_app.dependency_overrides[get_asset_db] = _session_override(asset_session_factory)
    asset_app.dependency_overrides[get_tag_renderer] = lambda: tag_renderer
    with TestClient(asset_app) as client:
        yield client
    asset_app.dependency_overrides.clear()


def make_user(db, username, password, role=UserRole.STAFF, name=None):
    user = Users(
        full_name=name or username.title(),
        username=username,
        email=f"{username}@example.com",
        role=role,
        status=UserStatus.ACTIVE.value,
    )
    user.set_password(password)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def login(auth_client, username, password):
    resp = auth_client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['data']['token']}"}


@pytest.fixture
def admin_user(auth_db):
    return make_user(auth_db, "admin", ADMIN_PASSWORD, role=UserRole.ADMIN, name="Site Admin")


@pytest.fixture
def staff_user(auth_db):
    return make_user(auth_db, "staff", STAFF_PASSWORD, name="Staff Member")


@pytest.fixture
def admin_headers(auth_client, admin_user):
    return login(auth_client, "admin", ADMIN_PASSWORD)


@pytest.fixture
def staff_headers(auth_client, staff_user):
    return login(auth_client, "staff", STAFF_PASSWORD)


@pytest.fixture
def company(asset_client, admin_headers):
    resp = asset_client.post(
        "/api/companies", json={"name": "Acme", "code": "ACM"}, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.fixture
def category(asset_client, admin_headers):
    resp = asset_client.post(
        "/api/categories", json={"name": "Laptop"}, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def create_asset(client, headers, company, category, **fields):
    payload = {
        "person_in_charge": "Ana",
        "department": "IT",
        "company_id": company["id"],
        "category_id": category["id"],
        "cost": 1000,
    }
    payload.update(fields)
    resp = client.post("/api/assets", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.fixture
def asset(asset_client, staff_headers, company, category):
    return create_asset(asset_client, staff_headers, company, category)
