"""
Shared fixtures.

Environment is set before the application is imported: Settings is read
once and cached, and the engine is built at import time.
"""
import os
import tempfile

os.environ.setdefault("SUPER_ADMIN_KEY", "test-super-admin-key")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-session-tokens")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BLOB_BACKEND"] = "local"
os.environ["LOCAL_MEDIA_DIR"] = tempfile.mkdtemp(prefix="negocio-media-")
os.environ["SECRETS_DIR"] = tempfile.mkdtemp(prefix="negocio-secrets-")

import pytest
from fastapi.testclient import TestClient

from negocio_api.config import get_settings
from negocio_api.database import Base, engine, SessionLocal
from negocio_api.main import app
from negocio_api.api.deps import get_blob_store
from negocio_api.services.blob_storage import LocalBlobStore

SUPER_ADMIN_HEADERS = {"X-Super-Admin-Key": os.environ["SUPER_ADMIN_KEY"]}


@pytest.fixture(autouse=True)
def fresh_database():
    import negocio_api.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def media_store(tmp_path):
    store = LocalBlobStore(str(tmp_path), "http://testserver")
    app.dependency_overrides[get_blob_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_blob_store, None)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def create_negocio(client):
    """Create a negocio through the super-admin API and return its credentials."""

    def _create(nombre="Café Luna", email="a@b.com"):
        response = client.post(
            "/api/super-admin/negocios",
            json={"nombreNegocio": nombre, "email": email},
            headers=SUPER_ADMIN_HEADERS,
        )
        assert response.status_code == 200, response.text
        return response.json()["negocio"]

    return _create


@pytest.fixture
def login(client):
    """Log in as a negocio admin and return Authorization headers."""

    def _login(negocio):
        response = client.post(
            "/api/auth/login",
            json={"user": negocio["user"], "pin": negocio["pin"], "negocioID": negocio["negocioID"]},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['accessToken']}"}

    return _login


@pytest.fixture
def negocio(create_negocio):
    return create_negocio()


@pytest.fixture
def auth_headers(login, negocio):
    return login(negocio)
