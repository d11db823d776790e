from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "pytest-secret")
os.environ.setdefault("ALLOWED_HOSTS", "testserver,localhost")
os.environ.setdefault("ENV", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import labcatalog.models  # noqa: F401
from labcatalog.core.security import create_access_token
from labcatalog.db.base import Base
from labcatalog.db.session import get_db, make_engine
from labcatalog.main import app
from labcatalog.services.maintenance import ensure_admin
from tests.testkit import ApiClient


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'catalog.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def api(session_factory) -> ApiClient:
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        with TestClient(app) as client:
            yield ApiClient(client)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin_token(session_factory) -> str:
    with session_factory() as session:
        user = ensure_admin(session, "lab_admin", email="admin@example.com")
        session.commit()
        return create_access_token(str(user.id), user.role)
