"""
Test configuration and fixtures.
The database URL is pinned to in-memory SQLite before anything imports contracthub.db,
so the app's startup hook never touches a file on disk.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from contracthub.db import Base, get_db
from contracthub.schemas import Actor
from contracthub.services.blueprint_service import BlueprintService
from contracthub.services.contract_service import ContractLifecycleService
from contracthub.services.store import SqlRecordStore

# Test database URL (in-memory SQLite)
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

# Create test engine
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database session override."""
    from fastapi.testclient import TestClient
    from contracthub.main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def store(db_session):
    return SqlRecordStore(db_session)


@pytest.fixture
def contract_service(store):
    return ContractLifecycleService(store)


@pytest.fixture
def blueprint_service(store):
    return BlueprintService(store)


@pytest.fixture
def admin():
    return Actor(id="u-admin", name="Ada Admin", role="admin")


@pytest.fixture
def approver():
    return Actor(id="u-approver", name="Avery Approver", role="approver")


@pytest.fixture
def signer():
    return Actor(id="u-signer", name="Sam Signer", role="signer")


@pytest.fixture
def title_blueprint(blueprint_service):
    """Blueprint with one required text field "Title"."""
    return blueprint_service.create_blueprint({
        "name": "Lease Agreement",
        "fields": [{"label": "Title", "field_type": "text", "required": True}],
    })


def actor_headers(role: str, user_id: str = "u-1", name: str = "Test User") -> dict:
    return {"X-User-Id": user_id, "X-User-Name": name, "X-User-Role": role}
