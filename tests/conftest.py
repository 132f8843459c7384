"""
Pytest configuration and fixtures for testing.
"""
import os

# Must be set before projecthub.core.config is imported
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["DB_INIT_ON_STARTUP"] = "false"
os.environ["STORAGE_ENSURE_ON_STARTUP"] = "false"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient
from uuid import uuid4

from projecthub.main import app
from projecthub.db.base import Base
from projecthub.db.deps import get_db
from projecthub.core.security import create_access_token, get_password_hash
from projecthub.integrations.storage import (
    BackendUnavailable,
    BucketConfig,
    PolicyAttachmentFailure,
    StorageGateway,
)
from projecthub.modules.uploads.deps import get_storage_gateway
from projecthub.modules.users.models import User


# Test database URL
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeObjectStore:
    """
    In-memory object store with the ObjectStoreClient surface.

    Flip `unavailable` to simulate a refused connection, `fail_writes` to
    reject put_object and `fail_policy` to reject put_bucket_policy.
    """

    def __init__(self):
        self.buckets: dict[str, dict[str, tuple[bytes, str]]] = {}
        self.policies: dict[str, dict] = {}
        self.calls: list[str] = []
        self.unavailable = False
        self.fail_writes = False
        self.fail_policy = False

    def _call(self, op: str) -> None:
        self.calls.append(op)
        if self.unavailable:
            raise BackendUnavailable("connection refused")

    def bucket_exists(self, name):
        self._call("bucket_exists")
        return name in self.buckets

    def make_bucket(self, name, region):
        self._call("make_bucket")
        if name in self.buckets:
            return False
        self.buckets[name] = {}
        return True

    def set_bucket_policy(self, name, policy):
        self.calls.append("set_bucket_policy")
        if self.unavailable or self.fail_policy:
            raise PolicyAttachmentFailure("Could not set bucket policy: AccessDenied")
        self.policies[name] = policy

    def put_object(self, bucket, name, stream, size, content_type):
        self._call("put_object")
        if self.fail_writes:
            raise BackendUnavailable("Object write failed: InternalError")
        data = stream.read()
        assert len(data) == size
        self.buckets[bucket][name] = (data, content_type)

    def list_buckets(self):
        self._call("list_buckets")
        return sorted(self.buckets)

    def get(self, bucket, name) -> tuple[bytes, str]:
        return self.buckets[bucket][name]


@pytest.fixture
def fake_store():
    return FakeObjectStore()


@pytest.fixture
def bucket_config():
    return BucketConfig(
        endpoint="minio.local",
        port=9000,
        use_tls=False,
        access_key="test-access",
        secret_key="test-secret",
        bucket_name="project-images",
    )


@pytest.fixture
def gateway(bucket_config, fake_store):
    return StorageGateway(bucket_config, fake_store)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db, gateway):
    """FastAPI test client with test database and in-memory object store."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_gateway] = lambda: gateway
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db, email: str, name: str = "Test User", password: str = "password123") -> User:
    user = User(
        id=uuid4(),
        name=name,
        email=email,
        password_hash=get_password_hash(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def user(db):
    """Create a user."""
    return make_user(db, "owner@test.com", name="Project Owner")


@pytest.fixture
def other_user(db):
    """Create a second user who owns nothing by default."""
    return make_user(db, "other@test.com", name="Someone Else")


@pytest.fixture
def auth_headers(user):
    """Bearer headers for `user`."""
    token = create_access_token(subject=str(user.id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_user):
    token = create_access_token(subject=str(other_user.id))
    return {"Authorization": f"Bearer {token}"}
