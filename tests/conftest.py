"""
Mahadev Tent House API - Test Configuration and Fixtures
"""
import asyncio
import os
from datetime import datetime, timedelta, timezone
from typing import Generator

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

# Set testing environment before the app reads its settings
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///./test_tenthouse.db"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ENABLE_RATE_LIMITING"] = "true"
os.environ["MAX_SUBMISSIONS_PER_HOUR"] = "5"
# never talk to Brevo from the test suite
os.environ["BREVO_API_KEY"] = ""
os.environ["ADMIN_NOTIFICATION_EMAIL"] = ""

from tenthouse.main import app
from tenthouse.core.config import settings
from tenthouse.core.security import hash_password
from tenthouse.db.mixins import Base
from tenthouse.db.models.testimonial import Testimonial
from tenthouse.db.session import SessionLocal, engine, get_db

fake = Faker()

ADMIN_PASSWORD = "tent-house-admin-pass"

T0 = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)

GOOD_MESSAGE = "Wonderful service, highly recommend!"


class FakeClock:
    """Callable stand-in for utcnow() that tests can move forward."""

    def __init__(self, start: datetime = T0):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


class RecordingNotifier:
    def __init__(self):
        self.calls = []

    def __call__(self, row) -> None:
        self.calls.append(row.id)


class LoopCheckingNotifier:
    """Records, per call, whether it was invoked on a running event loop."""

    def __init__(self):
        self.on_loop = []

    def __call__(self, row) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            self.on_loop.append(False)
        else:
            self.on_loop.append(True)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create test client with database override"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as tc:
        yield tc
    app.dependency_overrides.clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def loop_checking_notifier() -> LoopCheckingNotifier:
    return LoopCheckingNotifier()


@pytest.fixture
def make_testimonial(db_session: Session):
    """Insert a testimonial row directly, bypassing validation."""
    def _make(
        name: str = "Rajesh Kumar",
        rating: int = 5,
        message: str = GOOD_MESSAGE,
        status: str = "pending",
        created_at: datetime = T0,
        ip_address: str | None = None,
    ) -> Testimonial:
        row = Testimonial(
            name=name,
            email=fake.email(),
            rating=rating,
            message=message,
            status=status,
            ip_address=ip_address or fake.ipv4_public(),
            created_at=created_at,
            updated_at=created_at,
        )
        db_session.add(row)
        db_session.commit()
        db_session.refresh(row)
        return row

    return _make


@pytest.fixture(scope="session")
def admin_password_hash() -> str:
    return hash_password(ADMIN_PASSWORD)


@pytest.fixture
def admin_headers(client: TestClient, admin_password_hash: str, monkeypatch) -> dict:
    """Log in as the configured admin and return bearer headers"""
    monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", admin_password_hash)
    resp = client.post("/api/v1/auth/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
