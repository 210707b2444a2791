"""Shared fixtures: in-memory database, API client and a fake push gateway."""

import os

# Settings are read at import time: configure before importing the app.
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ.setdefault("VAPID_PRIVATE_KEY", "test-private-key")
os.environ.setdefault("VAPID_PUBLIC_KEY", "test-public-key")
os.environ.setdefault("VAPID_CLAIMS_EMAIL", "mailto:test@example.com")

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from pywebpush import WebPushException
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import deps
from app.db.base import Base
from app.main import app
from app.models.subscription import PushSubscription


@pytest.fixture
def engine():
    """Fresh in-memory SQLite shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    """Database session bound to the in-memory engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    yield session
    session.close()


@pytest.fixture
def client(db):
    """API client whose requests use the test session."""

    def override_get_db():
        yield db

    app.dependency_overrides[deps.get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


class FakeWebPush:
    """Records webpush calls; endpoints listed in `gone`/`broken` fail."""

    def __init__(self):
        self.calls = []
        self.gone = set()
        self.broken = set()

    def __call__(self, subscription_info, data, vapid_private_key, vapid_claims):
        endpoint = subscription_info["endpoint"]
        self.calls.append({"endpoint": endpoint, "data": data, "claims": vapid_claims})
        if endpoint in self.gone:
            raise WebPushException(
                "Push failed: 410 Gone",
                response=SimpleNamespace(status_code=410, text="gone"),
            )
        if endpoint in self.broken:
            raise WebPushException(
                "Push failed: 500",
                response=SimpleNamespace(status_code=500, text="boom"),
            )

    def endpoints(self):
        return [c["endpoint"] for c in self.calls]


@pytest.fixture
def fake_webpush(monkeypatch):
    """Replace pywebpush.webpush inside the push service."""
    fake = FakeWebPush()
    monkeypatch.setattr("app.services.push.webpush", fake)
    return fake


@pytest.fixture
def subscriptions(db):
    """Two registered devices."""
    subs = [
        PushSubscription(endpoint="https://push.example/a", auth="auth-a", p256dh="key-a"),
        PushSubscription(endpoint="https://push.example/b", auth="auth-b", p256dh="key-b"),
    ]
    db.add_all(subs)
    db.commit()
    return subs
