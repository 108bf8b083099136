"""Shared test configuration and fixtures for form intake tests"""

import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from form_intake.config import config
from form_intake.main import app
from form_intake.models.database import SubmissionStore, get_store
from form_intake.services.notification_service import get_notification_service
from tests.config import test_config
from tests.fakes import RecordingNotifier, RecordingStore

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@pytest.fixture(autouse=True)
def app_config(monkeypatch):
    """Apply test configuration for every test, restored afterwards"""
    for key, value in test_config.items():
        monkeypatch.setitem(config, key, value)
    return config


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def recording_notifier():
    return RecordingNotifier()


@pytest.fixture
def sqlite_engine():
    """In-memory SQLite engine with every submission table created"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def override_dependencies():
    """Install dependency overrides for one test, then restore the originals"""
    original_overrides = app.dependency_overrides.copy()

    def _override(store=None, notifier=None):
        if store is not None:
            app.dependency_overrides[get_store] = lambda: store
        if notifier is not None:
            app.dependency_overrides[get_notification_service] = lambda: notifier

    yield _override

    app.dependency_overrides.clear()
    app.dependency_overrides.update(original_overrides)


@pytest.fixture
def client(override_dependencies, recording_store, recording_notifier):
    """Test client wired to the recording store and notifier"""
    override_dependencies(store=recording_store, notifier=recording_notifier)
    return TestClient(app)


@pytest.fixture
def sqlite_client(override_dependencies, sqlite_engine, recording_notifier):
    """Test client backed by a real SubmissionStore on SQLite"""
    override_dependencies(
        store=SubmissionStore(sqlite_engine), notifier=recording_notifier
    )
    return TestClient(app)
