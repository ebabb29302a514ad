"""Pytest configuration for tech radar tests."""

import os

# Settings are read at import time; keep tests off the real database and worker
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["WORKER_ENABLED"] = "false"
os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
from fastapi.testclient import TestClient

# Configure Hypothesis before importing test modules
from tests.property_based.config import PropertyTestConfig
PropertyTestConfig.configure_hypothesis()

from tech_radar.repositories.job import JobRepository
from tech_radar.repositories.notification import NotificationRepository
from tech_radar.workers.radar_worker import RadarWorker
from tests.fakes import FakeTextGenerator, SessionStore


def pytest_collection_modifyitems(config, items):
    """Add markers based on test location."""
    for item in items:
        if "property_based" in str(item.fspath):
            item.add_marker(pytest.mark.property_test)
        elif "test_api" in str(item.fspath) or "test_migrations" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def store(tmp_path):
    """File-backed SQLite store so worker and test use separate connections."""
    store = SessionStore(f"sqlite:///{tmp_path / 'jobs.db'}")
    yield store
    store.dispose()


@pytest.fixture
def db_session(store):
    with store.session() as session:
        yield session


@pytest.fixture
def job_repository():
    return JobRepository()


@pytest.fixture
def notification_repository():
    return NotificationRepository()


@pytest.fixture
def fake_generator():
    return FakeTextGenerator()


@pytest.fixture
def make_worker(store):
    """Build a worker bound to the test store with fast timings."""
    def _make_worker(generator=None, **overrides):
        options = dict(
            session_factory=store.session,
            poll_interval=0.01,
            ai_timeout=5.0,
            artificial_delay=0.0,
            drain_timeout=5.0,
        )
        options.update(overrides)
        return RadarWorker(generator=generator or FakeTextGenerator(), **options)

    return _make_worker


@pytest.fixture
def app(store):
    """Application wired to the test store, without starting the lifespan."""
    from tech_radar.core.database import get_db
    from tech_radar.main import create_app

    app = create_app()

    def override_get_db():
        with store.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    # Not used as a context manager, so the worker lifespan never runs
    return TestClient(app)
