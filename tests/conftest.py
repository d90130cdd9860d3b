"""Shared fixtures: in-memory Mongo collections, a scripted model and a test client."""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.api.deps import get_archive, get_knowledge_store, get_model, get_registry
from app.core.config import Settings, get_settings
from app.services.conversation_registry import SessionRegistry
from app.services.knowledge_store import KnowledgeCache, KnowledgeStore
from app.services.session_archive import SessionArchive
from main import app

MANAGER_PIN = "4321"


class FakeClock:
    """Manually advanced clock returning datetimes."""

    def __init__(self, start: datetime = datetime(2026, 1, 1, 9, 0, 0)):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


class FakeTicker:
    """Manually advanced monotonic clock returning seconds."""

    def __init__(self):
        self.current = 1000.0

    def __call__(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


@pytest.fixture
def mongo_db():
    return AsyncMongoMockClient()["d2d_sales_coach_test"]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ticker() -> FakeTicker:
    return FakeTicker()


@pytest.fixture
def archive(mongo_db, clock) -> SessionArchive:
    return SessionArchive(mongo_db["practice_sessions"], now=clock)


@pytest.fixture
def knowledge_store(mongo_db, clock, ticker) -> KnowledgeStore:
    return KnowledgeStore(
        mongo_db["knowledge_files"],
        cache=KnowledgeCache(ttl=60.0, clock=ticker),
        now=clock,
    )


@pytest.fixture
def mock_model() -> Mock:
    """Model collaborator whose replies tests set through generate.return_value."""
    model = Mock()
    model.generate = AsyncMock(return_value="Not interested.\nCOACH: Lead with a reason for knocking.")
    return model


@pytest.fixture
def settings() -> Settings:
    return Settings(manager_pin=MANAGER_PIN)


@pytest.fixture
def client(archive, knowledge_store, mock_model, settings):
    registry = SessionRegistry()
    app.dependency_overrides[get_archive] = lambda: archive
    app.dependency_overrides[get_knowledge_store] = lambda: knowledge_store
    app.dependency_overrides[get_model] = lambda: mock_model
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def analysis_factory():
    """Build AnalysisRecord-shaped dicts."""
    return make_analysis


def make_analysis(overall, improvement="Ask for the inspection sooner.", **category_scores):
    breakdown = {
        name: {"score": score, "feedback": f"{name} feedback"}
        for name, score in category_scores.items()
    }
    return {
        "overall": overall,
        "breakdown": breakdown,
        "summary": "Solid practice run.",
        "keyStrength": "Friendly opener.",
        "keyImprovement": improvement,
    }
