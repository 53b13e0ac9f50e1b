"""Pytest fixtures for testing."""
import random
from datetime import datetime, timedelta
import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from quizzle.db.database import Base
from quizzle.db import models  # noqa: F401
from quizzle.db.store import KeyValueStore
from quizzle.services.notifications import ReminderNotifier
from quizzle.services.puzzle_service import PuzzleService
from quizzle.services.puzzle_session import PuzzleController
from quizzle.services.quiz_service import QuizService
from quizzle.services.quiz_session import QuizController
from quizzle.services.scheduler import ManualScheduler


class FakeClock:
    """Settable wall-clock."""

    def __init__(self, current: datetime):
        self.current = current

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


class FailingStore:
    """Store whose reads find nothing and whose writes always fail."""

    def __init__(self):
        self.write_attempts = 0

    def get(self, key):
        return None

    def set(self, key, value):
        self.write_attempts += 1
        raise SQLAlchemyError("database is locked")

    def delete(self, key):
        raise SQLAlchemyError("database is locked")


@pytest.fixture(scope="function")
def session_factory():
    """In-memory database shared across connections for one test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return KeyValueStore(session_factory)


@pytest.fixture
def failing_store():
    return FailingStore()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 10, 12, 0, 0))


@pytest.fixture
def notifier():
    return ReminderNotifier(enabled=True)


@pytest.fixture
def puzzle_service(store, clock):
    return PuzzleService(store, clock=clock, rng=random.Random(7))


@pytest.fixture
def quiz_service(store, puzzle_service, clock, notifier):
    return QuizService(store, puzzle_service, clock=clock, rng=random.Random(7), notifier=notifier)


@pytest.fixture
def quiz_controller(quiz_service, scheduler, clock):
    return QuizController(quiz_service, scheduler, clock)


@pytest.fixture
def puzzle_controller(puzzle_service, scheduler, clock):
    return PuzzleController(puzzle_service, scheduler, clock, random.Random(7))
