import pytest
import os
from datetime import datetime, timezone
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SCHEDULING_TIMEZONE"] = "UTC"
os.environ["SLOT_DURATION_MINUTES"] = "60"
os.environ["SLOT_OVERLAP_POLICY"] = "allow"

from app.database import Base, get_db
from app.main import app
from app.models.interviewer import Interviewer
from fastapi.testclient import TestClient

HOUR_MS = 3_600_000

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _epoch_ms(year, month, day, hour=0, minute=0, tz=timezone.utc):
    return int(datetime(year, month, day, hour, minute, tzinfo=tz).timestamp()) * 1000


@pytest.fixture
def epoch_ms():
    """Wall-clock components (UTC unless tz given) -> epoch millis."""
    return _epoch_ms


@pytest.fixture
def monday_9am():
    """Monday 2024-11-25 09:00 UTC."""
    return _epoch_ms(2024, 11, 25, 9)


@pytest.fixture(scope="function")
def db_session():
    """Fresh tables and session per test; services commit freely."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def make_interviewer(db_session):
    """Factory for persisted interviewers."""
    def _make(name="Ada Lovelace", max_interviews_per_week=2, email="ada@example.com"):
        interviewer = Interviewer(
            name=name,
            email=email,
            max_interviews_per_week=max_interviews_per_week,
            availability=[],
        )
        db_session.add(interviewer)
        db_session.commit()
        db_session.refresh(interviewer)
        return interviewer
    return _make


@pytest.fixture(scope="function")
def file_session_factory(tmp_path):
    """File-backed SQLite with one connection per session, for multi-threaded tests."""
    file_engine = create_engine(
        f"sqlite:///{tmp_path / 'scheduling.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=file_engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=file_engine)
    file_engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass
            
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
