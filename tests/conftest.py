"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from roster.config import SchedulerConfig
from roster.domain.models import Base
from roster.engine.records import StaffRecord

# Monday; the week of 2025-03-10 runs to Sunday 2025-03-16
WEEK_START = date(2025, 3, 10)
WEEK_END = date(2025, 3, 16)


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


def build_roster(caregivers: int = 8, assistants: int = 3, supervisors: int = 0):
    """Caregivers get ids 1..n, assistants follow, supervisors last."""
    staff = []
    next_id = 1
    for role, count in (("Caregiver", caregivers), ("Assistant", assistants), ("Supervisor", supervisors)):
        for i in range(count):
            staff.append(StaffRecord(staff_id=next_id, name=f"{role} {i + 1}", role=role))
            next_id += 1
    return staff


@pytest.fixture
def cfg():
    return SchedulerConfig()


@pytest.fixture
def roster():
    return build_roster()


@pytest.fixture
def db_session():
    """Create in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
