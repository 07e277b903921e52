"""Tests for database-backed schedule generation."""

from datetime import date

import pytest

from conftest import build_roster
from roster.domain.models import ScheduleEntry, ShiftRequest, Staff, Unavailability
from roster.domain.repositories import ScheduleRepository, StaffRepository
from roster.services.scheduling import delete_schedule, generate_schedule, load_snapshot


@pytest.fixture
def seeded_session(db_session):
    StaffRepository.bulk_create(
        db_session,
        [Staff(staff_id=s.staff_id, name=s.name, role=s.role, target_hours=s.target_hours) for s in build_roster(supervisors=1)],
    )
    return db_session


def test_generate_persists_entries(seeded_session, cfg):
    result = generate_schedule(seeded_session, "2025-03-10", "2025-03-16", cfg)

    stored = ScheduleRepository.get_between(seeded_session, date(2025, 3, 10), date(2025, 3, 16))
    assert len(stored) == result.assigned_shift_count == 44
    assert [e.to_record() for e in stored] == result.entries
    # Supervisor is on the roster but never scheduled
    assert all(e.staff.role != "Supervisor" for e in stored)


def test_regenerating_replaces_range(seeded_session, cfg):
    generate_schedule(seeded_session, "2025-03-10", "2025-03-16", cfg)
    generate_schedule(seeded_session, "2025-03-10", "2025-03-16", cfg)
    assert len(ScheduleRepository.get_all(seeded_session)) == 44


def test_dry_run_writes_nothing(seeded_session, cfg):
    result = generate_schedule(seeded_session, "2025-03-10", "2025-03-16", cfg, persist=False)
    assert result.assigned_shift_count == 44
    assert ScheduleRepository.get_all(seeded_session) == []


def test_lookback_entries_are_read_and_kept(seeded_session, cfg):
    ScheduleRepository.bulk_create(seeded_session, [ScheduleEntry(staff_id=1, date=date(2025, 3, 9), shift="6P6A")])

    result = generate_schedule(seeded_session, "2025-03-10", "2025-03-16", cfg)

    assert all(not (e.staff_id == 1 and e.date == date(2025, 3, 10)) for e in result.entries)
    kept = ScheduleRepository.get_between(seeded_session, date(2025, 3, 9), date(2025, 3, 9))
    assert [(e.staff_id, e.shift) for e in kept] == [(1, "6P6A")]


def test_stored_requests_and_unavailability_are_used(seeded_session, cfg):
    seeded_session.add_all(
        [
            Unavailability(staff_id=2, date=date(2025, 3, 11)),
            ShiftRequest(staff_id=3, date=date(2025, 3, 13), shift="6P6A"),
        ]
    )
    seeded_session.commit()

    snapshot = load_snapshot(seeded_session, date(2025, 3, 10), cfg)
    assert len(snapshot.staff) == 12
    assert len(snapshot.requests) == 1

    result = generate_schedule(seeded_session, "2025-03-10", "2025-03-16", cfg)
    assert result.request_outcomes[0].honored
    assert all(not (e.staff_id == 2 and e.date == date(2025, 3, 11)) for e in result.entries)


def test_invalid_range_writes_nothing(seeded_session, cfg):
    generate_schedule(seeded_session, "2025-03-10", "2025-03-16", cfg)
    with pytest.raises(ValueError):
        generate_schedule(seeded_session, "2025-03-16", "2025-03-10", cfg)
    assert len(ScheduleRepository.get_all(seeded_session)) == 44


def test_delete_schedule(seeded_session, cfg):
    generate_schedule(seeded_session, "2025-03-10", "2025-03-16", cfg)
    # Days 1 and 2 hold 11 entries each
    assert delete_schedule(seeded_session, "2025-03-10", "2025-03-11") == 22
    assert len(ScheduleRepository.get_all(seeded_session)) == 22

    with pytest.raises(ValueError):
        delete_schedule(seeded_session, "2025-03-12", "2025-03-11")
