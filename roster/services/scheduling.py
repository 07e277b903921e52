"""Generate, persist and clear schedules stored in the database."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from roster.domain.models import ScheduleEntry
from roster.domain.repositories import (
    ScheduleRepository,
    ShiftRequestRepository,
    StaffRepository,
    UnavailabilityRepository,
)
from roster.engine.generator import GenerationResult, ScheduleGenerator
from roster.engine.records import ScheduleRecord, ShiftRequestRecord, StaffRecord, UnavailabilityRecord
from roster.timekeys import parse_date

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """Read-only inputs for one generation run."""

    staff: List[StaffRecord]
    unavailability: List[UnavailabilityRecord]
    requests: List[ShiftRequestRecord]
    history: List[ScheduleRecord]


def load_snapshot(session: Session, start: date, cfg) -> Snapshot:
    """Load roster, unavailability, requests and look-back history."""
    return Snapshot(
        staff=[s.to_record() for s in StaffRepository.get_all(session)],
        unavailability=[u.to_record() for u in UnavailabilityRepository.get_all(session)],
        requests=[r.to_record() for r in ShiftRequestRepository.get_all(session)],
        history=[e.to_record() for e in ScheduleRepository.get_lookback(session, start, cfg.lookback_days)],
    )


def generate_schedule(
    session: Session,
    start,
    end,
    cfg,
    persist: bool = True,
) -> GenerationResult:
    """
    Generate the schedule for ``[start, end]`` from the stored data.

    Args:
        session: Database session
        start: First date of the range
        end: Last date of the range, inclusive
        cfg: SchedulerConfig
        persist: If True, replace stored entries in the range with the result

    Returns:
        GenerationResult for the range

    Raises:
        ValueError: On malformed range or inconsistent inputs (nothing is written)
    """
    start = parse_date(start)
    end = parse_date(end)
    snapshot = load_snapshot(session, start, cfg)

    generator = ScheduleGenerator(cfg)
    result = generator.generate(
        start,
        end,
        staff=snapshot.staff,
        unavailability=snapshot.unavailability,
        requests=snapshot.requests,
        history=snapshot.history,
    )

    if persist:
        try:
            deleted = ScheduleRepository.delete_between(session, start, end, commit=False)
            if deleted > 0:
                logger.info("Deleted %d existing entries for %s..%s", deleted, start, end)
            ScheduleRepository.bulk_create(
                session, [ScheduleEntry.from_record(r) for r in result.entries], commit=False
            )
            session.commit()
        except Exception:
            session.rollback()
            raise
        logger.info("Persisted %d entries", result.assigned_shift_count)

    return result


def delete_schedule(session: Session, start, end) -> int:
    """Remove stored entries from ``start`` to ``end`` inclusive."""
    start = parse_date(start)
    end = parse_date(end)
    if end < start:
        raise ValueError(f"End date {end} is before start date {start}")
    return ScheduleRepository.delete_between(session, start, end)
