"""CSV export utilities."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

import pandas as pd
from sqlalchemy.orm import Session

from roster.domain.repositories import ScheduleRepository, StaffRepository
from roster.engine.shifts import get_shift

logger = logging.getLogger(__name__)

SCHEDULE_COLUMNS = ["date", "staff_id", "name", "role", "shift", "hours"]
STAFF_COLUMNS = ["staff_id", "name", "role", "target_hours"]


def export_schedule_csv(
    session: Session,
    csv_path: str | Path,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> int:
    """
    Export schedule entries with staff name and role.

    Args:
        session: Database session
        csv_path: Output path
        start: Optional first date (requires ``end``)
        end: Optional last date

    Returns:
        Number of rows written
    """
    if start is not None and end is not None:
        entries = ScheduleRepository.get_between(session, start, end)
    else:
        entries = ScheduleRepository.get_all(session)

    rows = []
    for entry in entries:
        shift = get_shift(entry.shift)
        rows.append(
            {
                "date": entry.date.isoformat(),
                "staff_id": entry.staff_id,
                "name": entry.staff.name if entry.staff else None,
                "role": entry.staff.role if entry.staff else None,
                "shift": entry.shift,
                "hours": shift.hours if shift else None,
            }
        )

    pd.DataFrame(rows, columns=SCHEDULE_COLUMNS).to_csv(csv_path, index=False)
    logger.info("Exported %d schedule entries to %s", len(rows), csv_path)
    return len(rows)


def export_staff_csv(session: Session, csv_path: str | Path) -> int:
    """Export all staff to CSV."""
    rows = [
        {"staff_id": s.staff_id, "name": s.name, "role": s.role, "target_hours": s.target_hours}
        for s in StaffRepository.get_all(session)
    ]
    pd.DataFrame(rows, columns=STAFF_COLUMNS).to_csv(csv_path, index=False)
    logger.info("Exported %d staff to %s", len(rows), csv_path)
    return len(rows)
