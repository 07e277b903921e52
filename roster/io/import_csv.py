"""CSV import utilities to load data into database."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
from sqlalchemy.orm import Session

from roster.domain.models import ScheduleEntry, ShiftRequest, Staff, Unavailability
from roster.engine.shifts import BALANCED_WEEK_HOURS, ROLES, SHIFTS_BY_CODE

logger = logging.getLogger(__name__)


def _read(csv_path: str | Path, required: list) -> pd.DataFrame:
    df = pd.read_csv(csv_path)

    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"{csv_path}: missing required columns {missing}")
    if "date" in df.columns:
        df["date"] = pd.to_datetime(df["date"]).dt.date
    return df


def _check_shift_codes(df: pd.DataFrame, csv_path: str | Path) -> None:
    df["shift"] = df["shift"].astype(str).str.strip().str.upper()
    unknown = sorted(set(df["shift"]) - set(SHIFTS_BY_CODE))
    if unknown:
        raise ValueError(f"{csv_path}: unknown shift codes {unknown}")


def import_staff_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import staff from CSV into database.

    Expected columns: name, role; optional staff_id, target_hours.

    Returns:
        Number of staff imported
    """
    df = _read(csv_path, ["name", "role"])
    df["role"] = df["role"].astype(str).str.strip().str.title()
    unknown = sorted(set(df["role"]) - set(ROLES))
    if unknown:
        raise ValueError(f"{csv_path}: unknown roles {unknown}")

    staff = []
    for _, row in df.iterrows():
        person = Staff(
            name=str(row["name"]).strip(),
            role=row["role"],
            target_hours=int(row["target_hours"]) if pd.notna(row.get("target_hours")) else BALANCED_WEEK_HOURS,
        )
        if pd.notna(row.get("staff_id")):
            person.staff_id = int(row["staff_id"])
        staff.append(person)

    session.add_all(staff)
    session.commit()

    logger.info("Imported %d staff from %s", len(staff), csv_path)
    return len(staff)


def import_unavailability_csv(session: Session, csv_path: str | Path) -> int:
    """Import unavailability (columns: staff_id, date)."""
    df = _read(csv_path, ["staff_id", "date"])
    records = [Unavailability(staff_id=int(row["staff_id"]), date=row["date"]) for _, row in df.iterrows()]
    session.add_all(records)
    session.commit()
    logger.info("Imported %d unavailability records from %s", len(records), csv_path)
    return len(records)


def import_shift_requests_csv(session: Session, csv_path: str | Path) -> int:
    """Import shift requests (columns: staff_id, date, shift). File order is submission order."""
    df = _read(csv_path, ["staff_id", "date", "shift"])
    _check_shift_codes(df, csv_path)
    requests = [
        ShiftRequest(staff_id=int(row["staff_id"]), date=row["date"], shift=row["shift"])
        for _, row in df.iterrows()
    ]
    session.add_all(requests)
    session.commit()
    logger.info("Imported %d shift requests from %s", len(requests), csv_path)
    return len(requests)


def import_schedule_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import existing schedule entries (columns: staff_id, date, shift).

    Duplicate staff/date rows keep the last one.
    """
    df = _read(csv_path, ["staff_id", "date", "shift"])
    _check_shift_codes(df, csv_path)
    df = df.drop_duplicates(subset=["staff_id", "date"], keep="last")
    entries = [
        ScheduleEntry(staff_id=int(row["staff_id"]), date=row["date"], shift=row["shift"])
        for _, row in df.iterrows()
    ]
    session.add_all(entries)
    session.commit()
    logger.info("Imported %d schedule entries from %s", len(entries), csv_path)
    return len(entries)
