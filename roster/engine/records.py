"""Plain records exchanged between the engine and its callers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .shifts import BALANCED_WEEK_HOURS


@dataclass(frozen=True)
class StaffRecord:
    staff_id: int
    name: str
    role: str
    target_hours: int = BALANCED_WEEK_HOURS


@dataclass(frozen=True)
class UnavailabilityRecord:
    staff_id: int
    date: date


@dataclass(frozen=True)
class ShiftRequestRecord:
    staff_id: int
    date: date
    shift: str


@dataclass(frozen=True)
class ScheduleRecord:
    staff_id: int
    date: date
    shift: str

