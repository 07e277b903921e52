"""Fixed shift catalog and role constants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ShiftType:
    code: str
    hours: int

    @property
    def is_night(self) -> bool:
        return self.code in NIGHT_SHIFTS


SHIFTS: List[ShiftType] = [
    ShiftType("6A6P", 12),
    ShiftType("6A2P", 8),
    ShiftType("2P10P", 8),
    ShiftType("6P6A", 12),
    ShiftType("10P6A", 8),
]

SHIFTS_BY_CODE: Dict[str, ShiftType] = {s.code: s for s in SHIFTS}

NIGHT_SHIFTS = frozenset({"6P6A", "10P6A"})

# Long days first, nights last within each duration; also the order while 12h shifts are still owed
SHIFT_PRIORITY: List[str] = ["6A6P", "6P6A", "6A2P", "2P10P", "10P6A"]
EIGHT_HOUR_FIRST: List[str] = ["6A2P", "2P10P", "10P6A", "6A6P", "6P6A"]

AM_SHIFTS_PREFERENCE: List[str] = ["6A6P", "6A2P", "2P10P"]

# The 2x8h + 2x12h mix only applies to staff on this weekly target
BALANCED_WEEK_HOURS = 40
MIX_QUOTA = 2

CAREGIVER = "Caregiver"
ASSISTANT = "Assistant"
SUPERVISOR = "Supervisor"

ROLES = (CAREGIVER, ASSISTANT, SUPERVISOR)
SCHEDULED_ROLES = (CAREGIVER, ASSISTANT)


def get_shift(code: str) -> Optional[ShiftType]:
    return SHIFTS_BY_CODE.get(code)


def is_night_shift(code: Optional[str]) -> bool:
    return code in NIGHT_SHIFTS
