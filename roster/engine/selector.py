"""Shift choice and the per-person capacity check."""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional, Sequence

from roster.timekeys import week_key

from .records import StaffRecord
from .shifts import (
    BALANCED_WEEK_HOURS,
    EIGHT_HOUR_FIRST,
    MIX_QUOTA,
    SHIFT_PRIORITY,
    ShiftType,
    get_shift,
)
from .state import ConstraintState


def can_take_shift(state: ConstraintState, person: StaffRecord, shift: ShiftType, day: date) -> bool:
    """
    Check whether ``person`` can work ``shift`` on ``day`` given their week so far.

    Night shifts are refused when the person is already booked the next day.
    A week with time off waives the 2x8h + 2x12h mix but never the hours
    target.
    """
    staff_id = person.staff_id
    wkey = week_key(day)

    if shift.is_night and state.is_assigned(staff_id, day + timedelta(days=1)):
        return False

    hours_after = state.hours_for(staff_id, wkey) + shift.hours
    if hours_after > person.target_hours:
        return False

    if state.has_time_off_in_week(staff_id, wkey):
        return True

    if person.target_hours == BALANCED_WEEK_HOURS:
        mix = state.mix_for(staff_id, wkey)
        if shift.hours == 12 and mix.twelve_hour >= MIX_QUOTA:
            return False
        if shift.hours == 8 and mix.eight_hour >= MIX_QUOTA:
            return False
    return True


def _split_by_hours(codes: Sequence[str], first: int, second: int) -> List[str]:
    def hours(code: str) -> Optional[int]:
        shift = get_shift(code)
        return shift.hours if shift else None

    return [c for c in codes if hours(c) == first] + [c for c in codes if hours(c) == second]


def candidate_shifts(
    state: ConstraintState,
    person: StaffRecord,
    day: date,
    preferred: Optional[Sequence[str]] = None,
) -> List[str]:
    """Order shift codes in which they should be tried for ``person``."""
    staff_id = person.staff_id
    wkey = week_key(day)

    if person.target_hours == BALANCED_WEEK_HOURS and not state.has_time_off_in_week(staff_id, wkey):
        mix = state.mix_for(staff_id, wkey)
        if mix.twelve_hour < MIX_QUOTA:
            return _split_by_hours(preferred, 12, 8) if preferred else list(SHIFT_PRIORITY)
        if mix.eight_hour < MIX_QUOTA:
            return _split_by_hours(preferred, 8, 12) if preferred else list(EIGHT_HOUR_FIRST)
        return list(preferred) if preferred else list(SHIFT_PRIORITY)

    if preferred:
        return list(preferred)
    # Spread across shift types: least-used code today first, priority breaks ties
    return sorted(SHIFT_PRIORITY, key=lambda code: state.shift_count(day, code))


def find_best_shift(
    state: ConstraintState,
    person: StaffRecord,
    day: date,
    preferred: Optional[Sequence[str]] = None,
) -> Optional[ShiftType]:
    for code in candidate_shifts(state, person, day, preferred):
        shift = get_shift(code)
        if shift is not None and can_take_shift(state, person, shift, day):
            return shift
    return None
