"""Narrow the roster to staff who may legally work a given day."""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

from roster.timekeys import week_key

from .records import StaffRecord
from .shifts import is_night_shift
from .state import ConstraintState


def worked_night_before(state: ConstraintState, staff_id: int, day: date) -> bool:
    previous = state.entry_for(staff_id, day - timedelta(days=1))
    return previous is not None and is_night_shift(previous.shift)


def current_streak(state: ConstraintState, staff_id: int, day: date, targeted: bool = False) -> int:
    """
    Consecutive worked days that assigning ``day`` would extend.

    Fill passes use the running counter plus days already booked right after
    ``day``. Targeted checks run before any day is filled, so both sides are
    read from the booked schedule.
    """
    after = state.booked_run(staff_id, day, 1)
    if targeted:
        return state.booked_run(staff_id, day, -1) + after
    return state.consecutive_days.get(staff_id, 0) + after


def is_eligible(
    state: ConstraintState,
    person: StaffRecord,
    role: str,
    day: date,
    cfg,
    targeted: bool = False,
) -> bool:
    staff_id = person.staff_id

    if person.role != role:
        return False
    if state.is_unavailable(staff_id, day):
        return False
    if current_streak(state, staff_id, day, targeted) >= cfg.max_consecutive_days:
        return False
    if state.is_assigned(staff_id, day):
        return False
    if worked_night_before(state, staff_id, day):
        return False
    return True


def find_eligible_staff(
    state: ConstraintState,
    role: str,
    day: date,
    cfg,
    staff_id: Optional[int] = None,
) -> List[StaffRecord]:
    """
    List staff who can work ``role`` on ``day``.

    Args:
        state: Working state of the run
        role: Role to staff
        day: Date being filled
        cfg: SchedulerConfig
        staff_id: Restrict the check to a single staff member (pre-assignment)

    Returns:
        Eligible staff, least hours this week first when not targeted
    """
    if staff_id is not None:
        person = state.staff_by_id.get(staff_id)
        if person is None or not is_eligible(state, person, role, day, cfg, targeted=True):
            return []
        return [person]

    eligible = [p for p in state.staff if is_eligible(state, p, role, day, cfg)]
    wkey = week_key(day)
    # sorted() is stable: ties keep roster order, which keeps reruns reproducible
    return sorted(eligible, key=lambda p: state.hours_for(p.staff_id, wkey))


def find_best_staff(
    state: ConstraintState,
    role: str,
    day: date,
    cfg,
    staff_id: Optional[int] = None,
    exclude: Optional[set] = None,
) -> Optional[StaffRecord]:
    for person in find_eligible_staff(state, role, day, cfg, staff_id=staff_id):
        if exclude and person.staff_id in exclude:
            continue
        return person
    return None
