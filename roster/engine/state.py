"""Per-run working state: trackers, schedule index and streak counters."""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Set, Tuple

from roster.timekeys import day_key, week_dates, week_key

from .records import ScheduleRecord, StaffRecord, UnavailabilityRecord
from .shifts import ShiftType, get_shift

logger = logging.getLogger(__name__)


@dataclass
class WeeklyMix:
    eight_hour: int = 0
    twelve_hour: int = 0

    def add(self, shift: ShiftType) -> None:
        if shift.hours == 8:
            self.eight_hour += 1
        elif shift.hours == 12:
            self.twelve_hour += 1


class ConstraintState:
    """
    Mutable working set for one generation run.

    Everything the eligibility and capacity rules read lives here, so a run
    never depends on module-level state. The schedule list starts with the
    look-back history and grows with every assignment; trackers are updated
    in the same call so later decisions on the same day see them.
    """

    def __init__(
        self,
        staff: Iterable[StaffRecord],
        unavailability: Iterable[UnavailabilityRecord],
        range_start: date,
        range_end: date,
    ):
        self.staff: List[StaffRecord] = list(staff)
        self.staff_by_id: Dict[int, StaffRecord] = {s.staff_id: s for s in self.staff}
        self.range_start = range_start
        self.range_end = range_end

        self.unavailable: Dict[int, Set[str]] = defaultdict(set)
        for record in unavailability:
            self.unavailable[record.staff_id].add(day_key(record.date))

        self.hours: Dict[int, Dict[str, int]] = {s.staff_id: {} for s in self.staff}
        self.mix: Dict[int, Dict[str, WeeklyMix]] = {s.staff_id: {} for s in self.staff}
        self.consecutive_days: Dict[int, int] = {s.staff_id: 0 for s in self.staff}

        self.entries: List[ScheduleRecord] = []
        self._by_staff_day: Dict[Tuple[int, str], ScheduleRecord] = {}
        self._shift_counts: Dict[str, Counter] = defaultdict(Counter)
        self._role_counts: Dict[str, Counter] = defaultdict(Counter)

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------

    def seed(self, history: Iterable[ScheduleRecord]) -> int:
        """
        Load look-back records into the working set.

        Records keep their place in the schedule for continuity checks.
        Records of staff outside the roster, or with a shift code missing from
        the catalog, add nothing to the trackers.

        Returns:
            Number of records loaded
        """
        loaded = 0
        for record in history:
            self._index(record)
            loaded += 1
            shift = get_shift(record.shift)
            if shift is None:
                logger.debug("Ignoring unknown shift code %r in history for staff %s", record.shift, record.staff_id)
                continue
            if record.staff_id not in self.staff_by_id:
                logger.debug("Ignoring history for unschedulable staff %s", record.staff_id)
                continue
            self._track(record.staff_id, shift, week_key(record.date))
        return loaded

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_unavailable(self, staff_id: int, day: date) -> bool:
        return day_key(day) in self.unavailable.get(staff_id, ())

    def has_time_off_in_week(self, staff_id: int, wkey: str) -> bool:
        days_off = self.unavailable.get(staff_id)
        if not days_off:
            return False
        return any(d.isoformat() in days_off for d in week_dates(wkey))

    def hours_for(self, staff_id: int, wkey: str) -> int:
        return self.hours.get(staff_id, {}).get(wkey, 0)

    def mix_for(self, staff_id: int, wkey: str) -> WeeklyMix:
        return self.mix.get(staff_id, {}).get(wkey) or WeeklyMix()

    def entry_for(self, staff_id: int, day: date) -> Optional[ScheduleRecord]:
        return self._by_staff_day.get((staff_id, day_key(day)))

    def is_assigned(self, staff_id: int, day: date) -> bool:
        return (staff_id, day_key(day)) in self._by_staff_day

    def shift_count(self, day: date, code: str) -> int:
        return self._shift_counts[day_key(day)][code]

    def role_count(self, day: date, role: str) -> int:
        return self._role_counts[day_key(day)][role]

    def booked_run(self, staff_id: int, day: date, step: int) -> int:
        """Count consecutive booked days next to ``day`` within the range."""
        run = 0
        current = day + timedelta(days=step)
        while self.range_start <= current <= self.range_end and self.is_assigned(staff_id, current):
            run += 1
            current += timedelta(days=step)
        return run

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def assign(self, staff: StaffRecord, shift: ShiftType, day: date) -> ScheduleRecord:
        if self.is_assigned(staff.staff_id, day):
            raise ValueError(f"Staff {staff.staff_id} already has a shift on {day_key(day)}")
        record = ScheduleRecord(staff_id=staff.staff_id, date=day, shift=shift.code)
        self._index(record)
        self._track(staff.staff_id, shift, week_key(day))
        return record

    def update_streaks(self, day: date) -> None:
        for staff_id in self.consecutive_days:
            if self.is_assigned(staff_id, day):
                self.consecutive_days[staff_id] += 1
            else:
                self.consecutive_days[staff_id] = 0

    def _index(self, record: ScheduleRecord) -> None:
        dkey = day_key(record.date)
        self.entries.append(record)
        self._by_staff_day[(record.staff_id, dkey)] = record
        self._shift_counts[dkey][record.shift] += 1
        person = self.staff_by_id.get(record.staff_id)
        if person is not None:
            self._role_counts[dkey][person.role] += 1

    def _track(self, staff_id: int, shift: ShiftType, wkey: str) -> None:
        weekly = self.hours.setdefault(staff_id, {})
        weekly[wkey] = weekly.get(wkey, 0) + shift.hours
        self.mix.setdefault(staff_id, {}).setdefault(wkey, WeeklyMix()).add(shift)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def entries_in_range(self) -> List[ScheduleRecord]:
        return [e for e in self.entries if self.range_start <= e.date <= self.range_end]

    def weekly_hours_snapshot(self) -> Dict[int, Dict[str, int]]:
        return {staff_id: dict(weeks) for staff_id, weeks in self.hours.items()}
