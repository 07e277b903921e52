"""Schedule generator - runs the full greedy pipeline over a date range."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from roster.timekeys import day_key, iter_dates, parse_date

from .eligibility import find_best_staff
from .filler import FillResult, Shortfall, fill_day
from .records import ScheduleRecord, ShiftRequestRecord, StaffRecord, UnavailabilityRecord
from .selector import can_take_shift
from .shifts import ASSISTANT, CAREGIVER, ROLES, SCHEDULED_ROLES, get_shift
from .state import ConstraintState

logger = logging.getLogger(__name__)

COMPLETED_MESSAGE = "Schedule generated with all rules integrated."


class GenerationPhase(str, Enum):
    IDLE = "idle"
    SEEDING = "seeding"
    PRE_ASSIGNING = "pre_assigning"
    FILLING = "filling"
    STREAK_UPDATE = "streak_update"
    FINALIZING = "finalizing"
    DONE = "done"


@dataclass(frozen=True)
class RequestOutcome:
    request: ShiftRequestRecord
    honored: bool
    reason: str = ""


@dataclass
class GenerationResult:
    start: date
    end: date
    entries: List[ScheduleRecord]
    weekly_hours: Dict[int, Dict[str, int]]
    shortfalls: List[Shortfall] = field(default_factory=list)
    request_outcomes: List[RequestOutcome] = field(default_factory=list)
    message: str = COMPLETED_MESSAGE

    @property
    def assigned_shift_count(self) -> int:
        return len(self.entries)

    @property
    def unhonored_requests(self) -> List[RequestOutcome]:
        return [o for o in self.request_outcomes if not o.honored]

    def summary(self) -> dict:
        return {
            "message": self.message,
            "assigned_shift_count": self.assigned_shift_count,
            "weekly_hours": self.weekly_hours,
        }


class ScheduleGenerator:
    """
    Builds a schedule for ``[start, end]`` one day at a time.

    The run seeds trackers from the look-back window, honors shift requests
    that still fit, then fills every day with the fixed pass order:
    Caregiver/min, Assistant/min, Caregiver/max (AM preference),
    Assistant/max. Consecutive-day counters advance after each day.
    """

    def __init__(self, cfg):
        self.cfg = cfg
        self.phase = GenerationPhase.IDLE
        self.state: Optional[ConstraintState] = None

    def _enter(self, phase: GenerationPhase) -> None:
        self.phase = phase
        logger.debug("Generator phase: %s", phase.value)

    def pass_plan(self) -> List[tuple]:
        """(role, target kind, preference list) for each fill pass of a day."""
        return [
            (CAREGIVER, "min", None),
            (ASSISTANT, "min", None),
            (CAREGIVER, "max", list(self.cfg.am_shift_preference)),
            (ASSISTANT, "max", None),
        ]

    def generate(
        self,
        start,
        end,
        staff: Iterable[StaffRecord],
        unavailability: Iterable[UnavailabilityRecord] = (),
        requests: Iterable[ShiftRequestRecord] = (),
        history: Iterable[ScheduleRecord] = (),
    ) -> GenerationResult:
        """
        Generate schedule entries for every date from ``start`` to ``end``.

        Args:
            start: First date of the range (date or ``YYYY-MM-DD``)
            end: Last date of the range, inclusive
            staff: Full roster; Supervisors are left out of scheduling
            unavailability: Days off per staff member
            requests: Submitted shift requests, in submission order
            history: Existing schedule records; only the look-back window is used

        Returns:
            GenerationResult with the in-range entries and reporting data

        Raises:
            ValueError: On malformed range bounds or references to unknown
                staff or shift codes. Nothing is generated in that case.
        """
        range_start, range_end = self._parse_range(start, end)
        roster = list(staff)
        requests = list(requests)
        self._validate_inputs(roster, requests, range_start, range_end)

        self._enter(GenerationPhase.SEEDING)
        schedulable = [s for s in roster if s.role in SCHEDULED_ROLES]
        state = ConstraintState(schedulable, unavailability, range_start, range_end)
        self.state = state
        lookback_start = range_start - timedelta(days=self.cfg.lookback_days)
        window = [r for r in history if lookback_start <= parse_date(r.date) < range_start]
        loaded = state.seed(
            ScheduleRecord(staff_id=r.staff_id, date=parse_date(r.date), shift=r.shift) for r in window
        )
        logger.info(
            "Generating %s..%s for %d staff (%d look-back records)",
            day_key(range_start), day_key(range_end), len(schedulable), loaded,
        )

        self._enter(GenerationPhase.PRE_ASSIGNING)
        outcomes = [self._pre_assign(state, request) for request in requests]

        shortfalls: List[Shortfall] = []
        for day in iter_dates(range_start, range_end):
            self._enter(GenerationPhase.FILLING)
            for result in self.fill(state, day):
                if result.shortfall is not None:
                    shortfalls.append(result.shortfall)
            self._enter(GenerationPhase.STREAK_UPDATE)
            state.update_streaks(day)

        self._enter(GenerationPhase.FINALIZING)
        entries = sorted(state.entries_in_range(), key=lambda e: (e.date, e.staff_id))
        result = GenerationResult(
            start=range_start,
            end=range_end,
            entries=entries,
            weekly_hours=state.weekly_hours_snapshot(),
            shortfalls=shortfalls,
            request_outcomes=outcomes,
        )
        self._enter(GenerationPhase.DONE)
        logger.info(
            "Generated %d shifts (%d shortfalls, %d unhonored requests)",
            result.assigned_shift_count, len(shortfalls), len(result.unhonored_requests),
        )
        return result

    def fill(self, state: ConstraintState, day: date) -> List[FillResult]:
        return [
            fill_day(state, role, kind, day, self.cfg, preferred=preferred)
            for role, kind, preferred in self.pass_plan()
        ]

    def _pre_assign(self, state: ConstraintState, request: ShiftRequestRecord) -> RequestOutcome:
        day = parse_date(request.date)
        if not state.range_start <= day <= state.range_end:
            return RequestOutcome(request, False, "outside range")

        person = state.staff_by_id.get(request.staff_id)
        if person is None:
            return RequestOutcome(request, False, "requester is not scheduled automatically")

        if find_best_staff(state, person.role, day, self.cfg, staff_id=person.staff_id) is None:
            logger.debug("Request %s not honored: staff %s ineligible on %s", request.shift, person.staff_id, day_key(day))
            return RequestOutcome(request, False, "not eligible on that day")

        shift = get_shift(request.shift)
        if not can_take_shift(state, person, shift, day):
            logger.debug("Request %s not honored: staff %s lacks capacity on %s", request.shift, person.staff_id, day_key(day))
            return RequestOutcome(request, False, "exceeds weekly capacity or rest rules")

        state.assign(person, shift, day)
        return RequestOutcome(request, True)

    @staticmethod
    def _parse_range(start, end) -> tuple:
        if start is None or end is None or start == "" or end == "":
            raise ValueError("Both start and end dates are required")
        range_start = parse_date(start)
        range_end = parse_date(end)
        if range_end < range_start:
            raise ValueError(f"End date {day_key(range_end)} is before start date {day_key(range_start)}")
        return range_start, range_end

    @staticmethod
    def _validate_inputs(
        roster: Sequence[StaffRecord],
        requests: Sequence[ShiftRequestRecord],
        range_start: date,
        range_end: date,
    ) -> None:
        known = set()
        for person in roster:
            if person.role not in ROLES:
                raise ValueError(f"Staff {person.staff_id} has unknown role {person.role!r}")
            if person.target_hours <= 0:
                raise ValueError(f"Staff {person.staff_id} has non-positive target hours")
            known.add(person.staff_id)
        for request in requests:
            # Requests for other ranges are reported, never used
            if not range_start <= parse_date(request.date) <= range_end:
                continue
            if request.staff_id not in known:
                raise ValueError(f"Shift request references unknown staff {request.staff_id}")
            if get_shift(request.shift) is None:
                raise ValueError(f"Shift request for staff {request.staff_id} has unknown shift {request.shift!r}")
