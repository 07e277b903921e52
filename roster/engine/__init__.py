"""Greedy assignment engine: state, eligibility, shift choice and day filling."""

from .filler import FillResult, Shortfall, fill_day
from .generator import GenerationPhase, GenerationResult, RequestOutcome, ScheduleGenerator
from .records import ScheduleRecord, ShiftRequestRecord, StaffRecord, UnavailabilityRecord
from .shifts import SHIFTS, ShiftType, get_shift
from .state import ConstraintState, WeeklyMix

__all__ = [
    "ConstraintState",
    "WeeklyMix",
    "ScheduleGenerator",
    "GenerationPhase",
    "GenerationResult",
    "RequestOutcome",
    "FillResult",
    "Shortfall",
    "fill_day",
    "StaffRecord",
    "UnavailabilityRecord",
    "ShiftRequestRecord",
    "ScheduleRecord",
    "ShiftType",
    "SHIFTS",
    "get_shift",
]
