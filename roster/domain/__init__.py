"""Domain models and data access layer."""

from .models import Base, ScheduleEntry, ShiftRequest, Staff, Unavailability
from .repositories import ScheduleRepository, ShiftRequestRepository, StaffRepository, UnavailabilityRepository

__all__ = [
    "Base",
    "Staff",
    "Unavailability",
    "ShiftRequest",
    "ScheduleEntry",
    "StaffRepository",
    "UnavailabilityRepository",
    "ShiftRequestRepository",
    "ScheduleRepository",
]
