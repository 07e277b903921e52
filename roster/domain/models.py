"""SQLAlchemy models for the staff rostering system."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, Date, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, relationship

from roster.engine.records import ScheduleRecord, ShiftRequestRecord, StaffRecord, UnavailabilityRecord
from roster.engine.shifts import BALANCED_WEEK_HOURS, SHIFTS_BY_CODE


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Staff(Base):
    """Staff member with role and weekly hours target."""

    __tablename__ = "staff"

    staff_id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)
    role = Column(String(20), nullable=False)  # Caregiver, Assistant, Supervisor
    target_hours = Column(Integer, nullable=False, default=BALANCED_WEEK_HOURS)

    # Relationships
    unavailability = relationship("Unavailability", back_populates="staff")
    shift_requests = relationship("ShiftRequest", back_populates="staff")
    schedule_entries = relationship("ScheduleEntry", back_populates="staff")

    def to_record(self) -> StaffRecord:
        return StaffRecord(
            staff_id=self.staff_id,
            name=self.name,
            role=self.role,
            target_hours=self.target_hours or BALANCED_WEEK_HOURS,
        )

    def __repr__(self) -> str:
        return f"<Staff(id={self.staff_id}, name='{self.name}', role='{self.role}')>"


class Unavailability(Base):
    """A day a staff member cannot work."""

    __tablename__ = "unavailability"

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(Integer, ForeignKey("staff.staff_id"), nullable=False)
    date = Column(Date, nullable=False)

    staff = relationship("Staff", back_populates="unavailability")

    def to_record(self) -> UnavailabilityRecord:
        return UnavailabilityRecord(staff_id=self.staff_id, date=self.date)

    def __repr__(self) -> str:
        return f"<Unavailability(staff={self.staff_id}, date={self.date})>"


class ShiftRequest(Base):
    """A staff member's preferred shift for a date."""

    __tablename__ = "shift_requests"
    __table_args__ = (
        CheckConstraint(
            "shift IN ({})".format(", ".join(f"'{code}'" for code in SHIFTS_BY_CODE)),
            name="ck_shift_request_code",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(Integer, ForeignKey("staff.staff_id"), nullable=False)
    date = Column(Date, nullable=False)
    shift = Column(String(8), nullable=False)  # 6A6P, 6A2P, 2P10P, 6P6A, 10P6A

    staff = relationship("Staff", back_populates="shift_requests")

    def to_record(self) -> ShiftRequestRecord:
        return ShiftRequestRecord(staff_id=self.staff_id, date=self.date, shift=self.shift)

    def __repr__(self) -> str:
        return f"<ShiftRequest(staff={self.staff_id}, date={self.date}, shift={self.shift})>"


class ScheduleEntry(Base):
    """Assignment of one staff member to one shift on one date."""

    __tablename__ = "schedule_entries"
    __table_args__ = (UniqueConstraint("staff_id", "date", name="uq_schedule_staff_date"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(Integer, ForeignKey("staff.staff_id"), nullable=False)
    date = Column(Date, nullable=False)
    shift = Column(String(8), nullable=False)

    staff = relationship("Staff", back_populates="schedule_entries")

    @classmethod
    def from_record(cls, record: ScheduleRecord) -> "ScheduleEntry":
        return cls(staff_id=record.staff_id, date=record.date, shift=record.shift)

    def to_record(self) -> ScheduleRecord:
        return ScheduleRecord(staff_id=self.staff_id, date=self.date, shift=self.shift)

    def __repr__(self) -> str:
        return f"<ScheduleEntry(id={self.id}, staff={self.staff_id}, date={self.date}, shift={self.shift})>"
