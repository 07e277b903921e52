"""Repository classes for data access."""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from roster.engine.shifts import SUPERVISOR

from .models import ScheduleEntry, ShiftRequest, Staff, Unavailability


class StaffRepository:
    """Repository for staff data access."""

    @staticmethod
    def get_all(session: Session) -> List[Staff]:
        """Get all staff ordered by id."""
        return session.query(Staff).order_by(Staff.staff_id).all()

    @staticmethod
    def get_schedulable(session: Session) -> List[Staff]:
        """Get staff that take part in automatic scheduling (everyone but Supervisors)."""
        return session.query(Staff).filter(Staff.role != SUPERVISOR).order_by(Staff.staff_id).all()

    @staticmethod
    def get_by_id(session: Session, staff_id: int) -> Optional[Staff]:
        return session.query(Staff).filter(Staff.staff_id == staff_id).first()

    @staticmethod
    def get_by_name(session: Session, name: str) -> Optional[Staff]:
        return session.query(Staff).filter(Staff.name == name).first()

    @staticmethod
    def create(session: Session, staff: Staff) -> Staff:
        session.add(staff)
        session.commit()
        session.refresh(staff)
        return staff

    @staticmethod
    def bulk_create(session: Session, staff: List[Staff]) -> None:
        session.add_all(staff)
        session.commit()


class UnavailabilityRepository:
    """Repository for unavailability data access."""

    @staticmethod
    def get_all(session: Session) -> List[Unavailability]:
        return session.query(Unavailability).order_by(Unavailability.date, Unavailability.id).all()

    @staticmethod
    def create(session: Session, record: Unavailability) -> Unavailability:
        session.add(record)
        session.commit()
        session.refresh(record)
        return record

    @staticmethod
    def bulk_create(session: Session, records: List[Unavailability]) -> None:
        session.add_all(records)
        session.commit()


class ShiftRequestRepository:
    """Repository for shift request data access."""

    @staticmethod
    def get_all(session: Session) -> List[ShiftRequest]:
        """Get all requests in submission order."""
        return session.query(ShiftRequest).order_by(ShiftRequest.id).all()

    @staticmethod
    def create(session: Session, request: ShiftRequest) -> ShiftRequest:
        session.add(request)
        session.commit()
        session.refresh(request)
        return request

    @staticmethod
    def bulk_create(session: Session, requests: List[ShiftRequest]) -> None:
        session.add_all(requests)
        session.commit()


class ScheduleRepository:
    """Repository for schedule entry data access."""

    @staticmethod
    def get_all(session: Session) -> List[ScheduleEntry]:
        return session.query(ScheduleEntry).order_by(ScheduleEntry.date, ScheduleEntry.staff_id).all()

    @staticmethod
    def get_between(session: Session, start: date, end: date) -> List[ScheduleEntry]:
        """Get entries dated from ``start`` to ``end`` inclusive."""
        return (
            session.query(ScheduleEntry)
            .filter(ScheduleEntry.date >= start, ScheduleEntry.date <= end)
            .order_by(ScheduleEntry.date, ScheduleEntry.staff_id)
            .all()
        )

    @staticmethod
    def get_lookback(session: Session, start: date, days: int) -> List[ScheduleEntry]:
        """Get entries in the ``days`` before ``start`` (``start`` excluded)."""
        return (
            session.query(ScheduleEntry)
            .filter(ScheduleEntry.date >= start - timedelta(days=days), ScheduleEntry.date < start)
            .order_by(ScheduleEntry.date, ScheduleEntry.staff_id)
            .all()
        )

    @staticmethod
    def bulk_create(session: Session, entries: List[ScheduleEntry], commit: bool = True) -> None:
        session.add_all(entries)
        if commit:
            session.commit()

    @staticmethod
    def delete_between(session: Session, start: date, end: date, commit: bool = True) -> int:
        """Delete entries from ``start`` to ``end`` inclusive. Returns number of deleted rows."""
        count = (
            session.query(ScheduleEntry)
            .filter(ScheduleEntry.date >= start, ScheduleEntry.date <= end)
            .delete(synchronize_session=False)
        )
        if commit:
            session.commit()
        return count
