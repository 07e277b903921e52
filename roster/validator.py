from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Sequence

import pandas as pd

from roster.engine.records import ScheduleRecord, StaffRecord, UnavailabilityRecord
from roster.engine.shifts import BALANCED_WEEK_HOURS, MIX_QUOTA, NIGHT_SHIFTS, SHIFTS_BY_CODE
from roster.timekeys import parse_date, week_key


def schedule_frame(entries: Iterable[ScheduleRecord]) -> pd.DataFrame:
    rows = [{"staff_id": e.staff_id, "date": parse_date(e.date), "shift": e.shift} for e in entries]
    df = pd.DataFrame(rows, columns=["staff_id", "date", "shift"])
    df["hours"] = df["shift"].map(lambda code: SHIFTS_BY_CODE[code].hours if code in SHIFTS_BY_CODE else None)
    df["week"] = df["date"].map(week_key)
    return df


def _longest_run(dates: Sequence) -> int:
    longest = run = 0
    previous = None
    for d in sorted(set(dates)):
        run = run + 1 if previous is not None and d - previous == timedelta(days=1) else 1
        longest = max(longest, run)
        previous = d
    return longest


def validate_schedule(
    entries: Iterable[ScheduleRecord],
    staff: Iterable[StaffRecord],
    unavailability: Iterable[UnavailabilityRecord] = (),
    cfg=None,
) -> None:
    """
    Check a generated schedule against the hard rostering rules.

    Raises:
        ValueError: Describing the first violated rule
    """
    df = schedule_frame(entries)
    if df.empty:
        return
    roster = {s.staff_id: s for s in staff}
    max_days = cfg.max_consecutive_days if cfg is not None else 4

    # Referential integrity
    unknown_staff = set(df["staff_id"]) - set(roster)
    if unknown_staff:
        raise ValueError(f"Schedule references unknown staff ids: {sorted(unknown_staff)}")
    unknown_shifts = set(df["shift"]) - set(SHIFTS_BY_CODE)
    if unknown_shifts:
        raise ValueError(f"Schedule references unknown shift codes: {sorted(unknown_shifts)}")

    # One entry per staff per date
    dupes = df[df.duplicated(subset=["staff_id", "date"], keep=False)]
    if not dupes.empty:
        first = dupes.iloc[0]
        raise ValueError(f"Staff {first['staff_id']} has more than one shift on {first['date']}")

    # Unavailable days
    days_off = {(u.staff_id, parse_date(u.date)) for u in unavailability}
    for row in df.itertuples():
        if (row.staff_id, row.date) in days_off:
            raise ValueError(f"Staff {row.staff_id} is scheduled on unavailable day {row.date}")

    # Rest after nights
    booked = set(zip(df["staff_id"], df["date"]))
    for row in df[df["shift"].isin(NIGHT_SHIFTS)].itertuples():
        if (row.staff_id, row.date + timedelta(days=1)) in booked:
            raise ValueError(f"Staff {row.staff_id} works the day after a night shift on {row.date}")

    # Consecutive days
    for staff_id, group in df.groupby("staff_id"):
        run = _longest_run(list(group["date"]))
        if run > max_days:
            raise ValueError(f"Staff {staff_id} works {run} consecutive days (max {max_days})")

    # Weekly hours and shift mix
    weeks_off = {(staff_id, week_key(d)) for staff_id, d in days_off}
    weekly = df.groupby(["staff_id", "week"]).agg(
        hours=("hours", "sum"),
        eight=("hours", lambda h: int((h == 8).sum())),
        twelve=("hours", lambda h: int((h == 12).sum())),
    )
    for (staff_id, week), row in weekly.iterrows():
        target = roster[staff_id].target_hours
        if row["hours"] > target:
            raise ValueError(f"Staff {staff_id} exceeds {target}h in week {week}: {row['hours']}h")
        if target == BALANCED_WEEK_HOURS and (staff_id, week) not in weeks_off:
            if row["eight"] > MIX_QUOTA or row["twelve"] > MIX_QUOTA:
                raise ValueError(
                    f"Staff {staff_id} breaks the shift mix in week {week}: "
                    f"{row['eight']}x8h, {row['twelve']}x12h"
                )


def coverage_table(entries: Iterable[ScheduleRecord], staff: Iterable[StaffRecord]) -> pd.DataFrame:
    """Staff count per day (rows) and role (columns)."""
    roles = {s.staff_id: s.role for s in staff}
    df = schedule_frame(entries)
    if df.empty:
        return pd.DataFrame()
    df["role"] = df["staff_id"].map(roles)
    return df.groupby(["date", "role"]).size().unstack(fill_value=0)


def summarize_schedule(entries: Iterable[ScheduleRecord], staff: Iterable[StaffRecord]) -> str:
    entries = list(entries)
    staff = list(staff)
    if not entries:
        return "No assignments."
    names = {s.staff_id: s.name for s in staff}
    df = schedule_frame(entries)

    shifts = df.groupby(["date", "shift"]).size().unstack(fill_value=0)
    df["name"] = df["staff_id"].map(names)
    hours = df.groupby(["name", "week"])["hours"].sum().unstack(fill_value=0)

    lines = ["Coverage per day per role:"]
    lines.append(coverage_table(entries, staff).to_string())
    lines.append("")
    lines.append("Shifts per day:")
    lines.append(shifts.to_string())
    lines.append("")
    lines.append("Hours per staff member per week:")
    lines.append(hours.to_string())
    return "\n".join(lines)
