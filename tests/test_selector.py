from datetime import date

from conftest import WEEK_END, WEEK_START
from roster.engine.records import StaffRecord, UnavailabilityRecord
from roster.engine.selector import can_take_shift, candidate_shifts, find_best_shift
from roster.engine.shifts import EIGHT_HOUR_FIRST, SHIFT_PRIORITY, get_shift
from roster.engine.state import ConstraintState

FULL_TIME = StaffRecord(staff_id=1, name="Full Time", role="Caregiver")
PART_TIME = StaffRecord(staff_id=2, name="Part Time", role="Caregiver", target_hours=24)


def _state(unavailability=()):
    return ConstraintState([FULL_TIME, PART_TIME], unavailability, WEEK_START, WEEK_END)


def _book(state, person, *codes):
    for offset, code in enumerate(codes):
        state.assign(person, get_shift(code), date(2025, 3, 10 + offset))


def test_fresh_week_accepts_every_shift():
    state = _state()
    for code in SHIFT_PRIORITY:
        assert can_take_shift(state, FULL_TIME, get_shift(code), WEEK_START)


def test_mix_quota_for_forty_hour_staff():
    state = _state()
    _book(state, FULL_TIME, "6A6P", "6A6P")
    day = date(2025, 3, 12)
    assert not can_take_shift(state, FULL_TIME, get_shift("6A6P"), day)
    assert not can_take_shift(state, FULL_TIME, get_shift("6P6A"), day)
    assert can_take_shift(state, FULL_TIME, get_shift("6A2P"), day)


def test_weekly_target_is_a_hard_cap():
    state = _state()
    _book(state, FULL_TIME, "6A6P", "6A6P", "6A2P", "6A2P")
    assert state.hours_for(1, "2025-03-10") == 40
    for code in SHIFT_PRIORITY:
        assert not can_take_shift(state, FULL_TIME, get_shift(code), date(2025, 3, 15))


def test_time_off_relaxes_mix_but_not_hours():
    state = _state([UnavailabilityRecord(1, date(2025, 3, 16))])
    _book(state, FULL_TIME, "6A6P", "6A6P")
    day = date(2025, 3, 12)
    assert can_take_shift(state, FULL_TIME, get_shift("6A6P"), day)

    state.assign(FULL_TIME, get_shift("6A6P"), day)
    # 36h booked: a further 8h shift would pass the target
    assert not can_take_shift(state, FULL_TIME, get_shift("6A2P"), date(2025, 3, 13))


def test_night_refused_when_next_day_booked():
    state = _state()
    state.assign(FULL_TIME, get_shift("6A2P"), date(2025, 3, 11))
    assert not can_take_shift(state, FULL_TIME, get_shift("6P6A"), WEEK_START)
    assert not can_take_shift(state, FULL_TIME, get_shift("10P6A"), WEEK_START)
    assert can_take_shift(state, FULL_TIME, get_shift("6A6P"), WEEK_START)


def test_mix_not_enforced_off_forty_hours():
    state = _state()
    _book(state, PART_TIME, "6A2P", "6A2P")
    assert can_take_shift(state, PART_TIME, get_shift("2P10P"), date(2025, 3, 12))
    assert not can_take_shift(state, PART_TIME, get_shift("6A6P"), date(2025, 3, 12))


def test_candidates_follow_mix_progress():
    state = _state()
    first_pick = candidate_shifts(state, FULL_TIME, WEEK_START)
    assert first_pick == SHIFT_PRIORITY
    assert [get_shift(code).hours for code in first_pick] == [12, 12, 8, 8, 8]

    _book(state, FULL_TIME, "6A6P", "6P6A")
    assert candidate_shifts(state, FULL_TIME, date(2025, 3, 13)) == EIGHT_HOUR_FIRST


def test_candidates_split_preference_list():
    state = _state()
    preferred = ["6A6P", "6A2P", "2P10P"]
    assert candidate_shifts(state, FULL_TIME, WEEK_START, preferred) == ["6A6P", "6A2P", "2P10P"]

    _book(state, FULL_TIME, "6A6P", "6A6P")
    assert candidate_shifts(state, FULL_TIME, date(2025, 3, 12), preferred) == ["6A2P", "2P10P", "6A6P"]


def test_candidates_for_other_targets_spread_by_usage():
    state = _state()
    state.assign(FULL_TIME, get_shift("6A6P"), WEEK_START)
    assert candidate_shifts(state, PART_TIME, WEEK_START) == ["6P6A", "6A2P", "2P10P", "10P6A", "6A6P"]
    assert candidate_shifts(state, PART_TIME, WEEK_START, ["2P10P"]) == ["2P10P"]


def test_find_best_shift_skips_refused_codes():
    state = _state()
    _book(state, FULL_TIME, "6A6P", "6A6P")
    assert find_best_shift(state, FULL_TIME, date(2025, 3, 12)).code == "6A2P"

    _book(state, PART_TIME, "6A2P", "6A2P", "6A2P")
    assert find_best_shift(state, PART_TIME, date(2025, 3, 13)) is None
