"""Fill one role's daily quota from the eligible pool."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from roster.timekeys import day_key

from .eligibility import find_best_staff
from .records import ScheduleRecord
from .selector import find_best_shift
from .state import ConstraintState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Shortfall:
    """A day/role pass that ended below its target."""

    date: date
    role: str
    kind: str
    target: int
    assigned: int

    @property
    def missing(self) -> int:
        return self.target - self.assigned


@dataclass
class FillResult:
    role: str
    kind: str
    target: int
    assigned: List[ScheduleRecord] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)
    shortfall: Optional[Shortfall] = None


def fill_day(
    state: ConstraintState,
    role: str,
    kind: str,
    day: date,
    cfg,
    preferred: Optional[Sequence[str]] = None,
) -> FillResult:
    """
    Assign staff of ``role`` on ``day`` until the ``min``/``max`` target is met.

    A person with no fitting shift is passed over for the rest of this call
    only; a later pass on the same day considers them again. Running out of
    candidates ends the pass with a shortfall, which is not an error.
    """
    target = cfg.target_for(role, kind)
    result = FillResult(role=role, kind=kind, target=target)
    skipped: set = set()

    while state.role_count(day, role) < target:
        person = find_best_staff(state, role, day, cfg, exclude=skipped)
        if person is None:
            break

        shift = find_best_shift(state, person, day, preferred)
        if shift is None:
            logger.debug("No fitting shift for staff %s on %s (%s/%s pass)", person.staff_id, day_key(day), role, kind)
            skipped.add(person.staff_id)
            result.skipped.append(person.staff_id)
            continue

        result.assigned.append(state.assign(person, shift, day))

    count = state.role_count(day, role)
    if count < target:
        result.shortfall = Shortfall(date=day, role=role, kind=kind, target=target, assigned=count)
        logger.info("Shortfall on %s for %s (%s): %d of %d", day_key(day), role, kind, count, target)
    return result
