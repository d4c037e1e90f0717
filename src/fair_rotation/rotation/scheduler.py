"""Priority scheduler - forward rotation over a date range."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date

from fair_rotation.errors import SchedulingInputError
from fair_rotation.models.employee import CounterKind, Employee
from fair_rotation.models.rotation_config import RotationConfig
from fair_rotation.models.schedule import (
    DayClassification,
    Holiday,
    ProposedDay,
    ScheduleHistory,
    ScheduleProposal,
)
from fair_rotation.rotation import counters
from fair_rotation.rotation.auditor import reconcile_schedule_days
from fair_rotation.rotation.classifier import classify, date_range, holiday_map, parse_date

logger = logging.getLogger(__name__)


class PriorityScheduler:
    """Proposes assignments day by day using live fairness counters.

    Each day's candidate order depends on the counters left by the previous
    day, so dates are processed strictly in order. The result is advisory:
    the auditor recomputes the authoritative counters after a commit.
    """

    def __init__(
        self,
        employees: list[Employee],
        history: ScheduleHistory,
        requirements: Mapping[str, int],
        holidays: list[Holiday],
        config: RotationConfig | None = None,
    ) -> None:
        self.config = config or RotationConfig()
        self.employees = list(employees)
        self.history = history
        self.requirements = dict(requirements)
        self.holidays = list(holidays)
        self._validate_inputs()

    def _validate_inputs(self) -> None:
        ids = [e.id for e in self.employees]
        if len(ids) != len(set(ids)):
            raise SchedulingInputError("Duplicate employee ids in scheduler input")

        known = self.config.known_environments
        for env_id, count in self.requirements.items():
            if isinstance(count, bool) or not isinstance(count, int):
                raise SchedulingInputError(
                    f"Headcount for environment '{env_id}' must be an integer, got {count!r}"
                )
            if count < 0:
                raise SchedulingInputError(
                    f"Negative headcount for environment '{env_id}': {count}"
                )
            if known is not None and env_id not in known:
                available = ", ".join(sorted(known))
                raise SchedulingInputError(
                    f"Unknown environment: {env_id}. Available: {available}"
                )

    @property
    def headcount(self) -> int:
        return sum(self.requirements.values())

    def run(self, start_date: date | str, num_days: int) -> ScheduleProposal:
        start = parse_date(start_date)
        if isinstance(num_days, bool) or not isinstance(num_days, int) or num_days < 1:
            raise SchedulingInputError(f"num_days must be a positive integer, got {num_days!r}")

        names = holiday_map(self.holidays)
        state: dict[str, Employee] = {e.id: e for e in self.employees}
        rotation: list[str] = [e.id for e in self.employees]

        # Who worked the last published day of each type: (date, employee ids).
        # Stored flags may predate holiday edits, so reclassify first.
        published = self.history.published_dates()
        workers = self.history.workers_by_date()
        past_days, _ = reconcile_schedule_days(
            self.history.schedule_days, self.holidays, published
        )
        last_special: dict[CounterKind, tuple[date, set[str]] | None] = dict.fromkeys(CounterKind)
        for past in past_days:
            if past.date in published and past.date < start:
                for kind in CounterKind:
                    if past.has_flag(kind):
                        last_special[kind] = (past.date, workers[past.date])

        year = counters.active_year(published, self.config.clock_year())

        proposed_days: list[ProposedDay] = []
        for day in date_range(start, num_days):
            if day.year > year:
                logger.info("Active year advances to %d; resetting yearly totals", day.year)
                year = day.year
                state = {k: counters.reset_year(e) for k, e in state.items()}

            cls = classify(day, names)
            if cls.is_special:
                proposed = self._schedule_special(cls, state, last_special, year)
            else:
                proposed = self._schedule_workday(cls, state, rotation)

            if proposed.total_shortfall:
                logger.warning(
                    "%s: short %d staff (%s)",
                    day.isoformat(),
                    proposed.total_shortfall,
                    ", ".join(f"{k}={v}" for k, v in proposed.shortfall.items()),
                )
            proposed_days.append(proposed)

        proposal = ScheduleProposal(
            proposed_days=proposed_days,
            updated_employees=[state[e.id] for e in self.employees],
        )
        logger.info(
            "Proposed %d day(s) from %s; total shortfall %d",
            len(proposed_days),
            start.isoformat(),
            proposal.total_shortfall,
        )
        return proposal

    def _schedule_special(
        self,
        cls: DayClassification,
        state: dict[str, Employee],
        last_special: dict[CounterKind, tuple[date, set[str]] | None],
        year: int,
    ) -> ProposedDay:
        kind = cls.primary_kind
        pool = [e for e in state.values() if e.is_active]

        candidates = pool
        previous = last_special[kind]
        if self.config.avoid_back_to_back and previous is not None:
            _, worked_last = previous
            rested = [e for e in pool if e.id not in worked_last]
            # Never understaff because of the back-to-back rule
            if len(rested) >= self.headcount:
                candidates = rested
            else:
                logger.debug(
                    "%s: back-to-back rule relaxed (%d rested < %d required)",
                    cls.date.isoformat(),
                    len(rested),
                    self.headcount,
                )

        ranked = counters.sort_by_priority(candidates, kind)
        proposed = self._allocate(cls, [e.id for e in ranked])

        worked = set(proposed.assigned_ids)
        # A day nobody works is unpublished and must not move any counter
        if worked:
            for emp_id, emp in state.items():
                state[emp_id] = counters.apply_day(
                    emp, cls.counter_kinds, cls.date, emp_id in worked, year
                )
            for k in cls.counter_kinds:
                last_special[k] = (cls.date, worked)
        return proposed

    def _schedule_workday(
        self,
        cls: DayClassification,
        state: dict[str, Employee],
        rotation: list[str],
    ) -> ProposedDay:
        pool = [emp_id for emp_id in rotation if state[emp_id].is_active]
        proposed = self._allocate(cls, pool)

        consumed = proposed.assigned_ids
        if consumed:
            used = set(consumed)
            rotation[:] = [emp_id for emp_id in rotation if emp_id not in used] + consumed
        return proposed

    def _allocate(self, cls: DayClassification, ranked_ids: list[str]) -> ProposedDay:
        """Give each environment the next contiguous slice of ``ranked_ids``."""
        assignments: dict[str, list[str]] = {}
        shortfall: dict[str, int] = {}
        index = 0
        for env_id, count in self.requirements.items():
            staff = ranked_ids[index : index + count]
            index += len(staff)
            assignments[env_id] = staff
            if len(staff) < count:
                shortfall[env_id] = count - len(staff)

        return ProposedDay(
            date=cls.date,
            is_sunday=cls.is_sunday,
            is_holiday=cls.is_holiday,
            holiday_name=cls.holiday_name,
            assignments=assignments,
            shortfall=shortfall,
        )


def generate_schedule(
    start_date: date | str,
    num_days: int,
    employees: list[Employee],
    history: ScheduleHistory,
    requirements: Mapping[str, int],
    holidays: list[Holiday],
    config: RotationConfig | None = None,
) -> ScheduleProposal:
    """Functional entry point for :class:`PriorityScheduler`."""
    scheduler = PriorityScheduler(employees, history, requirements, holidays, config)
    return scheduler.run(start_date, num_days)
