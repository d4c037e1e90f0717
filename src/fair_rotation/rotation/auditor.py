"""Counter audit - rebuild fairness counters by replaying the assignment log."""

from __future__ import annotations

import logging
from datetime import date

from fair_rotation.models.audit import AuditResult
from fair_rotation.models.employee import CounterKind, Employee, FairnessCounter
from fair_rotation.models.schedule import Holiday, ScheduleDay, ScheduleHistory
from fair_rotation.rotation import counters
from fair_rotation.rotation.classifier import classify, holiday_map

logger = logging.getLogger(__name__)


def reconcile_schedule_days(
    schedule_days: list[ScheduleDay],
    holidays: list[Holiday],
    published_dates: set[date] | None = None,
) -> tuple[list[ScheduleDay], list[ScheduleDay]]:
    """Recompute Sunday/holiday flags from the live holiday list.

    Returns ``(all_days, changed_days)``. ``all_days`` is sorted by date.
    Dates in ``published_dates`` without a ScheduleDay row are materialized
    and reported as changed.
    """
    names = holiday_map(holidays)
    by_date = {d.date: d for d in schedule_days}
    for missing in sorted((published_dates or set()) - by_date.keys()):
        by_date[missing] = None

    all_days: list[ScheduleDay] = []
    changed: list[ScheduleDay] = []
    for day in sorted(by_date):
        cls = classify(day, names)
        fresh = ScheduleDay(
            date=day,
            is_sunday=cls.is_sunday,
            is_holiday=cls.is_holiday,
            holiday_name=cls.holiday_name,
        )
        stored = by_date[day]
        if stored is None or stored != fresh:
            changed.append(fresh)
        all_days.append(fresh)
    return all_days, changed


def replay_employee(
    employee: Employee,
    published_days: list[ScheduleDay],
    worked_dates: set[date],
    active_year: int,
) -> Employee:
    """Rebuild one employee's counters from the sentinel state."""
    result = employee.with_counters(sunday=FairnessCounter(), holiday=FairnessCounter())
    for day in published_days:
        kinds: list[CounterKind] = []
        if day.is_sunday:
            kinds.append(CounterKind.SUNDAY)
        if day.is_holiday:
            kinds.append(CounterKind.HOLIDAY)
        if kinds:
            result = counters.apply_day(
                result, kinds, day.date, day.date in worked_dates, active_year
            )
    return result


def recompute_counters(
    employees: list[Employee],
    holidays: list[Holiday],
    history: ScheduleHistory,
    today: date | None = None,
) -> AuditResult:
    """Recompute every employee's counters from the full history.

    Pure and idempotent: the same inputs always give the same counters.
    Only published days (with at least one assignment) are replayed.
    """
    workers = history.workers_by_date()
    published = set(workers)

    all_days, changed = reconcile_schedule_days(history.schedule_days, holidays, published)
    published_days = [d for d in all_days if d.date in published]

    clock_year = (today or date.today()).year
    year = counters.active_year(published, clock_year)

    worked_by_employee: dict[str, set[date]] = {}
    for day, emp_ids in workers.items():
        for emp_id in emp_ids:
            worked_by_employee.setdefault(emp_id, set()).add(day)

    updated = [
        replay_employee(emp, published_days, worked_by_employee.get(emp.id, set()), year)
        for emp in employees
    ]

    logger.info(
        "Recomputed %d employee(s) over %d published day(s); %d day flag(s) reconciled; active year %d",
        len(updated),
        len(published_days),
        len(changed),
        year,
    )
    return AuditResult(employees=updated, reconciled_days=changed, active_year=year)
