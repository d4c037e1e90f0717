"""Fairness counter transitions shared by the scheduler and the auditor."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from fair_rotation.models.employee import CounterKind, Employee, FairnessCounter


def apply_day(
    employee: Employee,
    kinds: Iterable[CounterKind],
    day: date,
    worked: bool,
    active_year: int,
) -> Employee:
    """Apply one published day to every counter in ``kinds``."""
    for kind in kinds:
        counter = employee.counter(kind)
        if worked:
            counter = counter.record_worked(day, counts_for_year=day.year == active_year)
        else:
            counter = counter.record_missed()
        employee = employee.with_counter(kind, counter)
    return employee


def priority_key(counter: FairnessCounter) -> tuple[int, int, int]:
    """Sort key, ascending = higher priority.

    Never-worked first, then most consecutive days off, then the oldest
    ``last_worked_date``.
    """
    if counter.never_worked:
        return (0, 0, 0)
    last = counter.last_worked_date.toordinal() if counter.last_worked_date else 0
    return (1, -counter.consecutive_off, last)


def sort_by_priority(employees: list[Employee], kind: CounterKind) -> list[Employee]:
    """Stable priority ordering; ties keep their input order."""
    return sorted(employees, key=lambda e: priority_key(e.counter(kind)))


def active_year(published: Iterable[date], clock_year: int) -> int:
    """Year used for ``worked_this_year`` totals."""
    latest = max(published, default=None)
    if latest is None:
        return clock_year
    return max(clock_year, latest.year)


def reset_year(employee: Employee) -> Employee:
    return employee.with_counters(
        sunday=employee.sunday.reset_year(),
        holiday=employee.holiday.reset_year(),
    )
