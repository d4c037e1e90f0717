"""In-memory store."""

from __future__ import annotations

from datetime import date

from fair_rotation.errors import StoreWriteError
from fair_rotation.models.employee import Category, Employee, Environment
from fair_rotation.models.schedule import Assignment, Holiday, ScheduleDay
from fair_rotation.store.base import ScheduleStore


class InMemoryStore(ScheduleStore):
    """Dictionary-backed store for tests and embedding."""

    def __init__(
        self,
        employees: list[Employee] | None = None,
        holidays: list[Holiday] | None = None,
        schedule_days: list[ScheduleDay] | None = None,
        assignments: list[Assignment] | None = None,
        environments: list[Environment] | None = None,
        categories: list[Category] | None = None,
    ) -> None:
        self._employees: dict[str, Employee] = {e.id: e for e in employees or []}
        self._holidays: dict[date, Holiday] = {h.date: h for h in holidays or []}
        self._days: dict[date, ScheduleDay] = {d.date: d for d in schedule_days or []}
        self._assignments: list[Assignment] = list(assignments or [])
        self._environments: dict[str, Environment] = {e.id: e for e in environments or []}
        self._categories: dict[str, Category] = {c.id: c for c in categories or []}

    def load_employees(self) -> list[Employee]:
        return list(self._employees.values())

    def load_holidays(self) -> list[Holiday]:
        return [self._holidays[k] for k in sorted(self._holidays)]

    def load_schedule_days(self) -> list[ScheduleDay]:
        return [self._days[k] for k in sorted(self._days)]

    def load_assignments(self) -> list[Assignment]:
        return list(self._assignments)

    def load_environments(self) -> list[Environment]:
        return list(self._environments.values())

    def load_categories(self) -> list[Category]:
        return list(self._categories.values())

    def save_employee(self, employee: Employee) -> None:
        self._employees[employee.id] = employee

    def save_employee_counters(self, employee: Employee) -> None:
        current = self._employees.get(employee.id)
        if current is None:
            raise StoreWriteError(f"Unknown employee: {employee.id}")
        self._employees[employee.id] = current.with_counters(employee.sunday, employee.holiday)

    def save_environment(self, environment: Environment) -> None:
        self._environments[environment.id] = environment

    def save_category(self, category: Category) -> None:
        self._categories[category.id] = category

    def save_holiday(self, holiday: Holiday) -> None:
        self._holidays[holiday.date] = holiday

    def delete_holiday(self, day: date) -> None:
        self._holidays.pop(day, None)

    def save_schedule_day(self, day: ScheduleDay) -> None:
        self._days[day.date] = day

    def delete_schedule_day(self, day: date) -> None:
        self._days.pop(day, None)

    def add_assignment(self, assignment: Assignment) -> None:
        for a in self._assignments:
            if a.date == assignment.date and a.employee_id == assignment.employee_id:
                raise StoreWriteError(
                    f"Employee {assignment.employee_id} already assigned on "
                    f"{assignment.date.isoformat()}"
                )
        self._assignments.append(assignment)

    def remove_assignment(self, assignment: Assignment) -> None:
        self._assignments = [a for a in self._assignments if a != assignment]

    def delete_assignments(self, day: date) -> None:
        self._assignments = [a for a in self._assignments if a.date != day]
