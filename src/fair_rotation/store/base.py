"""Persistence interface used by the agents."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from fair_rotation.errors import DoubleBookingError
from fair_rotation.models.employee import Category, Employee, Environment
from fair_rotation.models.schedule import (
    Assignment,
    Holiday,
    ScheduleDay,
    ScheduleHistory,
    ScheduleProposal,
)
from fair_rotation.rotation.classifier import classify


class ScheduleStore(ABC):
    """Table-level read/write operations over the schedule database.

    Writes are independent; there is no transaction spanning several records.
    """

    # --- Reads ---
    @abstractmethod
    def load_employees(self) -> list[Employee]:
        """All employees in a stable order."""

    @abstractmethod
    def load_holidays(self) -> list[Holiday]:
        """The live holiday list."""

    @abstractmethod
    def load_schedule_days(self) -> list[ScheduleDay]:
        """Every persisted ScheduleDay row."""

    @abstractmethod
    def load_assignments(self) -> list[Assignment]:
        """Every persisted Assignment row."""

    @abstractmethod
    def load_environments(self) -> list[Environment]:
        """Registered environments in insertion order."""

    @abstractmethod
    def load_categories(self) -> list[Category]: ...

    def load_history(self) -> ScheduleHistory:
        return ScheduleHistory(
            schedule_days=self.load_schedule_days(),
            assignments=self.load_assignments(),
        )

    # --- Writes ---
    @abstractmethod
    def save_employee(self, employee: Employee) -> None:
        """Insert or replace a full employee record."""

    @abstractmethod
    def save_employee_counters(self, employee: Employee) -> None:
        """Overwrite only the Sunday and Holiday counters of an existing employee."""

    @abstractmethod
    def save_environment(self, environment: Environment) -> None: ...

    @abstractmethod
    def save_category(self, category: Category) -> None: ...

    @abstractmethod
    def save_holiday(self, holiday: Holiday) -> None: ...

    @abstractmethod
    def delete_holiday(self, day: date) -> None: ...

    @abstractmethod
    def save_schedule_day(self, day: ScheduleDay) -> None:
        """Insert or replace the ScheduleDay row for ``day.date``."""

    @abstractmethod
    def delete_schedule_day(self, day: date) -> None: ...

    @abstractmethod
    def add_assignment(self, assignment: Assignment) -> None: ...

    @abstractmethod
    def remove_assignment(self, assignment: Assignment) -> None: ...

    @abstractmethod
    def delete_assignments(self, day: date) -> None:
        """Remove every assignment on ``day``."""

    # --- Assignment lifecycle ---
    def assign(self, day: date, environment_id: str, employee_id: str) -> Assignment:
        """Assign an employee, creating the ScheduleDay row on first use.

        Raises:
            DoubleBookingError: If the employee works another environment that day.
        """
        assignment = Assignment(date=day, environment_id=environment_id, employee_id=employee_id)
        existing = [
            a for a in self.load_assignments() if a.date == day and a.employee_id == employee_id
        ]
        for a in existing:
            if a.environment_id != environment_id:
                raise DoubleBookingError(
                    f"Employee '{employee_id}' already works '{a.environment_id}' on {day.isoformat()}"
                )
        if existing:
            return assignment

        if not any(d.date == day for d in self.load_schedule_days()):
            cls = classify(day, self.load_holidays())
            self.save_schedule_day(
                ScheduleDay(
                    date=day,
                    is_sunday=cls.is_sunday,
                    is_holiday=cls.is_holiday,
                    holiday_name=cls.holiday_name,
                )
            )
        self.add_assignment(assignment)
        return assignment

    def unassign(self, day: date, environment_id: str, employee_id: str) -> None:
        """Remove an assignment; the ScheduleDay goes with the last one."""
        self.remove_assignment(
            Assignment(date=day, environment_id=environment_id, employee_id=employee_id)
        )
        if not any(a.date == day for a in self.load_assignments()):
            self.delete_schedule_day(day)

    def commit_proposal(self, proposal: ScheduleProposal) -> list[Assignment]:
        """Replace the assignments of every proposed date with the proposal's."""
        written: list[Assignment] = []
        for proposed in proposal.proposed_days:
            self.delete_assignments(proposed.date)
            assignments = proposed.to_assignments()
            if not assignments:
                self.delete_schedule_day(proposed.date)
                continue
            self.save_schedule_day(proposed.to_schedule_day())
            for a in assignments:
                self.add_assignment(a)
            written.extend(assignments)
        return written
