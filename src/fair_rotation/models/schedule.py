"""Schedule-related data models."""

from __future__ import annotations

from collections import defaultdict
import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from fair_rotation.models.employee import CounterKind, Employee


class DayType(str, Enum):
    """Single-type classification used for the scheduler's per-day branch."""

    WORKDAY = "workday"
    SUNDAY = "sunday"
    HOLIDAY = "holiday"


class Holiday(BaseModel):
    """Registered public holiday."""

    id: str = ""
    date: dt.date
    name: str


class DayClassification(BaseModel):
    """Calendar facts about one date.

    ``is_sunday`` and ``is_holiday`` are independent; ``day_type`` picks
    Holiday over Sunday when both apply.
    """

    model_config = ConfigDict(frozen=True)

    date: dt.date
    is_sunday: bool = False
    is_holiday: bool = False
    holiday_name: str | None = None

    @property
    def is_special(self) -> bool:
        return self.is_sunday or self.is_holiday

    @property
    def day_type(self) -> DayType:
        if self.is_holiday:
            return DayType.HOLIDAY
        if self.is_sunday:
            return DayType.SUNDAY
        return DayType.WORKDAY

    @property
    def counter_kinds(self) -> list[CounterKind]:
        """Fairness counters touched by this date, in update order."""
        kinds: list[CounterKind] = []
        if self.is_sunday:
            kinds.append(CounterKind.SUNDAY)
        if self.is_holiday:
            kinds.append(CounterKind.HOLIDAY)
        return kinds

    @property
    def primary_kind(self) -> CounterKind | None:
        """Counter that drives priority ordering for this date."""
        if self.is_holiday:
            return CounterKind.HOLIDAY
        if self.is_sunday:
            return CounterKind.SUNDAY
        return None


class ScheduleDay(BaseModel):
    """Persisted day row. Published once any Assignment references its date."""

    date: dt.date
    is_sunday: bool = False
    is_holiday: bool = False
    holiday_name: str | None = None

    def has_flag(self, kind: CounterKind) -> bool:
        return self.is_sunday if kind == CounterKind.SUNDAY else self.is_holiday


class Assignment(BaseModel):
    """One employee working in one environment on one date."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    environment_id: str
    employee_id: str


class ScheduleHistory(BaseModel):
    """Snapshot of every persisted ScheduleDay and Assignment."""

    schedule_days: list[ScheduleDay] = Field(default_factory=list)
    assignments: list[Assignment] = Field(default_factory=list)

    def workers_by_date(self) -> dict[dt.date, set[str]]:
        result: dict[dt.date, set[str]] = defaultdict(set)
        for a in self.assignments:
            result[a.date].add(a.employee_id)
        return dict(result)

    def published_dates(self) -> set[dt.date]:
        return {a.date for a in self.assignments}

    def workers_on(self, day: dt.date) -> set[str]:
        return {a.employee_id for a in self.assignments if a.date == day}


class ProposedDay(BaseModel):
    """Scheduler output for one date."""

    date: dt.date
    is_sunday: bool = False
    is_holiday: bool = False
    holiday_name: str | None = None
    assignments: dict[str, list[str]] = Field(
        default_factory=dict, description="environment_id -> assigned employee ids"
    )
    shortfall: dict[str, int] = Field(
        default_factory=dict, description="environment_id -> unfilled headcount"
    )

    @property
    def total_shortfall(self) -> int:
        return sum(self.shortfall.values())

    @property
    def assigned_ids(self) -> list[str]:
        return [emp_id for ids in self.assignments.values() for emp_id in ids]

    def to_schedule_day(self) -> ScheduleDay:
        return ScheduleDay(
            date=self.date,
            is_sunday=self.is_sunday,
            is_holiday=self.is_holiday,
            holiday_name=self.holiday_name,
        )

    def to_assignments(self) -> list[Assignment]:
        return [
            Assignment(date=self.date, environment_id=env_id, employee_id=emp_id)
            for env_id, ids in self.assignments.items()
            for emp_id in ids
        ]


class ScheduleProposal(BaseModel):
    """Result of a scheduler run. Advisory until the auditor reconciles it."""

    proposed_days: list[ProposedDay] = Field(default_factory=list)
    updated_employees: list[Employee] = Field(default_factory=list)

    @property
    def total_shortfall(self) -> int:
        return sum(d.total_shortfall for d in self.proposed_days)

    @property
    def has_shortfall(self) -> bool:
        return self.total_shortfall > 0
