"""Employee data models."""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EmployeeStatus(str, Enum):
    """Employment status. Only ACTIVE employees can be scheduled."""

    ACTIVE = "active"
    VACATION = "vacation"
    LEAVE = "leave"


class CounterKind(str, Enum):
    """Day-type governed by a fairness counter."""

    SUNDAY = "sunday"
    HOLIDAY = "holiday"


class FairnessCounter(BaseModel):
    """Per day-type fairness counter.

    ``consecutive_off`` is ``None`` while the employee has never worked this
    day-type. That is the only "never worked" marker; it is not an integer.
    """

    model_config = ConfigDict(frozen=True)

    last_worked_date: date | None = None
    consecutive_off: int | None = Field(
        default=None, ge=0, description="Published days of this type since last worked"
    )
    total_worked: int = Field(default=0, ge=0)
    worked_this_year: int = Field(default=0, ge=0)

    @property
    def never_worked(self) -> bool:
        return self.consecutive_off is None

    def record_worked(self, day: date, counts_for_year: bool) -> FairnessCounter:
        """Counter after working ``day``."""
        return FairnessCounter(
            last_worked_date=day,
            consecutive_off=0,
            total_worked=self.total_worked + 1,
            worked_this_year=self.worked_this_year + (1 if counts_for_year else 0),
        )

    def record_missed(self) -> FairnessCounter:
        """Counter after a published day of this type the employee did not work."""
        if self.never_worked:
            return self
        return self.model_copy(update={"consecutive_off": self.consecutive_off + 1})

    def reset_year(self) -> FairnessCounter:
        return self.model_copy(update={"worked_this_year": 0})


class Category(BaseModel):
    """Employee category (e.g. cashier, stock)."""

    id: str
    name: str


class Environment(BaseModel):
    """Work environment that requires staff each day."""

    id: str
    name: str


class Employee(BaseModel):
    """Employee with its Sunday and Holiday fairness counters."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    category_id: str | None = None
    environment_id: str | None = Field(
        default=None, description="Home environment; informational only"
    )
    role: str | None = None
    sunday: FairnessCounter = Field(default_factory=FairnessCounter)
    holiday: FairnessCounter = Field(default_factory=FairnessCounter)

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    def counter(self, kind: CounterKind) -> FairnessCounter:
        return self.sunday if kind == CounterKind.SUNDAY else self.holiday

    def with_counter(self, kind: CounterKind, counter: FairnessCounter) -> Employee:
        return self.model_copy(update={kind.value: counter})

    def with_counters(self, sunday: FairnessCounter, holiday: FairnessCounter) -> Employee:
        return self.model_copy(update={"sunday": sunday, "holiday": holiday})
