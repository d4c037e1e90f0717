"""Counter audit result model."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from fair_rotation.models.employee import Employee
from fair_rotation.models.schedule import ScheduleDay


class AuditResult(BaseModel):
    """Outcome of a full counter recompute."""

    employees: list[Employee] = Field(default_factory=list)
    reconciled_days: list[ScheduleDay] = Field(
        default_factory=list,
        description="ScheduleDay rows whose stored flags were corrected or created",
    )
    active_year: int
    unreconciled_employee_ids: list[str] = Field(
        default_factory=list, description="Employees whose counters failed to persist"
    )
    unreconciled_dates: list[dt.date] = Field(
        default_factory=list, description="Reconciled ScheduleDays that failed to persist"
    )

    @property
    def is_converged(self) -> bool:
        """True when the store now matches this recompute."""
        return not self.unreconciled_employee_ids and not self.unreconciled_dates
