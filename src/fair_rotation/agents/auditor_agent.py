"""AuditorAgent - recomputes and persists fairness counters."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fair_rotation.agents.base import BaseAgent
from fair_rotation.errors import HistoryReadError, StoreWriteError
from fair_rotation.models.audit import AuditResult
from fair_rotation.models.employee import Employee
from fair_rotation.models.rotation_config import RotationConfig
from fair_rotation.models.schedule import Holiday
from fair_rotation.rotation.auditor import recompute_counters
from fair_rotation.store.base import ScheduleStore

logger = logging.getLogger(__name__)


class AuditorAgent(BaseAgent):
    """Rebuilds every employee's counters from the stored history.

    Safe to re-run at any time: the result depends only on the stored
    assignments and the live holiday list.
    """

    def __init__(self, store: ScheduleStore, config: RotationConfig | None = None) -> None:
        self.store = store
        self.config = config or RotationConfig()

    @property
    def name(self) -> str:
        return "auditor"

    def audit(
        self,
        employees: list[Employee] | None = None,
        holidays: list[Holiday] | None = None,
    ) -> AuditResult:
        """Reconcile day flags, recompute counters and overwrite them in the store.

        ``employees`` and ``holidays`` default to the store's current rows.

        Raises:
            HistoryReadError: If any read fails. Nothing is written in that case.
        """
        try:
            if employees is None:
                employees = self.store.load_employees()
            if holidays is None:
                holidays = self.store.load_holidays()
            history = self.store.load_history()
        except Exception as e:
            raise HistoryReadError(f"Could not read schedule history: {e}") from e

        result = recompute_counters(employees, holidays, history, today=self.config.today)

        unreconciled_dates: list[date] = []
        for day in result.reconciled_days:
            try:
                self.store.save_schedule_day(day)
            except StoreWriteError:
                logger.exception("Failed to persist schedule day %s", day.date.isoformat())
                unreconciled_dates.append(day.date)

        unreconciled: list[str] = []
        for emp in result.employees:
            try:
                self.store.save_employee_counters(emp)
            except StoreWriteError:
                logger.exception("Failed to persist counters for employee %s", emp.id)
                unreconciled.append(emp.id)

        if unreconciled or unreconciled_dates:
            logger.warning(
                "Audit incomplete, re-run it: %d employee(s) %s; %d day(s) %s",
                len(unreconciled),
                ", ".join(unreconciled),
                len(unreconciled_dates),
                ", ".join(d.isoformat() for d in unreconciled_dates),
            )
        return result.model_copy(
            update={
                "unreconciled_employee_ids": unreconciled,
                "unreconciled_dates": unreconciled_dates,
            }
        )

    def _handle_audit(self, payload: dict[str, Any]) -> dict[str, Any]:
        result = self.audit(
            employees=payload.get("employees"),
            holidays=payload.get("holidays"),
        )
        return {"audit_result": result}
