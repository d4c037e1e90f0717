"""ValidatorAgent - checks a proposal before it is committed."""

from __future__ import annotations

from collections import Counter
from typing import Any

from fair_rotation.agents.base import BaseAgent
from fair_rotation.models.employee import Employee
from fair_rotation.models.schedule import ProposedDay, ScheduleProposal
from fair_rotation.models.validation import ValidationReport, Violation, ViolationSeverity


class ValidatorAgent(BaseAgent):
    """Validates a proposal and produces a report."""

    @property
    def name(self) -> str:
        return "validator"

    def validate(
        self, proposal: ScheduleProposal, employees: list[Employee]
    ) -> ValidationReport:
        by_id = {e.id: e for e in employees}
        violations: list[Violation] = []
        for day in proposal.proposed_days:
            violations.extend(self._check_double_booking(day))
            violations.extend(self._check_eligibility(day, by_id))
            violations.extend(self._check_shortfall(day))

        return ValidationReport(
            violations=violations,
            total_shortfall=proposal.total_shortfall,
        )

    def _check_double_booking(self, day: ProposedDay) -> list[Violation]:
        counts = Counter(day.assigned_ids)
        return [
            Violation(
                rule_id="double_booking",
                message=f"{emp_id}: assigned to {n} environments on {day.date.isoformat()}",
                severity=ViolationSeverity.ERROR,
                employee_id=emp_id,
                date=day.date,
            )
            for emp_id, n in counts.items()
            if n > 1
        ]

    def _check_eligibility(
        self, day: ProposedDay, by_id: dict[str, Employee]
    ) -> list[Violation]:
        violations: list[Violation] = []
        for emp_id in day.assigned_ids:
            emp = by_id.get(emp_id)
            if emp is None:
                message = f"{emp_id}: unknown employee"
            elif not emp.is_active:
                message = f"{emp_id}: status is {emp.status.value}"
            else:
                continue
            violations.append(
                Violation(
                    rule_id="ineligible_employee",
                    message=message,
                    severity=ViolationSeverity.ERROR,
                    employee_id=emp_id,
                    date=day.date,
                )
            )
        return violations

    def _check_shortfall(self, day: ProposedDay) -> list[Violation]:
        return [
            Violation(
                rule_id="shortfall",
                message=f"{env_id}: {missing} position(s) unfilled on {day.date.isoformat()}",
                severity=ViolationSeverity.WARNING,
                date=day.date,
            )
            for env_id, missing in day.shortfall.items()
        ]

    def _handle_validate(self, payload: dict[str, Any]) -> dict[str, Any]:
        report = self.validate(payload["proposal"], payload["employees"])
        return {"validation_report": report}
