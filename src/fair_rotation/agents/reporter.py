"""ReporterAgent - fairness tables and Excel output."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from fair_rotation.agents.base import BaseAgent
from fair_rotation.io.excel_writer import build_fairness_frame, write_report_excel
from fair_rotation.models.employee import Employee
from fair_rotation.models.schedule import ScheduleProposal
from fair_rotation.models.validation import ValidationReport


class ReporterAgent(BaseAgent):
    """Generates fairness tables and Excel reports."""

    @property
    def name(self) -> str:
        return "reporter"

    def fairness_table(self, employees: list[Employee]) -> pd.DataFrame:
        return build_fairness_frame(employees)

    def generate_excel(
        self,
        filepath: str | Path,
        employees: list[Employee],
        proposal: ScheduleProposal | None = None,
        validation_report: ValidationReport | None = None,
    ) -> Path:
        filepath = Path(filepath)
        write_report_excel(filepath, employees, proposal, validation_report)
        return filepath

    def _handle_fairness_table(self, payload: dict[str, Any]) -> dict[str, Any]:
        return {"fairness_table": self.fairness_table(payload["employees"])}

    def _handle_generate_excel(self, payload: dict[str, Any]) -> dict[str, Any]:
        filepath = self.generate_excel(
            filepath=payload["filepath"],
            employees=payload["employees"],
            proposal=payload.get("proposal"),
            validation_report=payload.get("validation_report"),
        )
        return {"filepath": str(filepath)}
