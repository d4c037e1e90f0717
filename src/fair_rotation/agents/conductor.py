"""ConductorAgent - orchestrates audit, scheduling and reconciliation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from pathlib import Path
from typing import Any

from fair_rotation.agents.auditor_agent import AuditorAgent
from fair_rotation.agents.base import BaseAgent
from fair_rotation.agents.reporter import ReporterAgent
from fair_rotation.agents.scheduler_agent import SchedulerAgent
from fair_rotation.agents.validator import ValidatorAgent
from fair_rotation.models.rotation_config import RotationConfig
from fair_rotation.rotation.classifier import month_days
from fair_rotation.store.base import ScheduleStore

logger = logging.getLogger(__name__)


class ConductorAgent(BaseAgent):
    """Runs the full cycle against one store."""

    def __init__(self, store: ScheduleStore, config: RotationConfig | None = None) -> None:
        self.store = store
        self.config = config or RotationConfig()
        self._scheduler = SchedulerAgent(store, self.config)
        self._auditor = AuditorAgent(store, self.config)
        self._validator = ValidatorAgent()
        self._reporter = ReporterAgent()

    @property
    def name(self) -> str:
        return "conductor"

    def run_cycle(
        self,
        start_date: date | str,
        num_days: int,
        requirements: Mapping[str, int],
        commit: bool = True,
        output_path: str | Path | None = None,
    ) -> dict[str, Any]:
        """Run audit → propose → validate → commit → audit.

        The first audit gives the scheduler canonical counters; the second
        replaces the scheduler's provisional counters with the replayed ones.
        Nothing is committed when validation finds an error.

        Returns dict with proposal, validation_report, committed, audit_result
        and (if requested) output_path.
        """
        # 1. Canonical counters before scheduling
        self._auditor.audit()

        # 2. Propose
        proposal = self._scheduler.propose(start_date, num_days, requirements)

        # 3. Validate
        employees = self.store.load_employees()
        validation_report = self._validator.validate(proposal, employees)

        result: dict[str, Any] = {
            "proposal": proposal,
            "validation_report": validation_report,
            "committed": False,
        }

        # 4. Commit and reconcile
        if commit and validation_report.is_compliant:
            result["assignments"] = self._scheduler.commit(proposal)
            result["committed"] = True
            audit_result = self._auditor.audit()
            result["audit_result"] = audit_result
            employees = audit_result.employees
        elif commit:
            logger.error(
                "Proposal not committed: %d validation error(s)", validation_report.error_count
            )

        if output_path:
            filepath = self._reporter.generate_excel(
                filepath=output_path,
                employees=employees if result["committed"] else proposal.updated_employees,
                proposal=proposal,
                validation_report=validation_report,
            )
            result["output_path"] = str(filepath)

        return result

    def run_month(
        self,
        year: int,
        month: int,
        requirements: Mapping[str, int],
        commit: bool = True,
        output_path: str | Path | None = None,
    ) -> dict[str, Any]:
        """Run a cycle covering every day of a calendar month."""
        days = month_days(year, month)
        return self.run_cycle(days[0], len(days), requirements, commit, output_path)

    def _handle_run_cycle(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self.run_cycle(
            start_date=payload["start_date"],
            num_days=payload["num_days"],
            requirements=payload["requirements"],
            commit=payload.get("commit", True),
            output_path=payload.get("output_path"),
        )

    def _handle_run_month(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self.run_month(
            year=payload["year"],
            month=payload["month"],
            requirements=payload["requirements"],
            commit=payload.get("commit", True),
            output_path=payload.get("output_path"),
        )
