"""SchedulerAgent - proposes and commits assignments."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from fair_rotation.agents.base import BaseAgent
from fair_rotation.models.rotation_config import RotationConfig
from fair_rotation.models.schedule import Assignment, ScheduleProposal
from fair_rotation.rotation.scheduler import PriorityScheduler
from fair_rotation.store.base import ScheduleStore

logger = logging.getLogger(__name__)


class SchedulerAgent(BaseAgent):
    """Runs the priority scheduler on a snapshot read from the store."""

    def __init__(self, store: ScheduleStore, config: RotationConfig | None = None) -> None:
        self.store = store
        self.config = config or RotationConfig()

    @property
    def name(self) -> str:
        return "scheduler"

    def propose(
        self,
        start_date: date | str,
        num_days: int,
        requirements: Mapping[str, int],
    ) -> ScheduleProposal:
        """Propose assignments from the store's current snapshot.

        Requirement keys are checked against the registered environments
        unless the config already lists them. With no environment rows,
        any key is accepted.
        """
        config = self.config
        if config.known_environments is None:
            registered = [env.id for env in self.store.load_environments()]
            if registered:
                config = config.model_copy(update={"known_environments": registered})

        scheduler = PriorityScheduler(
            employees=self.store.load_employees(),
            history=self.store.load_history(),
            requirements=requirements,
            holidays=self.store.load_holidays(),
            config=config,
        )
        return scheduler.run(start_date, num_days)

    def commit(self, proposal: ScheduleProposal) -> list[Assignment]:
        """Persist the proposal's assignments. Counters are left to the auditor."""
        written = self.store.commit_proposal(proposal)
        logger.info(
            "Committed %d assignment(s) over %d day(s)",
            len(written),
            len(proposal.proposed_days),
        )
        return written

    def _handle_propose(self, payload: dict[str, Any]) -> dict[str, Any]:
        proposal = self.propose(
            start_date=payload["start_date"],
            num_days=payload["num_days"],
            requirements=payload["requirements"],
        )
        return {"proposal": proposal}

    def _handle_commit(self, payload: dict[str, Any]) -> dict[str, Any]:
        proposal = payload["proposal"]
        if not isinstance(proposal, ScheduleProposal):
            proposal = ScheduleProposal.model_validate(proposal)
        return {"assignments": self.commit(proposal)}
