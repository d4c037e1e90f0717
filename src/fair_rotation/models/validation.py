"""Validation result models."""

from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field


class ViolationSeverity(str, Enum):
    """Severity levels for rule violations."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Violation(BaseModel):
    """A single rule violation found in a proposal."""

    rule_id: str
    message: str
    severity: ViolationSeverity = ViolationSeverity.WARNING
    employee_id: str | None = None
    date: dt.date | None = None


class ValidationReport(BaseModel):
    """Validation report for a schedule proposal."""

    violations: list[Violation] = Field(default_factory=list)
    total_shortfall: int = 0

    @property
    def is_compliant(self) -> bool:
        """True if no error-level violations exist."""
        return not any(v.severity == ViolationSeverity.ERROR for v in self.violations)

    @property
    def error_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == ViolationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == ViolationSeverity.WARNING)
