"""Rotation configuration."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class RotationConfig(BaseModel):
    """Configuration for the scheduler and the auditor."""

    avoid_back_to_back: bool = Field(
        default=True,
        description="Skip whoever worked the previous published day of the same type",
    )
    today: date | None = Field(
        default=None, description="Clock override for the active year; None uses date.today()"
    )
    known_environments: list[str] | None = Field(
        default=None, description="If set, requirement keys must be one of these ids"
    )

    def clock_year(self) -> int:
        return (self.today or date.today()).year
