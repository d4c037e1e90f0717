"""Exceptions raised by the rotation core and its stores."""

from __future__ import annotations


class RotationError(Exception):
    """Base class for fair_rotation errors."""


class SchedulingInputError(RotationError, ValueError):
    """Scheduler input rejected before any computation."""


class DoubleBookingError(RotationError, ValueError):
    """Employee already assigned to another environment on the same date."""


class HistoryReadError(RotationError):
    """Schedule history could not be read; the audit is aborted."""


class StoreWriteError(RotationError):
    """A store failed to persist a record."""
