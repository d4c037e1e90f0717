"""Calendar classification of dates into workdays, Sundays and holidays."""

from __future__ import annotations

import calendar
import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta

from fair_rotation.errors import SchedulingInputError
from fair_rotation.models.schedule import DayClassification, DayType, Holiday

_SUNDAY = 6  # date.weekday(): 0=Mon..6=Sun
_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_date(value: date | str) -> date:
    """Accept a date or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    # date.fromisoformat also takes basic and week forms on 3.11+
    if not _ISO_DATE.fullmatch(text):
        raise SchedulingInputError(f"Malformed date: {value!r}")
    try:
        return date.fromisoformat(text)
    except ValueError as e:
        raise SchedulingInputError(f"Malformed date: {value!r}") from e


def holiday_map(holidays: Iterable[Holiday]) -> dict[date, str]:
    """Map holiday dates to names. Later entries win on duplicate dates."""
    return {h.date: h.name for h in holidays}


def is_sunday(day: date) -> bool:
    return day.weekday() == _SUNDAY


def classify(
    day: date, holidays: Iterable[Holiday] | Mapping[date, str]
) -> DayClassification:
    """Classify ``day`` against the current holiday list.

    Sunday and holiday flags are computed independently, so a date can be both.
    """
    names = holidays if isinstance(holidays, Mapping) else holiday_map(holidays)
    name = names.get(day)
    return DayClassification(
        date=day,
        is_sunday=is_sunday(day),
        is_holiday=name is not None,
        holiday_name=name,
    )


def classify_day_type(
    day: date, holidays: Iterable[Holiday] | Mapping[date, str]
) -> DayType:
    """Single-type classification; Holiday takes precedence over Sunday."""
    return classify(day, holidays).day_type


def date_range(start: date, num_days: int) -> list[date]:
    return [start + timedelta(days=i) for i in range(num_days)]


def month_days(year: int, month: int) -> list[date]:
    """Every date of the given month."""
    _, last = calendar.monthrange(year, month)
    return date_range(date(year, month, 1), last)
