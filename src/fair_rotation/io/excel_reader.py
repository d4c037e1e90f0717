"""Excel reader for holiday lists."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pandas as pd

from fair_rotation.models.schedule import Holiday
from fair_rotation.rotation.classifier import parse_date

_REQUIRED_COLUMNS = ("date", "name")


def read_holidays(filepath: str | Path, sheet_name: str | int = 0) -> list[Holiday]:
    """Read holidays from a sheet with ``date`` and ``name`` columns.

    An optional ``id`` column is kept; otherwise the ISO date is used as id.
    Rows without a date are skipped.
    """
    filepath = Path(filepath)
    df = pd.read_excel(filepath, sheet_name=sheet_name)
    df.columns = [str(c).strip().lower() for c in df.columns]

    missing = [c for c in _REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Holiday sheet is missing column(s): {', '.join(missing)}")

    holidays: list[Holiday] = []
    for _, row in df.iterrows():
        raw = row["date"]
        if pd.isna(raw):
            continue
        # Excel date cells arrive as datetime, text cells as str
        day = parse_date(raw if isinstance(raw, date) else str(raw))
        name = "" if pd.isna(row["name"]) else str(row["name"]).strip()
        hid = row["id"] if "id" in df.columns and not pd.isna(row["id"]) else day.isoformat()
        holidays.append(Holiday(id=str(hid), date=day, name=name))
    return holidays
