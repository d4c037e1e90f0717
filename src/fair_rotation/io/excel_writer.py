"""Excel writer for proposals and fairness counters."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from fair_rotation.models.employee import CounterKind, Employee
from fair_rotation.models.schedule import ScheduleProposal
from fair_rotation.models.validation import ValidationReport

FAIRNESS_COLUMNS = [
    "id",
    "name",
    "status",
    "sunday_last_worked",
    "sunday_consecutive_off",
    "sunday_total",
    "sunday_this_year",
    "holiday_last_worked",
    "holiday_consecutive_off",
    "holiday_total",
    "holiday_this_year",
]

_HEADER_FONT = Font(bold=True, size=11, name="Arial")
_TITLE_FONT = Font(bold=True, size=14, name="Arial")
_CENTER = Alignment(horizontal="center", vertical="center")
_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)
_HEADER_FILL = PatternFill("solid", fgColor="DAEEF3")
_SUNDAY_FILL = PatternFill("solid", fgColor="FFF2CC")
_HOLIDAY_FILL = PatternFill("solid", fgColor="FCE4EC")
_SHORT_FILL = PatternFill("solid", fgColor="FF9999")


def build_fairness_frame(employees: list[Employee]) -> pd.DataFrame:
    """One row per employee; never-worked counters are shown as ``None``."""
    rows = []
    for emp in employees:
        row = {"id": emp.id, "name": emp.name, "status": emp.status.value}
        for kind in CounterKind:
            counter = emp.counter(kind)
            row[f"{kind.value}_last_worked"] = counter.last_worked_date
            row[f"{kind.value}_consecutive_off"] = counter.consecutive_off
            row[f"{kind.value}_total"] = counter.total_worked
            row[f"{kind.value}_this_year"] = counter.worked_this_year
        rows.append(row)
    return pd.DataFrame(rows, columns=FAIRNESS_COLUMNS)


def write_report_excel(
    filepath: str | Path,
    employees: list[Employee],
    proposal: ScheduleProposal | None = None,
    validation_report: ValidationReport | None = None,
) -> None:
    """Write proposal, fairness and validation sheets to ``filepath``."""
    filepath = Path(filepath)
    wb = Workbook()

    _write_fairness_sheet(wb.active, build_fairness_frame(employees))
    if proposal is not None:
        _write_proposal_sheet(wb, proposal, {e.id: e.name or e.id for e in employees})
    if validation_report is not None:
        _write_validation_sheet(wb, validation_report)

    wb.save(str(filepath))


def _header_row(ws, row: int, labels: list[str]) -> None:
    for col_idx, label in enumerate(labels, 1):
        cell = ws.cell(row=row, column=col_idx, value=label)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = _CENTER
        cell.border = _BORDER


def _write_fairness_sheet(ws, frame: pd.DataFrame) -> None:
    ws.title = "Fairness"
    ws.cell(row=1, column=1, value="Sunday / Holiday fairness counters").font = _TITLE_FONT

    _header_row(ws, 3, list(frame.columns))
    for offset, record in enumerate(frame.itertuples(index=False), start=4):
        for col_idx, value in enumerate(record, 1):
            if pd.isna(value):
                value = None
            elif isinstance(value, float) and value.is_integer():
                # NULL counters turn the whole column into floats
                value = int(value)
            elif hasattr(value, "isoformat"):
                value = value.isoformat()
            cell = ws.cell(row=offset, column=col_idx, value=value)
            cell.border = _BORDER
            cell.alignment = _CENTER

    ws.column_dimensions["A"].width = 12
    ws.column_dimensions["B"].width = 20
    for col_idx in range(3, len(frame.columns) + 1):
        ws.column_dimensions[get_column_letter(col_idx)].width = 14


def _write_proposal_sheet(
    wb: Workbook, proposal: ScheduleProposal, names: dict[str, str]
) -> None:
    ws = wb.create_sheet("Proposal")
    ws.cell(row=1, column=1, value="Proposed schedule").font = _TITLE_FONT

    env_ids: list[str] = []
    for day in proposal.proposed_days:
        for env_id in day.assignments:
            if env_id not in env_ids:
                env_ids.append(env_id)

    _header_row(ws, 3, ["Date", "Type", "Holiday", *env_ids, "Shortfall"])
    for row, day in enumerate(proposal.proposed_days, start=4):
        fill = None
        if day.is_holiday:
            fill = _HOLIDAY_FILL
        elif day.is_sunday:
            fill = _SUNDAY_FILL

        day_type = "holiday" if day.is_holiday else "sunday" if day.is_sunday else "workday"
        values = [day.date.isoformat(), day_type, day.holiday_name or ""]
        values += [
            ", ".join(names.get(emp_id, emp_id) for emp_id in day.assignments.get(env_id, []))
            for env_id in env_ids
        ]
        values.append(day.total_shortfall)

        for col_idx, value in enumerate(values, 1):
            cell = ws.cell(row=row, column=col_idx, value=value)
            cell.border = _BORDER
            if fill is not None:
                cell.fill = fill
        if day.total_shortfall:
            ws.cell(row=row, column=len(values)).fill = _SHORT_FILL

    ws.column_dimensions["A"].width = 12
    ws.column_dimensions["B"].width = 10
    ws.column_dimensions["C"].width = 18
    for col_idx in range(4, 4 + len(env_ids)):
        ws.column_dimensions[get_column_letter(col_idx)].width = 30


def _write_validation_sheet(wb: Workbook, report: ValidationReport) -> None:
    ws = wb.create_sheet("Validation")

    ws.cell(row=1, column=1, value="Validation").font = _TITLE_FONT
    ws.cell(row=3, column=1, value=f"Total shortfall: {report.total_shortfall}")
    ws.cell(row=4, column=1, value=f"Errors: {report.error_count}")
    ws.cell(row=5, column=1, value=f"Warnings: {report.warning_count}")

    row = 7
    for col, header in enumerate(["Rule", "Severity", "Date", "Employee", "Message"], 1):
        ws.cell(row=row, column=col, value=header).font = _HEADER_FONT

    for v in report.violations:
        row += 1
        ws.cell(row=row, column=1, value=v.rule_id)
        ws.cell(row=row, column=2, value=v.severity.value)
        ws.cell(row=row, column=3, value=v.date.isoformat() if v.date else "")
        ws.cell(row=row, column=4, value=v.employee_id or "")
        ws.cell(row=row, column=5, value=v.message)
