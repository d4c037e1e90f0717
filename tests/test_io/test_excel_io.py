"""Tests for Excel input and output."""

from __future__ import annotations

from datetime import date

import pandas as pd
import pytest
from openpyxl import load_workbook

from fair_rotation.agents.reporter import ReporterAgent
from fair_rotation.io.excel_reader import read_holidays
from fair_rotation.io.excel_writer import FAIRNESS_COLUMNS, write_report_excel
from fair_rotation.models.employee import Employee, FairnessCounter
from fair_rotation.models.schedule import ProposedDay, ScheduleProposal


@pytest.fixture
def counted_staff() -> list[Employee]:
    return [
        Employee(id="E1", name="Ana", sunday=FairnessCounter(
            last_worked_date=date(2024, 12, 1), consecutive_off=2, total_worked=5,
            worked_this_year=3)),
        Employee(id="E2", name="Bruno"),
    ]


class TestFairnessTable:
    def test_columns_and_sentinel(self, counted_staff):
        frame = ReporterAgent().fairness_table(counted_staff)
        assert list(frame.columns) == FAIRNESS_COLUMNS
        assert len(frame) == 2
        assert frame.loc[0, "sunday_total"] == 5
        assert pd.isna(frame.loc[1, "sunday_consecutive_off"])


class TestWriteReport:
    def test_sheets_and_values(self, counted_staff, tmp_path):
        proposal = ScheduleProposal(
            proposed_days=[
                ProposedDay(date=date(2024, 12, 1), is_sunday=True,
                            assignments={"store": ["E2"], "stock": []},
                            shortfall={"stock": 1}),
                ProposedDay(date=date(2024, 12, 2), assignments={"store": ["E1"], "stock": ["E2"]}),
            ]
        )
        path = tmp_path / "report.xlsx"
        write_report_excel(path, counted_staff, proposal)

        wb = load_workbook(path)
        assert wb.sheetnames == ["Fairness", "Proposal"]

        fairness = wb["Fairness"]
        assert [c.value for c in fairness[3]] == FAIRNESS_COLUMNS
        assert fairness.cell(row=4, column=1).value == "E1"
        assert fairness.cell(row=4, column=4).value == "2024-12-01"
        assert fairness.cell(row=4, column=5).value == 2
        assert fairness.cell(row=5, column=5).value is None

        sheet = wb["Proposal"]
        assert [c.value for c in sheet[3]] == ["Date", "Type", "Holiday", "store", "stock", "Shortfall"]
        assert sheet.cell(row=4, column=2).value == "sunday"
        assert sheet.cell(row=4, column=4).value == "Bruno"
        assert sheet.cell(row=4, column=6).value == 1
        assert sheet.cell(row=5, column=5).value == "Bruno"


class TestReadHolidays:
    def test_reads_dates_and_names(self, tmp_path):
        path = tmp_path / "holidays.xlsx"
        pd.DataFrame(
            {
                "Date": [pd.Timestamp("2024-12-25"), "2025-01-01", None],
                "Name": ["Christmas", "New Year", "blank"],
            }
        ).to_excel(path, index=False)

        holidays = read_holidays(path)
        assert [(h.date, h.name) for h in holidays] == [
            (date(2024, 12, 25), "Christmas"),
            (date(2025, 1, 1), "New Year"),
        ]
        assert holidays[0].id == "2024-12-25"

    def test_missing_column(self, tmp_path):
        path = tmp_path / "bad.xlsx"
        pd.DataFrame({"when": ["2024-12-25"]}).to_excel(path, index=False)
        with pytest.raises(ValueError, match="missing column"):
            read_holidays(path)
