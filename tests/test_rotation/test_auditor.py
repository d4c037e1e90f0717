"""Tests for the counter auditor."""

from __future__ import annotations

from datetime import date

from fair_rotation.models.employee import Employee, FairnessCounter
from fair_rotation.models.schedule import Assignment, Holiday, ScheduleDay, ScheduleHistory
from fair_rotation.rotation.auditor import reconcile_schedule_days, recompute_counters

TODAY = date(2024, 6, 1)
SUNDAY_1 = date(2024, 12, 1)
SUNDAY_8 = date(2024, 12, 8)
SUNDAY_15 = date(2024, 12, 15)
SUNDAY_22 = date(2024, 12, 22)
CHRISTMAS = date(2024, 12, 25)


def _by_id(result):
    return {e.id: e for e in result.employees}


def _apply(history: ScheduleHistory, reconciled: list[ScheduleDay]) -> ScheduleHistory:
    days = {d.date: d for d in history.schedule_days}
    days.update({d.date: d for d in reconciled})
    return ScheduleHistory(schedule_days=list(days.values()), assignments=history.assignments)


class TestReplay:
    def test_counters_from_history(self, staff, sunday_history):
        result = recompute_counters(staff, [], sunday_history, today=TODAY)
        emps = _by_id(result)

        assert emps["E1"].sunday == FairnessCounter(
            last_worked_date=SUNDAY_15, consecutive_off=0, total_worked=2, worked_this_year=2
        )
        assert emps["E2"].sunday == FairnessCounter(
            last_worked_date=SUNDAY_8, consecutive_off=1, total_worked=1, worked_this_year=1
        )
        assert emps["E3"].sunday.consecutive_off == 0
        assert emps["E3"].sunday.last_worked_date == SUNDAY_15

    def test_never_worked_keeps_sentinel(self, staff, sunday_history):
        emps = _by_id(recompute_counters(staff, [], sunday_history, today=TODAY))
        for emp_id in ("E4", "E5"):
            assert emps[emp_id].sunday.never_worked
            assert emps[emp_id].sunday.last_worked_date is None
            assert emps[emp_id].sunday.total_worked == 0
            assert emps[emp_id].holiday.never_worked

    def test_reset_on_work(self, staff, sunday_history):
        emps = _by_id(recompute_counters(staff, [], sunday_history, today=TODAY))
        for a in sunday_history.assignments:
            if a.date == SUNDAY_15:
                assert emps[a.employee_id].sunday.consecutive_off == 0
                assert emps[a.employee_id].sunday.last_worked_date == SUNDAY_15

    def test_stored_counters_are_overwritten(self, sunday_history):
        stale = Employee(id="E2", sunday=FairnessCounter(
            last_worked_date=date(2020, 1, 5), consecutive_off=99, total_worked=40,
            worked_this_year=7))
        emps = _by_id(recompute_counters([stale], [], sunday_history, today=TODAY))
        assert emps["E2"].sunday.total_worked == 1
        assert emps["E2"].sunday.consecutive_off == 1

    def test_duplicate_assignment_rows_count_once(self, staff):
        history = ScheduleHistory(
            schedule_days=[ScheduleDay(date=SUNDAY_1, is_sunday=True)],
            assignments=[
                Assignment(date=SUNDAY_1, environment_id="store", employee_id="E1"),
                Assignment(date=SUNDAY_1, environment_id="stock", employee_id="E1"),
            ],
        )
        emps = _by_id(recompute_counters(staff, [], history, today=TODAY))
        assert emps["E1"].sunday.total_worked == 1

    def test_sunday_holiday_counts_both(self, staff):
        holiday = Holiday(id="h", date=SUNDAY_8, name="Immaculate Conception")
        history = ScheduleHistory(
            schedule_days=[ScheduleDay(date=SUNDAY_8, is_sunday=True)],
            assignments=[Assignment(date=SUNDAY_8, environment_id="store", employee_id="E1")],
        )
        result = recompute_counters(staff, [holiday], history, today=TODAY)
        e1 = _by_id(result)["E1"]
        assert e1.sunday.total_worked == 1
        assert e1.holiday.total_worked == 1
        assert result.reconciled_days == [
            ScheduleDay(date=SUNDAY_8, is_sunday=True, is_holiday=True,
                        holiday_name="Immaculate Conception")
        ]


class TestUnpublishedDays:
    def test_empty_day_does_not_penalize(self, staff, sunday_history):
        baseline = _by_id(recompute_counters(staff, [], sunday_history, today=TODAY))

        with_empty = ScheduleHistory(
            schedule_days=[*sunday_history.schedule_days, ScheduleDay(date=SUNDAY_22, is_sunday=True)],
            assignments=sunday_history.assignments,
        )
        after = _by_id(recompute_counters(staff, [], with_empty, today=TODAY))
        for emp_id, emp in baseline.items():
            assert after[emp_id].sunday.consecutive_off == emp.sunday.consecutive_off

    def test_orphan_assignment_materializes_day(self, staff):
        history = ScheduleHistory(
            assignments=[Assignment(date=SUNDAY_1, environment_id="store", employee_id="E2")]
        )
        result = recompute_counters(staff, [], history, today=TODAY)
        assert result.reconciled_days == [ScheduleDay(date=SUNDAY_1, is_sunday=True)]
        assert _by_id(result)["E2"].sunday.total_worked == 1


class TestHolidayReconciliation:
    def test_removed_holiday_no_longer_counts(self, staff):
        """Christmas was published as a holiday, then deleted from the holiday list."""
        history = ScheduleHistory(
            schedule_days=[ScheduleDay(date=CHRISTMAS, is_holiday=True, holiday_name="Christmas")],
            assignments=[Assignment(date=CHRISTMAS, environment_id="store", employee_id="E1")],
        )
        result = recompute_counters(staff, [], history, today=TODAY)

        assert result.reconciled_days == [ScheduleDay(date=CHRISTMAS)]
        e1 = _by_id(result)["E1"]
        assert e1.holiday.total_worked == 0
        assert e1.holiday.never_worked

    def test_added_holiday_counts_retroactively(self, staff):
        history = ScheduleHistory(
            schedule_days=[ScheduleDay(date=CHRISTMAS)],
            assignments=[Assignment(date=CHRISTMAS, environment_id="store", employee_id="E1")],
        )
        xmas = Holiday(id="x", date=CHRISTMAS, name="Christmas")
        result = recompute_counters(staff, [xmas], history, today=TODAY)
        emps = _by_id(result)
        assert emps["E1"].holiday.last_worked_date == CHRISTMAS
        assert emps["E1"].holiday.consecutive_off == 0
        assert emps["E2"].holiday.never_worked

    def test_reconcile_reports_only_changes(self):
        days = [
            ScheduleDay(date=SUNDAY_1, is_sunday=True),
            ScheduleDay(date=date(2024, 12, 2), is_sunday=True),
        ]
        all_days, changed = reconcile_schedule_days(days, [])
        assert [d.date for d in all_days] == [SUNDAY_1, date(2024, 12, 2)]
        assert changed == [ScheduleDay(date=date(2024, 12, 2))]


class TestActiveYear:
    def test_future_schedule_sets_active_year(self, staff):
        history = ScheduleHistory(
            schedule_days=[
                ScheduleDay(date=SUNDAY_22, is_sunday=True),
                ScheduleDay(date=date(2025, 1, 5), is_sunday=True),
            ],
            assignments=[
                Assignment(date=SUNDAY_22, environment_id="store", employee_id="E1"),
                Assignment(date=date(2025, 1, 5), environment_id="store", employee_id="E1"),
            ],
        )
        result = recompute_counters(staff, [], history, today=TODAY)
        assert result.active_year == 2025
        e1 = _by_id(result)["E1"]
        assert e1.sunday.total_worked == 2
        assert e1.sunday.worked_this_year == 1

    def test_clock_year_when_history_is_old(self, staff, sunday_history):
        result = recompute_counters(staff, [], sunday_history, today=date(2026, 3, 1))
        assert result.active_year == 2026
        assert _by_id(result)["E1"].sunday.worked_this_year == 0


class TestIdempotence:
    def test_second_run_is_identical(self, staff, sunday_history, christmas):
        history = ScheduleHistory(
            schedule_days=[*sunday_history.schedule_days, ScheduleDay(date=CHRISTMAS)],
            assignments=[
                *sunday_history.assignments,
                Assignment(date=CHRISTMAS, environment_id="store", employee_id="E4"),
            ],
        )
        first = recompute_counters(staff, [christmas], history, today=TODAY)
        second = recompute_counters(
            first.employees, [christmas], _apply(history, first.reconciled_days), today=TODAY
        )

        assert second.employees == first.employees
        assert second.reconciled_days == []
        assert second.active_year == first.active_year
