"""Common test fixtures."""

from __future__ import annotations

from datetime import date

import pytest

from fair_rotation.models.employee import Employee, EmployeeStatus
from fair_rotation.models.rotation_config import RotationConfig
from fair_rotation.models.schedule import Assignment, Holiday, ScheduleDay, ScheduleHistory
from fair_rotation.store.memory import InMemoryStore
from fair_rotation.store.sqlite import SQLiteStore

# December 2024: Sundays are 1, 8, 15, 22 and 29.
SUNDAY_1 = date(2024, 12, 1)
SUNDAY_8 = date(2024, 12, 8)
SUNDAY_15 = date(2024, 12, 15)
CHRISTMAS = date(2024, 12, 25)


def sunday_day(day: date) -> ScheduleDay:
    return ScheduleDay(date=day, is_sunday=True)


@pytest.fixture
def config() -> RotationConfig:
    """Clock pinned to 2024 so the active year is deterministic."""
    return RotationConfig(today=date(2024, 6, 1))


@pytest.fixture
def staff() -> list[Employee]:
    """Four active employees and one on vacation, nobody has worked a special day."""
    return [
        Employee(id="E1", name="Ana"),
        Employee(id="E2", name="Bruno"),
        Employee(id="E3", name="Carla"),
        Employee(id="E4", name="Davi"),
        Employee(id="E5", name="Elis", status=EmployeeStatus.VACATION),
    ]


@pytest.fixture
def christmas() -> Holiday:
    return Holiday(id="h-xmas", date=CHRISTMAS, name="Christmas")


@pytest.fixture
def sunday_history() -> ScheduleHistory:
    """Three published Sundays: E1 on the 1st, E2 on the 8th, E1 and E3 on the 15th."""
    return ScheduleHistory(
        schedule_days=[sunday_day(SUNDAY_1), sunday_day(SUNDAY_8), sunday_day(SUNDAY_15)],
        assignments=[
            Assignment(date=SUNDAY_1, environment_id="store", employee_id="E1"),
            Assignment(date=SUNDAY_8, environment_id="store", employee_id="E2"),
            Assignment(date=SUNDAY_15, environment_id="store", employee_id="E1"),
            Assignment(date=SUNDAY_15, environment_id="stock", employee_id="E3"),
        ],
    )


@pytest.fixture(params=["memory", "sqlite"])
def empty_store(request, tmp_path):
    """Each store implementation, empty."""
    if request.param == "memory":
        yield InMemoryStore()
    else:
        store = SQLiteStore(tmp_path / "rotation.sqlite3")
        yield store
        store.close()
