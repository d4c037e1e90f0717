"""SQLite-backed store."""

from __future__ import annotations

import sqlite3
from datetime import date
from pathlib import Path

from fair_rotation.errors import StoreWriteError
from fair_rotation.models.employee import (
    Category,
    Employee,
    EmployeeStatus,
    Environment,
    FairnessCounter,
)
from fair_rotation.models.schedule import Assignment, Holiday, ScheduleDay
from fair_rotation.store.base import ScheduleStore

_COUNTER_COLUMNS = ("last_worked", "consecutive_off", "total_worked", "worked_this_year")


def _counter_columns(prefix: str) -> str:
    return ", ".join(f"{prefix}_{c}" for c in _COUNTER_COLUMNS)


def _counter_values(counter: FairnessCounter) -> tuple:
    return (
        counter.last_worked_date.isoformat() if counter.last_worked_date else None,
        counter.consecutive_off,
        counter.total_worked,
        counter.worked_this_year,
    )


def _counter_from_row(row: sqlite3.Row, prefix: str) -> FairnessCounter:
    last = row[f"{prefix}_last_worked"]
    return FairnessCounter(
        last_worked_date=date.fromisoformat(last) if last else None,
        consecutive_off=row[f"{prefix}_consecutive_off"],
        total_worked=row[f"{prefix}_total_worked"],
        worked_this_year=row[f"{prefix}_worked_this_year"],
    )


class SQLiteStore(ScheduleStore):
    """One table per record type; dates are stored as ISO ``YYYY-MM-DD`` text.

    ``*_consecutive_off`` is NULL while the employee has never worked that
    day-type.
    """

    def __init__(self, db_path: str | Path = "fair_rotation.sqlite3") -> None:
        self.db_path = str(db_path)
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self._create_tables()

    def close(self) -> None:
        self.conn.close()

    def _create_tables(self) -> None:
        cur = self.conn.cursor()
        cur.execute("""
        CREATE TABLE IF NOT EXISTS employees(
            id TEXT PRIMARY KEY,
            position INTEGER NOT NULL,
            name TEXT NOT NULL DEFAULT '',
            status TEXT NOT NULL,
            category_id TEXT,
            environment_id TEXT,
            role TEXT,
            sunday_last_worked TEXT,         -- YYYY-MM-DD
            sunday_consecutive_off INTEGER,  -- NULL = never worked
            sunday_total_worked INTEGER NOT NULL DEFAULT 0,
            sunday_worked_this_year INTEGER NOT NULL DEFAULT 0,
            holiday_last_worked TEXT,
            holiday_consecutive_off INTEGER,
            holiday_total_worked INTEGER NOT NULL DEFAULT 0,
            holiday_worked_this_year INTEGER NOT NULL DEFAULT 0
        );
        """)
        cur.execute("""
        CREATE TABLE IF NOT EXISTS environments(
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL
        );
        """)
        cur.execute("""
        CREATE TABLE IF NOT EXISTS categories(
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL
        );
        """)
        cur.execute("""
        CREATE TABLE IF NOT EXISTS holidays(
            date TEXT PRIMARY KEY,
            id TEXT NOT NULL DEFAULT '',
            name TEXT NOT NULL
        );
        """)
        cur.execute("""
        CREATE TABLE IF NOT EXISTS schedules(
            date TEXT PRIMARY KEY,
            is_sunday INTEGER NOT NULL DEFAULT 0,
            is_holiday INTEGER NOT NULL DEFAULT 0,
            holiday_name TEXT
        );
        """)
        cur.execute("""
        CREATE TABLE IF NOT EXISTS assignments(
            date TEXT NOT NULL,
            environment_id TEXT NOT NULL,
            employee_id TEXT NOT NULL,
            UNIQUE(date, employee_id)
        );
        """)
        cur.execute("CREATE INDEX IF NOT EXISTS ix_assignments_date ON assignments(date);")
        self.conn.commit()

    def _write(self, sql: str, params: tuple) -> None:
        try:
            self.conn.execute(sql, params)
            self.conn.commit()
        except sqlite3.Error as e:
            self.conn.rollback()
            raise StoreWriteError(str(e)) from e

    # --- Reads ---
    def load_employees(self) -> list[Employee]:
        rows = self.conn.execute("SELECT * FROM employees ORDER BY position, id;").fetchall()
        return [
            Employee(
                id=r["id"],
                name=r["name"],
                status=EmployeeStatus(r["status"]),
                category_id=r["category_id"],
                environment_id=r["environment_id"],
                role=r["role"],
                sunday=_counter_from_row(r, "sunday"),
                holiday=_counter_from_row(r, "holiday"),
            )
            for r in rows
        ]

    def load_holidays(self) -> list[Holiday]:
        rows = self.conn.execute("SELECT id, date, name FROM holidays ORDER BY date;").fetchall()
        return [Holiday(id=r["id"], date=r["date"], name=r["name"]) for r in rows]

    def load_schedule_days(self) -> list[ScheduleDay]:
        rows = self.conn.execute("SELECT * FROM schedules ORDER BY date;").fetchall()
        return [
            ScheduleDay(
                date=r["date"],
                is_sunday=bool(r["is_sunday"]),
                is_holiday=bool(r["is_holiday"]),
                holiday_name=r["holiday_name"],
            )
            for r in rows
        ]

    def load_assignments(self) -> list[Assignment]:
        rows = self.conn.execute(
            "SELECT date, environment_id, employee_id FROM assignments ORDER BY date, rowid;"
        ).fetchall()
        return [Assignment(**dict(r)) for r in rows]

    def load_environments(self) -> list[Environment]:
        rows = self.conn.execute("SELECT id, name FROM environments ORDER BY rowid;").fetchall()
        return [Environment(id=r["id"], name=r["name"]) for r in rows]

    def load_categories(self) -> list[Category]:
        rows = self.conn.execute("SELECT id, name FROM categories ORDER BY rowid;").fetchall()
        return [Category(id=r["id"], name=r["name"]) for r in rows]

    # --- Writes ---
    def save_employee(self, employee: Employee) -> None:
        row = self.conn.execute(
            "SELECT position FROM employees WHERE id=?", (employee.id,)
        ).fetchone()
        if row is not None:
            position = row["position"]
        else:
            position = self.conn.execute(
                "SELECT COALESCE(MAX(position) + 1, 0) FROM employees"
            ).fetchone()[0]
        self._write(
            f"""
            INSERT OR REPLACE INTO employees(
                id, position, name, status, category_id, environment_id, role,
                {_counter_columns("sunday")}, {_counter_columns("holiday")}
            ) VALUES(?,?,?,?,?,?,?,?,?,?,?,?,?,?,?)
            """,
            (
                employee.id,
                position,
                employee.name,
                employee.status.value,
                employee.category_id,
                employee.environment_id,
                employee.role,
                *_counter_values(employee.sunday),
                *_counter_values(employee.holiday),
            ),
        )

    def save_employee_counters(self, employee: Employee) -> None:
        set_clause = ", ".join(
            f"{prefix}_{col}=?" for prefix in ("sunday", "holiday") for col in _COUNTER_COLUMNS
        )
        try:
            cur = self.conn.execute(
                f"UPDATE employees SET {set_clause} WHERE id=?",
                (*_counter_values(employee.sunday), *_counter_values(employee.holiday), employee.id),
            )
            self.conn.commit()
        except sqlite3.Error as e:
            self.conn.rollback()
            raise StoreWriteError(str(e)) from e
        if cur.rowcount == 0:
            raise StoreWriteError(f"Unknown employee: {employee.id}")

    def save_environment(self, environment: Environment) -> None:
        self._write(
            "INSERT INTO environments(id, name) VALUES(?,?) "
            "ON CONFLICT(id) DO UPDATE SET name=excluded.name;",
            (environment.id, environment.name),
        )

    def save_category(self, category: Category) -> None:
        self._write(
            "INSERT INTO categories(id, name) VALUES(?,?) "
            "ON CONFLICT(id) DO UPDATE SET name=excluded.name;",
            (category.id, category.name),
        )

    def save_holiday(self, holiday: Holiday) -> None:
        self._write(
            "INSERT OR REPLACE INTO holidays(date, id, name) VALUES(?,?,?)",
            (holiday.date.isoformat(), holiday.id, holiday.name),
        )

    def delete_holiday(self, day: date) -> None:
        self._write("DELETE FROM holidays WHERE date=?", (day.isoformat(),))

    def save_schedule_day(self, day: ScheduleDay) -> None:
        self._write(
            """
            INSERT INTO schedules(date, is_sunday, is_holiday, holiday_name)
            VALUES(?,?,?,?)
            ON CONFLICT(date) DO UPDATE SET
                is_sunday=excluded.is_sunday,
                is_holiday=excluded.is_holiday,
                holiday_name=excluded.holiday_name;
            """,
            (day.date.isoformat(), int(day.is_sunday), int(day.is_holiday), day.holiday_name),
        )

    def delete_schedule_day(self, day: date) -> None:
        self._write("DELETE FROM schedules WHERE date=?", (day.isoformat(),))

    def add_assignment(self, assignment: Assignment) -> None:
        self._write(
            "INSERT INTO assignments(date, environment_id, employee_id) VALUES(?,?,?)",
            (assignment.date.isoformat(), assignment.environment_id, assignment.employee_id),
        )

    def remove_assignment(self, assignment: Assignment) -> None:
        self._write(
            "DELETE FROM assignments WHERE date=? AND environment_id=? AND employee_id=?",
            (assignment.date.isoformat(), assignment.environment_id, assignment.employee_id),
        )

    def delete_assignments(self, day: date) -> None:
        self._write("DELETE FROM assignments WHERE date=?", (day.isoformat(),))
