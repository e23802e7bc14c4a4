"""Staff training records: listing, adding, editing, removing and searching."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

_SELECT = (
    "SELECT trainingid, staffid, staffname, start_trainingdate, "
    "end_trainingdate, traininglocation, evalution FROM trains"
)

_MAX_STAFF_ID = 10000

_GRADES = {1: "A", 2: "B", 3: "C", 4: "D"}
_GRADE_VALUES = {letter: value for value, letter in _GRADES.items()}

_UNKNOWN_GRADE = "未知"


class TrainingSearch(IntEnum):
    """What a training search matches against."""

    STAFF_ID = 1
    STAFF_NAME = 2
    EVALUATION = 3


class TrainingError(ValueError):
    """A training record change or search was refused."""


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def grade_label(value: Any) -> str:
    """Letter grade for a stored evaluation code; anything unknown reads as unknown."""
    try:
        code = int(_text(value).strip())
    except ValueError:
        return _UNKNOWN_GRADE
    return _GRADES.get(code, _UNKNOWN_GRADE)


def grade_value(letter: str) -> int:
    """Evaluation code for a letter grade A to D."""
    try:
        return _GRADE_VALUES[letter]
    except KeyError:
        raise TrainingError("评价搜索格式错误（请输入A/B/C/D）！") from None


def _require_text(value: str, what: str) -> str:
    if not value:
        raise TrainingError(f"{what} must not be empty")
    return value


def _require_grade(evaluation: int) -> int:
    if evaluation not in _GRADES:
        raise TrainingError(f"evaluation out of range: {evaluation!r}")
    return int(evaluation)


@dataclass(frozen=True)
class TrainingRecord:
    """One row of the ``trains`` table."""

    training_id: str
    staff_id: str
    staff_name: str
    start_date: str
    end_date: str
    location: str
    evaluation: str

    @property
    def grade_text(self) -> str:
        return grade_label(self.evaluation)

    def display_row(self) -> tuple[str, ...]:
        """The seven cells shown for this record, in column order."""
        return (
            self.training_id,
            self.staff_id,
            self.staff_name,
            self.start_date,
            self.end_date,
            self.location,
            self.grade_text,
        )


class TrainingBook:
    """Operations on the ``trains`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def _fetch(self, sql: str, params: tuple = ()) -> list[TrainingRecord]:
        rows = self.conn.execute(sql, params).fetchall()
        return [TrainingRecord(*(_text(value) for value in row)) for row in rows]

    def records(self) -> list[TrainingRecord]:
        """Every training record."""
        return self._fetch(_SELECT)

    def add(
        self, staff_id: int, start: str, end: str, location: str, evaluation: int
    ) -> int:
        """Record a training of an employee; returns the new record id."""
        if not 0 <= staff_id <= _MAX_STAFF_ID:
            raise TrainingError(f"staff id out of range: {staff_id}")
        _require_text(start, "start date")
        _require_text(end, "end date")
        _require_text(location, "location")
        grade = _require_grade(evaluation)

        user = self.conn.execute(
            "SELECT name FROM users WHERE id = ?", (staff_id,)
        ).fetchone()
        if user is None:
            raise TrainingError("员工ID不存在！")

        with self.conn:
            cursor = self.conn.execute(
                "INSERT INTO trains (staffid, staffname, start_trainingdate, "
                "end_trainingdate, traininglocation, evalution) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                (staff_id, user[0], start, end, location, grade),
            )
        return cursor.lastrowid

    def edit(
        self, training_id: int, start: str, end: str, location: str, evaluation: int
    ) -> bool:
        """Change a record's dates, place and grade; returns whether it existed."""
        _require_text(start, "start date")
        _require_text(end, "end date")
        grade = _require_grade(evaluation)
        with self.conn:
            cursor = self.conn.execute(
                "UPDATE trains SET start_trainingdate = ?, end_trainingdate = ?, "
                "traininglocation = ?, evalution = ? WHERE trainingid = ?",
                (start, end, location, grade, int(training_id)),
            )
        return cursor.rowcount > 0

    def delete(self, training_id: int) -> bool:
        """Remove a record; returns whether a row was deleted."""
        with self.conn:
            cursor = self.conn.execute(
                "DELETE FROM trains WHERE trainingid = ?", (int(training_id),)
            )
        return cursor.rowcount > 0

    def search(self, by: TrainingSearch | int, text: str) -> list[TrainingRecord]:
        """Records matching ``text`` exactly; a blank text lists every record."""
        text = (text or "").strip()
        if not text:
            return self.records()
        try:
            by = TrainingSearch(by)
        except ValueError:
            raise TrainingError(f"unknown search field: {by!r}") from None
        if by is TrainingSearch.STAFF_ID:
            column, value = "staffid", text
        elif by is TrainingSearch.STAFF_NAME:
            column, value = "staffname", text
        else:
            column, value = "evalution", str(grade_value(text))
        return self._fetch(f"{_SELECT} WHERE {column} = ?", (value,))