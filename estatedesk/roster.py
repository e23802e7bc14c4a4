"""Shift roster lookup: the full roster and one employee's shift."""

from __future__ import annotations

import re
import sqlite3
from dataclasses import dataclass
from typing import Any, Mapping

_INTEGER = re.compile(r"\s*([+-]?\d+)\s*")


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def parse_staff_id(text: str) -> int:
    """Read an employee id typed by a user; surrounding blanks are ignored."""
    match = _INTEGER.fullmatch(text or "")
    if match is None:
        raise ValueError("请输入有效的员工ID")
    return int(match.group(1))


@dataclass(frozen=True)
class Shift:
    """One row of the ``shifts`` table."""

    shift_id: str
    staff_id: str
    staff_name: str
    department: str
    position: str
    period: str
    shift: str
    phone_number: str
    approver_id: str
    approver: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Shift":
        """Build a shift from a row keyed by the table's column names."""
        return cls(
            shift_id=_text(row["shiftid"]),
            staff_id=_text(row["staffid"]),
            staff_name=_text(row["staffname"]),
            department=_text(row["department"]),
            position=_text(row["position"]),
            period=_text(row["time"]),
            shift=_text(row["shift"]),
            phone_number=_text(row["phonenumber"]),
            approver_id=_text(row["approverid"]),
            approver=_text(row["approver"]),
        )

    def display_row(self) -> tuple[str, ...]:
        """The ten cells shown for this shift, in column order."""
        return (
            self.shift_id,
            self.staff_id,
            self.staff_name,
            self.department,
            self.position,
            self.period,
            self.shift,
            self.phone_number,
            self.approver_id,
            self.approver,
        )


class RosterQuery:
    """Read-only queries over the ``shifts`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def _fetch(self, sql: str, params: tuple = ()) -> list[Shift]:
        cursor = self.conn.cursor()
        cursor.row_factory = sqlite3.Row
        try:
            cursor.execute(sql, params)
            return [Shift.from_row(row) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def all(self) -> list[Shift]:
        """Every scheduled shift."""
        return self._fetch("SELECT * FROM shifts")

    def by_staff(self, staff_id: int) -> Shift:
        """The first shift of the given employee; raises LookupError if none."""
        found = self._fetch("SELECT * FROM shifts WHERE staffid = ?", (staff_id,))
        if not found:
            raise LookupError(f"未找到用户名ID为 '{staff_id}' 的用户")
        return found[0]