"""Staff scheduling: quarterly shift assignments by a logged-in user."""

from __future__ import annotations

import sqlite3
from enum import IntEnum
from typing import Any

from estatedesk.roster import Shift

_FIRST_YEAR = 2025
_LAST_YEAR = 2028
_MAX_STAFF_ID = 10000


class ShiftKind(IntEnum):
    """Shift codes as stored in the ``shift`` column."""

    MORNING = 0
    MIDDLE = 1
    NIGHT = 2


class SchedulingError(Exception):
    """A scheduling change was refused."""


def quarter_options() -> list[str]:
    """The quarters a shift may be scheduled for, earliest first."""
    return [
        f"{year}年第{quarter}季度"
        for year in range(_FIRST_YEAR, _LAST_YEAR + 1)
        for quarter in range(1, 5)
    ]


def shift_label(value: Any) -> str:
    """Display text for a shift code; anything unknown reads as a night shift."""
    text = "" if value is None else str(value)
    if text == "0":
        return "早班"
    if text == "1":
        return "中班"
    return "夜班"


def _shift_code(shift: ShiftKind | int) -> int:
    try:
        return int(ShiftKind(shift))
    except ValueError:
        raise SchedulingError(f"invalid shift code: {shift!r}") from None


def _require_period(period: str) -> str:
    if not period:
        raise SchedulingError("请选择时间！")
    return period


class ShiftScheduler:
    """Create, change and remove shifts on behalf of one user."""

    def __init__(self, conn: sqlite3.Connection, user_id: int = -1) -> None:
        self.conn = conn
        self.user_id = user_id

    def shifts_for(self, period: str) -> list[Shift]:
        """Shifts scheduled for a quarter; a blank quarter gives none."""
        if not period:
            return []
        cursor = self.conn.cursor()
        cursor.row_factory = sqlite3.Row
        try:
            cursor.execute("SELECT * FROM shifts WHERE time = ?", (period,))
            return [Shift.from_row(row) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def add(self, staff_id: int, period: str, shift: ShiftKind | int) -> int:
        """Schedule an employee for a quarter; returns the new shift id."""
        if not 0 <= staff_id <= _MAX_STAFF_ID:
            raise SchedulingError(f"staff id out of range: {staff_id}")
        _require_period(period)
        code = _shift_code(shift)

        staff = self.conn.execute(
            "SELECT name, department, position, phonenumber FROM users WHERE id = ?",
            (staff_id,),
        ).fetchone()
        if staff is None:
            raise SchedulingError("员工ID不存在！")
        approver = self.conn.execute(
            "SELECT username FROM users WHERE id = ?", (self.user_id,)
        ).fetchone()
        if approver is None:
            raise SchedulingError("排班人信息获取失败！")

        name, department, position, phone = staff
        with self.conn:
            cursor = self.conn.execute(
                "INSERT INTO shifts (staffid, staffname, department, position, time, "
                "shift, phonenumber, approverid, approver) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    staff_id,
                    name,
                    department,
                    position,
                    period,
                    code,
                    phone,
                    self.user_id,
                    approver[0],
                ),
            )
        return cursor.lastrowid

    def edit(self, shift_id: int, period: str, shift: ShiftKind | int) -> bool:
        """Move a shift to a quarter and kind; returns whether it existed."""
        _require_period(period)
        code = _shift_code(shift)
        with self.conn:
            cursor = self.conn.execute(
                "UPDATE shifts SET time = ?, shift = ? WHERE shiftid = ?",
                (period, code, int(shift_id)),
            )
        return cursor.rowcount > 0

    def delete(self, shift_id: int) -> bool:
        """Remove a shift; returns whether a row was deleted."""
        with self.conn:
            cursor = self.conn.execute(
                "DELETE FROM shifts WHERE shiftid = ?", (int(shift_id),)
            )
        return cursor.rowcount > 0