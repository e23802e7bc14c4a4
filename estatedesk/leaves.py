"""Staff leave requests: the requester's pending and decided requests, and new ones."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import date
from typing import Any

_DATE_FORMAT = "%Y-%m-%d"

_PENDING_SQL = (
    "SELECT staffid, staffname, start_date, end_date, leavereason, "
    "approvalprogress, approvalresult, approverid "
    "FROM leaves WHERE approvalprogress = 0 AND staffid = ?"
)
_APPROVED_SQL = (
    "SELECT staffid, staffname, start_date, end_date, leavereason, "
    "approvalprogress, approvalresult, approverid, approver, approvaltime "
    "FROM leaves WHERE approvalprogress = 1 AND staffid = ?"
)

_PROGRESS_LABELS = {"1": "已审批"}
_NOT_REVIEWED = "未审批"
_RESULT_LABELS = {"1": "批准"}
_REFUSED = "驳回"


class LeaveValidationError(ValueError):
    """A leave request was not filled in correctly."""


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def progress_label(value: Any) -> str:
    """Display text for the review progress: 1 is reviewed, anything else is not."""
    code = _text(value)
    return _PROGRESS_LABELS.get(code, _NOT_REVIEWED)


def result_label(value: Any) -> str:
    """Display text for the review result: 1 is granted, anything else is refused."""
    code = _text(value)
    return _RESULT_LABELS.get(code, _REFUSED)


def _as_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise LeaveValidationError(f"invalid date: {value!r}") from None


@dataclass(frozen=True)
class LeaveRequest:
    """One row of the ``leaves`` table."""

    staff_id: str
    staff_name: str
    start_date: str
    end_date: str
    reason: str
    progress: str
    result: str
    approver_id: str
    approver: str = ""
    approval_time: str = ""

    @property
    def progress_text(self) -> str:
        return progress_label(self.progress)

    @property
    def result_text(self) -> str:
        return result_label(self.result)

    def pending_row(self) -> tuple[str, ...]:
        """The eight cells shown for a request awaiting review."""
        return (
            self.staff_id,
            self.staff_name,
            self.start_date,
            self.end_date,
            self.reason,
            self.progress_text,
            self.result,
            self.approver_id,
        )

    def display_row(self) -> tuple[str, ...]:
        """The ten cells shown for a reviewed request."""
        return (
            self.staff_id,
            self.staff_name,
            self.start_date,
            self.end_date,
            self.reason,
            self.progress_text,
            self.result_text,
            self.approver_id,
            self.approver,
            self.approval_time,
        )


class LeaveBook:
    """Leave requests of one member of staff."""

    def __init__(self, conn: sqlite3.Connection, user_id: int) -> None:
        self.conn = conn
        self.user_id = user_id

    def user_info(self) -> tuple[str, str]:
        """The user's id and name; raises LookupError if the user is unknown."""
        row = self.conn.execute(
            "SELECT id, name FROM users WHERE id = ?", (self.user_id,)
        ).fetchone()
        if row is None:
            raise LookupError(f"获取用户信息失败：{self.user_id}")
        return _text(row[0]), _text(row[1])

    def _fetch(self, sql: str) -> list[LeaveRequest]:
        rows = self.conn.execute(sql, (self.user_id,)).fetchall()
        return [LeaveRequest(*(_text(value) for value in row)) for row in rows]

    def pending(self) -> list[LeaveRequest]:
        """Requests not yet reviewed."""
        return self._fetch(_PENDING_SQL)

    def approved(self) -> list[LeaveRequest]:
        """Requests that have been reviewed."""
        return self._fetch(_APPROVED_SQL)

    def submit(
        self, staff_name: str, start: date | str, end: date | str, reason: str
    ) -> int:
        """File a new request awaiting review; returns its row id."""
        start_day = _as_date(start)
        end_day = _as_date(end)
        if (
            self.user_id is None
            or self.user_id <= 0
            or not staff_name
            or start_day > end_day
            or not reason
        ):
            raise LeaveValidationError("请正确填写所有字段，开始日期不能晚于结束日期！")
        with self.conn:
            cursor = self.conn.execute(
                "INSERT INTO leaves (staffid, staffname, start_date, end_date, "
                "leavereason, approvalprogress) VALUES (?, ?, ?, ?, ?, 0)",
                (
                    self.user_id,
                    staff_name,
                    start_day.strftime(_DATE_FORMAT),
                    end_day.strftime(_DATE_FORMAT),
                    reason,
                ),
            )
        return cursor.lastrowid