"""Repair work orders: listing, recording outcomes and deletion."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Any

_SELECT = (
    "SELECT maintenance.requestid, maintenance.username, maintenance.phonenumber, "
    "maintenance.location, maintenance.reporttime, maintenance.description, "
    "maintenance.status, maintenance.maintenancedate, maintenance.handler, "
    "maintenance.evaluation FROM maintenance"
)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def repair_status_label(status: Any) -> str:
    """Display text for a repair status; unknown values are shown as stored."""
    text = _text(status)
    if text == "1":
        return "已维修"
    if text == "0":
        return "未维修"
    return text


@dataclass(frozen=True)
class RepairOrder:
    """One repair request."""

    request_id: str
    username: str
    phone_number: str
    location: str
    report_time: str
    description: str
    status: str
    maintenance_date: str
    handler: str
    evaluation: str

    @property
    def status_text(self) -> str:
        return repair_status_label(self.status)

    def display_row(self) -> tuple[str, ...]:
        """The ten cells shown for this order, in column order."""
        return (
            self.request_id,
            self.username,
            self.phone_number,
            self.location,
            self.report_time,
            self.description,
            self.status_text,
            self.maintenance_date,
            self.handler,
            self.evaluation,
        )


class RepairOrderBook:
    """Operations on the ``maintenance`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def orders(self) -> list[RepairOrder]:
        """Every repair request."""
        rows = self.conn.execute(_SELECT).fetchall()
        return [RepairOrder(*(_text(value) for value in row)) for row in rows]

    def record_outcome(
        self, request_id: Any, completed: bool, handler: str, repair_date: str
    ) -> None:
        """Mark a request repaired (with handler and date) or not repaired."""
        request_id = _text(request_id)
        with self.conn:
            if completed:
                self.conn.execute(
                    "UPDATE maintenance SET status = '1' "
                    "WHERE requestid = ? AND status = '0'",
                    (request_id,),
                )
                self.conn.execute(
                    "UPDATE maintenance SET handler = ?, maintenancedate = ? "
                    "WHERE requestid = ?",
                    (handler, repair_date, request_id),
                )
            else:
                self.conn.execute(
                    "UPDATE maintenance SET status = '0' "
                    "WHERE requestid = ? AND status = '1'",
                    (request_id,),
                )

    def delete(self, request_id: Any) -> bool:
        """Remove a request; returns whether a row was deleted."""
        with self.conn:
            cursor = self.conn.execute(
                "DELETE FROM maintenance WHERE requestid = ?", (int(request_id),)
            )
        return cursor.rowcount > 0