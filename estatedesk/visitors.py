"""Visitor register: listing, exact-match searches, corrections and new entries."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import date
from enum import Enum, IntEnum
from typing import Any

_DATE_FORMAT = "%Y-%m-%d"

_SELECT = (
    "SELECT visiterid, visiterusername, visittime, address, visitphone, handler "
    "FROM visiter"
)

HEADERS = ("访客编号", "访客姓名", "来访日期", "访问地址", "访客联系电话", "登记人")


class VisitorField(str, Enum):
    """Columns of the ``visiter`` table."""

    ID = "visiterid"
    NAME = "visiterusername"
    VISIT_DATE = "visittime"
    ADDRESS = "address"
    PHONE = "visitphone"
    HANDLER = "handler"


_HEADER_FIELDS = dict(zip(HEADERS, VisitorField))


class VisitorSearch(IntEnum):
    """What a visitor search matches against."""

    NAME = 0
    ADDRESS = 1
    DATE = 2


_SEARCH_COLUMNS = {
    VisitorSearch.NAME: VisitorField.NAME.value,
    VisitorSearch.ADDRESS: VisitorField.ADDRESS.value,
    VisitorSearch.DATE: VisitorField.VISIT_DATE.value,
}


class VisitorError(ValueError):
    """A visitor entry, change or search was refused."""


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _field(field: VisitorField | str) -> VisitorField:
    if isinstance(field, str) and field in _HEADER_FIELDS:
        return _HEADER_FIELDS[field]
    try:
        return VisitorField(field)
    except ValueError:
        raise VisitorError(f"unknown visitor field: {field!r}") from None


@dataclass(frozen=True)
class Visitor:
    """One registered visit."""

    visitor_id: str
    name: str
    visit_date: str
    address: str
    phone: str
    handler: str

    def display_row(self) -> tuple[str, ...]:
        """The six cells shown for this visit, in column order."""
        return (
            self.visitor_id,
            self.name,
            self.visit_date,
            self.address,
            self.phone,
            self.handler,
        )


class VisitorLog:
    """Operations on the ``visiter`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def _fetch(self, sql: str, params: tuple = ()) -> list[Visitor]:
        rows = self.conn.execute(sql, params).fetchall()
        return [Visitor(*(_text(value) for value in row)) for row in rows]

    def visitors(self) -> list[Visitor]:
        """Every registered visit."""
        return self._fetch(_SELECT)

    def search(self, by: VisitorSearch | int, text: str) -> list[Visitor]:
        """Visits whose chosen field equals ``text``; a blank text lists every visit."""
        try:
            column = _SEARCH_COLUMNS[VisitorSearch(by)]
        except ValueError:
            raise VisitorError(f"unknown search type: {by!r}") from None
        if not text:
            return self.visitors()
        return self._fetch(f"{_SELECT} WHERE {column} = ?", (text,))

    def update(self, visitor_id: Any, field: VisitorField | str, value: str) -> bool:
        """Correct one field of a visit; a blank value changes nothing.

        Returns whether a row was changed. The visitor number cannot be changed.
        """
        column = _field(field)
        if column is VisitorField.ID:
            raise VisitorError("访客编号不可更改")
        if not value:
            return False
        with self.conn:
            cursor = self.conn.execute(
                f"UPDATE visiter SET {column.value} = ? WHERE visiterid = ?",
                (value, _text(visitor_id)),
            )
        return cursor.rowcount > 0

    def add(
        self,
        name: str,
        visit_date: date | str,
        address: str,
        phone: str,
        handler: str,
    ) -> int:
        """Register a visit; every field is required. Returns the new visitor number."""
        if isinstance(visit_date, date):
            visit_date = visit_date.strftime(_DATE_FORMAT)
        if not all((name, visit_date, address, phone, handler)):
            raise VisitorError("请填写完整的访客信息！")
        with self.conn:
            cursor = self.conn.execute(
                "INSERT INTO visiter (visiterusername, visittime, address, "
                "visitphone, handler) VALUES (?, ?, ?, ?, ?)",
                (name, visit_date, address, phone, handler),
            )
        return cursor.lastrowid