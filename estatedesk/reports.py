"""Yearly income and expense summaries per category."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import date
from typing import Iterable

INCOME_CATEGORIES = ("物业费", "车位费")
EXPENSE_CATEGORIES = ("工资", "维修费")

_TABLES = ("income", "expense")


@dataclass(frozen=True)
class CategoryTotal:
    """Sum and number of records of one category."""

    category: str
    total: float
    count: int


@dataclass(frozen=True)
class YearlySummary:
    """Per-category totals for one calendar year."""

    year: int
    categories: tuple[CategoryTotal, ...]

    @property
    def total(self) -> float:
        return sum(item.total for item in self.categories)

    @property
    def count(self) -> int:
        return sum(item.count for item in self.categories)

    def rows(self) -> list[tuple[str, str, str]]:
        """Table cells per category, followed by a grand total row."""
        lines = [
            (item.category, f"{item.total:.2f}", str(item.count))
            for item in self.categories
        ]
        lines.append(("总计", f"{self.total:.2f}", str(self.count)))
        return lines


def yearly_summary(
    conn: sqlite3.Connection, table: str, categories: Iterable[str], year: int
) -> YearlySummary:
    """Sum ``amount`` per category in ``table`` over the given year."""
    if table not in _TABLES:
        raise ValueError(f"unknown table: {table!r}")
    start = date(year, 1, 1).isoformat()
    end = date(year, 12, 31).isoformat()
    sql = (
        f"SELECT SUM(amount), COUNT(*) FROM {table} "
        "WHERE type = ? AND date BETWEEN ? AND ?"
    )
    totals = []
    for category in categories:
        amount, count = conn.execute(sql, (category, start, end)).fetchone()
        totals.append(CategoryTotal(category, float(amount or 0.0), int(count or 0)))
    return YearlySummary(year, tuple(totals))


def yearly_income(conn: sqlite3.Connection, today: date | None = None) -> YearlySummary:
    """Income of the year before ``today``."""
    today = today or date.today()
    return yearly_summary(conn, "income", INCOME_CATEGORIES, today.year - 1)


def yearly_expense(
    conn: sqlite3.Connection, today: date | None = None
) -> YearlySummary:
    """Expenses of the year before ``today``."""
    today = today or date.today()
    return yearly_summary(conn, "expense", EXPENSE_CATEGORIES, today.year - 1)