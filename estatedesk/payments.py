"""Payment records: paid and unpaid listings, searches and new charges."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

_COLUMNS = (
    "paymentid, paymentperiod, type, payable, paid, paymenttime, "
    "username, name, location, phonenumber, method"
)
_SELECT = f"SELECT {_COLUMNS} FROM payment"

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class PaymentKind(IntEnum):
    """What a payment is for, as stored in the ``type`` column."""

    REPAIR = 0
    PROPERTY = 1
    PARKING_RENT = 2
    PARKING_PURCHASE = 3


_KIND_LABELS = {
    "0": "维修费",
    "1": "物业费",
    "2": "车位租赁",
}

# Only these kinds can be raised by hand; the others come from elsewhere.
_MANUAL_KINDS = (PaymentKind.REPAIR, PaymentKind.PARKING_PURCHASE)


class SearchField(str, Enum):
    """Columns a fuzzy payment search may match against."""

    PERIOD = "paymentperiod"
    TIME = "paymenttime"
    NAME = "name"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def payment_type_label(value: Any) -> str:
    """Display text for a payment type; any unknown code reads as a parking purchase."""
    return _KIND_LABELS.get(_text(value), "车位购买")


def payment_method_label(value: Any) -> str:
    """Display text for a payment method; unknown values are shown as stored."""
    text = _text(value)
    if text == "1":
        return "线上缴费"
    if text == "0":
        return "线下缴费"
    return text


@dataclass(frozen=True)
class Payment:
    """One row of the payment ledger."""

    payment_id: str
    period: str
    type: str
    payable: str
    paid: str
    payment_time: str
    username: str
    name: str
    location: str
    phone_number: str
    method: str

    @property
    def type_text(self) -> str:
        return payment_type_label(self.type)

    @property
    def method_text(self) -> str:
        return payment_method_label(self.method)

    def display_row(self) -> tuple[str, ...]:
        """The eleven cells shown for this payment, in column order."""
        return (
            self.payment_id,
            self.period,
            self.type_text,
            self.payable,
            self.paid,
            self.payment_time,
            self.username,
            self.name,
            self.location,
            self.phone_number,
            self.method_text,
        )


class PaymentLedger:
    """Operations on the ``payment`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def _fetch(self, sql: str, params: tuple = ()) -> list[Payment]:
        rows = self.conn.execute(sql, params).fetchall()
        return [Payment(*(_text(value) for value in row)) for row in rows]

    def paid(self) -> list[Payment]:
        """Payments that carry a contact number."""
        return self._fetch(
            f"{_SELECT} WHERE phonenumber IS NOT NULL AND phonenumber != ''"
        )

    def unpaid(self) -> list[Payment]:
        """Payments with no contact number recorded."""
        return self._fetch(f"{_SELECT} WHERE phonenumber IS NULL OR phonenumber = ''")

    def by_username(self, username: str) -> list[Payment]:
        """Payments made by the given user."""
        return self._fetch(f"{_SELECT} WHERE username = ?", (username,))

    def search(self, field: SearchField | str, text: str) -> list[Payment]:
        """Payments whose chosen field contains ``text``."""
        try:
            column = SearchField(field).value
        except ValueError:
            raise ValueError(f"unknown search field: {field!r}") from None
        return self._fetch(f"{_SELECT} WHERE {column} LIKE ?", (f"%{text}%",))

    def add(
        self,
        kind: PaymentKind | int,
        period: str,
        payable: str,
        username: str,
        name: str,
        location: str,
        phonenumber: str,
        paid_at: datetime | str | None = None,
    ) -> int:
        """Record a new offline charge, paid in full; returns its id."""
        kind = PaymentKind(kind)
        if kind not in _MANUAL_KINDS:
            raise ValueError(f"payments of kind {kind.name} cannot be added by hand")
        if paid_at is None:
            paid_at = datetime.now()
        if isinstance(paid_at, datetime):
            paid_at = paid_at.strftime(_TIME_FORMAT)
        with self.conn:
            cursor = self.conn.execute(
                "INSERT INTO payment(paymentperiod, type, payable, username, name, "
                "location, paymenttime, phonenumber, method, paid) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    period,
                    int(kind),
                    payable,
                    username,
                    name,
                    location,
                    paid_at,
                    phonenumber,
                    0,
                    payable,
                ),
            )
        return cursor.lastrowid