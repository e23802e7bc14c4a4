"""Parking space allocation: listing, lookup and filtering by ownership."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping

_COLUMNS = (
    "spaceid",
    "type",
    "licenseplate",
    "username",
    "name",
    "phonenumber",
    "location",
    "start_date",
    "end_date",
    "registrationtime",
    "status",
    "registerid",
    "registername",
    "nature",
)

_SELECT = "SELECT * FROM parkingspace"


class ParkingNature(IntEnum):
    """Ownership state of a parking space."""

    VACANT = 0
    SOLD = 1
    RENTED = 2


_NATURE_LABELS = {
    ParkingNature.VACANT: "无主",
    ParkingNature.SOLD: "已出售",
    ParkingNature.RENTED: "出租",
}

_REVIEWED = "已审核"
_UNREVIEWED = "未审核"
_REVIEW_LABELS = {1: _REVIEWED}


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _as_int(value: Any) -> int:
    """Integer value of a stored cell; anything unreadable counts as 0."""
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return 0


def nature_label(nature: Any) -> str:
    """Display text for a space's nature code; unknown codes give a blank."""
    code = _as_int(nature)
    try:
        return _NATURE_LABELS[ParkingNature(code)]
    except ValueError:
        return " "


def review_label(status: Any) -> str:
    """Display text for the review status: 1 is reviewed, anything else is not."""
    code = _as_int(status)
    return _REVIEW_LABELS.get(code, _UNREVIEWED)


@dataclass(frozen=True)
class ParkingSpace:
    """One row of the parking space register."""

    space_id: str
    car_type: str
    license_plate: str
    username: str
    name: str
    phone_number: str
    location: str
    start_date: str
    end_date: str
    registration_time: str
    status: int
    register_id: str
    register_name: str
    nature: int

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ParkingSpace":
        """Build a space from a row keyed by the table's column names."""
        return cls(
            space_id=_text(row["spaceid"]),
            car_type=_text(row["type"]),
            license_plate=_text(row["licenseplate"]),
            username=_text(row["username"]),
            name=_text(row["name"]),
            phone_number=_text(row["phonenumber"]),
            location=_text(row["location"]),
            start_date=_text(row["start_date"]),
            end_date=_text(row["end_date"]),
            registration_time=_text(row["registrationtime"]),
            status=_as_int(row["status"]),
            register_id=_text(row["registerid"]),
            register_name=_text(row["registername"]),
            nature=_as_int(row["nature"]),
        )

    @property
    def status_text(self) -> str:
        return review_label(self.status)

    @property
    def nature_text(self) -> str:
        return nature_label(self.nature)

    def display_row(self) -> tuple[str, ...]:
        """The fourteen cells shown for this space, in column order."""
        return (
            self.space_id,
            self.car_type,
            self.license_plate,
            self.username,
            self.name,
            self.phone_number,
            self.location,
            self.start_date,
            self.end_date,
            self.registration_time,
            self.status_text,
            self.register_id,
            self.register_name,
            self.nature_text,
        )


class ParkingSpaceDirectory:
    """Queries over the ``parkingspace`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def _fetch(self, sql: str, params: tuple = ()) -> list[ParkingSpace]:
        cursor = self.conn.cursor()
        cursor.row_factory = sqlite3.Row
        try:
            cursor.execute(sql, params)
            return [ParkingSpace.from_row(row) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def all(self) -> list[ParkingSpace]:
        """Every registered space."""
        return self._fetch(_SELECT)

    def find(self, space_id: str) -> list[ParkingSpace]:
        """Spaces with the given number; a blank number lists every space."""
        space_id = (space_id or "").strip()
        if not space_id:
            return self.all()
        return self._fetch(f"{_SELECT} WHERE spaceid = ?", (space_id,))

    def vacant(self) -> list[ParkingSpace]:
        """Spaces that have no owner."""
        return self._fetch(f"{_SELECT} WHERE nature = 0")

    def occupied(self) -> list[ParkingSpace]:
        """Spaces that are sold or rented."""
        return self._fetch(f"{_SELECT} WHERE nature != 0")