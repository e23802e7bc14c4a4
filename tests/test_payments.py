import sqlite3
from datetime import datetime

import pytest

from estatedesk.payments import (
    Payment,
    PaymentKind,
    PaymentLedger,
    SearchField,
    payment_method_label,
    payment_type_label,
)

_SCHEMA = """
CREATE TABLE payment (
    paymentid INTEGER PRIMARY KEY AUTOINCREMENT,
    paymentperiod TEXT,
    type INTEGER,
    payable TEXT,
    paid TEXT,
    paymenttime TEXT,
    username TEXT,
    name TEXT,
    location TEXT,
    phonenumber TEXT,
    method INTEGER
)
"""

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    connection.execute(_SCHEMA)
    rows = [
        ("2025-Q1", 1, "300", "300", "2025-01-05 10:00:00", "alice", "Alice", "A-101", "tel-a", 1),
        ("2025-Q1", 2, "200", "200", "2025-02-06 11:00:00", "bob", "Bob", "B-202", "tel-b", 0),
        ("2025-Q2", 1, "300", "", "", "carol", "Carol", "C-303", None, 0),
        ("2025-Q2", 0, "50", "", "", "alice", "Alice", "A-101", "", 0),
    ]
    connection.executemany(
        "INSERT INTO payment(paymentperiod, type, payable, paid, paymenttime, "
        "username, name, location, phonenumber, method) VALUES (?,?,?,?,?,?,?,?,?,?)",
        rows,
    )
    connection.commit()
    yield connection
    connection.close()


@pytest.fixture
def ledger(conn):
    return PaymentLedger(conn)


def test_type_labels():
    assert payment_type_label(0) == "维修费"
    assert payment_type_label("1") == "物业费"
    assert payment_type_label(2) == "车位租赁"
    assert payment_type_label(3) == "车位购买"
    assert payment_type_label(None) == "车位购买"


def test_method_labels():
    assert payment_method_label(1) == "线上缴费"
    assert payment_method_label("0") == "线下缴费"
    assert payment_method_label("cash") == "cash"


def test_paid_and_unpaid_partition(ledger):
    paid = ledger.paid()
    unpaid = ledger.unpaid()
    assert {p.username for p in paid} == {"alice", "bob"}
    assert all(p.phone_number for p in paid)
    assert all(not p.phone_number for p in unpaid)
    assert len(paid) + len(unpaid) == 4
    assert not {p.payment_id for p in paid} & {p.payment_id for p in unpaid}


def test_by_username(ledger):
    result = ledger.by_username("alice")
    assert len(result) == 2
    assert all(p.name == "Alice" for p in result)
    assert ledger.by_username("nobody") == []


def test_search_like_match(ledger):
    result = ledger.search(SearchField.PERIOD, "Q2")
    assert {p.username for p in result} == {"carol", "alice"}
    by_name = ledger.search("name", "ob")
    assert [p.username for p in by_name] == ["bob"]
    by_time = ledger.search(SearchField.TIME, "2025-01")
    assert [p.username for p in by_time] == ["alice"]


def test_search_rejects_unknown_field(ledger):
    with pytest.raises(ValueError):
        ledger.search("location", "A")


def test_display_row_uses_labels(ledger):
    row = next(p for p in ledger.paid() if p.username == "alice").display_row()
    assert len(row) == 11
    assert row[2] == "物业费"
    assert row[10] == "线上缴费"


def test_add_repair_payment(ledger):
    new_id = ledger.add(
        PaymentKind.REPAIR, "2025-Q3", "80", "dave", "Dave", "D-404", "tel-d",
        datetime(2025, 7, 1, 9, 30, 0),
    )
    [payment] = [p for p in ledger.by_username("dave")]
    assert payment.payment_id == str(new_id)
    assert payment.type == "0"
    assert payment.method == "0"
    assert payment.paid == payment.payable == "80"
    assert payment.payment_time == "2025-07-01 09:30:00"
    assert payment in ledger.paid()


def test_add_parking_purchase(ledger):
    ledger.add(3, "2025", "90000", "erin", "Erin", "E-505", "tel-e", "2025-08-01 08:00:00")
    [payment] = ledger.by_username("erin")
    assert payment.type_text == "车位购买"
    assert payment.type == "3"


def test_add_default_time_is_formatted(ledger):
    before = datetime.now().replace(microsecond=0)
    ledger.add(PaymentKind.REPAIR, "2025", "10", "frank", "Frank", "F-1", "tel-f")
    after = datetime.now()
    [payment] = ledger.by_username("frank")
    stamp = datetime.strptime(payment.payment_time, _TIME_FORMAT)
    assert stamp.strftime(_TIME_FORMAT) == payment.payment_time
    assert before <= stamp <= after


def test_add_rejects_other_kinds(ledger):
    with pytest.raises(ValueError):
        ledger.add(PaymentKind.PROPERTY, "2025", "10", "g", "G", "G-1", "tel-g")
    assert ledger.by_username("g") == []


def test_add_without_phone_is_unpaid(ledger):
    ledger.add(PaymentKind.REPAIR, "2025", "15", "hank", "Hank", "H-1", "")
    assert "hank" in {p.username for p in ledger.unpaid()}
    assert "hank" not in {p.username for p in ledger.paid()}


def test_payment_is_plain_record():
    payment = Payment("1", "p", "2", "5", "5", "t", "u", "n", "l", "x", "1")
    assert payment.display_row()[2] == "车位租赁"
    assert payment.method_text == "线上缴费"