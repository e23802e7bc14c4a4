import sqlite3

import pytest

from estatedesk.training import (
    TrainingBook,
    TrainingError,
    TrainingRecord,
    TrainingSearch,
    grade_label,
    grade_value,
)


@pytest.fixture
def conn():
    connection = sqlite3.connect(":memory:")
    connection.executescript(
        """
        CREATE TABLE users (id INTEGER PRIMARY KEY, username TEXT, name TEXT);
        CREATE TABLE trains (
            trainingid INTEGER PRIMARY KEY AUTOINCREMENT,
            staffid INTEGER,
            staffname TEXT,
            start_trainingdate TEXT,
            end_trainingdate TEXT,
            traininglocation TEXT,
            evalution INTEGER
        );
        INSERT INTO users (id, username, name) VALUES (7, 'zhang', '张三');
        INSERT INTO users (id, username, name) VALUES (8, 'li', '李四');
        """
    )
    yield connection
    connection.close()


@pytest.fixture
def book(conn):
    return TrainingBook(conn)


@pytest.mark.parametrize(
    "value, expected",
    [(1, "A"), ("2", "B"), (3, "C"), ("4", "D"), (0, "未知"), ("x", "未知"), (None, "未知")],
)
def test_grade_label(value, expected):
    assert grade_label(value) == expected


@pytest.mark.parametrize("letter", ["A", "B", "C", "D"])
def test_grade_value_round_trip(letter):
    assert grade_label(grade_value(letter)) == letter


@pytest.mark.parametrize("letter", ["E", "a", "", "AB"])
def test_grade_value_rejects_unknown(letter):
    with pytest.raises(TrainingError):
        grade_value(letter)


def test_add_and_list(book):
    new_id = book.add(7, "2025-01-01", "2025-01-05", "会议室", 2)
    records = book.records()
    assert len(records) == 1
    record = records[0]
    assert record.training_id == str(new_id)
    assert record.staff_id == "7"
    assert record.staff_name == "张三"
    assert record.location == "会议室"
    assert record.grade_text == "B"
    assert record.display_row() == (
        str(new_id), "7", "张三", "2025-01-01", "2025-01-05", "会议室", "B"
    )


def test_add_unknown_staff(book):
    with pytest.raises(TrainingError):
        book.add(99, "2025-01-01", "2025-01-05", "会议室", 1)
    assert book.records() == []


@pytest.mark.parametrize(
    "args",
    [
        (-1, "2025-01-01", "2025-01-05", "会议室", 1),
        (10001, "2025-01-01", "2025-01-05", "会议室", 1),
        (7, "", "2025-01-05", "会议室", 1),
        (7, "2025-01-01", "", "会议室", 1),
        (7, "2025-01-01", "2025-01-05", "", 1),
        (7, "2025-01-01", "2025-01-05", "会议室", 0),
        (7, "2025-01-01", "2025-01-05", "会议室", 5),
    ],
)
def test_add_rejects_bad_input(book, args):
    with pytest.raises(TrainingError):
        book.add(*args)
    assert book.records() == []


def test_edit_changes_record(book):
    new_id = book.add(7, "2025-01-01", "2025-01-05", "会议室", 1)
    assert book.edit(new_id, "2025-02-01", "2025-02-03", "礼堂", 4) is True
    record = book.records()[0]
    assert (record.start_date, record.end_date, record.location) == (
        "2025-02-01", "2025-02-03", "礼堂"
    )
    assert record.grade_text == "D"


def test_edit_allows_blank_location(book):
    new_id = book.add(7, "2025-01-01", "2025-01-05", "会议室", 1)
    assert book.edit(new_id, "2025-02-01", "2025-02-03", "", 3) is True
    assert book.records()[0].location == ""


def test_edit_missing_record(book):
    assert book.edit(123, "2025-02-01", "2025-02-03", "礼堂", 1) is False


def test_edit_rejects_bad_grade(book):
    new_id = book.add(7, "2025-01-01", "2025-01-05", "会议室", 1)
    with pytest.raises(TrainingError):
        book.edit(new_id, "2025-02-01", "2025-02-03", "礼堂", 9)
    assert book.records()[0].grade_text == "A"


def test_delete(book):
    new_id = book.add(7, "2025-01-01", "2025-01-05", "会议室", 1)
    assert book.delete(new_id) is True
    assert book.records() == []
    assert book.delete(new_id) is False


def test_search_by_fields(book):
    first = book.add(7, "2025-01-01", "2025-01-05", "会议室", 1)
    second = book.add(8, "2025-03-01", "2025-03-02", "礼堂", 3)

    by_id = book.search(TrainingSearch.STAFF_ID, "8")
    assert [r.training_id for r in by_id] == [str(second)]

    by_name = book.search(TrainingSearch.STAFF_NAME, " 张三 ")
    assert [r.training_id for r in by_name] == [str(first)]

    by_grade = book.search(TrainingSearch.EVALUATION, "C")
    assert [r.training_id for r in by_grade] == [str(second)]


def test_search_blank_lists_all(book):
    book.add(7, "2025-01-01", "2025-01-05", "会议室", 1)
    book.add(8, "2025-03-01", "2025-03-02", "礼堂", 3)
    assert book.search(TrainingSearch.STAFF_NAME, "   ") == book.records()


def test_search_no_match(book):
    book.add(7, "2025-01-01", "2025-01-05", "会议室", 1)
    assert book.search(TrainingSearch.STAFF_NAME, "王五") == []


def test_search_bad_grade_letter(book):
    with pytest.raises(TrainingError):
        book.search(TrainingSearch.EVALUATION, "Z")


def test_search_unknown_field(book):
    with pytest.raises(TrainingError):
        book.search(9, "x")


def test_record_unknown_grade_text():
    record = TrainingRecord("1", "7", "张三", "a", "b", "c", "")
    assert record.display_row()[-1] == "未知"