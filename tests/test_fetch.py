import sqlite3

import pytest

from dbmeta.fetch import fetch_record, fetch_records, fetch_string, fetch_strings
from dbmeta.sinks import Column, Index, Schema, Table


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


def test_fetch_string(connection):
    assert fetch_string(connection.execute("SELECT 'SQLite - 3.34.0'")) == "SQLite - 3.34.0"


def test_fetch_string_no_rows(connection):
    assert fetch_string(connection.execute("SELECT 1 WHERE 1 = 0")) == ""


def test_fetch_string_null_raises(connection):
    with pytest.raises(ValueError):
        fetch_string(connection.execute("SELECT NULL"))


def test_fetch_strings(connection):
    connection.execute("CREATE TABLE t(name TEXT)")
    connection.executemany("INSERT INTO t VALUES (?)", [("emp",), ("dept",)])
    cursor = connection.execute("SELECT name FROM t ORDER BY rowid")
    assert fetch_strings(cursor) == ["emp", "dept"]


def test_fetch_records(connection):
    cursor = connection.execute(
        "SELECT 'emp' AS TABLE_NAME, 3 AS TABLE_ROWS, 'x' AS UNKNOWN "
        "UNION ALL SELECT 'dept', 5, 'y'"
    )
    assert fetch_records(cursor, Table) == [
        Table(name="emp", rows=3),
        Table(name="dept", rows=5),
    ]


def test_columns_matched_case_insensitively_and_converted(connection):
    cursor = connection.execute(
        "SELECT 'emp' AS table_name, 1 AS INDEX_UNIQUE, 'name' AS INDEX_COLUMNS"
    )
    [record] = fetch_records(cursor, Index)
    assert record == Index(table="emp", unique="1", columns="name")


def test_optional_fields_keep_null(connection):
    cursor = connection.execute(
        "SELECT 'id' AS COLUMN_NAME, NULL AS CHARACTER_MAXIMUM_LENGTH, NULL AS COLUMN_DEFAULT"
    )
    [record] = fetch_records(cursor, Column)
    assert (record.name, record.length, record.default) == ("id", None, None)


def test_alternative_column_names(connection):
    cursor = connection.execute("SELECT 'main' AS SCHEMA_NAME, '/tmp/a.db' AS SCHEMA_FILE")
    assert fetch_record(cursor, Schema) == Schema(name="main", path="/tmp/a.db")


def test_fetch_record_keeps_last_row(connection):
    cursor = connection.execute("SELECT 'a' AS TABLE_NAME UNION ALL SELECT 'b'")
    assert fetch_record(cursor, Table) == Table(name="b")


def test_fetch_record_no_rows(connection):
    assert fetch_record(connection.execute("SELECT 1 AS TABLE_ROWS WHERE 1 = 0"), Table) is None


def test_non_dataclass_rejected(connection):
    with pytest.raises(TypeError):
        fetch_records(connection.execute("SELECT 1"), dict)