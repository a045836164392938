"""Reading query results from DB-API cursors into strings and records."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, TypeVar

from dbmeta.sinks import column_names

T = TypeVar("T")


def _to_str(value: Any) -> str:
    if value is None:
        raise ValueError("converting NULL to string is unsupported")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def _type_text(hint: Any) -> str:
    if isinstance(hint, str):
        return hint
    if isinstance(hint, type):
        return hint.__name__
    return str(hint)


def _converter(field: dataclasses.Field) -> Callable[[Any], Any]:
    default = field.default
    if default is dataclasses.MISSING and field.default_factory is not dataclasses.MISSING:
        default = field.default_factory()
    text = _type_text(field.type)
    optional = default is None or "None" in text or "Optional" in text

    if default is not dataclasses.MISSING and default is not None:
        base: Any = type(default)
    elif "str" in text:
        base = str
    elif "int" in text:
        base = int
    else:
        base = None

    def convert(value: Any) -> Any:
        if value is None:
            if optional or base is None:
                return None
            return base()
        if base is str:
            return _to_str(value)
        if base is int:
            return int(value)
        return value

    return convert


def _record_builder(cursor: Any, record_type: type[T]) -> Callable[[Any], T]:
    if not (isinstance(record_type, type) and dataclasses.is_dataclass(record_type)):
        raise TypeError(f"expected a dataclass type but had: {record_type!r}")
    fields = {field.name: field for field in dataclasses.fields(record_type)}
    by_column = {
        column.upper(): name for column, name in column_names(record_type).items()
    }
    targets = []
    for description in cursor.description or ():
        name = by_column.get(str(description[0]).upper())
        targets.append(None if name is None else (name, _converter(fields[name])))

    def build(row: Any) -> T:
        values = {}
        for target, value in zip(targets, row):
            if target is not None:
                name, convert = target
                values[name] = convert(value)
        return record_type(**values)

    return build


def fetch_string(cursor: Any) -> str:
    """Return the first column of the first row, or '' when there is none."""
    row = cursor.fetchone()
    if row is None:
        return ""
    return _to_str(row[0])


def fetch_strings(cursor: Any) -> list[str]:
    """Return the first column of every row."""
    return [_to_str(row[0]) for row in cursor.fetchall()]


def fetch_record(cursor: Any, record_type: type[T]) -> T | None:
    """Read all rows into record_type and return the last, or None."""
    build = _record_builder(cursor, record_type)
    record = None
    for row in cursor.fetchall():
        record = build(row)
    return record


def fetch_records(cursor: Any, record_type: type[T]) -> list[T]:
    """Read every row into a record_type instance."""
    build = _record_builder(cursor, record_type)
    return [build(row) for row in cursor.fetchall()]