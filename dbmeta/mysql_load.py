"""Building MySQL LOAD DATA statements."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True)
class LoadConfig:
    """Delimiters used when streaming rows to LOAD DATA."""

    field_separator: str = ","
    object_separator: str = "#"
    enclose_by: str = "*"
    escape_by: str = "^"
    null_value: str = "null"


def _column_name(column: Any) -> str:
    if isinstance(column, str):
        return column
    name = column.name
    return name() if callable(name) else str(name)


def build_sql(
    config: LoadConfig, reader_id: str, table_name: str, columns: Iterable[Any]
) -> str:
    """Return a LOAD DATA LOCAL INFILE statement for the named reader.

    Columns are names, or objects with a ``name`` attribute or method.
    """
    names = ",".join(_column_name(column) for column in columns)
    return (
        f"LOAD DATA LOCAL INFILE 'Reader::{reader_id}' INTO TABLE {table_name}"
        f" FIELDS TERMINATED BY '{config.field_separator}'"
        f" ESCAPED BY '{config.escape_by}'"
        f" ENCLOSED BY '{config.enclose_by}'"
        f" LINES TERMINATED BY '{config.object_separator}' ({names})"
    )