"""Records that metadata queries are read into."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any


def _col(column: str, default: Any = "") -> Any:
    return field(default=default, metadata={"column": column})


@dataclass
class Column:
    """Column metadata."""

    catalog: str = _col("TABLE_CATALOG")
    schema: str = _col("TABLE_SCHEMA")
    table: str = _col("TABLE_NAME")
    name: str = _col("COLUMN_NAME")
    position: int = _col("ORDINAL_POSITION", 0)
    comments: str = _col("COLUMN_COMMENT")
    type: str = _col("DATA_TYPE")
    length: int | None = _col("CHARACTER_MAXIMUM_LENGTH", None)
    precision: int | None = _col("NUMERIC_PRECISION", None)
    scale: int | None = _col("NUMERIC_SCALE", None)
    nullable: str = _col("IS_NULLABLE")
    default: str | None = _col("COLUMN_DEFAULT", None)
    key: str = _col("COLUMN_KEY")
    descending: str = _col("DESCENDING")
    index: str = _col("INDEX_NAME")
    index_position: int = _col("INDEX_POSITION", 0)
    collation: str | None = _col("COLLATION", None)


@dataclass
class Function:
    """Information schema function."""

    name: str = _col("ROUTINE_NAME")
    body: str = _col("ROUTINE_BODY")
    data_type: str = _col("DATA_TYPE")
    type: str = _col("ROUTINE_TYPE")
    charset: str = _col("CHARACTER_SET_NAME")
    deterministic: str = _col("IS_DETERMINISTIC")


@dataclass
class Index:
    """Index metadata."""

    catalog: str = _col("TABLE_CATALOG")
    table: str = _col("TABLE_NAME")
    type: str = _col("INDEX_TYPE")
    table_schema: str = _col("TABLE_SCHEMA")
    schema: str = _col("INDEX_SCHEMA")
    position: int = _col("INDEX_POSITION", 0)
    name: str = _col("INDEX_NAME")
    unique: str = _col("INDEX_UNIQUE")
    columns: str = _col("INDEX_COLUMNS")
    origin: str = _col("INDEX_ORIGIN")
    partial: str = _col("INDEX_PARTIAL")


@dataclass
class Key:
    """Information schema constraint key."""

    name: str = _col("CONSTRAINT_NAME")
    type: str = _col("CONSTRAINT_TYPE")
    catalog: str = _col("CONSTRAINT_CATALOG")
    schema: str = _col("CONSTRAINT_SCHEMA")
    table: str = _col("TABLE_NAME")
    position: int = _col("ORDINAL_POSITION", 0)
    column: str = _col("COLUMN_NAME")
    reference_table: str = _col("REFERENCED_TABLE_NAME")
    reference_column: str = _col("REFERENCED_COLUMN_NAME")
    reference_schema: str = _col("REFERENCED_TABLE_SCHEMA")
    constrain_position: int = _col("POSITION_IN_UNIQUE_CONSTRAINT", 0)
    on_update: str = _col("ON_UPDATE")
    on_delete: str = _col("ON_DELETE")
    on_match: str = _col("ON_MATCH")


@dataclass
class Schema:
    """Information schema schema."""

    catalog: str = _col("CATALOG_NAME")
    name: str = _col("SCHEMA_NAME")
    character_set: str = _col("DEFAULT_CHARACTER_SET_NAME")
    collation: str = _col("DEFAULT_COLLATION_NAME")
    path: str = _col("SCHEMA_FILE|SQL_PATH")
    sequence: int = _col("SCHEMA_POS", 0)
    region: str = _col("REGION")


@dataclass
class Sequence:
    """Information schema sequence."""

    catalog: str = _col("SEQUENCE_CATALOG")
    schema: str = _col("SEQUENCE_SCHEMA")
    name: str = _col("SEQUENCE_NAME")
    value: int = _col("SEQUENCE_VALUE", 0)
    data_type: str = _col("DATA_TYPE")
    start_value: str = _col("START_VALUE")
    max_value: str = _col("MAX_VALUE")


@dataclass
class Session:
    """Connection session info."""

    pid: str = _col("PID")
    username: str = _col("USER_NAME")
    region: str = _col("REGION")
    catalog: str = _col("CATALOG_NAME")
    schema: str = _col("SCHEMA_NAME")
    app_name: str = _col("APP_NAME")


@dataclass
class Table:
    """Table metadata."""

    catalog: str = _col("TABLE_CATALOG")
    schema: str = _col("TABLE_SCHEMA")
    name: str = _col("TABLE_NAME")
    comment: str = _col("TABLE_COMMENT")
    type: str = _col("TABLE_TYPE")
    auto_increment: str = _col("AUTO_INCREMENT")
    create_time: str = _col("CREATE_TIME")
    update_time: str = _col("UPDATE_TIME")
    rows: int = _col("TABLE_ROWS", 0)
    version: str = _col("VERSION")
    engine: str = _col("ENGINE")
    sql: str = _col("DDL")


def column_names(record_type: Any) -> dict[str, str]:
    """Map each result column name of a record type to its field name.

    A field declared with alternatives ('A|B') is listed under each.
    """
    if not dataclasses.is_dataclass(record_type):
        raise TypeError(f"expected a dataclass but had: {record_type!r}")
    names: dict[str, str] = {}
    for item in dataclasses.fields(record_type):
        declared = item.metadata.get("column", item.name.upper())
        for column in declared.split("|"):
            names[column] = item.name
    return names