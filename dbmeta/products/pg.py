"""PostgreSQL dictionary queries and dialect."""

from __future__ import annotations

import logging

from dbmeta.database import Product
from dbmeta.dialect import Dialect
from dbmeta.features import InsertFeatures, LoadFeature, UpsertFeatures
from dbmeta.kind import Kind
from dbmeta.placeholder import NumberedGenerator
from dbmeta.query import Query, new_criterion, new_query
from dbmeta.registry import register as register_queries
from dbmeta.registry import register_dialect

_log = logging.getLogger(__name__)

_PG_SQL9 = Product(name="PostgreSQL", driver_pkg="pq", major=9)

_registered = False

_MAX_VALUES = (
    ("tinyint(1)", 127),
    ("tinyint(1) unsigned", 255),
    ("smallint(%)", 32767),
    ("smallint(%) unsigned", 65535),
    ("mediumint(%)", 8388607),
    ("mediumint(%) unsigned", 16777215),
    ("int(%)", 2147483647),
    ("int(%) unsigned", 4294967295),
    ("bigint(%)", 9223372036854775807),
    ("bigint(%) unsigned", 0),
)

_TABLE_DETAILS = ["AUTO_INCREMENT", "CREATE_TIME", "UPDATE_TIME", "TABLE_ROWS", "VERSION", "ENGINE"]

_KEY_COLUMNS = [
    "c.CONSTRAINT_NAME",
    "s.CONSTRAINT_TYPE",
    "s.CONSTRAINT_CATALOG",
    "s.CONSTRAINT_SCHEMA",
    "c.TABLE_NAME",
    "c.COLUMN_NAME",
]


def pg_sql9() -> Product:
    """Return the PostgreSQL 9.x product."""
    return _PG_SQL9


def _column(column) -> str:
    if isinstance(column, tuple):
        expression, alias = column
        return f"{expression} AS {alias}"
    return column


def _select(columns, source: str, *clauses: str) -> str:
    projection = ", ".join(_column(column) for column in columns)
    return " ".join(["SELECT", projection, "FROM", source, *clauses])


def _case(*branches, otherwise: str) -> str:
    whens = " ".join(f"WHEN {condition} THEN {value}" for condition, value in branches)
    return f"CASE {whens} ELSE {otherwise} END"


def _query(kind: Kind, sql: str, *columns: str) -> Query:
    criteria = (
        new_criterion(name, column)
        for name, column in zip(kind.criteria(), columns, strict=True)
    )
    return new_query(kind, sql, _PG_SQL9, *criteria)


def _schema_sql() -> str:
    return _select(
        [
            "CATALOG_NAME",
            "SCHEMA_NAME",
            ("COALESCE(SQL_PATH, '')", "SQL_PATH"),
            "DEFAULT_CHARACTER_SET_NAME",
            ("DEFAULT_COLLATION_NAME", "DEFAULT_COLLATION_NAME"),
        ],
        "information_schema.schemata",
    )


def _tables_sql(*leading: str) -> str:
    columns = ["TABLE_CATALOG", "TABLE_SCHEMA", *leading, *_TABLE_DETAILS]
    return _select(columns, "INFORMATION_SCHEMA.TABLES")


def _table_sql() -> str:
    names = (
        "TABLE_CATALOG",
        "TABLE_SCHEMA",
        "TABLE_NAME",
        "COLUMN_NAME",
        "ORDINAL_POSITION",
        "DATA_TYPE",
        "CHARACTER_MAXIMUM_LENGTH",
        "NUMERIC_PRECISION",
    )
    columns = [
        *((name, name) for name in names),
        ("NUMERIC_SCALE", '"NUMERIC_SCALE"'),
        ("IS_NULLABLE", "IS_NULLABLE"),
        ("COLUMN_DEFAULT", "COLUMN_DEFAULT"),
    ]
    return _select(columns, "INFORMATION_SCHEMA.COLUMNS")


def _sequences_sql() -> str:
    max_value = _case(
        *((f"COLUMN_TYPE LIKE '{pattern}'", str(value)) for pattern, value in _MAX_VALUES),
        otherwise="0",
    )
    auto_columns = _select(
        ["TABLE_SCHEMA", "TABLE_NAME", "COLUMN_TYPE", (max_value, '"MAX_VALUE"')],
        "INFORMATION_SCHEMA.COLUMNS",
        "WHERE EXTRA LIKE '%auto_increment%'",
    )
    join = (
        f"({auto_columns}) c JOIN INFORMATION_SCHEMA.TABLES t "
        "ON (t.TABLE_SCHEMA = c.TABLE_SCHEMA AND t.TABLE_NAME = c.TABLE_NAME)"
    )
    return _select(
        [
            ("t.TABLE_CATALOG", "SEQUENCE_CATALOG"),
            ("t.TABLE_SCHEMA", "SEQUENCE_SCHEMA"),
            ("c.TABLE_NAME", "SEQUENCE_NAME"),
            ("c.COLUMN_TYPE", "DATA_TYPE"),
            "c.MAX_VALUE",
            ("t.AUTO_INCREMENT", '"SEQUENCE_VALUE"'),
        ],
        join,
    )


def _indexes_sql() -> str:
    return _select(
        [
            "TABLE_CATALOG",
            "TABLE_SCHEMA",
            "TABLE_NAME",
            "INDEX_SCHEMA",
            "INDEX_NAME",
            "INDEX_TYPE",
            (_case(("NON_UNIQUE = 1", "1"), otherwise="0"), "INDEX_UNIQUE"),
            ("GROUP_CONCAT(COLUMN_NAME)", "INDEX_COLUMNS"),
        ],
        "INFORMATION_SCHEMA.STATISTICS",
        "$WHERE",
        "GROUP BY 1, 2, 3, 4, 5, 6, 7",
    )


def _index_sql() -> str:
    return _select(
        [
            "TABLE_CATALOG",
            "TABLE_SCHEMA",
            "TABLE_NAME",
            "INDEX_NAME",
            "COLUMN_NAME",
            "COLLATION",
            ("SEQ_IN_INDEX", "INDEX_POSITION"),
        ],
        "INFORMATION_SCHEMA.STATISTICS",
    )


def _constraint_source() -> str:
    joined = ("CONSTRAINT_NAME", "CONSTRAINT_CATALOG", "CONSTRAINT_SCHEMA", "TABLE_NAME")
    condition = " AND ".join(f"c.{name} = s.{name}" for name in joined)
    return (
        "INFORMATION_SCHEMA.TABLE_CONSTRAINTS s "
        f"JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE c ON {condition}"
    )


def _primary_keys_sql() -> str:
    referenced_schema = _case(
        ("c.REFERENCED_TABLE_NAME IS NOT NULL", "s.CONSTRAINT_SCHEMA"), otherwise="''"
    )
    return _select(
        [
            *_KEY_COLUMNS,
            ("COALESCE(c.REFERENCED_TABLE_NAME, '')", "REFERENCED_TABLE_NAME"),
            ("COALESCE(c.REFERENCED_COLUMN_NAME, '')", "REFERENCED_COLUMN_NAME"),
            (referenced_schema, "REFERENCED_TABLE_SCHEMA"),
        ],
        _constraint_source(),
        "WHERE s.CONSTRAINT_TYPE = 'PRIMARY KEY'",
    )


def _foreign_keys_sql() -> str:
    return _select(
        [
            *_KEY_COLUMNS,
            "c.REFERENCED_TABLE_NAME",
            "c.REFERENCED_COLUMN_NAME",
            ("s.CONSTRAINT_SCHEMA", "REFERENCED_TABLE_SCHEMA"),
        ],
        _constraint_source(),
        "WHERE s.CONSTRAINT_TYPE = 'FOREIGN KEY'",
    )


def _session_sql() -> str:
    return _select(
        [
            ("CAST(pid AS varchar)", "PID"),
            ("datname", "CATALOG_NAME"),
            ("usename", "USER_NAME"),
            ("application_name", "APP_NAME"),
            ("''", "SCHEMA_NAME"),
        ],
        "pg_stat_activity",
        "WHERE pid = pg_backend_pid() LIMIT 1;",
    )


def _queries():
    schema_sql = _schema_sql()
    key_check = "SET FOREIGN_KEY_CHECKS=1"
    return [
        _query(Kind.VERSION, "SELECT version()"),
        _query(Kind.SCHEMAS, schema_sql, "CATALOG_NAME"),
        _query(Kind.SCHEMA, schema_sql, "CATALOG_NAME", "SCHEMA_NAME"),
        _query(Kind.SCHEMA, schema_sql, "CATALOG_NAME", "SCHEMA_NAME"),
        _query(
            Kind.TABLES, _tables_sql("TABLE_TYPE", "TABLE_NAME"), "CATALOG_NAME", "SCHEMA_NAME"
        ),
        _query(
            Kind.TABLES, _tables_sql("TABLE_NAME", "TABLE_TYPE"), "TABLE_CATALOG", "TABLE_SCHEMA"
        ),
        _query(Kind.TABLE, _table_sql(), "TABLE_CATALOG", "TABLE_SCHEMA", "TABLE_NAME"),
        _query(
            Kind.SEQUENCES, _sequences_sql(), "t.TABLE_CATALOG", "t.TABLE_SCHEMA", "t.TABLE_NAME"
        ),
        _query(Kind.INDEXES, _indexes_sql(), "TABLE_CATALOG", "TABLE_SCHEMA", "TABLE_NAME"),
        _query(
            Kind.INDEX, _index_sql(), "TABLE_CATALOG", "TABLE_SCHEMA", "TABLE_NAME", "INDEX_NAME"
        ),
        _query(
            Kind.PRIMARY_KEYS,
            _primary_keys_sql(),
            "s.CONSTRAINT_CATALOG",
            "s.CONSTRAINT_SCHEMA",
            "c.TABLE_NAME",
        ),
        _query(
            Kind.FOREIGN_KEYS,
            _foreign_keys_sql(),
            "s.CONSTRAINT_CATALOG",
            "s.CONSTRAINT_SCHEMA",
            "c.TABLE_NAME",
        ),
        _query(Kind.SESSION, _session_sql()),
        _query(Kind.FOREIGN_KEYS_CHECK_ON, key_check, "", "", ""),
        _query(Kind.FOREIGN_KEYS_CHECK_OFF, key_check, "", "", ""),
    ]


def register() -> None:
    """Register PostgreSQL queries and dialect in the default registry, once."""
    global _registered
    if _registered:
        return
    _registered = True
    try:
        register_queries(*_queries())
    except ValueError as err:
        _log.error("failed to register queries: %s", err)

    register_dialect(
        Dialect(
            product=_PG_SQL9,
            placeholder="$",
            transactional=True,
            insert=InsertFeatures.MULTI_VALUES,
            upsert=UpsertFeatures.MERGE_INTO,
            load=LoadFeature.UNSUPPORTED,
            can_autoincrement=True,
            can_last_insert_id=False,
            can_returning=True,
            quote_character="'",
            placeholder_resolver=NumberedGenerator(),
            autoincrement_func="nextval",
        )
    )


register()