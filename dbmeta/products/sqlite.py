"""SQLite dictionary queries and dialect."""

from __future__ import annotations

import logging

from dbmeta.database import Product
from dbmeta.dialect import Dialect
from dbmeta.features import InsertFeatures, LoadFeature, UpsertFeatures
from dbmeta.kind import Kind
from dbmeta.query import Query, new_criterion, new_query
from dbmeta.registry import register as register_queries
from dbmeta.registry import register_dialect

_log = logging.getLogger(__name__)

_SQLITE3 = Product(name="SQLite", major=3, driver_pkg="sqlite3", driver="SQLiteDriver")

_TABLE_INFO = "sqlite_schema AS m, pragma_table_info(m.name) AS t"
_INDEX_LIST = "sqlite_schema AS m, pragma_index_list(m.name) AS t"

_registered = False


def sqlite3_product() -> Product:
    """Return the SQLite 3 product."""
    return _SQLITE3


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


def _field(name: str) -> str:
    return f"t.`{name}`"


def _query(kind: Kind, sql: str, *columns: str) -> Query:
    criteria = (
        new_criterion(name, column)
        for name, column in zip(kind.criteria(), columns, strict=True)
    )
    return new_query(kind, sql, _SQLITE3, *criteria)


def _foreign_key_columns():
    fields = (
        ("table", "REFERENCED_TABLE_NAME"),
        ("id", "POSITION_IN_UNIQUE_CONSTRAINT"),
        ("from", "COLUMN_NAME"),
        ("to", "REFERENCED_COLUMN_NAME"),
    )
    actions = (
        ("on_update", "ON_UPDATE"),
        ("on_delete", "ON_DELETE"),
        ("match", "ON_MATCH"),
    )
    return [
        ("m.name", "TABLE_NAME"),
        ("'FOREIGN KEY'", "CONSTRAINT_TYPE"),
        ("t.seq", "ORDINAL_POSITION"),
        *((_field(name), alias) for name, alias in fields),
        (f"m.name || '_' || {_field('table')} || '_fk'", "CONSTRAINT_NAME"),
        *((_field(name), alias) for name, alias in actions),
    ]


def _queries():
    empty = "''"
    return [
        _query(Kind.VERSION, "SELECT 'SQLite - ' || sqlite_version()"),
        _query(
            Kind.SCHEMAS,
            _select(
                [("name", "SCHEMA_NAME"), ("seq", "SCHEMA_POS"), ("file", "SCHEMA_FILE")],
                "pragma_database_list",
            ),
            "",
        ),
        _query(Kind.SCHEMA, _select(["name"], "pragma_database_list"), "", "name"),
        _query(
            Kind.TABLES,
            _select(
                [("type", "TABLE_TYPE"), ("name", "TABLE_NAME"), "sql"],
                "sqlite_schema",
                "WHERE type = 'table' AND name NOT IN ('sqlite_sequence')",
            ),
            "",
            "",
        ),
        _query(
            Kind.TABLE,
            _select(
                [
                    (_case((f"{_field('notnull')} = 0", "'1'"), otherwise="'0'"), "IS_NULLABLE"),
                    ("m.name", "TABLE_NAME"),
                    ("t.name", "COLUMN_NAME"),
                    ("t.cid", "ORDINAL_POSITION"),
                    ("t.type", "DATA_TYPE"),
                    (f"COALESCE(t.dflt_value, {empty})", "COLUMN_DEFAULT"),
                    (_case(("t.pk = 1", "'PRI'"), otherwise=empty), "COLUMN_KEY"),
                ],
                _TABLE_INFO,
            ),
            "",
            "",
            "m.name",
        ),
        _query(
            Kind.INDEXES,
            _select(
                [
                    (_field("unique"), "INDEX_UNIQUE"),
                    ("m.name", "TABLE_NAME"),
                    ("t.seq", "INDEX_POSITION"),
                    ("t.name", "INDEX_NAME"),
                    ("t.origin", "INDEX_ORIGIN"),
                    ("t.partial", "INDEX_PARTIAL"),
                    ("group_concat(i.NAME)", "INDEX_COLUMNS"),
                ],
                _INDEX_LIST + ", pragma_index_info(t.name) i",
                "$WHERE",
                "GROUP BY 1, 2, 3, 4, 5, 6",
            ),
            "",
            "",
            "m.name",
        ),
        _query(
            Kind.INDEX,
            _select(
                [
                    ("m.name", "TABLE_NAME"),
                    ("t.name", "INDEX_NAME"),
                    ("i.seqno", "INDEX_POSITION"),
                    ("i.desc", "DESCENDING"),
                    ("i.cid", "ORDINAL_POSITION"),
                    ("i.name", "COLUMN_NAME"),
                    ("i.coll", "COLLATION"),
                    ("i.key", "COLUMN_KEY"),
                ],
                _INDEX_LIST + ", pragma_index_xinfo(t.name) i",
                "WHERE i.name IS NOT NULL",
            ),
            "",
            "",
            "m.name",
            "t.name",
        ),
        _query(
            Kind.SEQUENCES,
            _select([("name", "SEQUENCE_NAME"), ("seq", "SEQUENCE_VALUE")], "SQLITE_SEQUENCE"),
            "",
            "",
            "name",
        ),
        _query(
            Kind.PRIMARY_KEYS,
            _select(
                [
                    ("m.name || '_pk'", "CONSTRAINT_NAME"),
                    ("'PRIMARY KEY'", "CONSTRAINT_TYPE"),
                    ("m.name", "TABLE_NAME"),
                    ("t.name", "COLUMN_NAME"),
                    ("t.cid", "ORDINAL_POSITION"),
                ],
                _TABLE_INFO,
                "WHERE t.pk = 1",
            ),
            "",
            "",
            "m.name\t\t",
        ),
        _query(
            Kind.FOREIGN_KEYS,
            _select(
                _foreign_key_columns(),
                "sqlite_schema AS m, pragma_foreign_key_list(m.name) t",
            ),
            "",
            "",
            "m.name",
        ),
        _query(
            Kind.FUNCTIONS,
            _select(
                [
                    ("t.name", "ROUTINE_NAME"),
                    (
                        _case(
                            ("t.type = 'w'", "'NUMERIC'"),
                            ("t.type = 's'", "'TEXT'"),
                            otherwise=empty,
                        ),
                        "DATA_TYPE",
                    ),
                    ("t.enc", "CHARACTER_SET_NAME"),
                    (_case(("t.builtin = 1", "'NATIVE'"), otherwise=empty), "ROUTINE_TYPE"),
                    (
                        _case(("t.flags & 0x800 != 0", "'YES'"), otherwise="'NO'"),
                        "IS_DETERMINISTIC",
                    ),
                ],
                "pragma_function_list t",
            ),
            "",
            "",
            "t.name",
        ),
        _query(
            Kind.SESSION,
            _select(
                [
                    (empty, "PID"),
                    (empty, "USER_NAME"),
                    (empty, "CATALOG"),
                    ("name", "SCHEMA_NAME"),
                    (empty, "APP_NAME"),
                ],
                "pragma_database_list",
            ),
        ),
        _query(Kind.FOREIGN_KEYS_CHECK_ON, "PRAGMA foreign_keys = true", "", "", ""),
        _query(Kind.FOREIGN_KEYS_CHECK_OFF, "PRAGMA foreign_keys = false", "", "", ""),
    ]


def register() -> None:
    """Register SQLite queries and dialect in the default registry, once."""
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
            product=_SQLITE3,
            placeholder="?",
            transactional=True,
            quote_character="'",
            insert=InsertFeatures.MULTI_VALUES,
            upsert=UpsertFeatures.INSERT_OR_REPLACE,
            load=LoadFeature.UNSUPPORTED,
            can_autoincrement=True,
            can_last_insert_id=True,
        )
    )


register()