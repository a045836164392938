"""MySQL dictionary queries and dialect."""

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

_MYSQL5 = Product(name="MySQL", major=5)

_registered = False

_INTEGER_LIMITS = (
    ("tinyint(1)", "127"),
    ("tinyint(1) unsigned", "255"),
    ("smallint(%)", "32767"),
    ("smallint(%) unsigned", "65535"),
    ("mediumint(%)", "8388607"),
    ("mediumint(%) unsigned", "16777215"),
    ("int(%)", "2147483647"),
    ("int(%) unsigned", "4294967295"),
    ("bigint(%)", "9223372036854775807"),
    ("bigint(%) unsigned", "0"),
)

_CONSTRAINT_JOIN = (
    "INFORMATION_SCHEMA.TABLE_CONSTRAINTS s\n"
    "JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE c"
    " ON c.CONSTRAINT_NAME = s.CONSTRAINT_NAME"
    " AND c.CONSTRAINT_CATALOG = s.CONSTRAINT_CATALOG"
    " AND c.CONSTRAINT_SCHEMA = s.CONSTRAINT_SCHEMA"
    " AND c.TABLE_NAME = s.TABLE_NAME"
)

_KEY_CRITERIA = ("s.CONSTRAINT_CATALOG", "s.CONSTRAINT_SCHEMA", "c.TABLE_NAME")


def mysql5() -> Product:
    """Return the MySQL 5.x product."""
    return _MYSQL5


def _select(columns, source: str, *clauses: str) -> str:
    return "\n".join(["SELECT " + ",\n  ".join(columns), "FROM " + source, *clauses])


def _query(kind: Kind, sql: str, *columns: str) -> Query:
    criteria = (
        new_criterion(name, column)
        for name, column in zip(kind.criteria(), columns, strict=True)
    )
    return new_query(kind, sql, _MYSQL5, *criteria)


def _schema_sql() -> str:
    return _select(
        [
            "CATALOG_NAME",
            "SCHEMA_NAME",
            "COALESCE(SQL_PATH, '') AS SQL_PATH",
            "DEFAULT_CHARACTER_SET_NAME",
            "DEFAULT_COLLATION_NAME AS DEFAULT_COLLATION_NAME",
        ],
        "information_schema.schemata",
    )


def _tables_sql(type_first: bool) -> str:
    leading = ["TABLE_TYPE", "TABLE_NAME"] if type_first else ["TABLE_NAME", "TABLE_TYPE"]
    columns = ["TABLE_CATALOG", "TABLE_SCHEMA", *leading]
    columns += ["AUTO_INCREMENT", "CREATE_TIME", "UPDATE_TIME", "TABLE_ROWS", "VERSION", "ENGINE"]
    return _select(columns, "INFORMATION_SCHEMA.TABLES")


def _sequences_sql() -> str:
    limits = " ".join(
        f"WHEN COLUMN_TYPE LIKE '{pattern}' THEN {limit}" for pattern, limit in _INTEGER_LIMITS
    )
    auto_columns = _select(
        ["TABLE_SCHEMA", "TABLE_NAME", "COLUMN_TYPE", f'CASE {limits} ELSE 0 END AS "MAX_VALUE"'],
        "INFORMATION_SCHEMA.COLUMNS",
        "WHERE EXTRA LIKE '%auto_increment%'",
    )
    return _select(
        [
            "t.TABLE_CATALOG AS SEQUENCE_CATALOG",
            "t.TABLE_SCHEMA AS SEQUENCE_SCHEMA",
            "c.TABLE_NAME AS SEQUENCE_NAME",
            "c.COLUMN_TYPE AS DATA_TYPE",
            "c.MAX_VALUE",
            "t.AUTO_INCREMENT AS SEQUENCE_VALUE",
        ],
        f"({auto_columns}) c\n"
        "JOIN INFORMATION_SCHEMA.TABLES t"
        " ON (t.TABLE_SCHEMA = c.TABLE_SCHEMA AND t.TABLE_NAME = c.TABLE_NAME)",
    )


def _keys_sql(constraint_type: str, with_defaults: bool) -> str:
    if with_defaults:
        references = [
            "COALESCE(c.REFERENCED_TABLE_NAME, '') AS REFERENCED_TABLE_NAME",
            "COALESCE(c.REFERENCED_COLUMN_NAME, '') AS REFERENCED_COLUMN_NAME",
            "CASE WHEN c.REFERENCED_TABLE_NAME IS NOT NULL THEN s.CONSTRAINT_SCHEMA ELSE '' END"
            " AS REFERENCED_TABLE_SCHEMA",
        ]
    else:
        references = [
            "c.REFERENCED_TABLE_NAME",
            "c.REFERENCED_COLUMN_NAME",
            "s.CONSTRAINT_SCHEMA AS REFERENCED_TABLE_SCHEMA",
        ]
    return _select(
        [
            "c.CONSTRAINT_NAME",
            "s.CONSTRAINT_TYPE",
            "s.CONSTRAINT_CATALOG",
            "s.CONSTRAINT_SCHEMA",
            "c.TABLE_NAME",
            "c.COLUMN_NAME",
            *references,
        ],
        _CONSTRAINT_JOIN,
        f"WHERE s.CONSTRAINT_TYPE = '{constraint_type}'",
    )


def _queries():
    schema_sql = _schema_sql()
    return [
        _query(Kind.VERSION, "SELECT CONCAT('MySQL - ', VERSION())"),
        _query(Kind.SCHEMAS, schema_sql, "CATALOG_NAME"),
        _query(Kind.SCHEMA, schema_sql, "CATALOG_NAME", "SCHEMA_NAME"),
        _query(Kind.SCHEMA, schema_sql, "CATALOG_NAME", "SCHEMA_NAME"),
        _query(Kind.TABLES, _tables_sql(True), "CATALOG_NAME", "SCHEMA_NAME"),
        _query(Kind.TABLES, _tables_sql(False), "TABLE_CATALOG", "TABLE_SCHEMA"),
        _query(
            Kind.TABLE,
            _select(
                [
                    "TABLE_CATALOG",
                    "TABLE_SCHEMA",
                    "TABLE_NAME",
                    "COLUMN_NAME",
                    "ORDINAL_POSITION",
                    "COLUMN_COMMENT",
                    "DATA_TYPE",
                    "CHARACTER_MAXIMUM_LENGTH",
                    "NUMERIC_PRECISION",
                    "NUMERIC_SCALE",
                    "IS_NULLABLE",
                    "COLUMN_DEFAULT",
                    "COLUMN_KEY",
                ],
                "INFORMATION_SCHEMA.COLUMNS",
            ),
            "TABLE_CATALOG",
            "TABLE_SCHEMA",
            "TABLE_NAME",
        ),
        _query(
            Kind.SEQUENCES,
            _sequences_sql(),
            "t.TABLE_CATALOG",
            "t.TABLE_SCHEMA",
            "t.TABLE_NAME",
        ),
        _query(
            Kind.INDEXES,
            _select(
                [
                    "TABLE_CATALOG",
                    "TABLE_SCHEMA",
                    "TABLE_NAME",
                    "INDEX_SCHEMA",
                    "INDEX_NAME",
                    "INDEX_TYPE",
                    "CASE WHEN NON_UNIQUE = 1 THEN 1 ELSE 0 END AS INDEX_UNIQUE",
                    "GROUP_CONCAT(COLUMN_NAME) AS INDEX_COLUMNS",
                ],
                "INFORMATION_SCHEMA.STATISTICS",
                "$WHERE",
                "GROUP BY 1, 2, 3, 4, 5, 6, 7",
            ),
            "TABLE_CATALOG",
            "TABLE_SCHEMA",
            "TABLE_NAME",
        ),
        _query(
            Kind.INDEX,
            _select(
                [
                    "TABLE_CATALOG",
                    "TABLE_SCHEMA",
                    "TABLE_NAME",
                    "INDEX_NAME",
                    "COLUMN_NAME",
                    "COLLATION",
                    "SEQ_IN_INDEX AS INDEX_POSITION",
                ],
                "INFORMATION_SCHEMA.STATISTICS",
            ),
            "TABLE_CATALOG",
            "TABLE_SCHEMA",
            "TABLE_NAME",
            "INDEX_NAME",
        ),
        _query(Kind.PRIMARY_KEYS, _keys_sql("PRIMARY KEY", True), *_KEY_CRITERIA),
        _query(Kind.FOREIGN_KEYS, _keys_sql("FOREIGN KEY", False), *_KEY_CRITERIA),
        _query(
            Kind.SESSION,
            _select(
                [
                    "CAST(ID AS CHAR) AS PID",
                    "CAST(USER AS CHAR) AS USER_NAME",
                    '"" AS CATALOG',
                    "CAST(DB AS CHAR) AS SCHEMA_NAME",
                    '"" AS APP_NAME',
                ],
                "information_schema.processlist",
                "WHERE ID = CONNECTION_ID() LIMIT 1;",
            ),
        ),
        _query(Kind.FOREIGN_KEYS_CHECK_ON, "SET FOREIGN_KEY_CHECKS=1", "", "", ""),
        _query(Kind.FOREIGN_KEYS_CHECK_OFF, "SET FOREIGN_KEY_CHECKS=1", "", "", ""),
    ]


def register() -> None:
    """Register MySQL queries and dialect in the default registry, once."""
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
            product=_MYSQL5,
            placeholder="?",
            transactional=True,
            insert=InsertFeatures.MULTI_VALUES,
            upsert=UpsertFeatures.INSERT_OR_REPLACE,
            load=LoadFeature.LOCAL_DATA,
            quote_character="'",
            can_autoincrement=True,
            can_last_insert_id=True,
            autoincrement_func="autoincrement",
        )
    )


register()