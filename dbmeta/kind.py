"""Kinds of metadata that can be queried and the criteria each accepts."""

from __future__ import annotations

import enum

REGION = "Region"
CATALOG = "Catalog"
SCHEMA = "Schema"
TABLE = "Table"
INDEX = "Index"
VIEW = "View"
SEQUENCE = "Sequence"
FUNCTION = "Function"


class Kind(enum.IntEnum):
    """A dictionary information kind."""

    VERSION = 0
    CATALOGS = 1
    CATALOG = 2
    CURRENT_SCHEMA = 3
    SCHEMAS = 4
    SCHEMA = 5
    TABLES = 6
    TABLE = 7
    VIEWS = 8
    VIEW = 9
    PRIMARY_KEYS = 10
    FOREIGN_KEYS = 11
    CONSTRAINTS = 12
    INDEXES = 13
    INDEX = 14
    SEQUENCES = 15
    FUNCTIONS = 16
    SESSION = 17
    FOREIGN_KEYS_CHECK_ON = 18
    FOREIGN_KEYS_CHECK_OFF = 19
    RESERVED = 20

    def __str__(self) -> str:
        return _LABELS.get(self, f"undefined kind: {int(self)}")

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def criteria(self) -> tuple[str, ...]:
        """Return the criterion names this kind accepts, in order."""
        return _CRITERIA.get(self, ())


_LABELS = {
    Kind.VERSION: "Version",
    Kind.CATALOGS: "Catalogs",
    Kind.CATALOG: "Catalog",
    Kind.CURRENT_SCHEMA: "CurrentSchema",
    Kind.SCHEMAS: "Schemas",
    Kind.SCHEMA: "Schema",
    Kind.TABLES: "Tables",
    Kind.TABLE: "Table",
    Kind.VIEWS: "Views",
    Kind.VIEW: "View",
    Kind.PRIMARY_KEYS: "PrimaryKeys",
    Kind.FOREIGN_KEYS: "ForeignKeys",
    Kind.CONSTRAINTS: "Constraints",
    Kind.INDEXES: "KindIndexes",
    Kind.INDEX: "KindIndex",
    Kind.SEQUENCES: "Sequences",
    Kind.FUNCTIONS: "Functions",
    Kind.FOREIGN_KEYS_CHECK_ON: "KindForeignKeysCheckOn",
    Kind.FOREIGN_KEYS_CHECK_OFF: "KindForeignKeysCheckOff",
    Kind.SESSION: "KindSession",
}

_CRITERIA: dict[Kind, tuple[str, ...]] = {
    Kind.CATALOG: (CATALOG,),
    Kind.SCHEMAS: (CATALOG,),
    Kind.SCHEMA: (CATALOG, SCHEMA),
    Kind.TABLES: (CATALOG, SCHEMA),
    Kind.TABLE: (CATALOG, SCHEMA, TABLE),
    Kind.VIEWS: (CATALOG, SCHEMA),
    Kind.VIEW: (CATALOG, SCHEMA, VIEW),
    Kind.PRIMARY_KEYS: (CATALOG, SCHEMA, TABLE),
    Kind.FOREIGN_KEYS: (CATALOG, SCHEMA, TABLE),
    Kind.CONSTRAINTS: (CATALOG, SCHEMA, TABLE),
    Kind.INDEXES: (CATALOG, SCHEMA, TABLE),
    Kind.INDEX: (CATALOG, SCHEMA, TABLE, INDEX),
    Kind.SEQUENCES: (CATALOG, SCHEMA, SEQUENCE),
    Kind.FUNCTIONS: (CATALOG, SCHEMA, FUNCTION),
    Kind.FOREIGN_KEYS_CHECK_ON: (CATALOG, SCHEMA, TABLE),
    Kind.FOREIGN_KEYS_CHECK_OFF: (CATALOG, SCHEMA, TABLE),
}