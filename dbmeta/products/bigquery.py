"""BigQuery dictionary queries and dialect."""

from __future__ import annotations

import logging

from dbmeta.database import Product
from dbmeta.dialect import Dialect
from dbmeta.features import InsertFeatures, LoadFeature, UpsertFeatures
from dbmeta.kind import CATALOG, INDEX, SCHEMA, SEQUENCE, TABLE, Kind
from dbmeta.query import new_criterion, new_query
from dbmeta.registry import register as register_queries
from dbmeta.registry import register_dialect

_log = logging.getLogger(__name__)

_BIG_QUERY = Product(name="BigQuery")

_registered = False

_SCHEMA_SQL = """SELECT
CATALOG_NAME, 
SCHEMA_NAME,
COALESCE(LOCATION,'') AS SQL_PATH,
'utf8' DEFAULT_CHARACTER_SET_NAME,
'' AS  DEFAULT_COLLATION_NAME,
LOCATION AS REGION
FROM INFORMATION_SCHEMA.SCHEMATA
"""

_TABLES_COLUMNS = """SELECT
TABLE_CATALOG,
TABLE_SCHEMA,
TABLE_TYPE,
TABLE_NAME,
'' AS AUTO_INCREMENT,
CREATION_TIME AS CREATE_TIME,
CREATION_TIME AS UPDATE_TIME,
0 AS TABLE_ROWS,
'' VERSION,
TABLE_TYPE AS ENGINE,
DDL
FROM INFORMATION_SCHEMA.TABLES"""

_TABLE_SQL = """SELECT 
TABLE_CATALOG,
TABLE_SCHEMA,
TABLE_NAME,
COLUMN_NAME,
ORDINAL_POSITION,
'' COLUMN_COMMENT,
DATA_TYPE,
NULL CHARACTER_MAXIMUM_LENGTH,
NULL NUMERIC_PRECISION,
NULL NUMERIC_SCALE,
IS_NULLABLE,
'' COLUMN_DEFAULT,
'' COLUMN_KEY
FROM INFORMATION_SCHEMA.COLUMNS
"""

_SEQUENCES_SQL = """SELECT * FROM (SELECT 
  '' AS SEQUENCE_CATALOG,
  '' AS SEQUENCE_SCHEMA, 
  '' AS SEQUENCE_NAME,
  '' AS DATA_TYPE,
  NULL AS MAX_VALUE,
  NULL AS SEQUENCE_VALUE) WHERE 1 = 0
"""

_INDEXES_SQL = """SELECT * FROM (SELECT 
		'' AS TABLE_CATALOG,
		'' AS TABLE_SCHEMA,
		'' AS TABLE_NAME,
		'' AS INDEX_SCHEMA,
		'' AS INDEX_NAME,
		'' AS INDEX_TYPE,
		'' AS INDEX_UNIQUE,
		'' AS INDEX_COLUMNS) WHERE 1=0
		"""

_INDEX_SQL = """SELECT * FROM (SELECT 
		'' AS TABLE_CATALOG,
		'' AS TABLE_SCHEMA,
		'' AS TABLE_NAME,
		'' AS INDEX_NAME,
		'' AS COLUMN_NAME,
		'' AS COLLATION,
		0 AS INDEX_POSITION)
		WHERE 1=0
"""

_PRIMARY_KEYS_SQL = """SELECT * FROM (
'' AS CONSTRAINT_NAME,  
'' AS CONSTRAINT_TYPE,
'' AS CONSTRAINT_CATALOG,
'' AS CONSTRAINT_SCHEMA,
'' AS TABLE_NAME,
'' AS COLUMN_NAME, 
'' AS  REFERENCED_TABLE_NAME,
'' AS REFERENCED_COLUMN_NAME,
'' AS  REFERENCED_TABLE_SCHEMA ) WHERE 1=0
"""

_FOREIGN_KEYS_SQL = """SELECT * FROM (
'' AS CONSTRAINT_NAME,  
'' AS CONSTRAINT_TYPE,
'' AS CONSTRAINT_CATALOG,
'' AS CONSTRAINT_SCHEMA,
'' AS TABLE_NAME,
'' AS COLUMN_NAME, 
'' AS REFERENCED_TABLE_NAME,
'' AS REFERENCED_COLUMN_NAME,
'' AS  REFERENCED_TABLE_SCHEMA ) WHERE 1=0"""

_SESSION_SQL = """SELECT /*+ {"ExpandDSN": true} +*/ 
'' AS PID,
SESSION_USER() AS USER_NAME,
'$Location' AS REGION,		
'$ProjectID' AS CATALOG,
'$DatasetID' as SCHEMA_NAME,
'' AS APP_NAME 
"""


def big_query() -> Product:
    """Return the BigQuery product."""
    return _BIG_QUERY


def _queries():
    product = _BIG_QUERY
    return [
        new_query(Kind.VERSION, "SELECT 'bigquery'", product),
        new_query(
            Kind.SCHEMAS,
            _SCHEMA_SQL,
            product,
            new_criterion(CATALOG, "CATALOG_NAME"),
        ),
        new_query(
            Kind.SCHEMA,
            _SCHEMA_SQL,
            product,
            new_criterion(CATALOG, "CATALOG_NAME"),
            new_criterion(SCHEMA, "SCHEMA_NAME"),
        ),
        new_query(
            Kind.SCHEMA,
            _SCHEMA_SQL,
            product,
            new_criterion(CATALOG, "CATALOG_NAME"),
            new_criterion(SCHEMA, "SCHEMA_NAME"),
        ),
        new_query(
            Kind.TABLES,
            _TABLES_COLUMNS + "\n",
            product,
            new_criterion(CATALOG, "CATALOG_NAME"),
            new_criterion(SCHEMA, "SCHEMA_NAME"),
        ),
        new_query(
            Kind.TABLES,
            _TABLES_COLUMNS,
            product,
            new_criterion(CATALOG, "TABLE_CATALOG"),
            new_criterion(SCHEMA, "TABLE_SCHEMA"),
        ),
        new_query(
            Kind.TABLE,
            _TABLE_SQL,
            product,
            new_criterion(CATALOG, "TABLE_CATALOG"),
            new_criterion(SCHEMA, "TABLE_SCHEMA"),
            new_criterion(TABLE, "TABLE_NAME"),
        ),
        new_query(
            Kind.SEQUENCES,
            _SEQUENCES_SQL,
            product,
            new_criterion(CATALOG, ""),
            new_criterion(SCHEMA, ""),
            new_criterion(SEQUENCE, ""),
        ),
        new_query(
            Kind.INDEXES,
            _INDEXES_SQL,
            product,
            new_criterion(CATALOG, ""),
            new_criterion(SCHEMA, ""),
            new_criterion(TABLE, ""),
        ),
        new_query(
            Kind.INDEX,
            _INDEX_SQL,
            product,
            new_criterion(CATALOG, ""),
            new_criterion(SCHEMA, ""),
            new_criterion(TABLE, ""),
            new_criterion(INDEX, ""),
        ),
        new_query(
            Kind.PRIMARY_KEYS,
            _PRIMARY_KEYS_SQL,
            product,
            new_criterion(CATALOG, ""),
            new_criterion(SCHEMA, ""),
            new_criterion(TABLE, ""),
        ),
        new_query(
            Kind.FOREIGN_KEYS,
            _FOREIGN_KEYS_SQL,
            product,
            new_criterion(CATALOG, ""),
            new_criterion(SCHEMA, ""),
            new_criterion(TABLE, ""),
        ),
        new_query(Kind.SESSION, _SESSION_SQL, product),
    ]


def register() -> None:
    """Register BigQuery queries and dialect in the default registry, once."""
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
            product=_BIG_QUERY,
            placeholder="?",
            transactional=False,
            insert=InsertFeatures.MULTI_VALUES,
            upsert=UpsertFeatures.MERGE,
            load=LoadFeature.LOCAL_DATA,
            quote_character="'",
            can_autoincrement=False,
            can_last_insert_id=False,
            autoincrement_func="",
        )
    )


register()