from __future__ import annotations

import pytest

from dbmeta import registry
from dbmeta.features import LoadFeature, UpsertFeatures
from dbmeta.kind import Kind
from dbmeta.options import new_args
from dbmeta.products import bigquery
from dbmeta.products.bigquery import big_query, register
from dbmeta.service import Service, prepare_sql


class _Cursor:
    def __init__(self, log, rows):
        self._log = log
        self.description = [("V",)]
        self._rows = rows
        self.rowcount = len(rows)

    def execute(self, sql, params=None):
        self._log.append((sql, params))

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class _Connection:
    def __init__(self, rows=()):
        self.log = []
        self._rows = list(rows)

    def cursor(self):
        return _Cursor(self.log, self._rows)


def test_product_identity():
    product = big_query()
    assert product.name == "BigQuery"
    assert product.major == 0
    assert product is bigquery.big_query()


def test_version_query():
    queries = registry.lookup("BigQuery", Kind.VERSION)
    assert [q.sql for q in queries] == ["SELECT 'bigquery'"]


def test_product_known_by_lower_case_name():
    assert registry.products()["bigquery"] == big_query()


def test_register_is_idempotent():
    before = len(registry.lookup("BigQuery", Kind.TABLES))
    register()
    assert len(registry.lookup("BigQuery", Kind.TABLES)) == before == 2


def test_registered_queries_have_valid_criteria():
    for kind in Kind:
        for query in registry.lookup("BigQuery", kind):
            query.criteria.validate(query.kind)
            assert query.product == big_query()


def test_tables_match_picks_first_registered():
    query = registry.lookup("BigQuery", Kind.TABLES).match(big_query())
    assert query.criteria[0].column == "CATALOG_NAME"
    assert query.criteria[1].column == "SCHEMA_NAME"


def test_unsupported_kinds_absent():
    assert len(registry.lookup("BigQuery", Kind.FUNCTIONS)) == 0
    assert len(registry.lookup("BigQuery", Kind.FOREIGN_KEYS_CHECK_ON)) == 0


def test_dialect():
    dialect = registry.lookup_dialect(big_query())
    assert dialect.transactional is False
    assert dialect.upsert is UpsertFeatures.MERGE
    assert dialect.load is LoadFeature.LOCAL_DATA
    assert dialect.insert.multi_values()
    assert dialect.quote_character == "'"


@pytest.mark.parametrize(
    "kind, args",
    [
        (Kind.SEQUENCES, ("", "", "seq")),
        (Kind.INDEXES, ("", "ds", "t")),
        (Kind.INDEX, ("", "ds", "t", "i")),
        (Kind.PRIMARY_KEYS, ("", "ds", "t")),
        (Kind.FOREIGN_KEYS, ("", "ds", "t")),
    ],
)
def test_placeholder_only_queries_ignore_arguments(kind, args):
    query = registry.lookup("BigQuery", kind).match(big_query())
    sql, params = prepare_sql(query, lambda: "?", new_args(*args))
    assert sql == query.sql
    assert params == []


def test_table_criteria_appended():
    query = registry.lookup("BigQuery", Kind.TABLE).match(big_query())
    sql, params = prepare_sql(query, lambda: "?", new_args("proj", "ds", "t"))
    assert sql == (
        query.sql + " WHERE TABLE_CATALOG=? AND TABLE_SCHEMA=? AND TABLE_NAME=?"
    )
    assert params == ["proj", "ds", "t"]


def test_session_query_keeps_dsn_variables():
    query = registry.lookup("BigQuery", Kind.SESSION).match(big_query())
    assert "'$ProjectID' AS CATALOG" in query.sql
    assert "'$DatasetID' as SCHEMA_NAME" in query.sql


def test_service_reads_version_string():
    connection = _Connection(rows=[("bigquery",)])
    version = Service().info(connection, Kind.VERSION, str, big_query())
    assert version == "bigquery"
    assert connection.log == [("SELECT 'bigquery'", None)]