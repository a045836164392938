import sqlite3

import pytest

from dbmeta.database import parse
from dbmeta.features import InsertFeatures, LoadFeature, UpsertFeatures
from dbmeta.kind import Kind
from dbmeta.products.sqlite import register, sqlite3_product
from dbmeta.registry import lookup, lookup_dialect, products

SUPPORTED = [
    Kind.VERSION,
    Kind.SCHEMAS,
    Kind.SCHEMA,
    Kind.TABLES,
    Kind.TABLE,
    Kind.INDEXES,
    Kind.INDEX,
    Kind.SEQUENCES,
    Kind.PRIMARY_KEYS,
    Kind.FOREIGN_KEYS,
    Kind.FUNCTIONS,
    Kind.SESSION,
    Kind.FOREIGN_KEYS_CHECK_ON,
    Kind.FOREIGN_KEYS_CHECK_OFF,
]


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


def test_product_fields():
    product = sqlite3_product()
    assert product.name == "SQLite"
    assert product.major == 3
    assert product.driver_pkg == "sqlite3"
    assert product.driver == "SQLiteDriver"


def test_product_registered_under_lower_case_name():
    assert products()["sqlite"] is sqlite3_product()


@pytest.mark.parametrize("kind", SUPPORTED)
def test_each_kind_has_one_query(kind):
    queries = lookup("SQLite", kind)
    assert len(queries) == 1
    assert queries[0].kind == kind
    assert queries[0].product is sqlite3_product()


@pytest.mark.parametrize("kind", [Kind.VIEWS, Kind.VIEW, Kind.CATALOGS])
def test_unsupported_kinds_have_no_queries(kind):
    assert len(lookup("SQLite", kind)) == 0


def test_register_twice_keeps_one_query_per_kind():
    register()
    register()
    assert len(lookup("SQLite", Kind.VERSION)) == 1


def test_dialect():
    dialect = lookup_dialect(sqlite3_product())
    assert dialect.product is sqlite3_product()
    assert dialect.placeholder == "?"
    assert dialect.quote_character == "'"
    assert dialect.transactional is True
    assert dialect.insert == InsertFeatures.MULTI_VALUES
    assert dialect.upsert == UpsertFeatures.INSERT_OR_REPLACE
    assert dialect.load == LoadFeature.UNSUPPORTED
    assert dialect.can_autoincrement is True
    assert dialect.can_last_insert_id is True


def test_version_query_yields_parsable_banner(connection):
    query = lookup("SQLite", Kind.VERSION)[0]
    banner = connection.execute(query.sql).fetchone()[0]
    product = parse(banner)
    assert product.name == "SQLite"
    assert product.major == 3


def test_foreign_key_pragmas(connection):
    on = lookup("SQLite", Kind.FOREIGN_KEYS_CHECK_ON)[0]
    off = lookup("SQLite", Kind.FOREIGN_KEYS_CHECK_OFF)[0]
    assert on.sql == "PRAGMA foreign_keys = true"
    assert off.sql == "PRAGMA foreign_keys = false"
    assert on.criteria.supported() == 0
    connection.execute(on.sql)
    assert bool(connection.execute("PRAGMA foreign_keys").fetchone()[0]) is True
    connection.execute(off.sql)
    assert bool(connection.execute("PRAGMA foreign_keys").fetchone()[0]) is False


def test_indexes_query_uses_where_marker():
    query = lookup("SQLite", Kind.INDEXES)[0]
    assert "$WHERE" in query.sql
    assert query.criteria.supported() == 1