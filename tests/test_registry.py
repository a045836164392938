import sqlite3
from contextlib import closing

import pytest

from dbmeta import registry as default_registry
from dbmeta.database import Product
from dbmeta.dialect import Dialect
from dbmeta.kind import CATALOG, SCHEMA, Kind
from dbmeta.query import new_criterion, new_query
from dbmeta.registry import Registry


def _tables_query(product, sql="SELECT 1"):
    return new_query(
        Kind.TABLES,
        sql,
        product,
        new_criterion(CATALOG, ""),
        new_criterion(SCHEMA, "TABLE_SCHEMA"),
    )


def test_register_and_lookup():
    registry = Registry()
    query = _tables_query(Product(name="Acme", major=1))
    registry.register(query)
    assert list(registry.lookup("Acme", Kind.TABLES)) == [query]
    assert len(registry.lookup("Acme", Kind.TABLE)) == 0


def test_lookup_unknown_product_is_empty():
    assert len(Registry().lookup("Missing", Kind.TABLES)) == 0


def test_register_rejects_invalid_criteria():
    registry = Registry()
    bad = new_query(Kind.TABLE, "SELECT 1", Product(name="Acme"), new_criterion(CATALOG, ""))
    with pytest.raises(ValueError):
        registry.register(bad)
    assert len(registry.lookup("Acme", Kind.TABLE)) == 0


def test_register_orders_queries_by_version():
    registry = Registry()
    newer = _tables_query(Product(name="Acme", major=2, minor=1), "SELECT 2")
    older = _tables_query(Product(name="Acme", major=1, minor=0), "SELECT 1")
    registry.register(newer, older)
    assert list(registry.lookup("Acme", Kind.TABLES)) == [older, newer]


def test_products_keyed_by_lower_case_name():
    registry = Registry()
    product = Product(name="Acme", major=1)
    registry.register(new_query(Kind.VERSION, "SELECT 1", product))
    assert registry.products["acme"] is product
    assert "Acme" not in registry.products


def test_dialect_lookup():
    registry = Registry()
    second = Dialect(product=Product(name="Acme", major=2))
    first = Dialect(product=Product(name="Acme", major=1))
    registry.register_dialect(second)
    registry.register_dialect(first)
    registry.register_dialect(Dialect(product=Product(name="Acme", major=1)))
    assert registry.lookup_dialect(Product(name="Acme", major=1)) is first
    assert registry.lookup_dialect(Product(name="Acme", major=2, minor=5)) is second
    assert registry.lookup_dialect(Product(name="Acme", major=0)) is first
    assert registry.lookup_dialect(Product(name="Other")) is None


def test_match_product_by_driver_package():
    registry = Registry()
    product = Product(name="SQLite", major=3, driver_pkg="sqlite3")
    registry.register(new_query(Kind.VERSION, "SELECT sqlite_version()", product))
    with closing(sqlite3.connect(":memory:")) as connection:
        assert registry.match_product(connection) is product


class FakeConnection:
    pass


def test_match_product_falls_back_to_ansi():
    registry = Registry()
    ansi = Product(name="ANSI", major=1, driver="ansi")
    registry.register(new_query(Kind.VERSION, "SELECT 1", ansi))
    assert registry.match_product(FakeConnection()) is ansi


def test_match_product_without_candidates():
    assert Registry().match_product(FakeConnection()) is None


def test_default_registry_round_trip():
    product = Product(name="RegistryProbe", major=1)
    query = new_query(Kind.VERSION, "SELECT 1", product)
    default_registry.register(query)
    assert list(default_registry.lookup("RegistryProbe", Kind.VERSION)) == [query]
    assert default_registry.products()["registryprobe"] is product
    dialect = Dialect(product=product)
    default_registry.register_dialect(dialect)
    assert default_registry.lookup_dialect(product) is dialect