"""Registry of metadata queries, products and dialects."""

from __future__ import annotations

import threading
from typing import Any

from dbmeta.database import Product
from dbmeta.dialect import Dialect, sort_dialects
from dbmeta.kind import Kind
from dbmeta.query import Queries, Query

DEFAULT_PRODUCT_NAME = "ansi"


def _less(left: Query, right: Query) -> bool:
    return (
        left.product.major < right.product.major
        and left.product.minor < right.product.minor
    )


def _sort_queries(queries: Queries) -> None:
    """Insertion sort by version, in place."""
    for i in range(1, len(queries)):
        j = i
        while j > 0 and _less(queries[j], queries[j - 1]):
            queries[j], queries[j - 1] = queries[j - 1], queries[j]
            j -= 1


class Registry:
    """Holds queries per product and kind, known products and dialects."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._queries: dict[str, list[Queries]] = {}
        self._products: dict[str, Product] = {}
        self._dialects: dict[str, list[Dialect]] = {}

    @property
    def products(self) -> dict[str, Product]:
        """Known products keyed by lower-case product name."""
        return self._products

    def register(self, *queries: Query) -> None:
        """Register queries; raise ValueError on a query with invalid criteria."""
        with self._lock:
            for query in queries:
                query.criteria.validate(query.kind)
                name = query.product.name
                if name not in self._queries:
                    self._queries[name] = [Queries() for _ in range(Kind.RESERVED + 1)]
                if name not in self._products:
                    self._products[name.lower()] = query.product
                if query.kind == Kind.VERSION:
                    self._products[name.lower()] = query.product
                by_kind = self._queries[name][query.kind]
                by_kind.append(query)
                _sort_queries(by_kind)

    def register_dialect(self, dialect: Dialect) -> None:
        """Register a dialect unless one for the same version is known."""
        with self._lock:
            name = dialect.product.name
            known = self._dialects.get(name)
            if known is None:
                self._dialects[name] = [dialect]
                return
            if any(item.product.equal(dialect.product) for item in known):
                return
            self._dialects[name] = sort_dialects([*known, dialect])

    def lookup(self, product: str, kind: Kind) -> Queries:
        """Return the queries of a kind for a product name."""
        by_kind = self._queries.get(product)
        if by_kind is None:
            return Queries()
        return by_kind[kind]

    def lookup_dialect(self, product: Product) -> Dialect | None:
        """Return the dialect closest to the product version, or None."""
        dialects = self._dialects.get(product.name)
        if not dialects:
            return None
        result = None
        for candidate in dialects:
            if product.equal(candidate.product):
                return candidate
            if candidate.product.major <= product.major:
                if result is None:
                    result = candidate
                if candidate.product.major == product.major:
                    if candidate.product.minor <= product.minor:
                        result = candidate
                        continue
                    break
        return dialects[0] if result is None else result

    def match_product(self, connection: Any) -> Product | None:
        """Guess the product of a DB-API connection from its type."""
        connection_type = type(connection)
        driver_pkg = connection_type.__module__ or ""
        driver_name = connection_type.__name__
        product = None
        default = None
        for name, candidate in self._products.items():
            if (
                name in driver_pkg
                or (candidate.driver_pkg and candidate.driver_pkg in driver_pkg)
                or (candidate.driver and driver_name in candidate.driver)
            ):
                product = candidate
            if DEFAULT_PRODUCT_NAME in candidate.driver:
                default = candidate
        return product if product is not None else default


_DEFAULT = Registry()


def register(*queries: Query) -> None:
    """Register queries in the default registry."""
    _DEFAULT.register(*queries)


def register_dialect(dialect: Dialect) -> None:
    """Register a dialect in the default registry."""
    _DEFAULT.register_dialect(dialect)


def lookup(product: str, kind: Kind) -> Queries:
    """Look up queries in the default registry."""
    return _DEFAULT.lookup(product, kind)


def lookup_dialect(product: Product) -> Dialect | None:
    """Look up a dialect in the default registry."""
    return _DEFAULT.lookup_dialect(product)


def products() -> dict[str, Product]:
    """Return the products known to the default registry."""
    return _DEFAULT.products


def match_product(connection: Any) -> Product | None:
    """Match a connection's product with the default registry."""
    return _DEFAULT.match_product(connection)