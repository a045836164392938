"""Metadata service running registered dictionary queries on a connection."""

from __future__ import annotations

import contextlib
import dataclasses
import re
import typing
from typing import Any, Callable, Iterator

from dbmeta import registry
from dbmeta.database import Product, parse
from dbmeta.dialect import Dialect
from dbmeta.fetch import fetch_record, fetch_records, fetch_string, fetch_strings
from dbmeta.kind import Kind
from dbmeta.options import Args, Options, find_option
from dbmeta.placeholder import DEFAULT
from dbmeta.query import Queries, Query

_WHERE = "$WHERE"
_VERB = re.compile(r"%%|%[vsdq]")


def _substitute(sql: str, value: Any) -> str:
    """Replace the first formatting verb in sql with value."""
    used = False

    def replace(match: re.Match[str]) -> str:
        nonlocal used
        if match.group() == "%%":
            return "%"
        if used:
            return match.group()
        used = True
        return str(value)

    return _VERB.sub(replace, sql)


def prepare_sql(
    query: Query, placeholder_getter: Callable[[], str], args: Args | None
) -> tuple[str, list[Any]]:
    """Build the SQL and bound parameters for a query and its criteria arguments.

    Raises ValueError when more arguments are given than the kind accepts.
    """
    values = args.unwrap() if args is not None else []
    params: list[Any] = []
    if not values and query.criteria.supported() == 0:
        return query.sql, params
    criteria = query.kind.criteria()
    if len(values) > len(criteria):
        raise ValueError(
            f"invalid arguments, expected: {list(criteria)}, but had: {values}"
        )

    sql = query.sql
    conditions: list[str] = []
    for criterion, value in zip(query.criteria, values):
        column = criterion.column
        if not column:
            continue
        if column == "%":
            sql = _substitute(sql, value)
            continue
        if column == "?" or value == "":
            continue
        conditions.append(f"{column}={placeholder_getter()}")
        params.append(value)

    if not conditions:
        return sql.replace(_WHERE, "", 1), params
    clause = " AND ".join(conditions)
    if _WHERE in query.sql:
        return sql.replace(_WHERE, f" WHERE {clause} ", 1), params
    if "where " in query.sql.lower():
        return f"{sql} AND {clause}", params
    return f"{sql} WHERE {clause}", params


def _reader(sink: Any) -> Callable[[Any], Any]:
    """Return the function reading a cursor into the requested sink shape."""
    if sink is str:
        return fetch_string
    if sink is list:
        return fetch_strings
    if typing.get_origin(sink) is list:
        (item,) = typing.get_args(sink) or (str,)
        if item is str:
            return fetch_strings
        if isinstance(item, type) and dataclasses.is_dataclass(item):
            return lambda cursor: fetch_records(cursor, item)
    elif isinstance(sink, type) and dataclasses.is_dataclass(sink):
        return lambda cursor: fetch_record(cursor, sink)
    raise TypeError(f"unsupported sink: {sink!r}")


@contextlib.contextmanager
def _executed(connection: Any, sql: str, params: list[Any]) -> Iterator[Any]:
    cursor = connection.cursor()
    try:
        if params:
            cursor.execute(sql, params)
        else:
            cursor.execute(sql)
        yield cursor
    finally:
        cursor.close()


class Service:
    """Runs metadata queries for the product behind a DB-API connection.

    A sink names the result shape: ``str`` for a single value, ``list[str]``
    for one value per row, ``list[Record]`` for records, or a record type for
    the last row read as one record.
    """

    def __init__(self) -> None:
        self._dialect: Dialect | None = None
        self._recent_connection: Any = None
        self._recent_product: Product | None = None

    def detect_product(self, connection: Any) -> Product:
        """Detect the product and version behind a connection."""
        if (
            self._recent_product is not None
            and self._recent_connection is connection
        ):
            self._dialect = registry.lookup_dialect(self._recent_product)
            return self._recent_product
        try:
            product = self._match_product(connection)
        except Exception as err:
            raise RuntimeError(f"failed to detect product: {err}") from err
        self._recent_connection = connection
        self._recent_product = product
        self._dialect = registry.lookup_dialect(product)
        return product

    def execute(self, connection: Any, kind: Kind, *options: Any) -> int:
        """Run the statement of a kind; return the affected row count."""
        product = Options(options).product()
        if product is None:
            product = self.detect_product(connection)
        query = self._match_query(product, kind)
        args = find_option(options, Args)
        sql, params = prepare_sql(query, self._placeholder_getter(), args)
        with _executed(connection, sql, params) as cursor:
            return cursor.rowcount

    def info(self, connection: Any, kind: Kind, sink: Any, *options: Any) -> Any:
        """Run the query of a kind and return its result shaped as sink."""
        product = find_option(options, Product)
        if product is None:
            product = self.detect_product(connection)
        query = self._match_query(product, kind)
        return self._run_query(connection, query, sink, options)

    def _match_query(self, product: Product, kind: Kind) -> Query:
        queries: Queries = registry.lookup(product.name, kind)
        if not queries:
            raise ValueError(f"unsupported kind: {kind} for: {product.name}")
        query = queries.match(product)
        if query is None:
            raise ValueError(
                f"unsupported kind: {kind}, for: {product.name}v{product.major}"
            )
        return query

    def _match_product(self, connection: Any) -> Product:
        product = registry.match_product(connection)
        if product is None:
            raise LookupError(
                f"no registered product matches {type(connection).__qualname__}"
            )
        return self._match_version(connection, product)

    def _match_version(self, connection: Any, product: Product) -> Product:
        queries = registry.lookup(product.name, Kind.VERSION)
        if not queries:
            return product
        error: Exception | None = None
        for query in queries:
            try:
                version = self._run_query(connection, query, str, ())
            except Exception as err:
                error = err
                continue
            try:
                return parse(version)
            except ValueError as err:
                raise ValueError(f"unrecognised version: {version!r}") from err
        assert error is not None
        raise error

    def _placeholder_getter(self) -> Callable[[], str]:
        if self._dialect is not None:
            return self._dialect.placeholder_getter()
        return lambda: DEFAULT

    def _run_query(
        self, connection: Any, query: Query, sink: Any, options: tuple[Any, ...]
    ) -> Any:
        read = _reader(sink)
        args = find_option(options, Args)
        sql, params = prepare_sql(query, self._placeholder_getter(), args)
        with _executed(connection, sql, params) as cursor:
            return read(cursor)