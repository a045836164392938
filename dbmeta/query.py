"""Metadata queries, their criteria and version matching."""

from __future__ import annotations

from dataclasses import dataclass, field

from dbmeta.database import Product
from dbmeta.kind import Kind


@dataclass
class Criterion:
    """A query criterion.

    The column names the vendor column; '?' marks a placeholder already in
    the SQL, '%' marks a value substituted into the SQL text.
    """

    name: str
    column: str = ""


class Criteria(list):
    """An ordered collection of criteria."""

    def supported(self) -> int:
        """Return how many criteria map to a column."""
        return sum(1 for item in self if item.column)

    def validate(self, kind: Kind) -> None:
        """Raise ValueError unless the criteria match those of kind."""
        expected = kind.criteria()
        if len(self) != len(expected):
            raise ValueError(
                f"invalid query '{kind}': expected {len(expected)} criteria, "
                f"but query defined {len(self)}"
            )
        for item, name in zip(self, expected):
            if item.name != name:
                raise ValueError(
                    f"invalid query criterion '{kind}': expected {name}, "
                    f"but had {item.name}"
                )


@dataclass
class Query:
    """A dictionary query for one kind of metadata and one product version."""

    kind: Kind
    sql: str
    product: Product
    criteria: Criteria = field(default_factory=Criteria)


class Queries(list):
    """Queries for the same kind, ordered by product version."""

    def match(self, product: Product) -> Query | None:
        """Return the query for the product version, or the latest one."""
        if not self:
            return None
        if len(self) == 1:
            return self[0]
        for candidate in self:
            if (
                candidate.product.major >= product.major
                and candidate.product.minor >= product.minor
            ):
                return candidate
        return self[-1]


def new_query(kind: Kind, sql: str, product: Product, *criteria: Criterion) -> Query:
    """Create a query with the given criteria."""
    return Query(kind=kind, sql=sql, product=product, criteria=Criteria(criteria))


def new_criterion(name: str, column: str) -> Criterion:
    """Create a criterion mapping a kind criterion name to a vendor column."""
    return Criterion(name=name, column=column)