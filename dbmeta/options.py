"""Options passed to metadata calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, TypeVar

from dbmeta.database import Product
from dbmeta.dialect import Dialect

TAG_SQLX = "sqlx"

T = TypeVar("T")


@dataclass(frozen=True)
class Args:
    """Prepared statement arguments."""

    items: tuple[Any, ...] = ()

    def unwrap(self) -> list[Any]:
        """Return the arguments as a list."""
        return list(self.items)


def new_args(*args: Any) -> Args:
    """Create statement arguments."""
    return Args(tuple(args))


class Tag(str):
    """Annotation tag name."""


class Identity(str):
    """Identity column option."""


class IdentityOnly(int):
    """Identity (primary key) only option."""

    def __repr__(self) -> str:
        return f"IdentityOnly({bool(self)})"


class BatchSize(int):
    """Batch size option."""

    def __repr__(self) -> str:
        return f"BatchSize({int(self)})"


class Options(list):
    """A list of options of mixed types."""

    def tag(self) -> str:
        """Return the annotation tag, default 'sqlx'."""
        for candidate in self:
            if isinstance(candidate, Tag):
                return str(candidate)
        return TAG_SQLX

    def dialect(self) -> Dialect | None:
        """Return the first dialect option, if any."""
        for candidate in self:
            if isinstance(candidate, Dialect):
                return candidate
        return None

    def product(self) -> Product | None:
        """Return the product of the first dialect or product option."""
        for candidate in self:
            if isinstance(candidate, Dialect):
                return candidate.product
            if isinstance(candidate, Product):
                return candidate
        return None

    def batch_size(self) -> int:
        """Return the batch size option, default 1."""
        for candidate in self:
            if isinstance(candidate, BatchSize):
                return int(candidate)
        return 1

    def identity_only(self) -> bool:
        """Return the identity only option, default False."""
        for candidate in self:
            if isinstance(candidate, IdentityOnly):
                return bool(candidate)
        return False

    def identity(self) -> str:
        """Return the identity column option, default empty."""
        for candidate in self:
            if isinstance(candidate, Identity):
                return str(candidate)
        return ""


def find_option(options: Iterable[Any] | None, cls: type[T]) -> T | None:
    """Return the last option that is an instance of cls, or None."""
    found = None
    for option in options or ():
        if isinstance(option, cls):
            found = option
    return found