"""SQL dialect description and placeholder rewriting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable

from dbmeta.database import Product
from dbmeta.features import InsertFeatures, LoadFeature, UpsertFeatures
from dbmeta.placeholder import DEFAULT, DefaultGenerator, Generator


@dataclass
class Dialect:
    """Capabilities and conventions of a database product's SQL."""

    product: Product = field(default_factory=Product)
    placeholder: str = ""
    placeholder_resolver: Generator | None = None
    transactional: bool = False
    insert: InsertFeatures = InsertFeatures.SINGLE_VALUES
    upsert: UpsertFeatures = UpsertFeatures.UNSUPPORTED
    load: LoadFeature = LoadFeature.UNSUPPORTED
    can_autoincrement: bool = False
    autoincrement_func: str = ""
    can_last_insert_id: bool = False
    can_returning: bool = False
    quote_character: str = ""
    keywords: dict[str, bool] = field(default_factory=dict)

    def placeholder_getter(self) -> Callable[[], str]:
        """Return a callable producing this dialect's placeholders in order."""
        generator = self.placeholder_resolver or DefaultGenerator()
        return generator.resolver()

    def ensure_placeholders(self, sql: str) -> str:
        """Rewrite '?' placeholders into this dialect's placeholders."""
        if self.placeholder == DEFAULT:
            return sql
        fragments = sql.split(DEFAULT)
        if len(fragments) == 1:
            return sql
        next_placeholder = self.placeholder_getter()
        return fragments[0] + "".join(
            next_placeholder() + fragment for fragment in fragments[1:]
        )


def sort_dialects(dialects: Iterable[Dialect]) -> list[Dialect]:
    """Return the dialects ordered by major, then minor version."""
    return sorted(
        dialects,
        key=lambda d: 100000 * d.product.major + d.product.minor,
    )