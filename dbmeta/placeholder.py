"""Prepared statement placeholder generators."""

from __future__ import annotations

import itertools
from typing import Callable, Protocol

DEFAULT = "?"


class Generator(Protocol):
    """Produces placeholders for a prepared statement."""

    def resolver(self) -> Callable[[], str]:
        """Return a callable giving the next placeholder on each call."""

    def length(self, start: int, count: int) -> int:
        """Return the total text length of the placeholders from start to count."""


class DefaultGenerator:
    """Generator of the plain '?' placeholder."""

    def resolver(self) -> Callable[[], str]:
        return lambda: DEFAULT

    def length(self, start: int, count: int) -> int:
        return count - start


def _truncate_tenth(value: int) -> int:
    quotient = abs(value) // 10
    return quotient if value >= 0 else -quotient


class NumberedGenerator:
    """Generator of numbered placeholders: $1, $2, ..."""

    def resolver(self) -> Callable[[], str]:
        counter = itertools.count(1)
        return lambda: f"${next(counter)}"

    def length(self, start: int, count: int) -> int:
        start += 1
        total = count
        multiplier = 1
        extra = 0
        while multiplier < start + count:
            extra += count % multiplier
            multiplier *= 10

        multiplier = 1
        while count != 0:
            total += (count - start) * multiplier
            count = _truncate_tenth(count)
            multiplier *= 10
            extra += 1
        return total + extra