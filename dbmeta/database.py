"""Database product description and version-string parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass

_DIGITS = re.compile(r"[0-9]+")
_SEPARATORS = ".:-"
_NAME_TRIM = " -\t\n"


@dataclass
class Product:
    """A database product: its name, driver hints and version."""

    name: str = ""
    driver: str = ""
    driver_pkg: str = ""
    major: int = 0
    minor: int = 0
    release: int = 0

    def equal(self, other: Product) -> bool:
        """Return True when name, major and minor version match."""
        return (
            self.name == other.name
            and self.major == other.major
            and self.minor == other.minor
        )

    def new(self, major: int, minor: int, release: int) -> Product:
        """Return a product with this name and the given version."""
        return Product(name=self.name, major=major, minor=minor, release=release)


class _Cursor:
    """Position over a version string."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def find_digits(self) -> re.Match[str] | None:
        match = _DIGITS.search(self.text, self.pos)
        if match is not None:
            self.pos = match.end()
        return match

    def match_number(self) -> int:
        match = _DIGITS.match(self.text, self.pos)
        if match is None:
            return 0
        self.pos = match.end()
        return int(match.group())

    def match_separator(self) -> bool:
        if self.pos < len(self.text) and self.text[self.pos] in _SEPARATORS:
            self.pos += 1
            return True
        return False


def _read_major(cursor: _Cursor, product: Product) -> None:
    match = cursor.find_digits()
    if match is None:
        raise ValueError(
            f"failed to parse version: expected digits at position {cursor.pos} "
            f"in {cursor.text!r}"
        )
    offset = match.start()
    if offset > 0:
        product.name = cursor.text[: offset - 1].strip(_NAME_TRIM)
    product.major = int(match.group())


def parse(text: str | bytes) -> Product:
    """Parse a product name and version from a version banner.

    Raises ValueError when the text holds no version digits at all.
    """
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8", errors="replace")
    cursor = _Cursor(text)
    product = Product()
    _read_major(cursor, product)

    if not cursor.match_separator():
        cursor.pos += 1
        try:
            _read_major(cursor, product)
        except ValueError:
            return product
        if not cursor.match_separator():
            return product

    product.minor = cursor.match_number()
    if not cursor.match_separator():
        return product
    product.release = cursor.match_number()
    return product