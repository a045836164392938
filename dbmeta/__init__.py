"""Database metadata discovery: product detection, dialects and dictionary queries."""

__version__ = "0.1.0"