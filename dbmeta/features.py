"""Feature sets a SQL dialect may support."""

from __future__ import annotations

import enum


class InsertFeatures(enum.IntFlag):
    """Supported insert styles, as a bit set."""

    SINGLE_VALUES = 0
    MULTI_VALUES = 1

    def multi_values(self) -> bool:
        """Return True when multi-row VALUES inserts are supported."""
        target = InsertFeatures.MULTI_VALUES
        return (self & target) == target


class LoadFeature(enum.IntEnum):
    """Supported bulk load styles."""

    UNSUPPORTED = 0
    LOCAL_DATA = 1


class UpsertFeatures(enum.IntEnum):
    """Supported upsert styles."""

    UNSUPPORTED = 0
    MERGE = 1
    MERGE_INTO = 2
    INSERT_OR_REPLACE = 3
    INSERT_OR_UPDATE = 4
    UPDATE_OR_INSERT = 5