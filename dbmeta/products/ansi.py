"""Default ANSI SQL product and dialect."""

from __future__ import annotations

from dbmeta.database import Product
from dbmeta.dialect import Dialect
from dbmeta.features import InsertFeatures, LoadFeature, UpsertFeatures
from dbmeta.placeholder import DefaultGenerator
from dbmeta.registry import register_dialect

ANSI = Product(name="ANSI", major=1, driver="ansi")

_registered = False


def register() -> None:
    """Register the ANSI dialect in the default registry, once."""
    global _registered
    if _registered:
        return
    _registered = True
    register_dialect(
        Dialect(
            product=ANSI,
            placeholder="?",
            transactional=True,
            insert=InsertFeatures.SINGLE_VALUES,
            upsert=UpsertFeatures.UNSUPPORTED,
            load=LoadFeature.UNSUPPORTED,
            placeholder_resolver=DefaultGenerator(),
        )
    )


register()