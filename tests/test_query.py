import pytest

from dbmeta.database import Product
from dbmeta.kind import CATALOG, SCHEMA, TABLE, Kind
from dbmeta.query import Criteria, Queries, new_criterion, new_query


def _query(major, minor, kind=Kind.VERSION):
    return new_query(kind, f"SELECT {major}", Product(name="Test", major=major, minor=minor))


def test_new_query_holds_criteria():
    product = Product(name="Test", major=1)
    first = new_criterion(CATALOG, "TABLE_CATALOG")
    second = new_criterion(SCHEMA, "TABLE_SCHEMA")
    query = new_query(Kind.TABLES, "SELECT 1", product, first, second)
    assert query.kind is Kind.TABLES
    assert query.product is product
    assert list(query.criteria) == [first, second]
    assert isinstance(query.criteria, Criteria)


def test_supported_counts_columns_only():
    criteria = Criteria(
        [
            new_criterion(CATALOG, ""),
            new_criterion(SCHEMA, "TABLE_SCHEMA"),
            new_criterion(TABLE, "TABLE_NAME"),
        ]
    )
    assert criteria.supported() == len([c for c in criteria if c.column])
    assert Criteria().supported() == 0


def test_validate_accepts_matching_criteria():
    criteria = Criteria([new_criterion(name, "") for name in Kind.TABLE.criteria()])
    criteria.validate(Kind.TABLE)
    assert [c.name for c in criteria] == list(Kind.TABLE.criteria())


def test_validate_rejects_wrong_count():
    criteria = Criteria([new_criterion(CATALOG, "")])
    with pytest.raises(ValueError, match="expected"):
        criteria.validate(Kind.TABLE)


def test_validate_rejects_wrong_name():
    criteria = Criteria([new_criterion(SCHEMA, ""), new_criterion(CATALOG, "")])
    with pytest.raises(ValueError, match="criterion"):
        criteria.validate(Kind.TABLES)


def test_match_empty_and_single():
    assert Queries().match(Product()) is None
    only = _query(9, 9)
    assert Queries([only]).match(Product(major=1)) is only


def test_match_picks_first_version_not_older():
    older, newer = _query(5, 0), _query(5, 7)
    queries = Queries([older, newer])
    assert queries.match(Product(major=5, minor=6)) is newer
    assert queries.match(Product(major=5, minor=0)) is older


def test_match_falls_back_to_latest():
    older, newer = _query(5, 0), _query(5, 7)
    queries = Queries([older, newer])
    assert queries.match(Product(major=8, minor=0)) is newer