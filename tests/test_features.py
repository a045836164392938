import pytest

from dbmeta.features import InsertFeatures, LoadFeature, UpsertFeatures


def test_multi_values_flag():
    assert InsertFeatures.MULTI_VALUES.multi_values() is True
    assert InsertFeatures.SINGLE_VALUES.multi_values() is False


def test_multi_values_from_combined_value():
    combined = InsertFeatures(InsertFeatures.MULTI_VALUES | InsertFeatures.SINGLE_VALUES)
    assert combined.multi_values() is True


def test_unsupported_is_the_zero_value():
    assert LoadFeature(0) is LoadFeature.UNSUPPORTED
    assert UpsertFeatures(0) is UpsertFeatures.UNSUPPORTED
    assert InsertFeatures(0) is InsertFeatures.SINGLE_VALUES
    assert LoadFeature(1) is LoadFeature.LOCAL_DATA


@pytest.mark.parametrize(
    "value, member",
    [
        (0, UpsertFeatures.UNSUPPORTED),
        (1, UpsertFeatures.MERGE),
        (3, UpsertFeatures.INSERT_OR_REPLACE),
        (5, UpsertFeatures.UPDATE_OR_INSERT),
    ],
)
def test_upsert_values(value, member):
    assert UpsertFeatures(value) is member