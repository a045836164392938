import pytest

from dbmeta.placeholder import DEFAULT, DefaultGenerator, NumberedGenerator


@pytest.mark.parametrize(
    "start, count, expected",
    [
        (0, 5, 10),
        (0, 10, 21),
        (0, 100, 292),
        (0, 60000, 348894),
        (0, 450, 1692),
        (0, 1232, 5053),
    ],
)
def test_numbered_length(start, count, expected):
    actual = NumberedGenerator().length(start, count)
    assert actual == expected
    rendered = "".join(f"${i + 1}" for i in range(start, count))
    assert len(rendered) == actual


def test_numbered_resolver_sequence():
    getter = NumberedGenerator().resolver()
    assert [getter() for _ in range(5)] == ["$1", "$2", "$3", "$4", "$5"]


def test_numbered_resolvers_are_independent():
    generator = NumberedGenerator()
    first = generator.resolver()
    first()
    second = generator.resolver()
    assert second() == "$1"
    assert first() == "$2"


def test_default_resolver_always_question_mark():
    getter = DefaultGenerator().resolver()
    assert [getter() for _ in range(3)] == [DEFAULT] * 3
    assert DEFAULT == "?"


def test_default_length_is_count_of_placeholders():
    generator = DefaultGenerator()
    for count in range(6):
        assert generator.length(0, count) == len(DEFAULT * count)