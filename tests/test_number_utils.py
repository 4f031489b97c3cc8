"""Tests for quantity text coercion."""

import pytest

from src.common.utils.number_utils import as_count, as_exact_int, coerce_entry


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("5", 5),
        (" 05 ", 5),
        ("2.9", 2),
        ("1e1", 10),
        ("", None),
        (None, None),
        ("0", None),
        ("0.99", None),
        ("-3", None),
        ("abc", None),
        ("nan", None),
        ("inf", None),
        ("9007199254740993", 9007199254740993),
        (" 123456789012345678901234567890 ", 123456789012345678901234567890),
        ("1_000", 1000),
    ],
)
def test_coerce_entry(raw, expected) -> None:
    assert coerce_entry(raw) == expected


def test_as_count_defaults_to_zero() -> None:
    assert as_count(None) == 0
    assert as_count("junk") == 0
    assert as_count(-4) == 0
    assert as_count("7") == 7


@pytest.mark.parametrize(
    "value, expected",
    [(7, 7), ("7", 7), (" 7 ", 7), (7.0, 7), (7.5, 7.5), ("7.0", "7.0"), ("", ""), ("six", "six"), (None, None)],
)
def test_as_exact_int_leaves_inexact_values_alone(value, expected) -> None:
    result = as_exact_int(value)

    assert result == expected
    assert type(result) is type(expected)
