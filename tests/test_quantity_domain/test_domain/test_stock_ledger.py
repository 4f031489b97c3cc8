"""Tests for available-stock computation."""

import logging

import pytest

from src.common.exceptions.custom_exceptions import InvalidConfigurationError
from src.quantity_domain.domain.entities.quantity_value import QuantityValue
from src.quantity_domain.domain.entities.stock_aggregate import StockAggregate, StockCounter
from src.quantity_domain.domain.services import stock_ledger


def _aggregate(pieces_per_box, stock=(0, 0), sales=(0, 0), damage=(0, 0), returns=(0, 0)) -> StockAggregate:
    return StockAggregate(
        pieces_per_box=pieces_per_box,
        stock=StockCounter(*stock),
        sales=StockCounter(*sales),
        damage=StockCounter(*damage),
        returns=StockCounter(*returns),
        product_id="p-1",
    )


def test_available_combines_all_four_counters() -> None:
    # 60 - 20 - 1 + 6 = 45 pcs
    aggregate = _aggregate(6, stock=(10, 0), sales=(3, 2), damage=(0, 1), returns=(1, 0))

    assert stock_ledger.balance_pieces(aggregate) == 45
    assert stock_ledger.available(aggregate) == QuantityValue(boxes=7, pieces=3, total_pieces=45)
    assert stock_ledger.available_boxes(aggregate) == 7


def test_available_renormalizes_unnormalized_counters() -> None:
    aggregate = _aggregate(4, stock=(1, 9))

    assert stock_ledger.available(aggregate) == QuantityValue(boxes=3, pieces=1, total_pieces=13)


def test_available_is_clamped_at_zero_and_logged(caplog) -> None:
    aggregate = _aggregate(5, stock=(0, 10), sales=(0, 15))

    with caplog.at_level(logging.WARNING):
        result = stock_ledger.available(aggregate)

    assert result == QuantityValue(boxes=0, pieces=0, total_pieces=0)
    assert stock_ledger.balance_pieces(aggregate) == -5
    assert "negative available stock" in caplog.text
    assert "p-1" in caplog.text


def test_available_with_broken_pieces_per_box_raises() -> None:
    with pytest.raises(InvalidConfigurationError):
        stock_ledger.available(_aggregate(0, stock=(1, 0)))


@pytest.mark.parametrize(
    "total, expected",
    [
        (0, stock_ledger.STATUS_OUT_OF_STOCK),
        (3, stock_ledger.STATUS_CRITICAL),
        (4, stock_ledger.STATUS_LOW),
        (11, stock_ledger.STATUS_LOW),
        (12, stock_ledger.STATUS_GOOD),
    ],
)
def test_availability_status(total, expected) -> None:
    assert stock_ledger.availability_status(total, 4) == expected


def test_availability_status_custom_good_threshold() -> None:
    assert stock_ledger.availability_status(12, 4, good_min_boxes=5) == stock_ledger.STATUS_LOW


def test_status_color_falls_back_to_gray() -> None:
    assert stock_ledger.status_color(stock_ledger.STATUS_GOOD) == "#10b981"
    assert stock_ledger.status_color("unknown") == "#6b7280"


def test_validate_quantity() -> None:
    assert stock_ledger.validate_quantity(5, 10, "sale").is_valid
    assert stock_ledger.validate_quantity(0, 10, "sale").message == "Must sale at least 1 piece"
    assert not stock_ledger.validate_quantity(-2, 10, "damage").is_valid

    result = stock_ledger.validate_quantity(11, 10, "sale")
    assert not result.is_valid
    assert result.message == "Insufficient quantity. Available: 10 pc, Needed: 11 pc"


def test_validate_boxes_pieces() -> None:
    assert stock_ledger.validate_boxes_pieces(2, 5, 6).is_valid
    assert stock_ledger.validate_boxes_pieces(2, 6, 6).message == "Pieces must be less than 6"
    assert not stock_ledger.validate_boxes_pieces(-1, 0, 6).is_valid


def test_low_stock_state() -> None:
    aggregate = _aggregate(6, stock=(7, 3))

    assert stock_ledger.low_stock_state(aggregate, 0) == stock_ledger.LOW_STOCK_NO_THRESHOLD
    assert stock_ledger.low_stock_state(aggregate, 8) == stock_ledger.LOW_STOCK_LOW
    assert stock_ledger.low_stock_state(aggregate, 7) == stock_ledger.LOW_STOCK_OK
