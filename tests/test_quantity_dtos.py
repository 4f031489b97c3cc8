"""Tests for product and quantity DTOs."""

import pytest

from src.common.dtos.quantity_dtos import ProductStockDTO, StockCounterDTO, StockMovementRequestDTO
from src.common.exceptions.custom_exceptions import InvalidConfigurationError
from src.quantity_domain.domain.services.unit_converter import ensure_pieces_per_box


def test_product_from_api_response(sample_product_api_data) -> None:
    product = ProductStockDTO.from_api_response(sample_product_api_data)

    assert product.id == "p-wall-12"
    assert product.product_name == "Ivory Wall Gloss"
    assert product.hsn_no == "69072100"
    assert product.stock == StockCounterDTO(boxes=10, pieces=0)
    assert product.returns == StockCounterDTO(boxes=1, pieces=0)


def test_product_with_missing_counters_and_pieces_per_box() -> None:
    product = ProductStockDTO.from_api_response({"id": 42, "stock": {"boxes": 3}})

    assert product.id == "42"
    assert product.pieces_per_box == 1
    assert product.stock == StockCounterDTO(boxes=3, pieces=0)
    assert product.sales == StockCounterDTO()
    assert product.low_stock_threshold == 0


@pytest.mark.parametrize("raw", [0, -2, 6.5, "", "six", "6.5", True])
def test_unusable_pieces_per_box_is_kept_for_conversion_to_reject(raw) -> None:
    product = ProductStockDTO.from_api_response({"_id": "x", "piecesPerBox": raw})

    assert product.pieces_per_box == raw
    with pytest.raises(InvalidConfigurationError):
        ensure_pieces_per_box(product.pieces_per_box)


@pytest.mark.parametrize("raw, expected", [(6, 6), ("6", 6), (" 12 ", 12), (6.0, 6)])
def test_whole_pieces_per_box_is_read_as_int(raw, expected) -> None:
    assert ProductStockDTO.from_api_response({"_id": "x", "piecesPerBox": raw}).pieces_per_box == expected


def test_movement_payloads() -> None:
    movement = StockMovementRequestDTO(boxes=2, pieces=3, notes="n")

    assert movement.to_payload() == {"boxes": 2, "pieces": 3, "notes": "n"}
    assert movement.to_damage_exchange_payload() == {"damageBoxes": 2, "damagePieces": 3, "notes": "n"}
