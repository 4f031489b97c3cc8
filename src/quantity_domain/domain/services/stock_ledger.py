# src/quantity_domain/domain/services/stock_ledger.py
"""Available-stock computation over a product's stock, sales, damage and returns counters."""

import logging
from dataclasses import dataclass

from src.common.config.settings import settings
from src.quantity_domain.domain.entities.quantity_value import QuantityValue
from src.quantity_domain.domain.entities.stock_aggregate import StockAggregate
from src.quantity_domain.domain.services.unit_converter import ensure_pieces_per_box, normalize, to_pieces

logger = logging.getLogger(__name__)

STATUS_GOOD = "good"
STATUS_LOW = "low"
STATUS_CRITICAL = "critical"
STATUS_OUT_OF_STOCK = "out_of_stock"

STATUS_COLORS = {
    STATUS_GOOD: "#10b981",
    STATUS_LOW: "#f59e0b",
    STATUS_CRITICAL: "#ef4444",
    STATUS_OUT_OF_STOCK: "#000000",
}
DEFAULT_STATUS_COLOR = "#6b7280"

LOW_STOCK_NO_THRESHOLD = "no_threshold"
LOW_STOCK_LOW = "low"
LOW_STOCK_OK = "ok"

OPERATION_SALE = "sale"
OPERATION_DAMAGE = "damage"
OPERATION_RETURN = "return"


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    message: str


def balance_pieces(aggregate: StockAggregate) -> int:
    """stock - sales - damage + returns, in pieces, without clamping."""
    ppb = aggregate.pieces_per_box
    stock = to_pieces(aggregate.stock.boxes, aggregate.stock.pieces, ppb)
    sales = to_pieces(aggregate.sales.boxes, aggregate.sales.pieces, ppb)
    damage = to_pieces(aggregate.damage.boxes, aggregate.damage.pieces, ppb)
    returns = to_pieces(aggregate.returns.boxes, aggregate.returns.pieces, ppb)
    return stock - sales - damage + returns


def available(aggregate: StockAggregate) -> QuantityValue:
    """
    Currently sellable quantity, normalized to boxes and pieces.

    A negative balance means the stored counters disagree with each other.
    It is floored at zero for display and reported as a warning.
    """
    balance = balance_pieces(aggregate)
    if balance < 0:
        logger.warning(
            f"Product {aggregate.product_id or '<unknown>'} has negative available stock "
            f"({balance} pcs); showing 0 instead."
        )
        balance = 0
    return normalize(balance, aggregate.pieces_per_box)


def available_boxes(aggregate: StockAggregate) -> int:
    """Whole boxes available; used for low-stock thresholds, which are set in boxes."""
    return available(aggregate).boxes


def availability_status(available_total_pieces: int, pieces_per_box: int, good_min_boxes: int | None = None) -> str:
    """Classifies an available piece count as good, low, critical or out_of_stock."""
    ensure_pieces_per_box(pieces_per_box)
    if good_min_boxes is None:
        good_min_boxes = settings.GOOD_STOCK_MIN_BOXES
    if available_total_pieces <= 0:
        return STATUS_OUT_OF_STOCK

    boxes = available_total_pieces // pieces_per_box
    if boxes >= good_min_boxes:
        return STATUS_GOOD
    if boxes >= 1:
        return STATUS_LOW
    return STATUS_CRITICAL


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)


def validate_quantity(
    total_pieces_needed: int, available_total_pieces: int, operation: str = OPERATION_SALE
) -> ValidationResult:
    """Checks a requested quantity against what is available before a sale, damage or return."""
    if total_pieces_needed < 0:
        return ValidationResult(False, f"Cannot {operation} negative quantity")
    if total_pieces_needed == 0:
        return ValidationResult(False, f"Must {operation} at least 1 piece")
    if total_pieces_needed > available_total_pieces:
        return ValidationResult(
            False,
            f"Insufficient quantity. Available: {available_total_pieces} pc, Needed: {total_pieces_needed} pc",
        )
    return ValidationResult(True, f"Valid for {operation}")


def validate_boxes_pieces(boxes: int, pieces: int, pieces_per_box: int) -> ValidationResult:
    """Checks that a {boxes, pieces} pair is already in normalized form."""
    if boxes < 0 or pieces < 0:
        return ValidationResult(False, "Boxes and pieces cannot be negative")
    if pieces >= pieces_per_box:
        return ValidationResult(False, f"Pieces must be less than {pieces_per_box}")
    return ValidationResult(True, "Valid format")


def low_stock_state(aggregate: StockAggregate, threshold_boxes: int) -> str:
    """A product is low when a threshold is set and fewer whole boxes than that remain."""
    if threshold_boxes <= 0:
        return LOW_STOCK_NO_THRESHOLD
    if available_boxes(aggregate) < threshold_boxes:
        return LOW_STOCK_LOW
    return LOW_STOCK_OK
