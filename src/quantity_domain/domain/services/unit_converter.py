# src/quantity_domain/domain/services/unit_converter.py
"""Conversions between total piece counts and (boxes, pieces) pairs."""

from src.common.exceptions.custom_exceptions import InvalidConfigurationError, QuantityValidationError
from src.quantity_domain.domain.entities.quantity_value import QuantityValue

BOXES = "boxes"
PIECES = "pieces"
UNIT_TYPES = (BOXES, PIECES)


def ensure_pieces_per_box(pieces_per_box: int) -> int:
    """Returns pieces_per_box unchanged, or raises if it cannot be used as a divisor."""
    if isinstance(pieces_per_box, bool) or not isinstance(pieces_per_box, int) or pieces_per_box < 1:
        raise InvalidConfigurationError(f"pieces per box must be a positive integer, got {pieces_per_box!r}")
    return pieces_per_box


def to_pieces(boxes: int, pieces: int, pieces_per_box: int) -> int:
    """boxes * pieces_per_box + pieces. Pieces above one box's worth are allowed."""
    ensure_pieces_per_box(pieces_per_box)
    return int(boxes) * pieces_per_box + int(pieces)


def normalize(total_pieces: int, pieces_per_box: int) -> QuantityValue:
    """Splits a raw piece count into whole boxes and the remaining loose pieces."""
    ensure_pieces_per_box(pieces_per_box)
    total_pieces = int(total_pieces)
    if total_pieces < 0:
        raise QuantityValidationError(f"Cannot normalize negative pieces ({total_pieces})")
    boxes, pieces = divmod(total_pieces, pieces_per_box)
    return QuantityValue(boxes=boxes, pieces=pieces, total_pieces=total_pieces)


def from_boxes_entry(boxes_entered: int, pieces_per_box: int) -> QuantityValue:
    """Treats the entered number as whole boxes; loose pieces are always 0."""
    return normalize(to_pieces(boxes_entered, 0, pieces_per_box), pieces_per_box)


def from_pieces_entry(pieces_entered: int, pieces_per_box: int) -> QuantityValue:
    """Treats the entered number as a raw piece count and folds overflow into boxes."""
    return normalize(to_pieces(0, pieces_entered, pieces_per_box), pieces_per_box)


def parse_dual_unit_input(value: int, input_type: str, pieces_per_box: int) -> QuantityValue:
    """Converts an already coerced, positive entry expressed in the given unit."""
    if value <= 0:
        raise QuantityValidationError("Input value must be positive")
    if input_type == BOXES:
        return from_boxes_entry(value, pieces_per_box)
    if input_type == PIECES:
        return from_pieces_entry(value, pieces_per_box)
    raise QuantityValidationError(f"Invalid input type: {input_type!r}")
