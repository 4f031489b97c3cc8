"""Quantity value object."""

from dataclasses import dataclass


@dataclass(frozen=True)  # Value objects are immutable
class QuantityValue:
    """A normalized dual-unit quantity: whole boxes, loose pieces and their total in pieces."""

    boxes: int
    pieces: int
    total_pieces: int

    def __post_init__(self) -> None:
        if self.boxes < 0 or self.pieces < 0 or self.total_pieces < 0:
            raise ValueError("Quantity cannot be negative.")

    @property
    def is_empty(self) -> bool:
        return self.total_pieces == 0

    def to_dict(self) -> dict[str, int]:
        return {"boxes": self.boxes, "pieces": self.pieces, "totalPieces": self.total_pieces}

    def to_request(self) -> dict[str, int]:
        """The {boxes, pieces} pair the inventory endpoints expect."""
        return {"boxes": self.boxes, "pieces": self.pieces}

