"""Data Transfer Objects for dual-unit quantities and products."""

from dataclasses import dataclass, field
from typing import Any, Optional

from src.common.utils.number_utils import as_count, as_exact_int


@dataclass(frozen=True)
class QuantityChangeDTO:
    """What a DualUnitInput reports to its owner after a valid entry."""

    type: str  # "boxes" | "pieces": the unit the user typed into
    boxes: int
    pieces: int
    total_pieces: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "boxes": self.boxes,
            "pieces": self.pieces,
            "totalPieces": self.total_pieces,
        }


@dataclass
class StockCounterDTO:
    """A stored {boxes, pieces} counter exactly as the inventory service holds it."""

    boxes: int = 0
    pieces: int = 0

    @classmethod
    def from_api_response(cls, data: Optional[dict[str, Any]]) -> "StockCounterDTO":
        if not data:
            return cls()
        return cls(boxes=as_count(data.get("boxes")), pieces=as_count(data.get("pieces")))


@dataclass
class StockMovementRequestDTO:
    """Request body for the add-stock, sale, damage and return endpoints."""

    boxes: int
    pieces: int
    notes: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        return {"boxes": self.boxes, "pieces": self.pieces, "notes": self.notes}

    def to_damage_exchange_payload(self) -> dict[str, Any]:
        """Customer damage-exchange uses its own field names."""
        return {"damageBoxes": self.boxes, "damagePieces": self.pieces, "notes": self.notes}


@dataclass
class ProductStockDTO:
    id: str
    product_name: Optional[str] = None
    type: Optional[str] = None
    sub_type: Optional[str] = None
    size: Optional[str] = None
    hsn_no: Optional[str] = None
    location: Optional[str] = None
    pieces_per_box: int = 1
    low_stock_threshold: int = 0  # in boxes; 0 means no threshold set
    stock: StockCounterDTO = field(default_factory=StockCounterDTO)
    sales: StockCounterDTO = field(default_factory=StockCounterDTO)
    damage: StockCounterDTO = field(default_factory=StockCounterDTO)
    returns: StockCounterDTO = field(default_factory=StockCounterDTO)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "ProductStockDTO":
        """Creates ProductStockDTO from an inventory service product document."""
        pieces_per_box = data.get("piecesPerBox")
        return cls(
            id=str(data.get("_id") or data.get("id") or ""),
            product_name=data.get("productName"),
            type=data.get("type"),
            sub_type=data.get("subType"),
            size=data.get("size"),
            hsn_no=data.get("hsnNo"),
            location=data.get("location"),
            # Absent means single-piece items. Anything not exactly a positive integer
            # ("", "six", 6.5, 0) is kept as sent so conversion rejects it
            pieces_per_box=as_exact_int(pieces_per_box) if pieces_per_box is not None else 1,
            low_stock_threshold=as_count(data.get("lowStockThreshold")),
            stock=StockCounterDTO.from_api_response(data.get("stock")),
            sales=StockCounterDTO.from_api_response(data.get("sales")),
            damage=StockCounterDTO.from_api_response(data.get("damage")),
            returns=StockCounterDTO.from_api_response(data.get("returns")),
        )


@dataclass
class LowStockFiltersDTO:
    search: str = ""
    type: str = ""
    sub_type: str = ""
    size: str = ""
    hsn: str = ""
    location: str = ""
