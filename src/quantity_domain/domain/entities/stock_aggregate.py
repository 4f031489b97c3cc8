"""Stock aggregate entity."""

from dataclasses import dataclass, field

from src.common.dtos.quantity_dtos import ProductStockDTO, StockCounterDTO


@dataclass(frozen=True)
class StockCounter:
    """A stored {boxes, pieces} counter. Not necessarily normalized; the inventory service owns it."""

    boxes: int = 0
    pieces: int = 0

    def __post_init__(self) -> None:
        if self.boxes < 0 or self.pieces < 0:
            raise ValueError("Stock counters cannot be negative.")

    @classmethod
    def from_dto(cls, dto: StockCounterDTO) -> "StockCounter":
        return cls(boxes=dto.boxes, pieces=dto.pieces)


@dataclass(frozen=True)
class StockAggregate:
    """The four independently accumulated counters of one product."""

    pieces_per_box: int
    stock: StockCounter = field(default_factory=StockCounter)
    sales: StockCounter = field(default_factory=StockCounter)
    damage: StockCounter = field(default_factory=StockCounter)
    returns: StockCounter = field(default_factory=StockCounter)
    product_id: str | None = None

    @classmethod
    def from_product(cls, product: ProductStockDTO) -> "StockAggregate":
        return cls(
            pieces_per_box=product.pieces_per_box,
            stock=StockCounter.from_dto(product.stock),
            sales=StockCounter.from_dto(product.sales),
            damage=StockCounter.from_dto(product.damage),
            returns=StockCounter.from_dto(product.returns),
            product_id=product.id,
        )
