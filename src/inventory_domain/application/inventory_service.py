# src/inventory_domain/application/inventory_service.py
"""Application service for stock movements and low-stock reporting."""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from src.common.dtos.quantity_dtos import LowStockFiltersDTO, ProductStockDTO, StockMovementRequestDTO
from src.common.exceptions.custom_exceptions import InvalidConfigurationError, QuantityValidationError
from src.common.utils.number_utils import as_exact_int
from src.inventory_domain.application.product_events import (
    DAMAGE_RECORDED,
    PRODUCT_ADDED,
    PRODUCT_UPDATED,
    RETURN_RECORDED,
    SALE_RECORDED,
    STOCK_UPDATED,
    ProductEventBus,
)
from src.inventory_domain.infrastructure.api_clients.inventory_api_client import DAMAGE_SHOP, InventoryApiClient
from src.quantity_domain.domain.entities.quantity_value import QuantityValue
from src.quantity_domain.domain.entities.stock_aggregate import StockAggregate
from src.quantity_domain.domain.services import stock_ledger
from src.quantity_domain.domain.services.packaging_rules import get_pieces_per_box
from src.quantity_domain.domain.services.unit_converter import ensure_pieces_per_box, normalize, to_pieces

logger = logging.getLogger(__name__)

SORT_LOW_STOCK = "low-stock"
SORT_NAME = "name"
SORT_TYPE = "type"


class DualUnitQuantity(Protocol):
    """Anything carrying boxes and pieces: QuantityValue or QuantityChangeDTO."""

    boxes: int
    pieces: int


@dataclass
class LowStockRowDTO:
    product: ProductStockDTO
    available: QuantityValue
    available_boxes: int
    state: str  # no_threshold | low | ok


class InventoryApplicationService:
    """Turns dual-unit quantities into inventory service requests and announces the results."""

    def __init__(self, api_client: InventoryApiClient, event_bus: ProductEventBus) -> None:
        self.api_client = api_client
        self.event_bus = event_bus

    # --- Read side ---

    def get_available(self, product: ProductStockDTO) -> QuantityValue:
        return stock_ledger.available(StockAggregate.from_product(product))

    def get_availability_status(self, product: ProductStockDTO) -> str:
        available = self.get_available(product)
        return stock_ledger.availability_status(available.total_pieces, product.pieces_per_box)

    # --- Stock movements ---

    def _movement(
        self, product: ProductStockDTO, quantity: DualUnitQuantity, notes: Optional[str], operation: str
    ) -> tuple[QuantityValue, StockMovementRequestDTO]:
        """Renormalizes the quantity against the product's own pieces per box."""
        if quantity is None:
            raise QuantityValidationError(f"Must {operation} at least 1 piece")
        total = to_pieces(quantity.boxes, quantity.pieces, product.pieces_per_box)
        if total <= 0:
            raise QuantityValidationError(f"Must {operation} at least 1 piece")
        normalized = normalize(total, product.pieces_per_box)
        return normalized, StockMovementRequestDTO(boxes=normalized.boxes, pieces=normalized.pieces, notes=notes)

    def _ensure_available(self, product: ProductStockDTO, needed: QuantityValue, operation: str) -> None:
        available = self.get_available(product)
        result = stock_ledger.validate_quantity(needed.total_pieces, available.total_pieces, operation)
        if not result.is_valid:
            raise QuantityValidationError(result.message)

    def add_stock(
        self, product: ProductStockDTO, quantity: DualUnitQuantity, notes: Optional[str] = None
    ) -> ProductStockDTO:
        normalized, movement = self._movement(product, quantity, notes, "add")
        logger.info(f"Adding {normalized.total_pieces} pcs to product {product.id} ({product.product_name})")
        updated = self.api_client.add_stock(product.id, movement)
        self.event_bus.publish(STOCK_UPDATED, updated)
        return updated

    def record_sale(
        self, product: ProductStockDTO, quantity: DualUnitQuantity, notes: Optional[str] = None
    ) -> ProductStockDTO:
        normalized, movement = self._movement(product, quantity, notes, stock_ledger.OPERATION_SALE)
        self._ensure_available(product, normalized, stock_ledger.OPERATION_SALE)
        logger.info(f"Recording sale of {normalized.total_pieces} pcs for product {product.id}")
        updated = self.api_client.record_sale(product.id, movement)
        self.event_bus.publish(SALE_RECORDED, updated)
        return updated

    def record_damage(
        self,
        product: ProductStockDTO,
        quantity: DualUnitQuantity,
        damage_type: str = DAMAGE_SHOP,
        notes: Optional[str] = None,
    ) -> ProductStockDTO:
        normalized, movement = self._movement(product, quantity, notes, stock_ledger.OPERATION_DAMAGE)
        self._ensure_available(product, normalized, stock_ledger.OPERATION_DAMAGE)
        logger.info(f"Recording {damage_type} damage of {normalized.total_pieces} pcs for product {product.id}")
        updated = self.api_client.record_damage(product.id, movement, damage_type)
        self.event_bus.publish(DAMAGE_RECORDED, updated)
        return updated

    def record_return(
        self, product: ProductStockDTO, quantity: DualUnitQuantity, notes: Optional[str] = None
    ) -> ProductStockDTO:
        normalized, movement = self._movement(product, quantity, notes, stock_ledger.OPERATION_RETURN)
        logger.info(f"Recording return of {normalized.total_pieces} pcs for product {product.id}")
        updated = self.api_client.record_return(product.id, movement)
        self.event_bus.publish(RETURN_RECORDED, updated)
        return updated

    # --- Products ---

    def create_product(self, product_data: dict[str, Any]) -> ProductStockDTO:
        """
        Creates a product. Pieces per box is fixed from here on, so it is
        resolved from the packaging rules when missing and checked before sending.
        """
        data = dict(product_data)
        if data.get("piecesPerBox") is None:
            data["piecesPerBox"] = get_pieces_per_box(data.get("size", ""), data.get("type"), data.get("subType"))
        ensure_pieces_per_box(data["piecesPerBox"])

        created = self.api_client.create_product(data)
        logger.info(f"Created product {created.id} ({created.product_name}), {created.pieces_per_box} pcs/box")
        self.event_bus.publish(PRODUCT_ADDED, created)
        return created

    def update_product(self, product: ProductStockDTO, changes: dict[str, Any]) -> ProductStockDTO:
        """Edits product details. Stored counters are in boxes and pieces, so pieces per box cannot change."""
        data = dict(changes)
        if "piecesPerBox" in data and as_exact_int(data["piecesPerBox"]) != product.pieces_per_box:
            raise InvalidConfigurationError(
                f"pieces per box of product {product.id} is fixed at {product.pieces_per_box}, "
                f"got {data['piecesPerBox']!r}"
            )
        data.pop("piecesPerBox", None)

        updated = self.api_client.update_product(product.id, data)
        logger.info(f"Updated product {updated.id} ({updated.product_name})")
        self.event_bus.publish(PRODUCT_UPDATED, updated)
        return updated

    # --- Low stock ---

    def set_low_stock_threshold(self, product_id: str, threshold: int) -> None:
        if threshold < 0:
            raise QuantityValidationError("Threshold must be 0 or greater")
        self.api_client.update_low_stock_threshold(product_id, threshold)
        self.event_bus.publish(PRODUCT_UPDATED, {"id": product_id, "lowStockThreshold": threshold})

    def bulk_set_low_stock_threshold(self, product_ids: list[str], threshold: int) -> None:
        if threshold < 0:
            raise QuantityValidationError("Threshold must be 0 or greater")
        if not product_ids:
            logger.warning("No products selected for threshold update.")
            return
        self.api_client.bulk_update_low_stock_threshold(product_ids, threshold)
        logger.info(f"Updated low-stock threshold to {threshold} boxes for {len(product_ids)} products")
        self.event_bus.publish(PRODUCT_UPDATED, {"ids": list(product_ids), "lowStockThreshold": threshold})

    @staticmethod
    def _matches(product: ProductStockDTO, filters: LowStockFiltersDTO) -> bool:
        if filters.search:
            search = filters.search.lower()
            haystack = (product.product_name, product.size, product.type, product.sub_type)
            if not any(value and search in value.lower() for value in haystack):
                return False
        exact = (
            (filters.type, product.type),
            (filters.sub_type, product.sub_type),
            (filters.size, product.size),
            (filters.hsn, product.hsn_no),
            (filters.location, product.location),
        )
        return all(not wanted or wanted == actual for wanted, actual in exact)

    def low_stock_report(
        self, filters: Optional[LowStockFiltersDTO] = None, sort_by: str = SORT_LOW_STOCK
    ) -> list[LowStockRowDTO]:
        """
        Fetches all products and returns them filtered and sorted for the low-stock screen.

        Available stock is recomputed from the freshly fetched counters on every call.
        Products whose pieces per box is unusable are logged and left out.
        """
        filters = filters or LowStockFiltersDTO()
        products = self.api_client.get_all_products()

        rows = []
        for product in products:
            if not self._matches(product, filters):
                continue
            try:
                ensure_pieces_per_box(product.pieces_per_box)
            except InvalidConfigurationError as e:
                logger.error(f"Skipping product {product.id} ({product.product_name}) in low-stock report: {e}")
                continue
            aggregate = StockAggregate.from_product(product)
            available = stock_ledger.available(aggregate)
            rows.append(
                LowStockRowDTO(
                    product=product,
                    available=available,
                    available_boxes=available.boxes,
                    state=stock_ledger.low_stock_state(aggregate, product.low_stock_threshold),
                )
            )

        if sort_by == SORT_LOW_STOCK:
            # Most critical first
            rows.sort(key=lambda row: row.available_boxes - row.product.low_stock_threshold)
        elif sort_by == SORT_NAME:
            rows.sort(key=lambda row: (row.product.product_name or "").lower())
        elif sort_by == SORT_TYPE:
            rows.sort(key=lambda row: (row.product.type or "").lower())

        logger.info(f"Low-stock report: {len(rows)} of {len(products)} products match filters")
        return rows
