# tests/conftest.py
import pytest
from unittest.mock import Mock

from src.common.config.settings import settings
from src.common.dtos.quantity_dtos import ProductStockDTO
from src.inventory_domain.application.inventory_service import InventoryApplicationService
from src.inventory_domain.application.product_events import ProductEventBus
from src.inventory_domain.infrastructure.api_clients.inventory_api_client import InventoryApiClient


@pytest.fixture(autouse=True)
def mock_settings_inventory_api(mocker) -> None:
    """Pins inventory service settings so tests never depend on a local .env file."""
    mocker.patch.object(settings, "INVENTORY_API_BASE_URL", "http://inventory.test/api")
    mocker.patch.object(settings, "INVENTORY_API_TOKEN", "test_token")
    mocker.patch.object(settings, "API_TIMEOUT_SECONDS", 5)
    mocker.patch.object(settings, "GOOD_STOCK_MIN_BOXES", 3)


@pytest.fixture
def mock_inventory_api_client() -> Mock:
    """Mock for InventoryApiClient."""
    return Mock(spec=InventoryApiClient)


@pytest.fixture
def mock_event_bus() -> Mock:
    """Mock for ProductEventBus."""
    return Mock(spec=ProductEventBus)


@pytest.fixture
def inventory_service(mock_inventory_api_client, mock_event_bus) -> InventoryApplicationService:
    """Instance of InventoryApplicationService with mocked dependencies."""
    return InventoryApplicationService(api_client=mock_inventory_api_client, event_bus=mock_event_bus)


@pytest.fixture
def sample_product_api_data() -> dict:
    """A product document as the inventory service returns it."""
    return {
        "_id": "p-wall-12",
        "productName": "Ivory Wall Gloss",
        "type": "Wall",
        "subType": None,
        "size": "1×2",
        "hsnNo": "69072100",
        "location": "Ground Floor",
        "piecesPerBox": 6,
        "lowStockThreshold": 8,
        "stock": {"boxes": 10, "pieces": 0},
        "sales": {"boxes": 3, "pieces": 2},
        "damage": {"boxes": 0, "pieces": 1},
        "returns": {"boxes": 1, "pieces": 0},
    }


@pytest.fixture
def sample_product(sample_product_api_data) -> ProductStockDTO:
    """Wall tile, 6 pcs/box: 60 - 20 - 1 + 6 = 45 pcs available (7 bx + 3 pc)."""
    return ProductStockDTO.from_api_response(sample_product_api_data)


@pytest.fixture
def sample_products_api_data(sample_product_api_data) -> list[dict]:
    """Three products covering the low, ok and no-threshold cases."""
    return [
        sample_product_api_data,
        {
            "_id": "p-floor-44",
            "productName": "Anthracite Rough",
            "type": "Floor",
            "subType": "Rough",
            "size": "2×4",
            "hsnNo": "69072200",
            "location": "First Floor",
            "piecesPerBox": 2,
            "lowStockThreshold": 4,
            "stock": {"boxes": 20, "pieces": 0},
            "sales": {"boxes": 2, "pieces": 0},
            "damage": {"boxes": 0, "pieces": 0},
            "returns": {"boxes": 0, "pieces": 0},
        },
        {
            "_id": "p-park-16",
            "productName": "Cobble Parking",
            "type": "Parking",
            "size": "16×16",
            "hsnNo": "69072300",
            "location": "Ground Floor",
            "piecesPerBox": 5,
            "lowStockThreshold": 0,
            "stock": {"boxes": 1, "pieces": 0},
            "sales": {"boxes": 0, "pieces": 0},
            "damage": {"boxes": 0, "pieces": 0},
            "returns": {"boxes": 0, "pieces": 0},
        },
    ]
