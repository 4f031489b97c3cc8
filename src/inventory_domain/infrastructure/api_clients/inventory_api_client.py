"""Client for the product/inventory REST service."""

import json
import logging
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from src.common.config.settings import settings
from src.common.dtos.quantity_dtos import ProductStockDTO, StockMovementRequestDTO
from src.common.exceptions.custom_exceptions import APIError

logger = logging.getLogger(__name__)

DAMAGE_SHOP = "shop"
DAMAGE_CUSTOMER = "customer"


class InventoryApiClient:
    def __init__(self) -> None:
        self.base_url = settings.INVENTORY_API_BASE_URL.rstrip("/")
        self.token = settings.INVENTORY_API_TOKEN
        self.timeout = settings.API_TIMEOUT_SECONDS

        # Configure session with connection pooling and retry strategy
        self.session = requests.Session()
        retry_strategy = Retry(
            total=3,
            status_forcelist=[429, 500, 502, 503, 504],
            # Stock movements are not idempotent, only reads are retried
            allowed_methods=["HEAD", "GET", "OPTIONS"],
            backoff_factor=1,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy, pool_connections=10, pool_maxsize=10)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        self.session.headers.update({"Content-Type": "application/json", "Accept": "application/json"})

    def _headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        response = None
        try:
            response = self.session.request(method, url, headers=self._headers(), timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout as e:
            raise APIError(f"{method} {path} timed out", original_exception=e)
        except requests.exceptions.HTTPError as e:
            raise APIError(
                self._error_message(response, f"{method} {path} failed"),
                original_exception=e,
                status_code=response.status_code if response is not None else None,
            )
        except json.JSONDecodeError as e:
            raise APIError(
                f"Failed to decode JSON response for {method} {path}. Raw response: {response.text if response is not None else 'N/A'}",
                original_exception=e,
            )
        except requests.exceptions.RequestException as e:
            raise APIError(f"{method} {path} failed: {e}", original_exception=e)

    @staticmethod
    def _error_message(response: Optional[requests.Response], fallback: str) -> str:
        """Prefers the service's own {"message": ...} body when it sends one."""
        if response is None:
            return fallback
        try:
            body = response.json()
        except ValueError:
            return fallback
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return fallback

    @staticmethod
    def _products_from(data: Any) -> list[ProductStockDTO]:
        items = data if isinstance(data, list) else (data or {}).get("products") or []
        return [ProductStockDTO.from_api_response(item) for item in items]

    @staticmethod
    def _product_from(data: Any, action: str) -> ProductStockDTO:
        product = (data or {}).get("product") if isinstance(data, dict) else None
        if not product:
            raise APIError(f"Inventory service returned no product after {action}")
        return ProductStockDTO.from_api_response(product)

    def get_all_products(
        self,
        search: Optional[str] = None,
        product_type: Optional[str] = None,
        size: Optional[str] = None,
        in_stock_only: bool = False,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[ProductStockDTO]:
        params: dict[str, Any] = {}
        if page:
            params["page"] = page
        if limit:
            params["limit"] = limit
        if search:
            params["q"] = search
        if product_type:
            params["type"] = product_type
        if size:
            params["size"] = size
        if in_stock_only:
            params["inStockOnly"] = "true"
        return self._products_from(self._request("GET", "/products", params=params))

    def search_products(self, query: str) -> list[ProductStockDTO]:
        return self._products_from(self._request("GET", "/products/search", params={"q": query}))

    def get_product(self, product_id: str) -> ProductStockDTO:
        return self._product_from(self._request("GET", f"/products/{product_id}"), "fetch")

    def create_product(self, product_data: dict[str, Any]) -> ProductStockDTO:
        return self._product_from(self._request("POST", "/products", json=product_data), "create")

    def update_product(self, product_id: str, product_data: dict[str, Any]) -> ProductStockDTO:
        return self._product_from(self._request("PUT", f"/products/{product_id}", json=product_data), "update")

    def add_stock(self, product_id: str, movement: StockMovementRequestDTO) -> ProductStockDTO:
        data = self._request("POST", f"/products/{product_id}/stock/add", json=movement.to_payload())
        return self._product_from(data, "adding stock")

    def record_sale(self, product_id: str, movement: StockMovementRequestDTO) -> ProductStockDTO:
        data = self._request("POST", f"/products/{product_id}/stock/reduce", json=movement.to_payload())
        return self._product_from(data, "recording sale")

    def record_damage(
        self, product_id: str, movement: StockMovementRequestDTO, damage_type: str = DAMAGE_SHOP
    ) -> ProductStockDTO:
        """Shop damage and customer damage-exchange use different endpoints and body shapes."""
        if damage_type == DAMAGE_CUSTOMER:
            path = f"/products/{product_id}/stock/damage-exchange"
            payload = movement.to_damage_exchange_payload()
        else:
            path = f"/products/{product_id}/stock/damage-shop"
            payload = movement.to_payload()
        return self._product_from(self._request("POST", path, json=payload), "recording damage")

    def record_return(self, product_id: str, movement: StockMovementRequestDTO) -> ProductStockDTO:
        data = self._request("POST", f"/products/{product_id}/stock/return", json=movement.to_payload())
        return self._product_from(data, "recording return")

    def update_low_stock_threshold(self, product_id: str, threshold: int) -> None:
        self._request("PATCH", f"/products/{product_id}/low-stock-threshold", json={"lowStockThreshold": threshold})

    def bulk_update_low_stock_threshold(self, product_ids: list[str], threshold: int) -> None:
        self._request(
            "PATCH",
            "/products/bulk-low-stock-threshold",
            json={"productIds": product_ids, "lowStockThreshold": threshold},
        )

    def __del__(self) -> None:
        """Clean up the session when the object is destroyed."""
        if hasattr(self, "session"):
            self.session.close()
