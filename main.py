"""Main application entry point for the low-stock report."""

import logging
import time
from datetime import datetime

import pytz
import schedule

from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import APIError, ApplicationError
from src.common.logger_config import setup_logging
from src.inventory_domain.application.inventory_service import InventoryApplicationService
from src.inventory_domain.application.product_events import ProductEventBus
from src.inventory_domain.infrastructure.api_clients.inventory_api_client import InventoryApiClient
from src.quantity_domain.domain.services.quantity_formatter import format_quantity_display
from src.quantity_domain.domain.services.stock_ledger import LOW_STOCK_LOW

logger = logging.getLogger(__name__)


def setup_inventory_dependencies() -> InventoryApplicationService:
    """Initializes and wires up inventory dependencies."""
    api_client = InventoryApiClient()
    event_bus = ProductEventBus()
    return InventoryApplicationService(api_client=api_client, event_bus=event_bus)


def run_low_stock_report() -> None:
    """Logs every product whose available whole boxes fell below its threshold."""
    report_tz = pytz.timezone(settings.LOW_STOCK_REPORT_TIMEZONE)
    logger.info(f"--- Low-stock report at {datetime.now(report_tz).strftime('%Y-%m-%d %H:%M:%S %Z')} ---")

    inventory_service = setup_inventory_dependencies()
    try:
        rows = inventory_service.low_stock_report()
    except APIError as e:
        logger.error(f"Could not load products from the inventory service: {e}")
        return
    except ApplicationError as e:
        logger.error(f"Low-stock report failed: {e}")
        return

    low_rows = [row for row in rows if row.state == LOW_STOCK_LOW]
    for row in low_rows:
        product = row.product
        available = format_quantity_display(
            row.available.boxes, row.available.pieces, True, product.pieces_per_box
        )
        logger.warning(
            f"{product.product_name} [{product.type or '-'} {product.size or '-'}]: "
            f"available {available}, threshold {product.low_stock_threshold} bx"
        )

    logger.info(f"--- {len(low_rows)} of {len(rows)} products below threshold ---")


if __name__ == "__main__":
    setup_logging()

    if not settings.LOW_STOCK_REPORT_TIME:
        run_low_stock_report()
    else:
        logger.info(
            f"Scheduling low-stock report every day at {settings.LOW_STOCK_REPORT_TIME} "
            f"{settings.LOW_STOCK_REPORT_TIMEZONE} time."
        )
        schedule.every().day.at(settings.LOW_STOCK_REPORT_TIME, settings.LOW_STOCK_REPORT_TIMEZONE).do(
            run_low_stock_report
        )
        while True:
            schedule.run_pending()
            time.sleep(1)  # Wait one second before checking again
