"""Application settings and environment variables."""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


class Settings:
    INVENTORY_API_BASE_URL: str = os.getenv("INVENTORY_API_BASE_URL", "http://localhost:5000/api")
    INVENTORY_API_TOKEN: Optional[str] = os.getenv("INVENTORY_API_TOKEN")
    API_TIMEOUT_SECONDS: int = int(os.getenv("API_TIMEOUT_SECONDS", "60"))  # Backend cold starts can be slow

    # Availability status: this many whole boxes or more counts as "good"
    GOOD_STOCK_MIN_BOXES: int = int(os.getenv("GOOD_STOCK_MIN_BOXES", "3"))

    # Daily low-stock report, e.g. "09:00". Unset means run once and exit.
    LOW_STOCK_REPORT_TIME: Optional[str] = os.getenv("LOW_STOCK_REPORT_TIME")
    LOW_STOCK_REPORT_TIMEZONE: str = os.getenv("LOW_STOCK_REPORT_TIMEZONE", "Asia/Kolkata")

    # Logging settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")  # INFO, DEBUG, WARNING, ERROR, CRITICAL


settings = Settings()
