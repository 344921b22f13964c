# deals_catalog/config/settings.py

"""Central configuration for the deals catalog."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the deals catalog."""

    # --- Hosted store ---
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "").rstrip("/")
    SUPABASE_ANON_KEY: str = os.getenv("SUPABASE_ANON_KEY", "")
    REST_PATH: str = "/rest/v1"

    # --- Transport ---
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "10"))
    FETCH_TIMEOUT: float = float(os.getenv("FETCH_TIMEOUT", "15"))
    REQUEST_DELAY: float = 0.5          # Base back-off between retries
    MAX_RETRIES: int = 3                # Attempts per store call
    MAX_DELAY_MULTIPLIER: int = 8       # Cap for adaptive back-off
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"

    # --- Resilience ---
    CIRCUIT_BREAKER_THRESHOLD: int = 3  # Consecutive failed calls to trip
    CIRCUIT_BREAKER_COOLDOWN: float = 30.0
    HEALTH_SLOW_MS: float = 2000.0

    # --- Listing pipeline ---
    PUSH_DOWN_MIN_RATING: bool = True
    DEFAULT_PRICE_RANGE: tuple[float, float] = (0.0, 5000.0)
    FEATURED_LIMIT: int = 6

    # --- Collections ---
    CATEGORIES_TABLE: str = "categories"
    PRODUCTS_TABLE: str = "products"
    PRODUCT_RETAILERS_TABLE: str = "product_retailers"

    LISTING_COLUMNS: tuple[str, ...] = (
        "id",
        "name",
        "slug",
        "image_url",
        "current_price",
        "original_price",
        "discount_percentage",
        "rating",
        "review_count",
    )
    DETAIL_COLUMNS: tuple[str, ...] = LISTING_COLUMNS + (
        "description",
        "specs",
        "pros",
        "cons",
        "affiliate_disclosure",
    )
    RETAILER_COLUMNS: tuple[str, ...] = (
        "price",
        "in_stock",
        "affiliate_url",
        "retailers(name)",
    )

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
