# app/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _env_number(name: str, default: float, positive: bool = False) -> float:
    raw = os.getenv(name)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    if value != value or value in (float("inf"), float("-inf")):
        return default
    if positive and value <= 0:
        return default
    return value


FIFTEEN_MINUTES_MS = 15 * 60 * 1000

CART_EXPIRY_MS = _env_number("CART_EXPIRY_MS", FIFTEEN_MINUTES_MS)
CART_SWEEP_INTERVAL_SECONDS = _env_number("CART_SWEEP_INTERVAL_SECONDS", 0)

API_KEY = os.getenv("API_KEY", "dev-api-key")
API_PREFIX = os.getenv("API_PREFIX", "").rstrip("/")

RATE_LIMIT_PER_MIN = int(_env_number("RATE_LIMIT_PER_MIN", 100, positive=True))
RATE_LIMIT_WINDOW_MS = _env_number("RATE_LIMIT_WINDOW_MS", 60_000, positive=True)

PRICING_SOURCE = os.getenv("PRICING_SOURCE", "catalog").lower()
DEFAULT_UNIT_PRICE = os.getenv("DEFAULT_UNIT_PRICE", "10")
PRODUCT_SERVICE_URL = os.getenv("PRODUCT_SERVICE_URL", "http://product-service:8000")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(_env_number("PORT", 8000, positive=True))
