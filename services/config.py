# services/config.py
import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


def _env_int(name: str, default: int) -> int:
    value = _env_float(name, default)
    if value < 1:
        logger.warning("Ignoring non-positive %s, using %s", name, default)
        return default
    return int(value)


ASTROLOGY_API_BASE_URL = os.getenv("ASTROLOGY_API_BASE_URL", "https://json.freeastrologyapi.com").rstrip("/")
ASTROLOGY_API_KEY = os.getenv("ASTROLOGY_API_KEY") or "YOUR_API_KEY_HERE"

# Per-call deadline in seconds; expiry counts as a failed endpoint
REQUEST_TIMEOUT = _env_float("ASTROLOGY_API_TIMEOUT", 10.0)
MAX_CONCURRENCY = _env_int("ASTROLOGY_API_MAX_CONCURRENCY", 21)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
