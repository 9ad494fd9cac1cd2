# src/config/settings.py

"""Central configuration for the price_banner workbench."""

import logging
import math
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("price_banner.config")


def _env_timeout() -> float | None:
    """Read GEMINI_TIMEOUT; unset or blank means no local timeout."""
    raw = os.getenv("GEMINI_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not math.isfinite(value) or value <= 0:
        logger.warning("Ignoring malformed GEMINI_TIMEOUT=%r", raw)
        return None
    return value


class Settings:
    """Central configuration for the price_banner workbench."""

    # --- Gemini API ---
    GEMINI_API_KEY: str = os.getenv(
        "GEMINI_API_KEY", os.getenv("API_KEY", "")
    )
    # Unset means the SDK default endpoint
    GEMINI_API_BASE: str | None = os.getenv("GEMINI_API_BASE") or None
    TEXT_MODEL: str = os.getenv("GEMINI_TEXT_MODEL", "gemini-2.5-flash")
    IMAGE_MODEL: str = os.getenv(
        "GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image"
    )
    REQUEST_TIMEOUT: float | None = _env_timeout()

    # --- Result limits ---
    MAX_PRICE_QUOTES: int = 5
    MAX_TAGS: int = 10

    # --- Display ---
    CURRENCY_SUFFIX: str = "원"
    DEFAULT_BARCODE: str = "8801062628479"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
