"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when an environment value cannot be parsed."""


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    port: int = 5000
    allowed_origin: str = "*"
    scan_keyword: str = "self storage"
    scan_max_candidates: int = 20
    scan_max_workers: int = 4
    scrape_nav_timeout_ms: int = 30000
    polite_interval_seconds: float = 2.0


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("GOOGLE_PLACES_API_KEY") or os.getenv("GOOGLE_API_KEY", "")
    allowed_origin = os.getenv("ALLOWED_ORIGIN") or "*"
    scan_keyword = (os.getenv("SCAN_KEYWORD") or "self storage").strip()

    if not google_api_key:
        logger.warning("GOOGLE_PLACES_API_KEY is not configured; geocoding and Places requests will fail.")

    return Settings(
        google_api_key=google_api_key,
        port=_get_int("PORT", 5000),
        allowed_origin=allowed_origin,
        scan_keyword=scan_keyword,
        scan_max_candidates=_get_int("SCAN_MAX_CANDIDATES", 20),
        scan_max_workers=_get_int("SCAN_MAX_WORKERS", 4),
        scrape_nav_timeout_ms=_get_int("SCRAPE_NAV_TIMEOUT_MS", 30000),
        polite_interval_seconds=_get_float("POLITE_INTERVAL_SECONDS", 2.0),
    )
