"""Fetch competitor websites with a headless browser and pull price hints."""

from __future__ import annotations

import logging
from typing import Optional, Protocol
from urllib.parse import urlparse

from playwright.sync_api import Error as PlaywrightError, sync_playwright

from rategenius.core.cache import TTLCache
from rategenius.core.extract import PriceExtractor, RegexPriceExtractor
from rategenius.core.retry import RetryPolicy
from rategenius.core.throttle import PolitenessThrottle
from rategenius.models import ScrapeResult

logger = logging.getLogger(__name__)

NAVIGATION_TIMEOUT_MS = 30000
SCRAPE_TTL_SECONDS = 12 * 3600
CHROMIUM_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]


class ScrapeError(RuntimeError):
    """Raised when a page could not be fetched after all retries."""


class Renderer(Protocol):
    def render(self, url: str) -> str:
        ...


class PlaywrightRenderer:
    """Render a page in a fresh headless Chromium and return its HTML.

    Every call launches its own browser and closes it before returning, so a
    failed navigation never leaks a browser process. Waiting stops at
    DOMContentLoaded rather than network idle.
    """

    def __init__(self, timeout_ms: int = NAVIGATION_TIMEOUT_MS) -> None:
        self._timeout_ms = timeout_ms

    def render(self, url: str) -> str:
        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(headless=True, args=CHROMIUM_ARGS)
            try:
                page = browser.new_page()
                page.set_default_navigation_timeout(self._timeout_ms)
                page.goto(url, wait_until="domcontentloaded", timeout=self._timeout_ms)
                return page.content()
            finally:
                browser.close()


def host_of(url: str) -> Optional[str]:
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        logger.debug("Unable to parse host from %s", url)
        return None
    return hostname or None


def default_scrape_retry() -> RetryPolicy:
    return RetryPolicy(retries=2, initial_delay=1.0, multiplier=1.5, retry_on=(PlaywrightError,))


class PageScraper:
    def __init__(
        self,
        cache: TTLCache,
        throttle: PolitenessThrottle,
        *,
        renderer: Optional[Renderer] = None,
        extractor: Optional[PriceExtractor] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> None:
        self.cache = cache
        self.throttle = throttle
        self.renderer = renderer or PlaywrightRenderer()
        self.extractor = extractor or RegexPriceExtractor()
        self.retry_policy = retry_policy or default_scrape_retry()

    def scrape(self, url: str) -> ScrapeResult:
        cache_key = f"scrape:{url}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Scrape cache hit for %s", url)
            return cached

        host = host_of(url)
        if not host:
            return self._fetch(url)
        with self.throttle.hold(host):
            # Another worker may have fetched this URL while we queued.
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached
            return self._fetch(url)

    def _fetch(self, url: str) -> ScrapeResult:
        logger.info("Scraping %s", url)
        try:
            html = self.retry_policy.call(self.renderer.render, url)
        except self.retry_policy.retry_on as exc:
            raise ScrapeError(f"scrape failed for {url}: {exc}") from exc

        price, unit = self.extractor.extract(html)
        result = ScrapeResult(price=price, unit=unit, source=url)
        logger.info("Scraped %s price=%s unit=%s", url, price, unit)
        self.cache.set(f"scrape:{url}", result, SCRAPE_TTL_SECONDS)
        return result
