"""Competitor scan: locate, discover, resolve websites, scrape prices."""

import argparse
import json
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional

from rategenius.core.cache import TTLCache
from rategenius.core.config import Settings, get_settings
from rategenius.core.location import LocationResolver
from rategenius.core.page_scraper import PageScraper, PlaywrightRenderer, ScrapeError
from rategenius.core.places import DetailResolver, PlaceFinder
from rategenius.core.throttle import PolitenessThrottle
from rategenius.etl.transform import to_competitor_record
from rategenius.models import CompetitorRecord, PlaceCandidate

logger = logging.getLogger(__name__)

DEFAULT_RADIUS_MILES = 10
MAX_CANDIDATES = 20
MAX_WORKERS = 4


class ScanPipeline:
    """Resolve a location and build one competitor record per nearby place.

    Candidates run on a small thread pool. The shared throttle keeps requests
    to the same host spaced out; records come back in candidate order.
    """

    def __init__(
        self,
        resolver: LocationResolver,
        finder: PlaceFinder,
        details: DetailResolver,
        scraper: PageScraper,
        *,
        max_candidates: int = MAX_CANDIDATES,
        max_workers: int = MAX_WORKERS,
    ) -> None:
        self.resolver = resolver
        self.finder = finder
        self.details = details
        self.scraper = scraper
        self.max_candidates = max_candidates
        self.max_workers = max(1, max_workers)

    def run(self, address: str, radius_miles: Any = DEFAULT_RADIUS_MILES) -> List[CompetitorRecord]:
        coordinate = self.resolver.resolve(address)
        candidates = self.finder.find(coordinate, radius_miles)[: self.max_candidates]
        logger.info("Scanning %d candidates near %s", len(candidates), coordinate.as_param())
        if not candidates:
            return []

        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(candidates))) as executor:
            records = list(executor.map(self._process_candidate, candidates))

        priced = sum(1 for record in records if record.price is not None)
        logger.info("Completed scan: candidates=%d priced=%d", len(records), priced)
        return records

    def _process_candidate(self, candidate: PlaceCandidate) -> CompetitorRecord:
        try:
            detail = self.details.resolve(candidate.place_id)
            website = detail.website if detail else None
            if not website:
                return to_competitor_record(candidate, detail)

            try:
                scraped = self.scraper.scrape(website)
            except ScrapeError as exc:
                logger.warning("Scrape failed for %s (%s): %s", candidate.name, website, exc)
                return to_competitor_record(candidate, detail, error="scrape failed")
            return to_competitor_record(candidate, detail, scraped)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to process candidate %s: %s", candidate.place_id, exc)
            return CompetitorRecord(name=candidate.name, address=candidate.address, error=str(exc))


def build_pipeline(settings: Optional[Settings] = None) -> ScanPipeline:
    """Wire a pipeline around one cache and one throttle for this process."""
    settings = settings or get_settings()
    cache = TTLCache()
    throttle = PolitenessThrottle(settings.polite_interval_seconds)
    api_key = settings.google_api_key
    return ScanPipeline(
        resolver=LocationResolver(api_key),
        finder=PlaceFinder(api_key, cache, keyword=settings.scan_keyword),
        details=DetailResolver(api_key, cache),
        scraper=PageScraper(cache, throttle, renderer=PlaywrightRenderer(settings.scrape_nav_timeout_ms)),
        max_candidates=settings.scan_max_candidates,
        max_workers=settings.scan_max_workers,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scan nearby competitors and scrape their advertised prices")
    parser.add_argument("--address", required=True, help="Facility address or 'lat,lng'")
    parser.add_argument(
        "--radius",
        type=float,
        default=DEFAULT_RADIUS_MILES,
        help="Search radius in miles",
    )
    return parser


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args()

    records = build_pipeline().run(args.address, args.radius)
    print(json.dumps({"competitors": [record.to_dict() for record in records]}, indent=2))


if __name__ == "__main__":
    main()
