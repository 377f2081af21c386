from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from .catalog_data import STATIC_DESTINATIONS
from .logger import logger
from .schemas import Destination

SOURCE_LIVE = "liteapi"
SOURCE_MOCK = "mock"
SOURCE_MOCK_FALLBACK = "mock_fallback"


@dataclass(frozen=True)
class CatalogResult:
    destinations: List[Destination]
    source: str


class DestinationCatalog:
    """Destination list with a process-wide, time-boxed cache.

    The cache is last-write-wins and unlocked: two requests racing past an
    expired entry both fetch and the later one stays cached. Fallback data
    is never written into the cache.
    """

    def __init__(
        self,
        fetcher: Callable[[], List[Destination]],
        ttl_seconds: float = 30 * 60,
        clock: Callable[[], float] = time.monotonic,
        fallback: Optional[List[Destination]] = None,
    ) -> None:
        self.fetcher = fetcher
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.fallback = list(fallback) if fallback is not None else list(STATIC_DESTINATIONS)
        self._cached: Optional[List[Destination]] = None
        self._expires_at = 0.0

    def get_destinations(self) -> List[Destination]:
        return self.load().destinations

    def load(self) -> CatalogResult:
        cached = self._cached
        if cached is not None and self.clock() < self._expires_at:
            logger.debug("Serving %d destinations from cache", len(cached))
            return CatalogResult(destinations=cached, source=SOURCE_LIVE)

        try:
            destinations = self.fetcher()
        except (RuntimeError, ValueError) as exc:
            logger.error("Destination fetch failed, serving static destinations: %s", exc)
            return CatalogResult(destinations=list(self.fallback), source=SOURCE_MOCK_FALLBACK)

        if not isinstance(destinations, list) or not destinations:
            logger.warning("Destination fetch returned no usable data, serving static destinations")
            return CatalogResult(destinations=list(self.fallback), source=SOURCE_MOCK)

        self._cached = destinations
        self._expires_at = self.clock() + self.ttl_seconds
        return CatalogResult(destinations=destinations, source=SOURCE_LIVE)

    def refresh_destinations(self) -> CatalogResult:
        self.clear()
        return self.load()

    def clear(self) -> None:
        self._cached = None
        self._expires_at = 0.0

    def find(self, destination_id: str) -> Optional[Destination]:
        for destination in self.get_destinations():
            if destination.id == destination_id:
                return destination
        for destination in self.fallback:
            if destination.id == destination_id:
                return destination
        return None
