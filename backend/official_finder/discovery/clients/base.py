"""
Shared SerpAPI client: one GET per search, per-request timeout, one
requests.Session reused across calls for connection pooling.
"""

from itertools import islice
from threading import Lock
from typing import Any, Iterator, Optional

import requests

from official_finder.config import Settings, get_settings
from official_finder.discovery.errors import ProviderError, ProviderUnavailable
from official_finder.discovery.schemas import RawProviderResult
from official_finder.discovery.support import PerformanceMonitor, get_performance_monitor
from official_finder.logger import logger

# SerpAPI reports an empty result page as an "error"
_NO_RESULTS_MARKER = "hasn't returned any results"


def text_field(item: dict[str, Any], key: str) -> Optional[str]:
    value = item.get(key)
    return value if isinstance(value, str) else None


class SerpApiClient:
    """Base adapter. Subclasses set name/engine/results_key and parse one item."""

    name: str = ""
    engine: str = ""
    results_key: str = ""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        monitor: Optional[PerformanceMonitor] = None,
    ):
        self.settings = settings or get_settings()
        self.api_key = self.settings.api_key_for(self.name)
        self.timeout = self.settings.provider_timeout_seconds
        self._session = session
        self._session_lock = Lock()
        self._monitor = monitor or get_performance_monitor()

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get_session(self) -> requests.Session:
        with self._session_lock:
            if self._session is None:
                self._session = requests.Session()
            return self._session

    def close(self) -> None:
        with self._session_lock:
            if self._session is not None:
                self._session.close()
                self._session = None

    def _params(self, query: str, limit: int) -> dict[str, Any]:
        return {
            "engine": self.engine,
            "q": query,
            "num": limit,
            "hl": self.settings.search_language,
            "api_key": self.api_key,
        }

    def _parse_item(self, item: dict[str, Any]) -> RawProviderResult:
        raise NotImplementedError

    def _iter_results(self, data: dict[str, Any]) -> Iterator[RawProviderResult]:
        for item in data.get(self.results_key) or []:
            if isinstance(item, dict):
                yield self._parse_item(item)

    def _fetch(self, query: str, limit: int) -> dict[str, Any]:
        try:
            response = self._get_session().get(
                self.settings.serpapi_base_url,
                params=self._params(query, limit),
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise ProviderUnavailable(self.name, e) from e
        if not isinstance(data, dict):
            raise ProviderUnavailable(self.name, f"unexpected payload type {type(data).__name__}")
        return data

    def search(self, query: str, limit: int) -> list[RawProviderResult]:
        """Run one search; returns at most *limit* raw results."""
        if not self.is_configured:
            logger.info("%s search skipped: no API key configured", self.name)
            return []

        metric = self._monitor.start_call(self.name, query)
        logger.info("%s search – query: %s", self.name, query)
        try:
            data = self._fetch(query, limit)
            error = data.get("error")
            if error:
                if _NO_RESULTS_MARKER in str(error):
                    self._monitor.record_success(metric, 0)
                    return []
                raise ProviderError(self.name, str(error))
            results = list(islice(self._iter_results(data), max(limit, 0)))
        except (ProviderUnavailable, ProviderError) as e:
            self._monitor.record_error(metric, str(e))
            logger.warning("%s search failed for '%s': %s", self.name, query, e)
            raise

        self._monitor.record_success(metric, len(results))
        logger.info("%s returned %d results for: %s", self.name, len(results), query)
        return results
