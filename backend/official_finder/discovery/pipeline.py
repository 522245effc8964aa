"""
Discovery pipeline: settings → provider adapters → aggregator.

One aggregator (and so one requests.Session per adapter) is kept per Settings
instance and reused across calls. Single entry point: discover_candidates(criteria).
"""

from threading import Lock
from typing import Optional

from official_finder.config import Settings, get_settings
from official_finder.discovery.aggregator import CandidateAggregator
from official_finder.discovery.clients import ImageSearchClient, NewsSearchClient, WebSearchClient
from official_finder.discovery.progress import ProgressSink
from official_finder.discovery.schemas import Candidate, SearchCriteria

# id(settings) -> (settings, aggregator); settings kept so the id stays valid
_aggregators: dict[int, tuple[Settings, CandidateAggregator]] = {}
_aggregators_lock = Lock()


def build_aggregator(settings: Optional[Settings] = None) -> CandidateAggregator:
    """Wire the three SerpAPI adapters into a new aggregator using *settings*."""
    settings = settings or get_settings()
    return CandidateAggregator(
        web=WebSearchClient(settings),
        news=NewsSearchClient(settings),
        image=ImageSearchClient(settings),
        web_limit=settings.web_result_limit,
        news_limit=settings.news_result_limit,
        image_limit=settings.image_result_limit,
        join_timeout=settings.provider_timeout_seconds + settings.join_grace_seconds,
    )


def get_aggregator(settings: Optional[Settings] = None) -> CandidateAggregator:
    """Shared aggregator for *settings*, built on first use."""
    settings = settings or get_settings()
    with _aggregators_lock:
        entry = _aggregators.get(id(settings))
        if entry is None:
            entry = (settings, build_aggregator(settings))
            _aggregators[id(settings)] = entry
        return entry[1]


def close_aggregators() -> None:
    with _aggregators_lock:
        entries = list(_aggregators.values())
        _aggregators.clear()
    for _, aggregator in entries:
        aggregator.close()


def discover_candidates(
    criteria: SearchCriteria,
    progress: Optional[ProgressSink] = None,
    *,
    settings: Optional[Settings] = None,
) -> list[Candidate]:
    """
    Run one discovery round: build query → web/news/image in parallel →
    normalize → rank (or fall back to local samples).

    Raises:
        ConfigurationMissing: no provider has an API key and nothing was found.
    """
    return get_aggregator(settings).discover(criteria, progress)
