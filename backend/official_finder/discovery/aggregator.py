"""
Candidate aggregation: fan out one query to the web, news and image
providers in parallel, join their outcomes, and rank the merged fragments.

Confidence is rank-based: providers already order by relevance, so the
i-th merged fragment scores max(45, 96 - 3*i).
"""

import concurrent.futures
import uuid
from dataclasses import dataclass, field
from typing import Optional, Protocol

from official_finder.discovery.classification import classify_position
from official_finder.discovery.errors import ConfigurationMissing, ProviderUnavailable
from official_finder.discovery.fallback import (
    DEFAULT_NAME,
    DEFAULT_NATIONALITY,
    DEFAULT_POSITION,
    synthesize,
)
from official_finder.discovery.normalizer import is_news, normalize
from official_finder.discovery.placeholders import placeholder_image
from official_finder.discovery.progress import (
    PHASE_ANALYZING,
    PHASE_CONNECTING,
    PHASE_DONE,
    PHASE_FALLBACK,
    ProgressDispatcher,
    ProgressSink,
)
from official_finder.discovery.query_builder import build_query
from official_finder.discovery.schemas import (
    Candidate,
    CandidateFragment,
    NewsItem,
    RawProviderResult,
    SearchCriteria,
)
from official_finder.logger import logger

MAX_CANDIDATES = 24
TOP_CONFIDENCE = 96
CONFIDENCE_STEP = 3
MIN_CONFIDENCE = 45

WEB_LIMIT = 10
NEWS_LIMIT = 10
IMAGE_LIMIT = 12

MEDIA_ROLE = "media coverage"
WEB_ROLE = "web match"


class SearchAdapter(Protocol):
    name: str

    @property
    def is_configured(self) -> bool: ...

    def search(self, query: str, limit: int) -> list[RawProviderResult]: ...


@dataclass
class ProviderOutcome:
    """What one adapter produced at the join: fragments or an error, never both."""

    provider: str
    fragments: list[CandidateFragment] = field(default_factory=list)
    error: Optional[Exception] = None
    configured: bool = True

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SearchTask:
    adapter: SearchAdapter
    limit: int


def confidence_for_rank(rank: int) -> int:
    return max(MIN_CONFIDENCE, TOP_CONFIDENCE - CONFIDENCE_STEP * rank)


def _run_task(task: SearchTask, query: str) -> list[CandidateFragment]:
    return [normalize(raw) for raw in task.adapter.search(query, task.limit)]


class CandidateAggregator:
    """Runs one discovery round across the three providers."""

    def __init__(
        self,
        web: SearchAdapter,
        news: SearchAdapter,
        image: SearchAdapter,
        *,
        web_limit: int = WEB_LIMIT,
        news_limit: int = NEWS_LIMIT,
        image_limit: int = IMAGE_LIMIT,
        join_timeout: Optional[float] = None,
    ):
        self.web = SearchTask(web, web_limit)
        self.news = SearchTask(news, news_limit)
        self.image = SearchTask(image, image_limit)
        self.join_timeout = join_timeout
        self._progress = ProgressDispatcher()

    def flush_progress(self, timeout: Optional[float] = None) -> bool:
        return self._progress.flush(timeout)

    def close(self) -> None:
        """Stop progress delivery and close adapter connections."""
        self._progress.close()
        for task in (self.web, self.news, self.image):
            close = getattr(task.adapter, "close", None)
            if close is not None:
                close()

    def _gather(self, query: str) -> dict[str, ProviderOutcome]:
        """Fan out to every adapter and collect one outcome each."""
        tasks = [self.web, self.news, self.image]
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=len(tasks))
        try:
            future_to_task = {executor.submit(_run_task, task, query): task for task in tasks}
            done, _ = concurrent.futures.wait(future_to_task, timeout=self.join_timeout)
            outcomes: dict[str, ProviderOutcome] = {}
            for future, task in future_to_task.items():
                name = task.adapter.name
                configured = task.adapter.is_configured
                if future not in done:
                    error = ProviderUnavailable(name, f"no response within {self.join_timeout}s")
                    logger.warning("%s", error)
                    outcomes[name] = ProviderOutcome(name, error=error, configured=configured)
                    continue
                try:
                    outcomes[name] = ProviderOutcome(name, fragments=future.result(), configured=configured)
                except Exception as e:
                    logger.warning("Search provider %s failed: %s", name, e)
                    outcomes[name] = ProviderOutcome(name, error=e, configured=configured)
        finally:
            # Do not block on a hung provider
            executor.shutdown(wait=False, cancel_futures=True)
        return outcomes

    def discover(
        self,
        criteria: SearchCriteria,
        progress: Optional[ProgressSink] = None,
    ) -> list[Candidate]:
        query = build_query(criteria)
        self._progress.emit(progress, f"{PHASE_CONNECTING}: {query}")

        outcomes = self._gather(query)
        web = outcomes[self.web.adapter.name]
        news = outcomes[self.news.adapter.name]
        image = outcomes[self.image.adapter.name]

        image_pool = [f.image_ref for f in image.fragments if f.image_ref]
        fragments = web.fragments + news.fragments
        self._progress.emit(progress, f"{PHASE_ANALYZING} ({len(fragments)} results, {len(image_pool)} images)")

        if not fragments:
            if not any(o.configured for o in outcomes.values()):
                raise ConfigurationMissing()
            logger.info("No provider results for '%s'; using fallback candidates", query)
            self._progress.emit(progress, PHASE_FALLBACK)
            return synthesize(criteria)

        candidates = rank_fragments(fragments, criteria, image_pool)
        self._progress.emit(progress, f"{PHASE_DONE}: {len(candidates)} candidates")
        return candidates


def rank_fragments(
    fragments: list[CandidateFragment],
    criteria: SearchCriteria,
    image_pool: list[str],
) -> list[Candidate]:
    """Turn ordered fragments into at most MAX_CANDIDATES ranked candidates."""
    run_id = uuid.uuid4().hex[:8]
    pool_cursor = 0
    candidates: list[Candidate] = []

    for rank, fragment in enumerate(fragments[:MAX_CANDIDATES]):
        name = fragment.display_name or criteria.name or DEFAULT_NAME
        position = criteria.position or fragment.snippet or DEFAULT_POSITION

        photo_url = fragment.image_ref
        if not photo_url and image_pool:
            # Pool entries are reused once exhausted
            photo_url = image_pool[pool_cursor % len(image_pool)]
            pool_cursor += 1
        if not photo_url:
            photo_url = placeholder_image(name)

        latest_news = []
        if fragment.published_date:
            latest_news.append(
                NewsItem(date=fragment.published_date, content=fragment.snippet, source=fragment.source_label)
            )

        candidates.append(
            Candidate(
                id=f"{run_id}-{rank + 1}",
                name=name,
                position=position,
                nationality=criteria.country or DEFAULT_NATIONALITY,
                source=fragment.source_label,
                confidence=confidence_for_rank(rank),
                role_type=MEDIA_ROLE if is_news(fragment) else WEB_ROLE,
                photo_url=photo_url,
                latest_news=latest_news,
                link=fragment.link,
                category=classify_position(position),
            )
        )
    return candidates
