"""
Official Finder API: candidate discovery and the officials registry.
"""

from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Response, status

from official_finder.config import Settings, get_settings
from official_finder.discovery import (
    CandidateAggregator,
    CollectingProgress,
    ConfigurationMissing,
    build_query,
    close_aggregators,
    get_aggregator,
    get_performance_monitor,
)
from official_finder.discovery.fallback import FALLBACK_SOURCE_LABEL
from official_finder.discovery.schemas import Candidate, DiscoveryResponse, SearchCriteria
from official_finder.logger import setup_logger
from official_finder.registry import (
    InMemoryRegistry,
    OfficialNotFound,
    OfficialRecord,
    OfficialRegistry,
    candidate_to_record,
)

setup_logger(level=get_settings().log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    close_aggregators()


app = FastAPI(title="Official Finder", version="0.1.0", lifespan=lifespan)

_registry = InMemoryRegistry()

PROVIDERS = ("web", "news", "image")


def get_registry() -> OfficialRegistry:
    return _registry


def aggregator_for_settings(settings: Settings = Depends(get_settings)) -> CandidateAggregator:
    return get_aggregator(settings)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/api/v1/officials/discover", response_model=DiscoveryResponse)
def officials_discover(
    body: SearchCriteria,
    settings: Settings = Depends(get_settings),
    aggregator: CandidateAggregator = Depends(aggregator_for_settings),
):
    """
    Search web, news and image providers for officials matching the criteria.

    Returns ranked candidates plus the progress messages emitted during the run.
    """
    progress = CollectingProgress()
    try:
        candidates = aggregator.discover(body, progress)
    except ConfigurationMissing as e:
        raise HTTPException(status_code=503, detail=e.message)
    finally:
        aggregator.flush_progress(timeout=settings.progress_flush_seconds)
    return DiscoveryResponse(
        query=build_query(body),
        candidates=candidates,
        progress=progress.messages,
        used_fallback=any(c.source == FALLBACK_SOURCE_LABEL for c in candidates),
    )


@app.post("/api/v1/officials", response_model=OfficialRecord, status_code=status.HTTP_201_CREATED)
def officials_confirm(body: Candidate, registry: OfficialRegistry = Depends(get_registry)):
    """Store a candidate the operator selected."""
    return registry.insert_official(candidate_to_record(body))


@app.get("/api/v1/officials", response_model=list[OfficialRecord])
def officials_list(
    category: Optional[str] = None,
    q: Optional[str] = None,
    registry: OfficialRegistry = Depends(get_registry),
):
    """List officials, optionally by category tab ("all" for every category) and text in name or position."""
    return registry.list_officials(category=category, query=q)


@app.get("/api/v1/officials/{official_id}", response_model=OfficialRecord)
def officials_get(official_id: str, registry: OfficialRegistry = Depends(get_registry)):
    try:
        return registry.get_official(official_id)
    except OfficialNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.delete("/api/v1/officials/{official_id}", status_code=status.HTTP_204_NO_CONTENT)
def officials_delete(official_id: str, registry: OfficialRegistry = Depends(get_registry)):
    try:
        registry.delete_official(official_id)
    except OfficialNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get("/api/v1/providers/stats")
def providers_stats():
    monitor = get_performance_monitor()
    return {name: asdict(monitor.get_stats(name)) for name in PROVIDERS}
