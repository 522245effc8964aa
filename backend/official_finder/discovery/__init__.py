"""Candidate discovery: query building, provider search, normalization and ranking."""

from .aggregator import CandidateAggregator, ProviderOutcome, confidence_for_rank, rank_fragments
from .classification import classify_position
from .errors import ConfigurationMissing, DiscoveryError, ProviderError, ProviderUnavailable
from .fallback import FALLBACK_SOURCE_LABEL, synthesize
from .normalizer import normalize, normalize_image, normalize_news, normalize_web
from .pipeline import build_aggregator, close_aggregators, discover_candidates, get_aggregator
from .placeholders import placeholder_image
from .progress import CollectingProgress, LoggingProgress, NullProgress, ProgressDispatcher, ProgressSink
from .query_builder import DEFAULT_QUERY, build_query
from .schemas import Candidate, CandidateFragment, DiscoveryResponse, NewsItem, SearchCriteria
from .support import PerformanceMonitor, get_performance_monitor

__all__ = [
    "build_query",
    "DEFAULT_QUERY",
    "normalize",
    "normalize_web",
    "normalize_news",
    "normalize_image",
    "CandidateAggregator",
    "ProviderOutcome",
    "confidence_for_rank",
    "rank_fragments",
    "synthesize",
    "FALLBACK_SOURCE_LABEL",
    "classify_position",
    "placeholder_image",
    "build_aggregator",
    "discover_candidates",
    "get_aggregator",
    "close_aggregators",
    "ProgressDispatcher",
    "ProgressSink",
    "NullProgress",
    "LoggingProgress",
    "CollectingProgress",
    "DiscoveryError",
    "ProviderUnavailable",
    "ProviderError",
    "ConfigurationMissing",
    "SearchCriteria",
    "CandidateFragment",
    "Candidate",
    "NewsItem",
    "DiscoveryResponse",
    "PerformanceMonitor",
    "get_performance_monitor",
]
