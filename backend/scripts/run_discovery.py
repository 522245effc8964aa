"""
Run one discovery round and print every stage.

Install the package first (from the repository root: pip install -e .), then run
from backend/ with:
  python scripts/run_discovery.py --name "Jane Doe" --position "Minister of Transport" --country "Kenya"

Requires: SERPAPI_API_KEY in env (or .env), or per-provider
WEB_SEARCH_API_KEY / NEWS_SEARCH_API_KEY / IMAGE_SEARCH_API_KEY.
Prints the query, progress messages, provider stats and the ranked candidates.
"""

import argparse
import sys
from textwrap import shorten

from official_finder.config import get_settings
from official_finder.discovery import (
    ConfigurationMissing,
    LoggingProgress,
    SearchCriteria,
    build_query,
    discover_candidates,
    get_aggregator,
    get_performance_monitor,
)


def _trunc(s: str, max_len: int = 72) -> str:
    return shorten(s, width=max_len, placeholder="…") if s else ""


def _section(title: str) -> None:
    print()
    print("=" * 80)
    print(f"  {title}")
    print("=" * 80)


def main() -> None:
    parser = argparse.ArgumentParser(description="Discover candidate officials from partial clues.")
    parser.add_argument("--name")
    parser.add_argument("--position")
    parser.add_argument("--country")
    args = parser.parse_args()

    criteria = SearchCriteria(name=args.name, position=args.position, country=args.country)
    settings = get_settings()

    _section("Query")
    print(f"Criteria: {criteria.model_dump()}")
    print(f"Query: {build_query(criteria)}")
    configured = [p for p in ("web", "news", "image") if settings.api_key_for(p)]
    print(f"Configured providers: {configured or 'none'}")

    _section("Discovery")
    try:
        candidates = discover_candidates(criteria, LoggingProgress(), settings=settings)
    except ConfigurationMissing as e:
        print(e.message)
        sys.exit(1)
    get_aggregator(settings).flush_progress(timeout=settings.progress_flush_seconds)

    _section("Provider stats")
    monitor = get_performance_monitor()
    for provider in ("web", "news", "image"):
        stats = monitor.get_stats(provider)
        print(
            f"  {provider:<6} calls={stats.total_calls} ok={stats.successful_calls} "
            f"failed={stats.failed_calls} results={stats.total_results} "
            f"avg={stats.avg_duration_seconds:.2f}s"
        )
        if stats.last_error:
            print(f"         last error: {_trunc(stats.last_error, 60)}")

    _section(f"Candidates ({len(candidates)})")
    print(f"{'#':>3}  {'conf':>4}  {'source':<13}  {'category':<10}  name")
    print("-" * 80)
    for i, c in enumerate(candidates, 1):
        print(f"{i:>3}  {c.confidence:>4}  {c.source:<13}  {c.category:<10}  {_trunc(c.name, 40)}")
        print(f"{'':>27}position: {_trunc(c.position, 48)}")
        if c.latest_news:
            print(f"{'':>27}news {c.latest_news[0].date}: {_trunc(c.latest_news[0].content or '', 40)}")
    print()


if __name__ == "__main__":
    main()
