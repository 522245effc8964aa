"""News search adapter (Google News via SerpAPI)."""

from typing import Any

from official_finder.discovery.clients.base import SerpApiClient, text_field
from official_finder.discovery.schemas import NewsResult


class NewsSearchClient(SerpApiClient):
    name = "news"
    engine = "google_news"
    results_key = "news_results"

    def _params(self, query: str, limit: int) -> dict[str, Any]:
        # google_news ignores "num"; truncation happens in search()
        params = super()._params(query, limit)
        params.pop("num", None)
        return params

    def _parse_item(self, item: dict[str, Any]) -> NewsResult:
        source = item.get("source")
        source_name = source.get("name") if isinstance(source, dict) else source
        return NewsResult(
            title=text_field(item, "title"),
            snippet=text_field(item, "snippet"),
            link=text_field(item, "link"),
            thumbnail=text_field(item, "thumbnail"),
            date=text_field(item, "date"),
            source_name=source_name if isinstance(source_name, str) else None,
        )
