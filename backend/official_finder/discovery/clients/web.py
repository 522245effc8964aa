"""Web search adapter (Google organic results via SerpAPI)."""

from typing import Any

from official_finder.discovery.clients.base import SerpApiClient, text_field
from official_finder.discovery.schemas import WebResult


class WebSearchClient(SerpApiClient):
    name = "web"
    engine = "google"
    results_key = "organic_results"

    def _parse_item(self, item: dict[str, Any]) -> WebResult:
        return WebResult(
            title=text_field(item, "title"),
            snippet=text_field(item, "snippet"),
            link=text_field(item, "link"),
            thumbnail=text_field(item, "thumbnail"),
        )
