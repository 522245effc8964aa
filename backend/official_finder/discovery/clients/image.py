"""Image search adapter (Google Images via SerpAPI)."""

from typing import Any

from official_finder.discovery.clients.base import SerpApiClient, text_field
from official_finder.discovery.schemas import ImageResult


class ImageSearchClient(SerpApiClient):
    name = "image"
    engine = "google_images"
    results_key = "images_results"

    def _params(self, query: str, limit: int) -> dict[str, Any]:
        params = super()._params(query, limit)
        params.pop("num", None)
        return params

    def _parse_item(self, item: dict[str, Any]) -> ImageResult:
        return ImageResult(
            title=text_field(item, "title"),
            link=text_field(item, "link"),
            original=text_field(item, "original"),
            thumbnail=text_field(item, "thumbnail"),
            source_name=text_field(item, "source"),
        )
