"""Search provider adapters: web, news and image."""

from .base import SerpApiClient
from .image import ImageSearchClient
from .news import NewsSearchClient
from .web import WebSearchClient

__all__ = ["SerpApiClient", "WebSearchClient", "NewsSearchClient", "ImageSearchClient"]
