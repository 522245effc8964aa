"""Pytest fixtures for discovery tests."""

import time

import pytest

from official_finder.config import Settings
from official_finder.discovery.schemas import ImageResult, NewsResult, SearchCriteria, WebResult


class FakeAdapter:
    """Stands in for a provider client; returns canned results or raises."""

    def __init__(self, name, results=None, error=None, configured=True, delay=0.0):
        self.name = name
        self.results = results or []
        self.error = error
        self.configured = configured
        self.delay = delay
        self.calls = []

    @property
    def is_configured(self):
        return self.configured

    def search(self, query, limit):
        self.calls.append((query, limit))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if not self.configured:
            return []
        return self.results[:limit]


@pytest.fixture
def fake_adapter():
    return FakeAdapter


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        serpapi_api_key="test-key",
        web_search_api_key="",
        news_search_api_key="",
        image_search_api_key="",
        provider_timeout_seconds=5.0,
        join_grace_seconds=1.0,
    )


@pytest.fixture
def unconfigured_settings():
    return Settings(
        _env_file=None,
        serpapi_api_key="",
        web_search_api_key="",
        news_search_api_key="",
        image_search_api_key="",
    )


@pytest.fixture
def minister_criteria():
    return SearchCriteria(name="A. Example", position="Minister", country="Country X")


@pytest.fixture
def web_results():
    def _make(n, with_thumbnail=False):
        return [
            WebResult(
                title=f"Result {i}",
                snippet=f"Snippet {i}",
                link=f"https://example.org/{i}",
                thumbnail=f"https://img.example.org/web-{i}.jpg" if with_thumbnail else None,
            )
            for i in range(n)
        ]

    return _make


@pytest.fixture
def news_results():
    def _make(n):
        return [
            NewsResult(
                title=f"Headline {i}",
                snippet=f"Story {i}",
                link=f"https://news.example.org/{i}",
                date=f"2024-05-{i + 1:02d}",
                source_name="Example Times",
            )
            for i in range(n)
        ]

    return _make


@pytest.fixture
def image_results():
    def _make(n):
        return [
            ImageResult(
                title=f"Photo {i}",
                original=f"https://img.example.org/original-{i}.jpg",
                thumbnail=f"https://img.example.org/thumb-{i}.jpg",
            )
            for i in range(n)
        ]

    return _make
