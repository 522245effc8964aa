"""Tests for candidate aggregation and ranking."""

import time

import pytest

from official_finder.discovery.aggregator import (
    MAX_CANDIDATES,
    CandidateAggregator,
    confidence_for_rank,
    rank_fragments,
)
from official_finder.discovery.errors import ConfigurationMissing, ProviderError, ProviderUnavailable
from official_finder.discovery.fallback import FALLBACK_SOURCE_LABEL
from official_finder.discovery.normalizer import PROVIDER_LABELS
from official_finder.discovery.progress import CollectingProgress
from official_finder.discovery.schemas import CandidateFragment, ImageResult, SearchCriteria, WebResult


def _aggregator(fake_adapter, web=None, news=None, image=None, **kwargs):
    return CandidateAggregator(
        web=web or fake_adapter("web"),
        news=news or fake_adapter("news"),
        image=image or fake_adapter("image"),
        **kwargs,
    )


class TestConfidence:
    """Rank-based confidence."""

    def test_top_rank(self):
        assert confidence_for_rank(0) == 96

    def test_step_of_three(self):
        assert confidence_for_rank(1) == 93
        assert confidence_for_rank(5) == 81

    def test_floor(self):
        assert confidence_for_rank(17) == 45
        assert confidence_for_rank(40) == 45

    def test_non_increasing_and_bounded(self, fake_adapter, web_results, news_results, minister_criteria):
        aggregator = _aggregator(
            fake_adapter,
            web=fake_adapter("web", web_results(10)),
            news=fake_adapter("news", news_results(10)),
        )
        candidates = aggregator.discover(minister_criteria)
        scores = [c.confidence for c in candidates]
        assert len(scores) == 20
        assert all(a >= b for a, b in zip(scores, scores[1:]))
        assert all(45 <= s <= 96 for s in scores)


class TestScenarios:
    """End-to-end discovery scenarios with fake providers."""

    def test_single_web_result(self, fake_adapter, minister_criteria):
        web = fake_adapter("web", [WebResult(title="A. Example opens new terminal", snippet="Airport news")])
        candidates = _aggregator(fake_adapter, web=web).discover(minister_criteria)

        assert len(candidates) == 1
        c = candidates[0]
        assert c.confidence == 96
        assert c.role_type == "web match"
        assert c.position == "Minister"
        assert c.name == "A. Example opens new terminal"
        assert c.nationality == "Country X"
        assert c.source == "web search"
        assert c.category == "minister"

    def test_all_empty_uses_fallback(self, fake_adapter, minister_criteria):
        candidates = _aggregator(fake_adapter).discover(minister_criteria)

        assert len(candidates) == 2
        assert [c.confidence for c in candidates] == [80, 68]
        assert all(c.source == "local samples" for c in candidates)
        assert FALLBACK_SOURCE_LABEL not in PROVIDER_LABELS

    def test_web_ranked_before_news(self, fake_adapter, web_results, news_results, minister_criteria):
        aggregator = _aggregator(
            fake_adapter,
            web=fake_adapter("web", web_results(2)),
            news=fake_adapter("news", news_results(2)),
        )
        candidates = aggregator.discover(minister_criteria)
        assert [c.source for c in candidates] == ["web search", "web search", "news search", "news search"]
        assert [c.role_type for c in candidates] == ["web match", "web match", "media coverage", "media coverage"]

    def test_output_capped(self, fake_adapter, web_results, news_results, minister_criteria):
        aggregator = _aggregator(
            fake_adapter,
            web=fake_adapter("web", web_results(25)),
            news=fake_adapter("news", news_results(25)),
            web_limit=25,
            news_limit=25,
        )
        candidates = aggregator.discover(minister_criteria)
        assert len(candidates) == MAX_CANDIDATES == 24

    def test_ids_unique_within_run(self, fake_adapter, web_results, minister_criteria):
        candidates = _aggregator(fake_adapter, web=fake_adapter("web", web_results(10))).discover(minister_criteria)
        ids = [c.id for c in candidates]
        assert len(set(ids)) == len(ids)

    def test_adapters_receive_query_and_limits(self, fake_adapter, minister_criteria):
        web, news, image = fake_adapter("web"), fake_adapter("news"), fake_adapter("image")
        _aggregator(fake_adapter, web=web, news=news, image=image).discover(minister_criteria)
        assert web.calls == [("A. Example Minister Country X", 10)]
        assert news.calls == [("A. Example Minister Country X", 10)]
        assert image.calls == [("A. Example Minister Country X", 12)]


class TestPartialFailure:
    """One provider failing must not abort the others."""

    def test_news_unavailable(self, fake_adapter, web_results, image_results, minister_criteria):
        aggregator = _aggregator(
            fake_adapter,
            web=fake_adapter("web", web_results(3)),
            news=fake_adapter("news", error=ProviderUnavailable("news", "connection refused")),
            image=fake_adapter("image", image_results(2)),
        )
        candidates = aggregator.discover(minister_criteria)
        assert len(candidates) == 3
        assert all(c.source == "web search" for c in candidates)
        assert candidates[0].photo_url == "https://img.example.org/original-0.jpg"

    def test_provider_error_payload(self, fake_adapter, news_results, minister_criteria):
        aggregator = _aggregator(
            fake_adapter,
            web=fake_adapter("web", error=ProviderError("web", "Invalid API key")),
            news=fake_adapter("news", news_results(1)),
        )
        candidates = aggregator.discover(minister_criteria)
        assert len(candidates) == 1
        assert candidates[0].role_type == "media coverage"

    def test_unexpected_exception_is_contained(self, fake_adapter, web_results, minister_criteria):
        aggregator = _aggregator(
            fake_adapter,
            web=fake_adapter("web", web_results(1)),
            image=fake_adapter("image", error=RuntimeError("boom")),
        )
        assert len(aggregator.discover(minister_criteria)) == 1

    def test_all_failing_uses_fallback(self, fake_adapter, minister_criteria):
        aggregator = _aggregator(
            fake_adapter,
            web=fake_adapter("web", error=ProviderUnavailable("web", "timeout")),
            news=fake_adapter("news", error=ProviderUnavailable("news", "timeout")),
            image=fake_adapter("image", error=ProviderUnavailable("image", "timeout")),
        )
        candidates = aggregator.discover(minister_criteria)
        assert [c.source for c in candidates] == ["local samples", "local samples"]

    def test_slow_provider_times_out(self, fake_adapter, web_results, minister_criteria):
        aggregator = _aggregator(
            fake_adapter,
            web=fake_adapter("web", web_results(2)),
            news=fake_adapter("news", delay=2.0),
            join_timeout=0.5,
        )
        outcomes = aggregator._gather("query")
        assert outcomes["web"].ok
        assert isinstance(outcomes["news"].error, ProviderUnavailable)
        assert outcomes["news"].fragments == []


class TestConfiguration:
    """Missing credentials."""

    def test_all_unconfigured_raises(self, fake_adapter, minister_criteria):
        aggregator = _aggregator(
            fake_adapter,
            web=fake_adapter("web", configured=False),
            news=fake_adapter("news", configured=False),
            image=fake_adapter("image", configured=False),
        )
        with pytest.raises(ConfigurationMissing, match="unavailable"):
            aggregator.discover(minister_criteria)

    def test_one_configured_empty_falls_back(self, fake_adapter, minister_criteria):
        aggregator = _aggregator(
            fake_adapter,
            web=fake_adapter("web", configured=False),
            news=fake_adapter("news", configured=False),
        )
        assert len(aggregator.discover(minister_criteria)) == 2

    def test_one_unconfigured_degrades_silently(self, fake_adapter, web_results, minister_criteria):
        aggregator = _aggregator(
            fake_adapter,
            web=fake_adapter("web", web_results(4)),
            news=fake_adapter("news", configured=False),
            image=fake_adapter("image", configured=False),
        )
        assert len(aggregator.discover(minister_criteria)) == 4


class TestImagery:
    """Photo assignment: own image, pool, then placeholder."""

    def test_own_image_preferred(self, fake_adapter, web_results, image_results, minister_criteria):
        aggregator = _aggregator(
            fake_adapter,
            web=fake_adapter("web", web_results(2, with_thumbnail=True)),
            image=fake_adapter("image", image_results(2)),
        )
        candidates = aggregator.discover(minister_criteria)
        assert candidates[0].photo_url == "https://img.example.org/web-0.jpg"
        assert candidates[1].photo_url == "https://img.example.org/web-1.jpg"

    def test_pool_reused_modulo(self, fake_adapter, web_results, image_results, minister_criteria):
        aggregator = _aggregator(
            fake_adapter,
            web=fake_adapter("web", web_results(5)),
            image=fake_adapter("image", image_results(2)),
        )
        photos = [c.photo_url for c in aggregator.discover(minister_criteria)]
        assert photos == [
            "https://img.example.org/original-0.jpg",
            "https://img.example.org/original-1.jpg",
            "https://img.example.org/original-0.jpg",
            "https://img.example.org/original-1.jpg",
            "https://img.example.org/original-0.jpg",
        ]

    def test_placeholder_when_no_images(self, fake_adapter, web_results, minister_criteria):
        candidates = _aggregator(fake_adapter, web=fake_adapter("web", web_results(6))).discover(minister_criteria)
        assert all(c.photo_url for c in candidates)
        assert all(c.photo_url.startswith("https://ui-avatars.com/api/") for c in candidates)

    def test_pool_skips_results_without_reference(self, fake_adapter, web_results, minister_criteria):
        image = fake_adapter("image", [ImageResult(title="broken"), ImageResult(thumbnail="https://img/t.jpg")])
        candidates = _aggregator(fake_adapter, web=fake_adapter("web", web_results(2)), image=image).discover(
            minister_criteria
        )
        assert [c.photo_url for c in candidates] == ["https://img/t.jpg", "https://img/t.jpg"]


class TestRankFragments:
    """Field resolution when criteria or fragment fields are missing."""

    def test_name_falls_back_to_criteria(self):
        fragments = [CandidateFragment(source_label="web search", snippet="Head of transport")]
        c = rank_fragments(fragments, SearchCriteria(name="Jane Doe"), [])[0]
        assert c.name == "Jane Doe"
        assert c.position == "Head of transport"
        assert c.nationality == "unspecified"

    def test_generic_name_and_position(self):
        c = rank_fragments([CandidateFragment(source_label="web search")], SearchCriteria(), [])[0]
        assert c.name == "Unidentified official"
        assert c.position == "unspecified position"

    def test_latest_news_from_dated_fragment(self):
        fragment = CandidateFragment(
            source_label="news search", display_name="X", snippet="Opened a port", published_date="2024-05-20"
        )
        c = rank_fragments([fragment], SearchCriteria(), [])[0]
        assert len(c.latest_news) == 1
        assert c.latest_news[0].date == "2024-05-20"
        assert c.latest_news[0].content == "Opened a port"

    def test_no_news_without_date(self):
        c = rank_fragments([CandidateFragment(source_label="web search", snippet="s")], SearchCriteria(), [])[0]
        assert c.latest_news == []

    def test_fifty_fragments_capped(self):
        fragments = [CandidateFragment(source_label="web search", display_name=f"n{i}") for i in range(50)]
        candidates = rank_fragments(fragments, SearchCriteria(), [])
        assert len(candidates) == 24
        assert candidates[-1].confidence == 45


class TestProgress:
    """Progress messages during discovery."""

    def test_phases_in_order(self, fake_adapter, web_results, minister_criteria):
        progress = CollectingProgress()
        aggregator = _aggregator(fake_adapter, web=fake_adapter("web", web_results(1)))
        aggregator.discover(minister_criteria, progress)
        assert aggregator.flush_progress(timeout=2.0)
        assert len(progress.messages) == 3
        assert progress.messages[0].startswith("Connecting")
        assert progress.messages[1].startswith("Analyzing")
        assert progress.messages[2].startswith("Done")

    def test_fallback_message(self, fake_adapter, minister_criteria):
        progress = CollectingProgress()
        aggregator = _aggregator(fake_adapter)
        aggregator.discover(minister_criteria, progress)
        aggregator.flush_progress(timeout=2.0)
        assert "local samples" in progress.messages[-1]

    def test_failing_sink_does_not_fail_discovery(self, fake_adapter, web_results, minister_criteria):
        class BrokenSink:
            def emit(self, message):
                raise RuntimeError("display closed")

        aggregator = _aggregator(fake_adapter, web=fake_adapter("web", web_results(1)))
        candidates = aggregator.discover(minister_criteria, BrokenSink())
        assert len(candidates) == 1
        assert aggregator.flush_progress(timeout=2.0)

    def test_slow_sink_does_not_delay_discovery(self, fake_adapter, web_results, minister_criteria):
        class SlowSink:
            def __init__(self):
                self.messages = []

            def emit(self, message):
                time.sleep(0.5)
                self.messages.append(message)

        sink = SlowSink()
        aggregator = _aggregator(fake_adapter, web=fake_adapter("web", web_results(1)))
        started = time.monotonic()
        candidates = aggregator.discover(minister_criteria, sink)
        elapsed = time.monotonic() - started

        assert len(candidates) == 1
        assert elapsed < 0.5
        assert aggregator.flush_progress(timeout=5.0)
        assert len(sink.messages) == 3
        assert sink.messages[0].startswith("Connecting")
