"""
Map each provider's raw result into a CandidateFragment.

Every function is total: missing fields stay absent, nothing raises.
"""

from typing import Optional

from official_finder.discovery.schemas import (
    CandidateFragment,
    ImageResult,
    NewsResult,
    RawProviderResult,
    WebResult,
)

WEB_SOURCE_LABEL = "web search"
NEWS_SOURCE_LABEL = "news search"
IMAGE_SOURCE_LABEL = "image search"

PROVIDER_LABELS = (WEB_SOURCE_LABEL, NEWS_SOURCE_LABEL, IMAGE_SOURCE_LABEL)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def normalize_web(raw: WebResult) -> CandidateFragment:
    return CandidateFragment(
        display_name=_clean(raw.title),
        snippet=_clean(raw.snippet),
        source_label=WEB_SOURCE_LABEL,
        link=_clean(raw.link),
        image_ref=_clean(raw.thumbnail),
    )


def normalize_news(raw: NewsResult) -> CandidateFragment:
    return CandidateFragment(
        display_name=_clean(raw.title),
        snippet=_clean(raw.snippet),
        source_label=NEWS_SOURCE_LABEL,
        link=_clean(raw.link),
        image_ref=_clean(raw.thumbnail),
        published_date=_clean(raw.date),
    )


def normalize_image(raw: ImageResult) -> CandidateFragment:
    """Prefer the full-size original over the thumbnail."""
    return CandidateFragment(
        display_name=_clean(raw.title),
        source_label=IMAGE_SOURCE_LABEL,
        link=_clean(raw.link),
        image_ref=_clean(raw.original) or _clean(raw.thumbnail),
    )


def normalize(raw: RawProviderResult) -> CandidateFragment:
    if raw.kind == "web":
        return normalize_web(raw)
    if raw.kind == "news":
        return normalize_news(raw)
    return normalize_image(raw)


def is_news(fragment: CandidateFragment) -> bool:
    return fragment.source_label == NEWS_SOURCE_LABEL
