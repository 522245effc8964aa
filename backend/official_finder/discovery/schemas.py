"""
Candidate discovery: Pydantic schemas for criteria, raw provider results,
normalized fragments and operator-facing candidates.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ----- Input -----


class SearchCriteria(BaseModel):
    """Partial clues supplied by the operator."""

    name: Optional[str] = None
    position: Optional[str] = None
    country: Optional[str] = None

    @field_validator("name", "position", "country", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


# ----- Raw provider results (tagged by kind) -----


class WebResult(BaseModel):
    kind: Literal["web"] = "web"
    title: Optional[str] = None
    snippet: Optional[str] = None
    link: Optional[str] = None
    thumbnail: Optional[str] = None


class NewsResult(BaseModel):
    kind: Literal["news"] = "news"
    title: Optional[str] = None
    snippet: Optional[str] = None
    link: Optional[str] = None
    thumbnail: Optional[str] = None
    date: Optional[str] = None
    source_name: Optional[str] = None


class ImageResult(BaseModel):
    kind: Literal["image"] = "image"
    title: Optional[str] = None
    link: Optional[str] = None
    original: Optional[str] = None
    thumbnail: Optional[str] = None
    source_name: Optional[str] = None


RawProviderResult = Annotated[Union[WebResult, NewsResult, ImageResult], Field(discriminator="kind")]


# ----- Normalized -----


class CandidateFragment(BaseModel):
    """Provider-agnostic form of one search result."""

    model_config = ConfigDict(frozen=True)

    display_name: Optional[str] = None
    snippet: Optional[str] = None
    source_label: str
    link: Optional[str] = None
    image_ref: Optional[str] = None
    published_date: Optional[str] = None


# ----- Output -----


class NewsItem(BaseModel):
    date: str
    content: Optional[str] = None
    source: str


class Candidate(BaseModel):
    """One provisional record shown to the operator."""

    id: str
    name: str
    position: str
    nationality: str
    source: str
    confidence: int = Field(..., ge=0, le=100)
    role_type: str
    photo_url: str = Field(..., min_length=1)
    latest_news: list[NewsItem] = Field(default_factory=list, max_length=1)
    link: Optional[str] = None
    category: str = "other"


class DiscoveryResponse(BaseModel):
    """API response for one discovery run."""

    query: str
    candidates: list[Candidate]
    progress: list[str] = Field(default_factory=list)
    used_fallback: bool = False
