"""
Registry of confirmed officials.

The discovery engine never writes here; the caller decides which candidate
to keep and stores it with candidate_to_record() + insert_official().
"""

import uuid
from datetime import date
from threading import Lock
from typing import Optional, Protocol

from pydantic import BaseModel, Field

from official_finder.discovery.schemas import Candidate, NewsItem


class SocialStats(BaseModel):
    tweets: int = 0
    videos: int = 0
    news: int = 0


class OfficialRecord(BaseModel):
    """Stored official, in the registry's column layout."""

    id: Optional[str] = None
    name: str
    position: str
    category: str = "other"
    status: str = "current"  # current | previous
    nationality: str = "unspecified"
    appointment_date: Optional[str] = None
    photo_url: Optional[str] = None
    social_stats: SocialStats = Field(default_factory=SocialStats)
    mandates: list[str] = Field(default_factory=list)
    latest_news: list[NewsItem] = Field(default_factory=list)
    predecessors: list[str] = Field(default_factory=list)


class OfficialNotFound(KeyError):
    def __init__(self, official_id: str):
        self.official_id = official_id
        super().__init__(official_id)

    def __str__(self) -> str:
        return f"Official {self.official_id} not found"


class OfficialRegistry(Protocol):
    def list_officials(self, category: Optional[str] = None, query: Optional[str] = None) -> list[OfficialRecord]: ...

    def insert_official(self, record: OfficialRecord) -> OfficialRecord: ...

    def delete_official(self, official_id: str) -> None: ...

    def get_official(self, official_id: str) -> OfficialRecord: ...


def matches_filters(record: OfficialRecord, category: Optional[str] = None, query: Optional[str] = None) -> bool:
    if category and category != "all" and record.category != category:
        return False
    needle = (query or "").strip().lower()
    if not needle:
        return True
    return needle in record.name.lower() or needle in record.position.lower()


class InMemoryRegistry:
    """Process-local registry; newest records are listed first."""

    def __init__(self):
        self._records: dict[str, OfficialRecord] = {}
        self._lock = Lock()

    def list_officials(self, category: Optional[str] = None, query: Optional[str] = None) -> list[OfficialRecord]:
        """Newest first; *category* "all" or None means every category, *query* matches name or position."""
        with self._lock:
            records = list(reversed(self._records.values()))
        return [r for r in records if matches_filters(r, category, query)]

    def insert_official(self, record: OfficialRecord) -> OfficialRecord:
        stored = record.model_copy(update={"id": record.id or uuid.uuid4().hex})
        with self._lock:
            self._records[stored.id] = stored
        return stored

    def delete_official(self, official_id: str) -> None:
        with self._lock:
            if official_id not in self._records:
                raise OfficialNotFound(official_id)
            del self._records[official_id]

    def get_official(self, official_id: str) -> OfficialRecord:
        with self._lock:
            record = self._records.get(official_id)
        if record is None:
            raise OfficialNotFound(official_id)
        return record


def candidate_to_record(candidate: Candidate, appointment_date: Optional[date] = None) -> OfficialRecord:
    """Registry record for a candidate the operator confirmed."""
    return OfficialRecord(
        name=candidate.name,
        position=candidate.position,
        category=candidate.category,
        nationality=candidate.nationality,
        appointment_date=(appointment_date or date.today()).isoformat(),
        photo_url=candidate.photo_url,
        latest_news=list(candidate.latest_news),
    )
