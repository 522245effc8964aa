"""
Fallback synthesis: two local placeholder candidates built from the criteria
alone, used when no provider returned anything.
"""

import uuid

from official_finder.discovery.classification import classify_position
from official_finder.discovery.placeholders import placeholder_image
from official_finder.discovery.schemas import Candidate, SearchCriteria

FALLBACK_SOURCE_LABEL = "local samples"

DEFAULT_NAME = "Unidentified official"
DEFAULT_POSITION = "unspecified position"
DEFAULT_NATIONALITY = "unspecified"

# (role_type, confidence)
FALLBACK_ROLES = [
    ("likely current officeholder", 80),
    ("prior media record", 68),
]


def synthesize(criteria: SearchCriteria) -> list[Candidate]:
    run_id = uuid.uuid4().hex[:8]
    name = criteria.name or DEFAULT_NAME
    position = criteria.position or DEFAULT_POSITION
    return [
        Candidate(
            id=f"{run_id}-local-{idx}",
            name=name,
            position=position,
            nationality=criteria.country or DEFAULT_NATIONALITY,
            source=FALLBACK_SOURCE_LABEL,
            confidence=confidence,
            role_type=role_type,
            photo_url=placeholder_image(name),
            category=classify_position(criteria.position),
        )
        for idx, (role_type, confidence) in enumerate(FALLBACK_ROLES, start=1)
    ]
