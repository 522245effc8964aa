from official_finder.discovery.schemas import SearchCriteria

DEFAULT_QUERY = "government official"


def normalize_query(query: str) -> str:
    return " ".join(query.split())


def build_query(criteria: SearchCriteria) -> str:
    """Join name, position and country into one query shared by every provider."""
    parts = [criteria.name, criteria.position, criteria.country]
    query = normalize_query(" ".join(p for p in parts if p))
    return query or DEFAULT_QUERY
