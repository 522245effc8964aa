"""
Registry category for a candidate, inferred from its position text.

Categories match the registry's tabs: minister, ambassador, int_org,
company, local, other. First matching category wins.
"""

import re
from typing import Optional

CATEGORY_KEYWORDS: list[tuple[str, list[str]]] = [
    ("minister", ["minister", "secretary of state", "وزير", "وزيرة"]),
    ("ambassador", ["ambassador", "envoy", "consul", "chargé d'affaires", "سفير", "سفيرة", "قنصل"]),
    (
        "int_org",
        [
            "united nations",
            "secretary-general",
            "world bank",
            "imf",
            "unesco",
            "unicef",
            "who director",
            "international organization",
            "international organisation",
            "security council",
            "منظمة",
        ],
    ),
    ("local", ["mayor", "governor", "municipal", "city council", "city of", "أمين", "محافظ", "بلدية"]),
    ("company", ["ceo", "chief executive", "chairman", "founder", "managing director", "company", "رئيس تنفيذي", "شركة"]),
]

CATEGORIES = [c for c, _ in CATEGORY_KEYWORDS] + ["other"]


def _matches(keyword: str, text: str) -> bool:
    # Short latin acronyms need word boundaries ("imf" inside "himself")
    if keyword.isascii() and len(keyword) <= 4:
        return re.search(rf"\b{re.escape(keyword)}\b", text) is not None
    return keyword in text


def classify_position(position: Optional[str]) -> str:
    text = (position or "").lower()
    if not text:
        return "other"
    for category, keywords in CATEGORY_KEYWORDS:
        if any(_matches(k, text) for k in keywords):
            return category
    return "other"
