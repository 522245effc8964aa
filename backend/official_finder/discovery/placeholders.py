"""Generated avatar used when no photo is available."""

from urllib.parse import urlencode

AVATAR_BASE_URL = "https://ui-avatars.com/api/"
AVATAR_BACKGROUND = "AC9D81"
AVATAR_FOREGROUND = "FFFFFF"


def placeholder_image(name: str) -> str:
    """Deterministic avatar URL for *name*."""
    params = {
        "name": (name or "").strip() or "?",
        "background": AVATAR_BACKGROUND,
        "color": AVATAR_FOREGROUND,
        "size": 256,
    }
    return f"{AVATAR_BASE_URL}?{urlencode(params)}"
