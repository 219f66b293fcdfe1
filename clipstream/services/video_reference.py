"""
YouTube Reference Resolver
Pattern-based extraction of the 11-character video id from a URL.

This is a heuristic matcher, not a URL grammar: it looks for the last
short-link, /v/, /u/<user>/, /embed/ or watch? marker and accepts the token
that follows only when it is exactly VIDEO_ID_LENGTH characters long.
"""

import re
from typing import Optional
from urllib.parse import parse_qs, urlparse

VIDEO_ID_LENGTH = 11

_REFERENCE_PATTERN = re.compile(
    r"^.*((youtu\.be/)|(v/)|(/u/\w+/)|(embed/)|(watch\?))\??v?=?(?P<token>[^#&?]*).*"
)


def _accept(token: Optional[str]) -> Optional[str]:
    if token and len(token) == VIDEO_ID_LENGTH:
        return token
    return None


def extract_video_id(url: Optional[str]) -> Optional[str]:
    """Return the video id referenced by ``url`` or None"""
    if not url:
        return None

    value = url.strip()
    match = _REFERENCE_PATTERN.match(value)
    if match:
        video_id = _accept(match.group("token"))
        if video_id:
            return video_id

    # watch?feature=...&v=<id> puts the id after other query parameters
    parsed = urlparse(value)
    if parsed.path.endswith("/watch"):
        return _accept((parse_qs(parsed.query).get("v") or [None])[0])

    return None
