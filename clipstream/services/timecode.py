"""
Time Code Helpers
Convert between "mm:ss" / "hh:mm:ss" strings and whole seconds
"""

import re
from typing import Optional

from ..utils.exceptions import InvalidTimeCodeError

_SEGMENT = re.compile(r"[0-9]+")


def parse_time(text: Optional[str]) -> int:
    """
    Parse a time code into seconds.

    Empty input and "0:00" mean the start of the video. Anything that is not
    two or three colon-separated non-negative integers raises
    InvalidTimeCodeError rather than silently collapsing to zero.
    """
    if text is None:
        return 0

    value = text.strip()
    if not value or value == "0:00":
        return 0

    parts = value.split(":")
    if len(parts) not in (2, 3) or not all(_SEGMENT.fullmatch(part) for part in parts):
        raise InvalidTimeCodeError(text)

    numbers = [int(part) for part in parts]
    if len(numbers) == 2:
        minutes, seconds = numbers
        return minutes * 60 + seconds

    hours, minutes, seconds = numbers
    return hours * 3600 + minutes * 60 + seconds


def format_time(total_seconds: float) -> str:
    """Render seconds as h:mm:ss from one hour upward, m:ss below"""
    total = int(total_seconds)
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_span(start_seconds: int, end_seconds: Optional[int]) -> Optional[str]:
    """
    Render the length of a trim window as m:ss.

    Minutes are never folded into hours here. Returns None when the window is
    absent or empty.
    """
    if end_seconds is None or end_seconds <= start_seconds:
        return None

    minutes, seconds = divmod(end_seconds - start_seconds, 60)
    return f"{minutes}:{seconds:02d}"
