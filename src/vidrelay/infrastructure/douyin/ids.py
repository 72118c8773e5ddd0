"""Video identifier and URL extraction from free-form text."""

from __future__ import annotations

import re

# Tried in priority order; first match wins.
_VIDEO_ID_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"/video/(\d+)"),
    re.compile(r"/note/(\d+)"),
    re.compile(r"modal_id=(\d+)"),
)

_URL_RE = re.compile(r"https?://\S+")


def extract_video_id(url: str) -> str | None:
    """Return the aweme id embedded in *url*, or None.

    >>> extract_video_id("https://www.douyin.com/video/7301234567890123456?x=1")
    '7301234567890123456'
    >>> extract_video_id("https://www.douyin.com/discover?modal_id=42")
    '42'
    """
    for pattern in _VIDEO_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def extract_first_url(text: str) -> str:
    """Return the first URL embedded in pasted share text.

    Share messages wrap the link in prose and emoji.  When no URL is
    found the stripped input is returned unchanged.
    """
    match = _URL_RE.search(text)
    if match:
        return match.group(0)
    return text.strip()
