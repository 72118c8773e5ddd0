"""Rewrite media hosts that are unreachable outside mainland China."""

from __future__ import annotations

import re

_REACHABLE_HOST = "www.douyin.com"

# Applied in order, each once.  Replacement hosts never match a source
# pattern, which keeps normalization idempotent.
DOMAIN_REPLACEMENTS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"aweme\.snssdk\.com"), _REACHABLE_HOST),
    (re.compile(r"api-h2\.amemv\.com"), _REACHABLE_HOST),
    (re.compile(r"api\.amemv\.com"), _REACHABLE_HOST),
    (re.compile(r"v\d+-[a-z]+\.douyinvod\.com"), _REACHABLE_HOST),
)


def normalize_video_url(url: str) -> str:
    """Replace inaccessible CDN hosts with accessible alternatives.

    Purely textual; the URL structure is not parsed.

    >>> normalize_video_url("https://aweme.snssdk.com/aweme/v1/play/?video_id=v0")
    'https://www.douyin.com/aweme/v1/play/?video_id=v0'
    """
    for pattern, replacement in DOMAIN_REPLACEMENTS:
        url = pattern.sub(replacement, url)
    return url
