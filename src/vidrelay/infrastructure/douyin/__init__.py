"""Douyin-specific resolution building blocks."""

from __future__ import annotations

from .deep_search import find_video_info
from .domains import normalize_video_url
from .ids import extract_first_url, extract_video_id
from .redirects import ShortLinkResolver

__all__ = [
    "ShortLinkResolver",
    "extract_first_url",
    "extract_video_id",
    "find_video_info",
    "normalize_video_url",
]
