"""Shared constants for talking to Douyin endpoints."""

from __future__ import annotations

DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)

MOBILE_USER_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 16_6 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) "
    "Version/16.6 Mobile/15E148 Safari/604.1"
)

DOUYIN_REFERER = "https://www.douyin.com/"

DETAIL_API_URL = "https://www.douyin.com/aweme/v1/web/aweme/detail/"
DESKTOP_PAGE_URL = "https://www.douyin.com/video/{video_id}"
MOBILE_PAGE_URL = "https://m.douyin.com/share/video/{video_id}"
ITEM_INFO_API_URL = "https://www.iesdouyin.com/web/api/v2/aweme/iteminfo/"
DIRECT_PLAY_URL = (
    "https://www.douyin.com/aweme/v1/play/?video_id={video_id}&ratio=720p&line=0"
)

# Static cookies the web detail API expects next to the generated tokens.
DETAIL_API_STATIC_COOKIES = (
    "odin_tt=324fb4ea4a89c0c05827e18a1ed9cf9bf8a17f7705fcc793fec935b637867e2a"
    "5a9b8168c885554d029919117a18ba69; "
    "passport_csrf_token=3571e3e6a307e1c3b29a6de5dd205e69"
)

# Path marker distinguishing the watermarked CDN variant from the clean one.
WATERMARK_MARKER = "playwm"
CLEAN_MARKER = "play"

HTML_ACCEPT = "text/html,application/xhtml+xml"
DESKTOP_HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
JSON_ACCEPT = "application/json, text/plain, */*"

# Per-call timeouts (seconds)
REDIRECT_HOP_TIMEOUT = 10.0
REDIRECT_FOLLOW_TIMEOUT = 15.0
PAGE_TIMEOUT = 15.0
LEGACY_API_TIMEOUT = 10.0
PROBE_TIMEOUT = 10.0
STREAM_TIMEOUT = 120.0

MAX_REDIRECT_HOPS = 10


def strip_watermark(url: str) -> str:
    """Rewrite the first watermarked play marker to the unwatermarked variant."""
    return url.replace(WATERMARK_MARKER, CLEAN_MARKER, 1)


def ensure_scheme(url: str) -> str:
    """Prefix scheme-relative or bare URLs with ``https:``."""
    if url.startswith("http"):
        return url
    return "https:" + url
