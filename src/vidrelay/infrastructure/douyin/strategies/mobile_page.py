"""Strategy c: mobile share page, regex capture only.

Mobile markup is less stable than the desktop state blobs, so media URLs
are captured directly from script text instead of parsing JSON.
"""

from __future__ import annotations

import re

import httpx

from vidrelay.domain.entities.video import VideoInfo
from vidrelay.infrastructure.common.html_selectors import inline_scripts, parse_html

from ..constants import (
    HTML_ACCEPT,
    MOBILE_PAGE_URL,
    MOBILE_USER_AGENT,
    ensure_scheme,
    strip_watermark,
)
from .base import StrategyBase

_SCRIPT_KEYWORDS = ("playAddr", "play_addr", "playApi")

_MEDIA_URL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r'"playApi"\s*:\s*"([^"]+)"'),
    re.compile(r'"play_addr".*?"url_list"\s*:\s*\["([^"]+)"'),
    re.compile(r'"playAddr"\s*:\s*\[\{"src"\s*:\s*"([^"]+)"'),
)

_ANY_MP4_RE = re.compile(r"""https?://[^"'\s\\]+\.mp4[^"'\s\\]*""")


def unescape_slashes(src: str) -> str:
    r"""Decode ``/`` and ``\/`` escapes left in inline JSON."""
    return src.replace("\\u002F", "/").replace("\\/", "/")


def find_media_url_in_scripts(scripts: list[str]) -> str | None:
    """Capture the first play URL from scripts that mention play keys."""
    for body in scripts:
        if not any(keyword in body for keyword in _SCRIPT_KEYWORDS):
            continue
        for pattern in _MEDIA_URL_PATTERNS:
            match = pattern.search(body)
            if match and match.group(1):
                src = ensure_scheme(unescape_slashes(match.group(1)))
                return strip_watermark(src)
    return None


def find_any_mp4(html: str) -> str | None:
    match = _ANY_MP4_RE.search(html)
    return match.group(0) if match else None


class MobilePageStrategy(StrategyBase):
    name = "mobile_page"

    async def attempt(self, video_id: str, page_url: str) -> VideoInfo | None:
        try:
            resp = await self._http.get(
                MOBILE_PAGE_URL.format(video_id=video_id),
                headers={"User-Agent": MOBILE_USER_AGENT, "Accept": HTML_ACCEPT},
                follow_redirects=True,
                timeout=self._timeout,
            )
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            self._log_http_failure(video_id, exc)
            return None

        html = resp.text
        src = find_media_url_in_scripts(inline_scripts(parse_html(html)))
        if src is None:
            src = find_any_mp4(html)
            if src is not None:
                self._log.debug("mobile_page_mp4_fallback_hit", video_id=video_id)

        if src is None:
            self._log.info("mobile_page_no_video", video_id=video_id)
            return None
        return VideoInfo(url=src)
