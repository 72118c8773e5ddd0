"""Strategy b: desktop video page with server-rendered state.

The page ships its state either URL-encoded in ``<script id="RENDER_DATA">``
or as a JSON literal assigned in an inline script (``_ROUTER_DATA``,
``self.__next_f.push``).
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterator
from typing import Any
from urllib.parse import unquote

import httpx

from vidrelay.domain.entities.video import VideoInfo
from vidrelay.infrastructure.common.html_selectors import (
    inline_scripts,
    parse_html,
    select_text,
)

from ..constants import (
    DESKTOP_HTML_ACCEPT,
    DESKTOP_PAGE_URL,
    DESKTOP_USER_AGENT,
    DOUYIN_REFERER,
)
from ..deep_search import find_video_info
from ..tokens import session_cookie_header
from .base import PARSE_ERRORS, StrategyBase

_EMBEDDED_JSON_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"window\._ROUTER_DATA\s*=\s*(\{.+\})\s*;?\s*$", re.MULTILINE | re.DOTALL),
    re.compile(r'self\.__next_f\.push\(\[.*?"(\{.*?\})"\]', re.DOTALL),
)


def parse_render_data(raw: str) -> Any:
    """Decode the URL-encoded JSON held by the ``RENDER_DATA`` element."""
    return json.loads(unquote(raw))


def parse_embedded_json(raw: str) -> Any:
    """Parse a JSON object captured from a script body.

    Payloads pushed through ``__next_f`` sit inside a JS string literal,
    so a second attempt unescapes the literal before parsing.
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return json.loads(json.loads(f'"{raw}"'))


def iter_embedded_json(scripts: list[str]) -> Iterator[Any]:
    """Yield every parseable embedded JSON candidate across *scripts*."""
    for body in scripts:
        for pattern in _EMBEDDED_JSON_PATTERNS:
            match = pattern.search(body)
            if not match:
                continue
            try:
                yield parse_embedded_json(match.group(1))
            except PARSE_ERRORS:
                continue


class DesktopPageStrategy(StrategyBase):
    name = "desktop_page"

    async def attempt(self, video_id: str, page_url: str) -> VideoInfo | None:
        headers = {
            "User-Agent": DESKTOP_USER_AGENT,
            "Referer": DOUYIN_REFERER,
            "Cookie": session_cookie_header(),
            "Accept": DESKTOP_HTML_ACCEPT,
            "Accept-Language": "zh-CN,zh;q=0.9",
        }
        try:
            resp = await self._http.get(
                DESKTOP_PAGE_URL.format(video_id=video_id),
                headers=headers,
                follow_redirects=True,
                timeout=self._timeout,
            )
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            self._log_http_failure(video_id, exc)
            return None

        soup = parse_html(resp.text)

        render_data = select_text(soup, "#RENDER_DATA")
        if render_data:
            try:
                info = find_video_info(parse_render_data(render_data))
            except PARSE_ERRORS:
                self._log.warning("desktop_page_render_data_invalid", video_id=video_id)
                info = None
            if info is not None:
                self._log.debug("desktop_page_render_data_hit", video_id=video_id)
                return info

        for data in iter_embedded_json(inline_scripts(soup)):
            info = find_video_info(data)
            if info is not None:
                self._log.debug("desktop_page_script_hit", video_id=video_id)
                return info

        self._log.info("desktop_page_no_video", video_id=video_id)
        return None
