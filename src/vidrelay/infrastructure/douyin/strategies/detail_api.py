"""Strategy a: official web detail API (``aweme/v1/web/aweme/detail``).

Anonymous calls are accepted when they carry ``msToken``/``ttwid``
cookies shaped like the ones the web client generates.
"""

from __future__ import annotations

import httpx

from vidrelay.domain.entities.video import VideoInfo

from ..constants import (
    DESKTOP_USER_AGENT,
    DETAIL_API_STATIC_COOKIES,
    DETAIL_API_URL,
    DOUYIN_REFERER,
    JSON_ACCEPT,
)
from ..deep_search import find_video_info
from ..tokens import session_cookie_header
from .base import PARSE_ERRORS, StrategyBase, partial_info


class DetailApiStrategy(StrategyBase):
    name = "detail_api"

    async def attempt(self, video_id: str, page_url: str) -> VideoInfo | None:
        params = {
            "aweme_id": video_id,
            "aid": "6383",
            "cookie_enabled": "true",
            "platform": "PC",
            "downlink": "10",
        }
        headers = {
            "User-Agent": DESKTOP_USER_AGENT,
            "Referer": DOUYIN_REFERER,
            "Cookie": session_cookie_header(DETAIL_API_STATIC_COOKIES),
            "Accept": JSON_ACCEPT,
            "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
        }
        try:
            resp = await self._http.get(
                DETAIL_API_URL,
                params=params,
                headers=headers,
                timeout=self._timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as exc:
            self._log_http_failure(video_id, exc)
            return None
        except PARSE_ERRORS:
            # Blocked requests come back as an empty 200 body.
            self._log.warning("detail_api_invalid_json", video_id=video_id)
            return None

        detail = data.get("aweme_detail") if isinstance(data, dict) else None
        if not isinstance(detail, dict) or not detail:
            self._log.info("detail_api_no_detail", video_id=video_id)
            return None

        info = find_video_info(detail)
        if info is None:
            self._log.info("detail_api_no_video", video_id=video_id)
            return partial_info(detail.get("desc"))
        return info
