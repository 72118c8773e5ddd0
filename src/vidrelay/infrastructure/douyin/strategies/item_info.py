"""Strategy d: legacy ``iesdouyin.com`` item-info API (flat JSON)."""

from __future__ import annotations

import httpx

from vidrelay.domain.entities.video import VideoInfo

from ..constants import (
    ITEM_INFO_API_URL,
    LEGACY_API_TIMEOUT,
    MOBILE_USER_AGENT,
    strip_watermark,
)
from .base import PARSE_ERRORS, StrategyBase, partial_info


class ItemInfoStrategy(StrategyBase):
    name = "item_info"

    def __init__(
        self, http_client: httpx.AsyncClient, *, timeout: float = LEGACY_API_TIMEOUT
    ) -> None:
        super().__init__(http_client, timeout=timeout)

    async def attempt(self, video_id: str, page_url: str) -> VideoInfo | None:
        try:
            resp = await self._http.get(
                ITEM_INFO_API_URL,
                params={"item_ids": video_id},
                headers={"User-Agent": MOBILE_USER_AGENT},
                timeout=self._timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as exc:
            self._log_http_failure(video_id, exc)
            return None
        except PARSE_ERRORS:
            self._log.warning("item_info_invalid_json", video_id=video_id)
            return None

        try:
            item = data["item_list"][0]
        except PARSE_ERRORS:
            self._log.info("item_info_empty", video_id=video_id)
            return None

        try:
            src = item["video"]["play_addr"]["url_list"][0]
        except PARSE_ERRORS:
            src = None
        if not isinstance(src, str) or not src:
            self._log.info("item_info_no_play_addr", video_id=video_id)
            return partial_info(item.get("desc") if isinstance(item, dict) else None)

        try:
            cover = item["video"]["cover"]["url_list"][0]
        except PARSE_ERRORS:
            cover = ""
        desc = item.get("desc")
        return VideoInfo(
            url=strip_watermark(src),
            cover=cover if isinstance(cover, str) else "",
            desc=desc if isinstance(desc, str) else "",
        )
