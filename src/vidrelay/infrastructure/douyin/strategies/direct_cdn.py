"""Strategy e: constructed play URL validated by a HEAD probe.

A 200 on the probe only shows the endpoint answers; it does not prove
the body is playable media.
"""

from __future__ import annotations

import httpx

from vidrelay.domain.entities.video import VideoInfo

from ..constants import DIRECT_PLAY_URL, MOBILE_USER_AGENT, PROBE_TIMEOUT
from .base import StrategyBase


class DirectCdnStrategy(StrategyBase):
    name = "direct_cdn"

    def __init__(
        self, http_client: httpx.AsyncClient, *, timeout: float = PROBE_TIMEOUT
    ) -> None:
        super().__init__(http_client, timeout=timeout)

    async def attempt(self, video_id: str, page_url: str) -> VideoInfo | None:
        cdn_url = DIRECT_PLAY_URL.format(video_id=video_id)
        try:
            resp = await self._http.head(
                cdn_url,
                headers={"User-Agent": MOBILE_USER_AGENT},
                follow_redirects=True,
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            self._log_http_failure(video_id, exc)
            return None

        if resp.status_code != 200:
            self._log.info(
                "direct_cdn_probe_rejected",
                video_id=video_id,
                status=resp.status_code,
            )
            return None
        return VideoInfo(url=cdn_url)
