"""Streaming relay of Douyin media through this server.

The CDN requires a mobile ``User-Agent`` and a Douyin ``Referer`` and is
unreachable on several networks under its canonical host names, so media
is fetched server-side after domain normalization and relayed chunk by
chunk without buffering the full body.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable

import httpx
import structlog

from vidrelay.domain.entities.video import MediaStream, ProxyTransportFault
from vidrelay.infrastructure.douyin.constants import (
    DOUYIN_REFERER,
    MOBILE_USER_AGENT,
    STREAM_TIMEOUT,
)
from vidrelay.infrastructure.douyin.domains import normalize_video_url

log = structlog.get_logger(__name__)

DEFAULT_FILENAME = "douyin_video.mp4"
DEFAULT_CONTENT_TYPE = "video/mp4"
DEFAULT_CHUNK_SIZE = 65536


class MediaProxy:
    """Opens upstream media streams with the headers the CDN expects."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        user_agent: str = MOBILE_USER_AGENT,
        referer: str = DOUYIN_REFERER,
        timeout: float = STREAM_TIMEOUT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        filename: str = DEFAULT_FILENAME,
        default_content_type: str = DEFAULT_CONTENT_TYPE,
        normalize_fn: Callable[[str], str] = normalize_video_url,
    ) -> None:
        self._http = http_client
        self._headers = {"User-Agent": user_agent, "Referer": referer}
        self._timeout = timeout
        self._chunk_size = chunk_size
        self._filename = filename
        self._default_content_type = default_content_type
        self._normalize = normalize_fn

    async def open(self, media_url: str) -> tuple[AsyncIterator[bytes], MediaStream]:
        """Start streaming *media_url*.

        Returns ``(byte_iterator, metadata)`` once upstream headers have
        arrived.  Raises ``ProxyTransportFault`` when the request fails or
        upstream answers with an error status; in that case nothing has
        been sent to the caller yet.

        A failure after this point surfaces from the iterator, at which
        time response headers are already committed and the connection
        can only be dropped.
        """
        url = self._normalize(media_url)
        log.info("proxy_open", url=url[:120])

        try:
            resp = await self._http.send(
                self._http.build_request(
                    "GET",
                    url,
                    headers=self._headers,
                    timeout=self._timeout,
                ),
                stream=True,
                follow_redirects=True,
            )
        except httpx.HTTPError as exc:
            log.warning(
                "proxy_upstream_request_failed",
                url=url[:120],
                error=str(exc) or type(exc).__name__,
            )
            raise ProxyTransportFault() from exc

        if resp.is_error:
            await resp.aclose()
            log.warning("proxy_upstream_status", status=resp.status_code, url=url[:120])
            raise ProxyTransportFault()

        content_length = resp.headers.get("content-length")
        if resp.headers.get("content-encoding"):
            # Body is decoded while relaying; the upstream length no longer applies.
            content_length = None

        meta = MediaStream(
            content_type=resp.headers.get("content-type") or self._default_content_type,
            filename=self._filename,
            content_length=content_length,
        )

        async def _iter() -> AsyncIterator[bytes]:
            relayed = 0
            try:
                async for chunk in resp.aiter_bytes(chunk_size=self._chunk_size):
                    relayed += len(chunk)
                    yield chunk
            except httpx.HTTPError as exc:
                log.warning(
                    "proxy_stream_interrupted",
                    url=url[:120],
                    relayed_bytes=relayed,
                    error=str(exc) or type(exc).__name__,
                )
                raise ProxyTransportFault() from exc
            finally:
                await resp.aclose()
            log.debug("proxy_stream_complete", relayed_bytes=relayed)

        return _iter(), meta
