"""Tests for MediaProxy (streaming relay of upstream media)."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import respx

from vidrelay.domain.entities import ProxyTransportFault
from vidrelay.infrastructure.douyin.constants import DOUYIN_REFERER, MOBILE_USER_AGENT
from vidrelay.infrastructure.streaming.media_proxy import MediaProxy

_MEDIA_URL = "https://v26-web.douyinvod.com/abc/video.mp4?sig=1"
_NORMALIZED_URL = "https://www.douyin.com/abc/video.mp4?sig=1"
_BODY = bytes(range(256)) * 64


async def _drain(body_iter: AsyncIterator[bytes]) -> bytes:
    chunks = [chunk async for chunk in body_iter]
    return b"".join(chunks)


class TestMediaProxyOpen:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_relays_bytes_unchanged(self) -> None:
        respx.get(_NORMALIZED_URL).respond(
            200, content=_BODY, headers={"Content-Type": "video/mp4"}
        )

        async with httpx.AsyncClient() as client:
            body_iter, meta = await MediaProxy(client, chunk_size=1000).open(_MEDIA_URL)
            data = await _drain(body_iter)

        assert data == _BODY
        assert meta.content_type == "video/mp4"
        assert meta.content_length == str(len(_BODY))

    @respx.mock
    @pytest.mark.asyncio()
    async def test_sends_cdn_headers_to_normalized_host(self) -> None:
        route = respx.get(_NORMALIZED_URL).respond(200, content=b"x")

        async with httpx.AsyncClient() as client:
            body_iter, _ = await MediaProxy(client).open(_MEDIA_URL)
            await _drain(body_iter)

        request = route.calls[0].request
        assert request.headers["User-Agent"] == MOBILE_USER_AGENT
        assert request.headers["Referer"] == DOUYIN_REFERER

    @respx.mock
    @pytest.mark.asyncio()
    async def test_fixed_filename_and_default_content_type(self) -> None:
        respx.get(_NORMALIZED_URL).respond(200, content=b"abc")

        async with httpx.AsyncClient() as client:
            body_iter, meta = await MediaProxy(client).open(_MEDIA_URL)
            await _drain(body_iter)

        assert meta.content_type == "video/mp4"
        assert meta.filename == "douyin_video.mp4"
        headers = meta.response_headers()
        assert headers["Content-Disposition"] == 'attachment; filename="douyin_video.mp4"'

    @respx.mock
    @pytest.mark.asyncio()
    async def test_custom_filename(self) -> None:
        respx.get(_NORMALIZED_URL).respond(200, content=b"abc")

        async with httpx.AsyncClient() as client:
            body_iter, meta = await MediaProxy(client, filename="clip.mp4").open(
                _MEDIA_URL
            )
            await _drain(body_iter)

        assert meta.filename == "clip.mp4"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_follows_redirects(self) -> None:
        final = "https://cdn.example.com/final.mp4"
        respx.get(_NORMALIZED_URL).respond(302, headers={"Location": final})
        respx.get(final).respond(200, content=b"final")

        async with httpx.AsyncClient() as client:
            body_iter, _ = await MediaProxy(client).open(_MEDIA_URL)
            data = await _drain(body_iter)

        assert data == b"final"


class TestMediaProxyFailures:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_error_status_raises(self) -> None:
        respx.get(_NORMALIZED_URL).respond(403)

        async with httpx.AsyncClient() as client:
            with pytest.raises(ProxyTransportFault):
                await MediaProxy(client).open(_MEDIA_URL)

    @respx.mock
    @pytest.mark.asyncio()
    async def test_network_error_raises(self) -> None:
        respx.get(_NORMALIZED_URL).mock(side_effect=httpx.ConnectError("refused"))

        async with httpx.AsyncClient() as client:
            with pytest.raises(ProxyTransportFault):
                await MediaProxy(client).open(_MEDIA_URL)
