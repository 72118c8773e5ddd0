"""Tests for ShortLinkResolver (manual redirect chase + auto-follow fallback)."""

from __future__ import annotations

import httpx
import pytest
import respx

from vidrelay.infrastructure.douyin.constants import MAX_REDIRECT_HOPS, MOBILE_USER_AGENT
from vidrelay.infrastructure.douyin.redirects import ShortLinkResolver

_SHORT = "https://v.douyin.com/iRNBho6u/"
_VIDEO_URL = "https://www.iesdouyin.com/share/video/7301234567890123456/?region=CN"


def _chain_url(i: int) -> str:
    return f"https://v.douyin.com/hop{i}/"


class TestIdInInput:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_no_request_when_id_present(self) -> None:
        async with httpx.AsyncClient() as client:
            link = await ShortLinkResolver(client).resolve(_VIDEO_URL)

        assert link.video_id == "7301234567890123456"
        assert link.final_url == _VIDEO_URL
        assert respx.calls.call_count == 0


class TestManualChase:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_single_hop(self) -> None:
        route = respx.get(_SHORT).respond(302, headers={"Location": _VIDEO_URL})

        async with httpx.AsyncClient() as client:
            link = await ShortLinkResolver(client).resolve(_SHORT)

        assert link.video_id == "7301234567890123456"
        assert link.final_url == _VIDEO_URL
        assert route.call_count == 1
        assert route.calls[0].request.headers["User-Agent"] == MOBILE_USER_AGENT

    @respx.mock
    @pytest.mark.asyncio()
    async def test_stops_at_first_location_with_id(self) -> None:
        """A three hop chain costs exactly three requests; the page is never fetched."""
        routes = [
            respx.get(_chain_url(0)).respond(302, headers={"Location": _chain_url(1)}),
            respx.get(_chain_url(1)).respond(302, headers={"Location": _chain_url(2)}),
            respx.get(_chain_url(2)).respond(302, headers={"Location": _VIDEO_URL}),
        ]

        async with httpx.AsyncClient() as client:
            link = await ShortLinkResolver(client).resolve(_chain_url(0))

        assert link.video_id == "7301234567890123456"
        assert [r.call_count for r in routes] == [1, 1, 1]
        assert respx.calls.call_count == 3

    @respx.mock
    @pytest.mark.asyncio()
    async def test_id_on_last_allowed_hop(self) -> None:
        """The hop budget is spent exactly; no auto-follow request is made."""
        routes = [
            respx.get(_chain_url(i)).respond(
                302, headers={"Location": _chain_url(i + 1)}
            )
            for i in range(MAX_REDIRECT_HOPS - 1)
        ]
        routes.append(
            respx.get(_chain_url(MAX_REDIRECT_HOPS - 1)).respond(
                302, headers={"Location": _VIDEO_URL}
            )
        )

        async with httpx.AsyncClient() as client:
            link = await ShortLinkResolver(client).resolve(_chain_url(0))

        assert link.video_id == "7301234567890123456"
        assert link.final_url == _VIDEO_URL
        assert [r.call_count for r in routes] == [1] * MAX_REDIRECT_HOPS
        assert respx.calls.call_count == MAX_REDIRECT_HOPS

    @respx.mock
    @pytest.mark.asyncio()
    async def test_relative_location_resolved_against_current_url(self) -> None:
        respx.get(_SHORT).respond(301, headers={"Location": "/share/video/55/"})

        async with httpx.AsyncClient() as client:
            link = await ShortLinkResolver(client).resolve(_SHORT)

        assert link.video_id == "55"
        assert link.final_url == "https://v.douyin.com/share/video/55/"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_modal_id_location(self) -> None:
        target = "https://www.douyin.com/discover?modal_id=42"
        respx.get(_SHORT).respond(302, headers={"Location": target})

        async with httpx.AsyncClient() as client:
            link = await ShortLinkResolver(client).resolve(_SHORT)

        assert link.video_id == "42"


class TestAutoFollowFallback:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_hop_limit_falls_back_to_auto_follow(self) -> None:
        hops = MAX_REDIRECT_HOPS + 2
        routes = [
            respx.get(_chain_url(i)).respond(302, headers={"Location": _chain_url(i + 1)})
            for i in range(hops)
        ]
        respx.get(_chain_url(hops)).respond(302, headers={"Location": _VIDEO_URL})
        respx.get(_VIDEO_URL).respond(200, text="<html></html>")

        async with httpx.AsyncClient() as client:
            link = await ShortLinkResolver(client).resolve(_chain_url(0))

        assert link.video_id == "7301234567890123456"
        # Manual chase stops after MAX_REDIRECT_HOPS requests.
        assert routes[MAX_REDIRECT_HOPS - 1].call_count == 2
        assert routes[MAX_REDIRECT_HOPS].call_count == 1

    @respx.mock
    @pytest.mark.asyncio()
    async def test_custom_hop_limit(self) -> None:
        respx.get(_chain_url(0)).respond(302, headers={"Location": _chain_url(1)})
        second = respx.get(_chain_url(1)).respond(302, headers={"Location": _VIDEO_URL})
        respx.get(_VIDEO_URL).respond(200)

        async with httpx.AsyncClient() as client:
            link = await ShortLinkResolver(client, max_hops=1).resolve(_chain_url(0))

        assert link.video_id == "7301234567890123456"
        assert second.call_count == 1

    @respx.mock
    @pytest.mark.asyncio()
    async def test_hop_fault_falls_back_to_auto_follow(self) -> None:
        respx.get(_SHORT).mock(
            side_effect=[
                httpx.ConnectTimeout("timed out"),
                httpx.Response(302, headers={"Location": _VIDEO_URL}),
            ]
        )
        respx.get(_VIDEO_URL).respond(200)

        async with httpx.AsyncClient() as client:
            link = await ShortLinkResolver(client).resolve(_SHORT)

        assert link.video_id == "7301234567890123456"
        assert link.final_url == _VIDEO_URL

    @respx.mock
    @pytest.mark.asyncio()
    async def test_terminal_200_without_id(self) -> None:
        route = respx.get(_SHORT).respond(200, text="<html>landing</html>")

        async with httpx.AsyncClient() as client:
            link = await ShortLinkResolver(client).resolve(_SHORT)

        assert link.video_id is None
        assert link.final_url == _SHORT
        # One manual request plus one auto-follow request.
        assert route.call_count == 2

    @respx.mock
    @pytest.mark.asyncio()
    async def test_auto_follow_fault_reports_last_url(self) -> None:
        respx.get(_SHORT).respond(302, headers={"Location": _chain_url(1)})
        respx.get(_chain_url(1)).mock(side_effect=httpx.ConnectError("refused"))

        async with httpx.AsyncClient() as client:
            link = await ShortLinkResolver(client).resolve(_SHORT)

        assert link.video_id is None
        assert link.final_url == _chain_url(1)

    @respx.mock
    @pytest.mark.asyncio()
    async def test_auto_follow_fault_does_not_raise(self) -> None:
        respx.get(_SHORT).mock(side_effect=httpx.ConnectError("refused"))

        async with httpx.AsyncClient() as client:
            link = await ShortLinkResolver(client).resolve(_SHORT)

        assert link.video_id is None
        assert link.final_url == _SHORT
