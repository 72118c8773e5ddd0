"""Short link resolution with early video-id detection.

Share links (``v.douyin.com/xxxx``) go through a variable number of
redirect hops before reaching a page URL that carries the aweme id.
Redirects are followed manually so the id can be picked up from the
first ``Location`` that exposes it, without downloading the final page.

The chase is a small state machine::

    Chasing(url, hops) --3xx, no id--> Chasing(next, hops + 1)
    Chasing(url, hops) --3xx, id-----> ResolvedId(id, next)
    Chasing(url, hops) --terminal----> ResolvedId | Exhausted
    Chasing(url, hops) --fault/limit-> Exhausted

``Exhausted`` hands over to a single auto-follow request.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urljoin

import httpx
import structlog

from vidrelay.domain.entities.video import ResolvedLink

from .constants import (
    HTML_ACCEPT,
    MAX_REDIRECT_HOPS,
    MOBILE_USER_AGENT,
    REDIRECT_FOLLOW_TIMEOUT,
    REDIRECT_HOP_TIMEOUT,
)
from .ids import extract_video_id

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Chasing:
    url: str
    hops: int = 0


@dataclass(frozen=True)
class ResolvedId:
    video_id: str
    url: str


@dataclass(frozen=True)
class Exhausted:
    url: str


ChaseState = Chasing | ResolvedId | Exhausted


def _detect(*candidates: str) -> ResolvedId | None:
    """Return the first candidate URL that exposes a video id."""
    for url in candidates:
        if not url:
            continue
        video_id = extract_video_id(url)
        if video_id is not None:
            return ResolvedId(video_id=video_id, url=url)
    return None


def _urls_from_fault(exc: httpx.HTTPError) -> list[str]:
    """Collect URLs an httpx error knows about (last request, last Location)."""
    urls: list[str] = []
    try:
        urls.append(str(exc.request.url))
    except RuntimeError:
        # Errors raised outside a request context carry no request.
        pass
    response = getattr(exc, "response", None)
    if isinstance(response, httpx.Response):
        location = response.headers.get("location")
        if location:
            urls.append(urljoin(str(response.url), location))
    return urls


class ShortLinkResolver:
    """Resolves share links to ``ResolvedLink(final_url, video_id)``."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        max_hops: int = MAX_REDIRECT_HOPS,
        hop_timeout: float = REDIRECT_HOP_TIMEOUT,
        follow_timeout: float = REDIRECT_FOLLOW_TIMEOUT,
        user_agent: str = MOBILE_USER_AGENT,
    ) -> None:
        self._http = http_client
        self._max_hops = max_hops
        self._hop_timeout = hop_timeout
        self._follow_timeout = follow_timeout
        self._headers = {"User-Agent": user_agent, "Accept": HTML_ACCEPT}

    async def resolve(self, url: str) -> ResolvedLink:
        """Follow *url* until a video id shows up.

        1. Id already in the input: return without any request.
        2. Manual hop-by-hop chase (bounded by ``max_hops``).
        3. Single auto-follow request as fallback.
        """
        direct = _detect(url)
        if direct is not None:
            log.info("redirect_id_in_input", video_id=direct.video_id)
            return ResolvedLink(final_url=url, video_id=direct.video_id)

        state: ChaseState = Chasing(url)
        while isinstance(state, Chasing):
            state = await self._step(state)

        if isinstance(state, ResolvedId):
            return ResolvedLink(final_url=state.url, video_id=state.video_id)

        log.info("redirect_fallback_auto_follow", url=url[:120])
        return await self._follow_automatically(url)

    async def _step(self, state: Chasing) -> ChaseState:
        """Issue one non-following request and compute the next state."""
        if state.hops >= self._max_hops:
            log.warning("redirect_hop_limit", hops=state.hops, url=state.url[:120])
            return Exhausted(state.url)

        try:
            resp = await self._http.get(
                state.url,
                headers=self._headers,
                follow_redirects=False,
                timeout=self._hop_timeout,
            )
        except httpx.HTTPError as exc:
            log.info(
                "redirect_hop_failed",
                url=state.url[:120],
                error=str(exc) or type(exc).__name__,
            )
            return Exhausted(state.url)

        location = resp.headers.get("location")
        if resp.is_redirect and location:
            next_url = urljoin(state.url, location)
            log.debug(
                "redirect_hop",
                status=resp.status_code,
                hop=state.hops + 1,
                next_url=next_url[:120],
            )
            return _detect(next_url) or Chasing(next_url, state.hops + 1)

        log.debug("redirect_terminal", status=resp.status_code, url=state.url[:120])
        return _detect(state.url, str(resp.url)) or Exhausted(state.url)

    async def _follow_automatically(self, url: str) -> ResolvedLink:
        """Let httpx follow every redirect and inspect where it ended up."""
        try:
            resp = await self._http.get(
                url,
                headers={"User-Agent": self._headers["User-Agent"]},
                follow_redirects=True,
                timeout=self._follow_timeout,
            )
        except httpx.HTTPError as exc:
            candidates = _urls_from_fault(exc)
            found = _detect(*candidates)
            final_url = found.url if found else (candidates[-1] if candidates else url)
            log.info(
                "redirect_auto_follow_failed",
                last_url=final_url[:120],
                error=str(exc) or type(exc).__name__,
            )
            return ResolvedLink(
                final_url=final_url,
                video_id=found.video_id if found else None,
            )

        final_url = str(resp.url)
        log.info("redirect_auto_follow_final", url=final_url[:120])
        return ResolvedLink(final_url=final_url, video_id=extract_video_id(final_url))
