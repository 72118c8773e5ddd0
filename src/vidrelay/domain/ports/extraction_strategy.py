"""Port for a single video extraction attempt."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from vidrelay.domain.entities.video import VideoInfo


@runtime_checkable
class ExtractionStrategyPort(Protocol):
    """Turns a video identifier into a playable media URL.

    Implementations make exactly one attempt against one upstream source
    (JSON API, embedded page data, raw pattern match, ...).
    """

    @property
    def name(self) -> str:
        """Strategy name used in logs (e.g. 'detail_api')."""
        ...

    async def attempt(self, video_id: str, page_url: str) -> VideoInfo | None:
        """Try to extract video info for *video_id*.

        *page_url* is the URL reached by short link resolution; most
        strategies ignore it.  Returns None when nothing matched.
        """
        ...
