"""Port for turning a short link into a video identifier."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from vidrelay.domain.entities.video import ResolvedLink


@runtime_checkable
class LinkResolverPort(Protocol):
    """Follows redirects until a video identifier is exposed."""

    async def resolve(self, url: str) -> ResolvedLink:
        """Resolve *url*; ``video_id`` is None when nothing was found."""
        ...
