"""Domain entities for video link resolution.

Pure value objects and domain errors without framework dependencies or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

DEFAULT_DESCRIPTION = "抖音视频"


@dataclass(frozen=True)
class ResolvedLink:
    """Outcome of short link resolution.

    ``video_id`` is ``None`` when no identifier could be found; this is a
    valid terminal state and distinct from an empty string.
    """

    final_url: str
    video_id: str | None = None


@dataclass(frozen=True)
class VideoInfo:
    """A resolved, directly fetchable video plus minimal metadata."""

    url: str
    cover: str = ""
    desc: str = ""
    is_demo: bool = False

    def with_url(self, url: str) -> VideoInfo:
        return replace(self, url=url)

    def with_desc(self, desc: str) -> VideoInfo:
        return replace(self, desc=desc)

    def to_payload(self) -> dict[str, str | bool]:
        """Serialize to the JSON shape consumed by the web client."""
        payload: dict[str, str | bool] = {
            "url": self.url,
            "cover": self.cover,
            "desc": self.desc,
        }
        if self.is_demo:
            payload["isDemo"] = True
        return payload


@dataclass(frozen=True)
class MediaStream:
    """Header metadata of an upstream media response being relayed."""

    content_type: str
    filename: str
    content_length: str | None = None

    def response_headers(self, *, download: bool = True) -> dict[str, str]:
        """Headers for the relayed response.

        The disposition always names the fixed *filename*, never the
        upstream URL's own name.
        """
        disposition = "attachment" if download else "inline"
        headers = {
            "Content-Type": self.content_type,
            "Content-Disposition": f'{disposition}; filename="{self.filename}"',
        }
        if self.content_length:
            headers["Content-Length"] = self.content_length
        return headers


class ResolutionError(Exception):
    """Base error for video resolution and proxying."""

    public_message = "Video resolution failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)


class InputInvalid(ResolutionError):
    """No URL-like text was supplied."""

    public_message = "A video link is required"


class IdentifierNotFound(ResolutionError):
    """Redirect chasing finished without a usable video identifier."""

    public_message = "Could not extract a video ID from the link, please check the link format"


class UpstreamFault(ResolutionError):
    """A single network/parse failure inside a strategy or redirect hop.

    Always recovered locally; never surfaced to callers.
    """

    public_message = "Upstream request failed"


class AllStrategiesExhausted(ResolutionError):
    """Every extraction strategy failed for a known identifier."""

    public_message = (
        "All extraction strategies failed. The video may have been deleted, "
        "the server IP may be restricted, or the link format is unsupported"
    )


class ProxyTransportFault(ResolutionError):
    """Streaming relay of upstream media failed."""

    public_message = "Video download failed, please try again later"
