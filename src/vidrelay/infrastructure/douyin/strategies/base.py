"""Shared plumbing for extraction strategies."""

from __future__ import annotations

import httpx
import structlog

from vidrelay.domain.entities.video import VideoInfo

from ..constants import PAGE_TIMEOUT

log = structlog.get_logger(__name__)

# Errors a strategy treats as "no match" after logging.  json.loads raises
# RecursionError on pathologically nested input.
PARSE_ERRORS = (ValueError, KeyError, TypeError, IndexError, RecursionError)


def partial_info(desc: object) -> VideoInfo | None:
    """Description-only outcome for a response that had metadata but no media.

    The pipeline carries the description forward to a later strategy's
    result instead of losing it.
    """
    if isinstance(desc, str) and desc:
        return VideoInfo(url="", desc=desc)
    return None


class StrategyBase:
    """Holds the shared HTTP client and per-call timeout.

    Subclasses set ``name`` and implement ``attempt()``.
    """

    name: str = ""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        timeout: float = PAGE_TIMEOUT,
    ) -> None:
        self._http = http_client
        self._timeout = timeout
        self._log = structlog.get_logger(f"vidrelay.strategy.{self.name}")

    async def attempt(self, video_id: str, page_url: str) -> VideoInfo | None:
        raise NotImplementedError

    def _log_http_failure(self, video_id: str, exc: httpx.HTTPError) -> None:
        if isinstance(exc, httpx.TimeoutException):
            self._log.warning(f"{self.name}_timeout", video_id=video_id)
            return
        self._log.warning(
            f"{self.name}_http_error",
            video_id=video_id,
            error=str(exc) or type(exc).__name__,
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
