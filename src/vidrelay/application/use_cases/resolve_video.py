"""Video resolution use case.

raw share text -> URL -> short link resolution -> strategies (in order)
-> domain normalization -> VideoInfo.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol

import structlog

from vidrelay.domain.entities.video import (
    DEFAULT_DESCRIPTION,
    AllStrategiesExhausted,
    IdentifierNotFound,
    InputInvalid,
    VideoInfo,
)
from vidrelay.domain.ports.extraction_strategy import ExtractionStrategyPort
from vidrelay.domain.ports.link_resolver import LinkResolverPort

log = structlog.get_logger(__name__)


class _DemoPolicy(Protocol):
    """Placeholder settings consumed by ResolveVideoUseCase."""

    enabled: bool
    url: str
    cover: str
    desc: str


# Type aliases for injected pure functions.
_UrlExtractFn = Callable[[str], str]
_NormalizeFn = Callable[[str], str]


class ResolveVideoUseCase:
    """Resolves pasted share text into a playable, watermark-free video.

    Strategies run sequentially and the first one returning a media URL
    wins.  Strategy faults are logged and count as "no match".  When every
    strategy misses, the demo policy decides between a placeholder record
    (``is_demo=True``) and ``AllStrategiesExhausted``.
    """

    def __init__(
        self,
        *,
        link_resolver: LinkResolverPort,
        strategies: Sequence[ExtractionStrategyPort],
        extract_url_fn: _UrlExtractFn,
        normalize_fn: _NormalizeFn,
        demo: _DemoPolicy,
        default_desc: str = DEFAULT_DESCRIPTION,
    ) -> None:
        self._link_resolver = link_resolver
        self._strategies = tuple(strategies)
        self._extract_url = extract_url_fn
        self._normalize = normalize_fn
        self._demo = demo
        self._default_desc = default_desc

    @property
    def strategy_names(self) -> list[str]:
        return [s.name for s in self._strategies]

    async def execute(self, raw_input: str) -> VideoInfo:
        """Run one resolution pass.

        Raises:
            InputInvalid: *raw_input* is blank.
            IdentifierNotFound: no video id behind the link.
            AllStrategiesExhausted: nothing matched and the demo policy
                is disabled.
        """
        if not raw_input or not raw_input.strip():
            raise InputInvalid()

        target_url = self._extract_url(raw_input)
        log.info("resolve_input", url=target_url[:120])

        link = await self._link_resolver.resolve(target_url)
        log.info(
            "resolve_short_link",
            final_url=link.final_url[:120],
            video_id=link.video_id,
        )
        if link.video_id is None:
            raise IdentifierNotFound()

        info = await self._run_strategies(link.video_id, link.final_url)
        if info is None:
            return self._exhausted(link.video_id)

        normalized = self._normalize(info.url)
        log.info(
            "resolve_success",
            video_id=link.video_id,
            url=normalized[:120],
        )
        return info.with_url(normalized)

    async def _run_strategies(self, video_id: str, page_url: str) -> VideoInfo | None:
        carried_desc = ""
        for strategy in self._strategies:
            outcome = await self._try_strategy(strategy, video_id, page_url)
            if outcome is None:
                continue
            if not outcome.url:
                # Metadata without media: remember the description only.
                carried_desc = outcome.desc or carried_desc
                continue
            log.info("strategy_success", strategy=strategy.name, video_id=video_id)
            desc = outcome.desc or carried_desc or self._default_desc
            return outcome.with_desc(desc)
        return None

    @staticmethod
    async def _try_strategy(
        strategy: ExtractionStrategyPort,
        video_id: str,
        page_url: str,
    ) -> VideoInfo | None:
        log.debug("strategy_attempt", strategy=strategy.name, video_id=video_id)
        try:
            return await strategy.attempt(video_id, page_url)
        except Exception:
            log.exception("strategy_error", strategy=strategy.name, video_id=video_id)
            return None

    def _exhausted(self, video_id: str) -> VideoInfo:
        if not self._demo.enabled:
            log.warning("resolve_all_strategies_failed", video_id=video_id)
            raise AllStrategiesExhausted()

        log.warning(
            "resolve_all_strategies_failed",
            video_id=video_id,
            fallback="demo",
        )
        return VideoInfo(
            url=self._demo.url,
            cover=self._demo.cover,
            desc=self._demo.desc,
            is_demo=True,
        )
