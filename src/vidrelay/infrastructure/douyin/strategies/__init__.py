"""Extraction strategies, tried in the order of ``build_default_strategies``."""

from __future__ import annotations

import httpx

from vidrelay.domain.ports.extraction_strategy import ExtractionStrategyPort

from .desktop_page import DesktopPageStrategy
from .detail_api import DetailApiStrategy
from .direct_cdn import DirectCdnStrategy
from .item_info import ItemInfoStrategy
from .mobile_page import MobilePageStrategy


def build_default_strategies(
    http_client: httpx.AsyncClient,
    *,
    page_timeout: float | None = None,
    api_timeout: float | None = None,
) -> list[ExtractionStrategyPort]:
    """Ordered registry: detail API, desktop page, mobile page, item info, direct CDN."""
    page_kwargs = {"timeout": page_timeout} if page_timeout is not None else {}
    api_kwargs = {"timeout": api_timeout} if api_timeout is not None else {}
    return [
        DetailApiStrategy(http_client, **page_kwargs),
        DesktopPageStrategy(http_client, **page_kwargs),
        MobilePageStrategy(http_client, **page_kwargs),
        ItemInfoStrategy(http_client, **api_kwargs),
        DirectCdnStrategy(http_client, **api_kwargs),
    ]


__all__ = [
    "DesktopPageStrategy",
    "DetailApiStrategy",
    "DirectCdnStrategy",
    "ItemInfoStrategy",
    "MobilePageStrategy",
    "build_default_strategies",
]
