"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from vidrelay.application.use_cases.resolve_video import ResolveVideoUseCase
from vidrelay.infrastructure.config.schema import AppConfig
from vidrelay.infrastructure.douyin.domains import normalize_video_url
from vidrelay.infrastructure.douyin.ids import extract_first_url
from vidrelay.infrastructure.douyin.redirects import ShortLinkResolver
from vidrelay.infrastructure.douyin.strategies import build_default_strategies
from vidrelay.infrastructure.streaming.media_proxy import MediaProxy
from vidrelay.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def build_http_client(config: AppConfig) -> httpx.AsyncClient:
    """Shared client; every call passes its own headers and timeout.

    The cookie jar accepts no domains, so upstream ``Set-Cookie`` headers
    never carry over from one caller's requests to another's.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        max_redirects=config.http_max_redirects,
        follow_redirects=False,
        cookies=CookieJar(policy=DefaultCookiePolicy(allowed_domains=[])),
    )


def wire_services(state: AppState, config: AppConfig) -> None:
    """Build resolver, strategies, use case and proxy on an existing client."""
    resolver_cfg = config.resolver

    link_resolver = ShortLinkResolver(
        state.http_client,
        max_hops=resolver_cfg.max_redirect_hops,
        hop_timeout=resolver_cfg.redirect_hop_timeout_seconds,
        follow_timeout=resolver_cfg.redirect_follow_timeout_seconds,
    )
    strategies = build_default_strategies(
        state.http_client,
        page_timeout=resolver_cfg.page_timeout_seconds,
        api_timeout=resolver_cfg.api_timeout_seconds,
    )
    state.resolve_video_uc = ResolveVideoUseCase(
        link_resolver=link_resolver,
        strategies=strategies,
        extract_url_fn=extract_first_url,
        normalize_fn=normalize_video_url,
        demo=config.demo,
        default_desc=resolver_cfg.default_description,
    )
    log.info(
        "resolve_use_case_initialized",
        strategies=state.resolve_video_uc.strategy_names,
        demo_fallback=config.demo.enabled,
    )

    state.media_proxy = MediaProxy(
        state.http_client,
        user_agent=config.proxy.user_agent,
        referer=config.proxy.referer,
        timeout=config.proxy.timeout_seconds,
        chunk_size=config.proxy.chunk_size,
        filename=config.proxy.filename,
        default_content_type=config.proxy.default_content_type,
        normalize_fn=normalize_video_url,
    )
    log.info("media_proxy_initialized", filename=config.proxy.filename)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. HTTP client (shared by resolver, strategies and proxy)
        2. Resolution use case + media proxy
    """
    state = cast(AppState, app.state)
    config = state.config

    state.http_client = build_http_client(config)
    log.info(
        "http_client_initialized",
        timeout_seconds=config.http_timeout_seconds,
        max_redirects=config.http_max_redirects,
    )

    wire_services(state, config)
    log.info("app_startup_complete")

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")
        log.info("app_shutdown_complete")
