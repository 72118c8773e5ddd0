"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

import httpx
from starlette.datastructures import State

from vidrelay.application.use_cases.resolve_video import ResolveVideoUseCase
from vidrelay.infrastructure.config import AppConfig
from vidrelay.infrastructure.streaming.media_proxy import MediaProxy


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient

    # Application services
    resolve_video_uc: ResolveVideoUseCase
    media_proxy: MediaProxy
