"""Shared test fixtures for the vidrelay test suite."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from vidrelay.domain.entities import VideoInfo
from vidrelay.infrastructure.config import AppConfig, DemoConfig

# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clear_vidrelay_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep VIDRELAY_* variables from the developer shell out of tests."""
    for key in list(os.environ):
        if key.upper().startswith("VIDRELAY_"):
            monkeypatch.delenv(key, raising=False)
    yield


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def video_info() -> VideoInfo:
    return VideoInfo(
        url="https://www.douyin.com/aweme/v1/play/?video_id=v0200f",
        cover="https://p3.douyinpic.com/cover.jpeg",
        desc="山间日落",
    )


@pytest.fixture()
def demo_config() -> DemoConfig:
    return DemoConfig()


# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def app_config() -> AppConfig:
    return AppConfig(environment="test")
