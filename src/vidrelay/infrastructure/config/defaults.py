"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "vidrelay",
    "environment": "dev",
    "http": {
        "timeout_seconds": 30.0,
        "max_redirects": 10,
    },
    "resolver": {
        "max_redirect_hops": 10,
        "redirect_hop_timeout_seconds": 10.0,
        "redirect_follow_timeout_seconds": 15.0,
        "page_timeout_seconds": 15.0,
        "api_timeout_seconds": 10.0,
    },
    "proxy": {
        "timeout_seconds": 120.0,
        "filename": "douyin_video.mp4",
    },
    "demo": {
        "enabled": True,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
