from __future__ import annotations

from .load import load_config
from .schema import AppConfig, DemoConfig, EnvOverrides, ProxyConfig, ResolverConfig

__all__ = [
    "AppConfig",
    "DemoConfig",
    "EnvOverrides",
    "ProxyConfig",
    "ResolverConfig",
    "load_config",
]
