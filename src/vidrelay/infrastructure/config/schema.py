"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from vidrelay.domain.entities.video import DEFAULT_DESCRIPTION
from vidrelay.infrastructure.douyin import constants

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


def _require_positive(name: str, v: float) -> float:
    if v <= 0:
        raise ValueError(f"{name} must be > 0")
    return v


class ResolverConfig(BaseModel):
    """Short link resolution and extraction strategy settings."""

    max_redirect_hops: int = Field(
        default=constants.MAX_REDIRECT_HOPS,
        description="Max manual redirect hops before falling back to auto-follow.",
    )
    redirect_hop_timeout_seconds: float = Field(
        default=constants.REDIRECT_HOP_TIMEOUT,
        description="Timeout per manual redirect hop.",
    )
    redirect_follow_timeout_seconds: float = Field(
        default=constants.REDIRECT_FOLLOW_TIMEOUT,
        description="Timeout for the auto-follow fallback request.",
    )
    page_timeout_seconds: float = Field(
        default=constants.PAGE_TIMEOUT,
        description="Timeout for detail API and page fetches.",
    )
    api_timeout_seconds: float = Field(
        default=constants.LEGACY_API_TIMEOUT,
        description="Timeout for the legacy item-info API and the CDN probe.",
    )
    default_description: str = Field(
        default=DEFAULT_DESCRIPTION,
        description="Description used when a resolved video carries none.",
    )

    @field_validator("max_redirect_hops")
    @classmethod
    def _validate_hops(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_redirect_hops must be >= 1")
        return v

    @field_validator(
        "redirect_hop_timeout_seconds",
        "redirect_follow_timeout_seconds",
        "page_timeout_seconds",
        "api_timeout_seconds",
    )
    @classmethod
    def _validate_timeouts(cls, v: float, info: ValidationInfo) -> float:
        return _require_positive(info.field_name or "timeout", v)


class DemoConfig(BaseModel):
    """Placeholder returned when every extraction strategy fails.

    Enabled by default so the web client always has something to show;
    disable to surface the failure as an error instead.
    """

    enabled: bool = Field(
        default=True,
        description="Return a demo record instead of an error on total failure.",
    )
    url: str = Field(
        default="https://interactive-examples.mdn.mozilla.net/media/cc0-videos/flower.mp4",
        description="Demo media URL.",
    )
    cover: str = Field(
        default="https://picsum.photos/seed/douyin/400/600",
        description="Demo cover image URL.",
    )
    desc: str = Field(
        default="解析失败（服务器 IP 可能被限制）。展示示例视频供预览。",
        description="Demo description shown to the user.",
    )

    @field_validator("url")
    @classmethod
    def _validate_url(cls, v: str) -> str:
        if not v:
            raise ValueError("demo url must not be empty")
        return v


class ProxyConfig(BaseModel):
    """Streaming media proxy settings."""

    timeout_seconds: float = Field(
        default=constants.STREAM_TIMEOUT,
        description="Timeout for upstream media streaming.",
    )
    chunk_size: int = Field(
        default=65536,
        description="Relay chunk size in bytes.",
    )
    filename: str = Field(
        default="douyin_video.mp4",
        description="Fixed filename in Content-Disposition.",
    )
    default_content_type: str = Field(
        default="video/mp4",
        description="Content-Type used when upstream sends none.",
    )
    user_agent: str = Field(
        default=constants.MOBILE_USER_AGENT,
        description="User-Agent sent to the media CDN.",
    )
    referer: str = Field(
        default=constants.DOUYIN_REFERER,
        description="Referer sent to the media CDN.",
    )

    @field_validator("timeout_seconds")
    @classmethod
    def _validate_timeout(cls, v: float) -> float:
        return _require_positive("timeout_seconds", v)

    @field_validator("chunk_size")
    @classmethod
    def _validate_chunk_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("chunk_size must be > 0")
        return v


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/resolver/proxy/demo/logging).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="vidrelay", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP client (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Default timeout for the shared HTTP client.",
    )
    http_max_redirects: int = Field(
        default=10,
        validation_alias=AliasChoices(
            "http_max_redirects",
            AliasPath("http", "max_redirects"),
        ),
        description="Redirect limit for auto-following requests.",
    )

    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    proxy: ProxyConfig = Field(default_factory=ProxyConfig)
    demo: DemoConfig = Field(default_factory=DemoConfig)

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        return _require_positive("http_timeout_seconds", v)

    @field_validator("http_max_redirects")
    @classmethod
    def _validate_max_redirects(cls, v: int) -> int:
        if v < 0:
            raise ValueError("http_max_redirects must be >= 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "max_redirects": self.http_max_redirects,
            },
            "resolver": self.resolver.model_dump(),
            "proxy": self.proxy.model_dump(),
            "demo": self.demo.model_dump(),
            "logging": {"level": self.log_level, "format": self.log_format},
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Supported env var examples (flat, explicit):
    - VIDRELAY_HTTP_TIMEOUT_SECONDS
    - VIDRELAY_MAX_REDIRECT_HOPS
    - VIDRELAY_DEMO_ENABLED
    - VIDRELAY_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="VIDRELAY_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_max_redirects: Optional[int] = None

    max_redirect_hops: Optional[int] = None
    page_timeout_seconds: Optional[float] = None

    proxy_timeout_seconds: Optional[float] = None

    demo_enabled: Optional[bool] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
