from .video import (
    DEFAULT_DESCRIPTION,
    AllStrategiesExhausted,
    IdentifierNotFound,
    InputInvalid,
    MediaStream,
    ProxyTransportFault,
    ResolutionError,
    ResolvedLink,
    UpstreamFault,
    VideoInfo,
)

__all__ = [
    "DEFAULT_DESCRIPTION",
    "AllStrategiesExhausted",
    "IdentifierNotFound",
    "InputInvalid",
    "MediaStream",
    "ProxyTransportFault",
    "ResolutionError",
    "ResolvedLink",
    "UpstreamFault",
    "VideoInfo",
]
