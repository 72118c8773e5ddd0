"""vidrelay: resolve Douyin share links to watermark-free media and relay it."""

__version__ = "0.1.0"
