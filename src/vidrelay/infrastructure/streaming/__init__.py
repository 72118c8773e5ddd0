from .media_proxy import MediaProxy

__all__ = ["MediaProxy"]
