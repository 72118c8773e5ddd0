from .resolve_video import ResolveVideoUseCase

__all__ = ["ResolveVideoUseCase"]
