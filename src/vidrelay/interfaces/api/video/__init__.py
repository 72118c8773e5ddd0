from .router import router, validation_error_handler

__all__ = ["router", "validation_error_handler"]
