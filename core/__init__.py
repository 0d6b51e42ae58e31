# Core module - error classification shared by commands and the palette session
# Handler failures become Error results here; nothing propagates to the UI

from .errors import (
    ErrorHandler, PaletteError, ErrorCategory,
    handler_missing_error, handler_failure_error, context_unavailable_error,
    settings_write_error,
)

__all__ = [
    "ErrorHandler", "PaletteError", "ErrorCategory",
    "handler_missing_error", "handler_failure_error", "context_unavailable_error",
    "settings_write_error",
]
