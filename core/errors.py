"""
Error Handling Module
---------------------
Typed palette errors and their translation to Error results.

Handler failures never propagate out of a command. They are classified,
logged, and returned to the caller as an Error result. Nothing is retried.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Dict, List, Optional
import logging
import traceback


class ErrorCategory(Enum):
    """Categories of palette errors."""
    HANDLER_MISSING = auto()       # Required handler not wired up
    HANDLER_FAILURE = auto()       # Handler raised or reported failure
    CONTEXT_UNAVAILABLE = auto()   # Action ran without an execution context
    CONFIRMATION_EXPIRED = auto()  # User confirmed too late
    NO_PENDING = auto()            # Confirm called with nothing pending
    SETTINGS_FAILURE = auto()      # Settings store rejected a write


@dataclass
class PaletteError:
    """
    Structured error with metadata.

    `message` is already the user-facing text.
    """
    category: ErrorCategory
    message: str
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime = field(default_factory=datetime.now)
    stack_trace: Optional[str] = None

    @classmethod
    def from_exception(
        cls,
        exception: Exception,
        category: ErrorCategory = ErrorCategory.HANDLER_FAILURE,
        details: Optional[Dict] = None
    ) -> "PaletteError":
        """Create error from an exception raised by a handler."""
        return cls(
            category=category,
            message=f"Failed to clear: {describe_exception(exception)}",
            details=details,
            stack_trace=traceback.format_exc(),
        )

    def __repr__(self) -> str:
        return f"PaletteError({self.category.name}: {self.message})"


def describe_exception(exception: Exception) -> str:
    """Human-readable description of a handler exception."""
    text = str(exception)
    return text if text else type(exception).__name__


class ErrorHandler:
    """
    Central error handler with logging and a bounded history.
    """

    LEVELS: Dict[ErrorCategory, int] = {
        ErrorCategory.HANDLER_MISSING: logging.WARNING,
        ErrorCategory.HANDLER_FAILURE: logging.WARNING,
        ErrorCategory.CONTEXT_UNAVAILABLE: logging.ERROR,
        ErrorCategory.CONFIRMATION_EXPIRED: logging.INFO,
        ErrorCategory.NO_PENDING: logging.INFO,
        ErrorCategory.SETTINGS_FAILURE: logging.WARNING,
    }

    def __init__(self, max_history: int = 100):
        self._logger = logging.getLogger("pasta.errors")
        self._error_history: List[PaletteError] = []
        self._max_history = max_history

    def handle(self, error: PaletteError) -> str:
        """Log an error, remember it, and return its user-facing message."""
        level = self.LEVELS.get(error.category, logging.ERROR)
        self._logger.log(
            level,
            f"{error.category.name}: {error.message}",
            extra={"details": error.details}
        )
        if error.stack_trace:
            self._logger.debug(f"Stack trace:\n{error.stack_trace}")

        self._error_history.append(error)
        if len(self._error_history) > self._max_history:
            self._error_history.pop(0)

        return error.message

    def get_error_stats(self) -> Dict[str, int]:
        """Count errors seen so far, by category name."""
        stats: Dict[str, int] = {}
        for error in self._error_history:
            key = error.category.name
            stats[key] = stats.get(key, 0) + 1
        return stats

    @property
    def history(self) -> List[PaletteError]:
        return list(self._error_history)

    def clear_history(self) -> None:
        self._error_history.clear()


# Convenience functions

def handler_missing_error(handler_name: str) -> PaletteError:
    """A delete handler was never configured."""
    return PaletteError(
        category=ErrorCategory.HANDLER_MISSING,
        message="Delete handler not configured",
        details={"handler": handler_name}
    )


def handler_failure_error(reason: str, handler_name: str = "") -> PaletteError:
    """A delete handler reported failure without raising."""
    return PaletteError(
        category=ErrorCategory.HANDLER_FAILURE,
        message=f"Failed to clear: {reason}",
        details={"handler": handler_name}
    )


def context_unavailable_error() -> PaletteError:
    return PaletteError(
        category=ErrorCategory.CONTEXT_UNAVAILABLE,
        message="Registry unavailable"
    )


def settings_write_error(key: str, exception: Exception) -> PaletteError:
    """The settings store raised while writing `key`."""
    return PaletteError(
        category=ErrorCategory.SETTINGS_FAILURE,
        message=f"Failed to save setting: {describe_exception(exception)}",
        details={"key": key},
        stack_trace=traceback.format_exc(),
    )
