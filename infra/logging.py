"""
Pasta Centralized Logging
-------------------------
Structured logging with session_id propagation.

Design:
- Every time the palette opens it gets a unique session_id
- session_id propagates through: Session -> Registry -> Actions -> Settings
- Supports both console (Rich) and file (JSON lines) output
- Severity discipline: DEBUG=search traces, INFO=state changes,
  WARNING=recoverable handler problems, ERROR=abort

Usage:
    from infra.logging import get_logger, SessionContext

    logger = get_logger("palette")

    with SessionContext() as session_id:
        logger.info("Palette opened")
"""

import contextvars
import json
import logging
import logging.handlers
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAMESPACE = "pasta"

_session_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "session_id", default=None
)


def generate_session_id() -> str:
    """Generate a unique palette session ID."""
    return f"session_{uuid.uuid4().hex[:12]}"


def get_session_id() -> Optional[str]:
    return _session_id_var.get()


def set_session_id(session_id: str) -> contextvars.Token:
    return _session_id_var.set(session_id)


def reset_session_id(token: contextvars.Token) -> None:
    _session_id_var.reset(token)


class SessionContext:
    """
    Context manager for session scoping.

    Usage:
        with SessionContext() as session_id:
            # All logs within this block carry session_id
            logger.info("Searching...")
    """

    def __init__(self, session_id: Optional[str] = None):
        self._session_id = session_id or generate_session_id()
        self._token: Optional[contextvars.Token] = None

    @property
    def session_id(self) -> str:
        return self._session_id

    def __enter__(self) -> str:
        self._token = set_session_id(self._session_id)
        return self._session_id

    def __exit__(self, *args) -> None:
        if self._token is not None:
            reset_session_id(self._token)
            self._token = None


class SessionIdFilter(logging.Filter):
    """Logging filter that adds session_id to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "session_id", None) is None:
            record.session_id = get_session_id() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured file logging."""

    EXTRA_FIELDS = ("details", "command_id", "query")

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "session_id": getattr(record, "session_id", "-"),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key in self.EXTRA_FIELDS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        return json.dumps(log_entry, default=str)


# Global configuration state
_logging_initialized = False

MAX_LOG_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 3


def configure_logging(
    level: int = logging.INFO,
    log_dir: Optional[str] = None,
    console: bool = True,
    file: bool = True,
    rich_console: Optional[Console] = None,
) -> None:
    """
    Configure the Pasta logging system. Later calls are no-ops.

    Args:
        level: Logging level (default INFO)
        log_dir: Directory for log files (default: ./logs)
        console: Enable Rich console output
        file: Enable JSON file output
        rich_console: Console to log to (default: a new stderr console)
    """
    global _logging_initialized

    if _logging_initialized:
        return

    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    root_logger.setLevel(logging.DEBUG if file else level)
    root_logger.handlers.clear()

    session_filter = SessionIdFilter()

    if console:
        console_handler = RichHandler(
            console=rich_console or Console(stderr=True),
            rich_tracebacks=True,
            show_path=False,
        )
        console_handler.setLevel(level)
        console_handler.addFilter(session_filter)
        root_logger.addHandler(console_handler)

    if file:
        log_path = Path(log_dir) if log_dir else Path("logs")
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            str(log_path / "pasta.log"),
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)  # File gets everything
        file_handler.setFormatter(JSONFormatter())
        file_handler.addFilter(session_filter)
        root_logger.addHandler(file_handler)

    _logging_initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the Pasta namespace.

    Args:
        name: Logger name (prefixed with 'pasta.' if not already)
    """
    if not name.startswith(LOGGER_NAMESPACE):
        name = f"{LOGGER_NAMESPACE}.{name}"

    return logging.getLogger(name)
