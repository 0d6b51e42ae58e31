# Commands module - Palette command catalog, search and execution
# Actions reach the host app only through injected handlers and the settings store

from .models import (
    Command, CommandCategory, CommandResult, ContentType,
    Success, NeedsConfirmation, Error, OpenMainWindow, Dismissed,
)
from .handlers import CommandHandlers, DeleteOutcome, ExecutionContext
from .catalog import CommandCatalog, DuplicateCommandError, build_default_commands
from .dynamic import parse_dynamic_clear, parse_clear_duration
from .actions import format_time_description
from .registry import CommandRegistry
from .session import PaletteSession, PendingConfirmation, split_command_query

__all__ = [
    "Command", "CommandCategory", "CommandResult", "ContentType",
    "Success", "NeedsConfirmation", "Error", "OpenMainWindow", "Dismissed",
    "CommandHandlers", "DeleteOutcome", "ExecutionContext",
    "CommandCatalog", "DuplicateCommandError", "build_default_commands",
    "parse_dynamic_clear", "parse_clear_duration", "format_time_description",
    "CommandRegistry",
    "PaletteSession", "PendingConfirmation", "split_command_query",
]
