"""
Command Actions
---------------
Action factories shared by the static catalog and the dynamic clear parser.

Each factory returns an async callable taking the ExecutionContext. Handler
failures are translated to Error results here and never propagate.
"""

from typing import Any, Optional
import logging

from .handlers import ExecutionContext, call_handler, normalize_outcome
from .models import (
    CommandAction, CommandResult, ContentType,
    Error, NeedsConfirmation, OpenMainWindow, Success,
)
from core.errors import (
    PaletteError, context_unavailable_error,
    handler_failure_error, handler_missing_error, settings_write_error,
)

logger = logging.getLogger("pasta.commands.actions")

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 1440

CLEAR_ALL_PROMPT = "This will delete ALL clipboard history. Are you sure?"


def pluralize(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def format_time_description(minutes: int) -> str:
    """Render a minute count as minutes, hours or days."""
    if minutes < MINUTES_PER_HOUR:
        return f"{minutes} {pluralize(minutes, 'minute', 'minutes')}"
    if minutes < MINUTES_PER_DAY:
        hours = minutes // MINUTES_PER_HOUR
        return f"{hours} {pluralize(hours, 'hour', 'hours')}"
    days = minutes // MINUTES_PER_DAY
    return f"{days} {pluralize(days, 'day', 'days')}"


def _unavailable() -> Error:
    error = context_unavailable_error()
    logger.error(f"{error.category.name}: {error.message}")
    return Error(error.message)


async def execute_clear(context: Optional[ExecutionContext], minutes: int) -> CommandResult:
    """Delete entries copied within the last `minutes` minutes."""
    if context is None:
        return _unavailable()

    delete_recent = context.handlers.delete_recent
    if delete_recent is None:
        return Error(context.errors.handle(handler_missing_error("delete_recent")))

    try:
        outcome = normalize_outcome(await call_handler(delete_recent, minutes))
    except Exception as e:
        return Error(context.errors.handle(
            PaletteError.from_exception(e, details={"handler": "delete_recent", "minutes": minutes})
        ))

    if not outcome.ok:
        return Error(context.errors.handle(handler_failure_error(outcome.error, "delete_recent")))

    noun = pluralize(outcome.count, "entry", "entries")
    return Success(f"Cleared {outcome.count} {noun} from last {format_time_description(minutes)}")


async def execute_clear_all(context: Optional[ExecutionContext]) -> CommandResult:
    """Delete the whole clipboard history."""
    if context is None:
        return _unavailable()

    delete_all = context.handlers.delete_all
    if delete_all is None:
        return Error(context.errors.handle(handler_missing_error("delete_all")))

    try:
        outcome = normalize_outcome(await call_handler(delete_all))
    except Exception as e:
        return Error(context.errors.handle(
            PaletteError.from_exception(e, details={"handler": "delete_all"})
        ))

    if not outcome.ok:
        return Error(context.errors.handle(handler_failure_error(outcome.error, "delete_all")))

    logger.info(f"Cleared all {outcome.count} entries")
    return Success(f"Cleared all {outcome.count} entries")


# Factories

def clear_action(minutes: int) -> CommandAction:
    async def action(context: Optional[ExecutionContext]) -> CommandResult:
        return await execute_clear(context, minutes)
    return action


def clear_all_action() -> CommandAction:
    async def action(context: Optional[ExecutionContext]) -> CommandResult:
        if context is None:
            return _unavailable()

        async def confirm() -> CommandResult:
            return await execute_clear_all(context)

        return NeedsConfirmation(CLEAR_ALL_PROMPT, confirm)
    return action


def setting_action(key: str, value: Any, message: str) -> CommandAction:
    """Write a single settings value and report `message`."""
    async def action(context: Optional[ExecutionContext]) -> CommandResult:
        if context is None:
            return _unavailable()
        try:
            context.settings.set(key, value)
        except Exception as e:
            return Error(context.errors.handle(settings_write_error(key, e)))
        logger.info(f"Setting written: {key} = {value}")
        return Success(message)
    return action


def handler_action(handler_name: str, result: CommandResult) -> CommandAction:
    """
    Fire an optional UI handler and return a fixed result.

    A missing handler is a silent no-op.
    """
    async def action(context: Optional[ExecutionContext]) -> CommandResult:
        if context is None:
            return _unavailable()
        handler = getattr(context.handlers, handler_name)
        if handler is not None:
            await call_handler(handler)
        else:
            logger.debug(f"No {handler_name} handler configured")
        return result
    return action


def open_main_window_action(content_type: Optional[ContentType]) -> CommandAction:
    async def action(context: Optional[ExecutionContext]) -> CommandResult:
        return OpenMainWindow(content_type)
    return action


def static_action(result: CommandResult) -> CommandAction:
    async def action(context: Optional[ExecutionContext]) -> CommandResult:
        return result
    return action
