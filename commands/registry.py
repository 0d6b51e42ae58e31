"""
Command Registry
----------------
Search and execution over the command catalog.

Search is synchronous and pure: it only reads the catalog, so concurrent
searches need no locking. Execution awaits a single command action with the
registry's execution context.
"""

from typing import List, Optional

from .catalog import CommandCatalog
from .dynamic import parse_dynamic_clear
from .handlers import CommandHandlers, ExecutionContext
from .models import Command, CommandCategory, CommandResult
from settings import SettingsStore
from infra.logging import get_logger


class CommandRegistry:
    """
    Registry of palette commands with search and execution.

    Construct one per application and hand it to whatever owns the palette.
    """

    def __init__(
        self,
        handlers: Optional[CommandHandlers] = None,
        settings: Optional[SettingsStore] = None,
        catalog: Optional[CommandCatalog] = None,
    ):
        self.context = ExecutionContext()
        if handlers is not None:
            self.context.handlers = handlers
        if settings is not None:
            self.context.settings = settings
        self.catalog = catalog if catalog is not None else CommandCatalog()
        self._logger = get_logger("commands.registry")

    @property
    def handlers(self) -> CommandHandlers:
        return self.context.handlers

    @handlers.setter
    def handlers(self, handlers: CommandHandlers) -> None:
        self.context.handlers = handlers

    @property
    def commands(self) -> List[Command]:
        return list(self.catalog)

    def search(self, query: str) -> List[Command]:
        """
        Search commands matching the query (without the leading "!").

        Prefix matches come before substring matches, each in catalog order.
        A dynamic clear command, when the query is one, comes first.
        """
        normalized = query.strip().lower()

        if not normalized:
            return list(self.catalog)

        dynamic = parse_dynamic_clear(normalized)
        if dynamic is not None:
            results = [dynamic]
            results.extend(
                cmd for cmd in self.catalog
                if cmd.matches(normalized) and cmd.id != dynamic.id
            )
            self._logger.debug(f"Dynamic match for {normalized!r}: {dynamic.id}")
            return results

        prefix = []
        contains = []
        for cmd in self.catalog:
            if cmd.matches_prefix(normalized):
                prefix.append(cmd)
            elif cmd.matches(normalized):
                contains.append(cmd)

        self._logger.debug(
            f"Search {normalized!r}: {len(prefix)} prefix, {len(contains)} contains"
        )
        return prefix + contains

    async def execute(self, command: Command) -> CommandResult:
        """Execute a command and return its result."""
        return await command.action(self.context)

    def get_command(self, command_id: str) -> Optional[Command]:
        """Get a static command by ID."""
        return self.catalog.get(command_id)

    def list_by_category(self, category: CommandCategory) -> List[Command]:
        return self.catalog.by_category(category)

    def __len__(self) -> int:
        return len(self.catalog)

    def __contains__(self, command_id: str) -> bool:
        return command_id in self.catalog
