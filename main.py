#!/usr/bin/env python3
"""
Pasta Command Palette
=====================

Text-mode driver for the clipboard history command palette.

Usage:
    python main.py                      # Interactive palette
    python main.py --config pasta.yaml  # Use a config file
    python main.py --help               # Show help

Type "!" followed by a command (e.g. "!clear 5 mins", "!theme dark").
Type "!" alone to list every command. Type "quit" to exit.
"""

import argparse
import asyncio
import logging
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

# Ensure project root is in path
sys.path.insert(0, str(Path(__file__).parent))

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table
from rich.text import Text

from commands import (
    CommandHandlers, CommandRegistry, CommandResult, ContentType,
    Dismissed, Error, NeedsConfirmation, OpenMainWindow, PaletteSession, Success,
)
from infra import ConfigManager, configure_logging, get_logger
from settings import YAMLSettingsStore


console = Console()


class DemoHistory:
    """In-memory clipboard history standing in for the real store."""

    def __init__(self, entries: Optional[List[datetime]] = None):
        now = datetime.now()
        self.entries: List[datetime] = entries if entries is not None else [
            now - timedelta(minutes=offset)
            for offset in (1, 3, 8, 25, 50, 90, 300, 1000, 2000, 5000)
        ]

    def delete_recent(self, minutes: int) -> int:
        cutoff = datetime.now() - timedelta(minutes=minutes)
        kept = [ts for ts in self.entries if ts < cutoff]
        deleted = len(self.entries) - len(kept)
        self.entries = kept
        return deleted

    def delete_all(self) -> int:
        count = len(self.entries)
        self.entries = []
        return count


def build_handlers(history: DemoHistory) -> CommandHandlers:
    def open_main_window(content_type: Optional[ContentType]) -> None:
        label = content_type.value if content_type else "all"
        console.print(f"[cyan]Opening main window (filter: {label})[/cyan]")

    return CommandHandlers(
        delete_recent=history.delete_recent,
        delete_all=history.delete_all,
        open_settings=lambda: console.print("[cyan]Opening settings...[/cyan]"),
        check_for_updates=lambda: console.print("[cyan]Checking for updates...[/cyan]"),
        open_release_notes=lambda: console.print("[cyan]Opening release notes...[/cyan]"),
        quit_app=lambda: console.print("[cyan]Quit requested[/cyan]"),
        open_main_window=open_main_window,
    )


def print_banner() -> None:
    banner = Text()
    banner.append("Pasta", style="bold cyan")
    banner.append(" - Clipboard History Command Palette\n\n", style="dim")
    banner.append("Type ", style="dim")
    banner.append("!command", style="bold green")
    banner.append(" to run a command | ", style="dim")
    banner.append("quit", style="bold red")
    banner.append(" to exit", style="dim")

    console.print(Panel(banner, title="Welcome", border_style="blue"))


def print_results(session: PaletteSession) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", style="dim", width=3)
    table.add_column("Command", style="bold")
    table.add_column("Description")
    table.add_column("Category", style="dim")

    for index, command in enumerate(session.command_results[:session.max_visible]):
        marker = "▶" if index == session.selected_index else str(index + 1)
        style = "red" if command.is_destructive else None
        table.add_row(marker, command.trigger, command.description, command.category.value, style=style)

    console.print(table)


def print_result(result: CommandResult) -> None:
    if isinstance(result, Success):
        console.print(f"[bold green]✓[/bold green] {result.message}")
    elif isinstance(result, Error):
        console.print(f"[bold red]Error:[/bold red] {result.message}")
    elif isinstance(result, OpenMainWindow):
        console.print("[dim]Main window opened[/dim]")
    elif isinstance(result, Dismissed):
        console.print("[dim]Dismissed[/dim]")


async def run_palette(session: PaletteSession) -> None:
    """Read-eval loop over the palette session."""
    print_banner()
    logger = get_logger("main")

    while True:
        try:
            text = console.input("\n[bold cyan]>[/bold cyan] ")
        except (KeyboardInterrupt, EOFError):
            break

        if text.strip().lower() in ("quit", "exit", "q"):
            break

        session.prepare()
        session.update_query(text)

        if not session.is_command_mode:
            console.print("[yellow]Commands start with[/yellow] "
                          f"[bold]{session.command_prefix}[/bold]")
            continue

        if not session.command_results:
            console.print("[yellow]No matching commands[/yellow]")
            continue

        print_results(session)
        if text.strip() == session.command_prefix:
            continue

        result = await session.execute_selected()

        while isinstance(result, NeedsConfirmation):
            console.print(f"[bold yellow]⚠[/bold yellow] {result.message}")
            approved = Confirm.ask("Confirm", default=False, console=console)
            result = await session.confirm(approved)

        if result is not None:
            logger.debug(f"Result: {result!r}")
            print_result(result)

    console.print("\n[yellow]Shutting down...[/yellow]")


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Pasta - Clipboard History Command Palette"
    )
    parser.add_argument(
        "--config", "-c",
        default="config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--settings", "-s",
        default=None,
        help="Path to the settings file written by commands"
    )
    parser.add_argument(
        "--log-level", "-l",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    args = parser.parse_args()

    config = ConfigManager(args.config).palette_config()
    if args.settings:
        config.settings_path = args.settings
    if args.log_level:
        config.log_level = args.log_level

    configure_logging(
        level=getattr(logging, config.log_level, logging.INFO),
        log_dir=config.log_dir,
        rich_console=console,
    )
    logger = get_logger("main")

    try:
        registry = CommandRegistry(
            handlers=build_handlers(DemoHistory()),
            settings=YAMLSettingsStore(config.settings_path),
        )
        session = PaletteSession(
            registry,
            command_prefix=config.command_prefix,
            max_visible=config.max_visible_commands,
            confirmation_timeout_seconds=config.confirmation_timeout_seconds,
        )
        asyncio.run(run_palette(session))
        return 0

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130
    except Exception as e:
        logger.exception("Fatal error")
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
