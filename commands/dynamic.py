"""
Dynamic Clear Commands
----------------------
Recognizes "clear <n> <unit>" queries that have no static catalog entry,
e.g. "clear 5 mins", "clear 2 hours", "clear 3 days".

A parse failure is a plain no-match, never an error.
"""

from typing import Dict, Optional, Tuple
import re

from .actions import MINUTES_PER_DAY, MINUTES_PER_HOUR, clear_action, pluralize
from .models import Command, CommandCategory

DYNAMIC_CLEAR_PATTERN = re.compile(
    r'^clear\s+([0-9]+)\s*(mins?|minutes?|m|hours?|hr?|days?|d)$',
    re.IGNORECASE
)

# Durations beyond a signed 64-bit minute count are not representable
MAX_DURATION_MINUTES = 2**63 - 1

# unit -> (minutes per unit, singular, plural)
_UNITS: Dict[str, Tuple[int, str, str]] = {}
for _unit in ("m", "min", "mins", "minute", "minutes"):
    _UNITS[_unit] = (1, "minute", "minutes")
for _unit in ("h", "hr", "hour", "hours"):
    _UNITS[_unit] = (MINUTES_PER_HOUR, "hour", "hours")
for _unit in ("d", "day", "days"):
    _UNITS[_unit] = (MINUTES_PER_DAY, "day", "days")


def parse_clear_duration(query: str) -> Optional[Tuple[int, int, str]]:
    """
    Parse a dynamic clear query.

    Returns (number, minutes, unit display) or None when the query does not
    match or the duration is not a positive 64-bit minute count.
    """
    match = DYNAMIC_CLEAR_PATTERN.match(query.strip())
    if not match:
        return None

    digits = match.group(1)
    if len(digits.lstrip("0")) > len(str(MAX_DURATION_MINUTES)):
        return None

    number = int(digits)
    factor, singular, plural = _UNITS[match.group(2).lower()]
    minutes = number * factor
    if minutes <= 0 or minutes > MAX_DURATION_MINUTES:
        return None

    return number, minutes, pluralize(number, singular, plural)


def parse_dynamic_clear(query: str) -> Optional[Command]:
    """Synthesize a transient clear command for a matching query."""
    parsed = parse_clear_duration(query)
    if parsed is None:
        return None

    number, minutes, unit_display = parsed
    return Command(
        id=f"clear-{minutes}-mins-dynamic",
        trigger=f"clear {number} {unit_display}",
        description=f"Clear entries from last {number} {unit_display}",
        icon="trash",
        category=CommandCategory.CLEAR,
        action=clear_action(minutes),
    )
