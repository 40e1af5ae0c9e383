#!/usr/bin/env python3
# rlconsole/commands/commands.py
from __future__ import annotations

"""
Per-console command registry and decorator utilities.

This module provides:
- CommandRegistry: in-memory mapping from command name to CommandEntry.
- command: decorator to register functions into a given registry.
"""

from typing import Any, Callable, Dict, Iterable, Iterator, Optional

from rlconsole.commands.command_types import CommandEntry


class CommandRegistry:
    """
    Holds the commands of one console instance.

    Names are taken verbatim (no case folding, no validation). Registering an
    existing name replaces its entry in place, so enumeration order is the
    order in which names were first registered.
    """

    def __init__(self) -> None:
        self._commands_by_name: Dict[str, CommandEntry] = {}

    # ---------------- Registration ----------------

    def register(self, entry: CommandEntry) -> CommandEntry:
        """Insert or replace the entry for `entry.name`."""
        self._commands_by_name[entry.name] = entry
        return entry

    def add(
        self,
        name: str,
        handler: Callable[[list[str]], Any],
        hints: Iterable[str] = (),
        description: str = "",
    ) -> CommandEntry:
        """Build a CommandEntry from parts and register it."""
        return self.register(CommandEntry(
            name=name, handler=handler, hints=tuple(hints), description=description))

    # ---------------- Lookup ----------------

    def get(self, name: str) -> Optional[CommandEntry]:
        """Return the entry registered under `name`, or None."""
        return self._commands_by_name.get(name)

    def all(self) -> list[CommandEntry]:
        return list(self._commands_by_name.values())

    def names(self) -> list[str]:
        """Return every registered name in stable enumeration order."""
        return list(self._commands_by_name.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._commands_by_name

    def __len__(self) -> int:
        return len(self._commands_by_name)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())


def command(
    registry: CommandRegistry,
    *,
    name: str | None = None,
    hints: Iterable[str] = (),
    description: str | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator to register a function as a console command.

    - Function name is transformed from snake_case to kebab-case for `name` if not provided.
    - `description` falls back to the function docstring.
    """

    def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
        registry.add(
            name if name is not None else func.__name__.replace("_", "-"),
            func,
            hints,
            (description or (func.__doc__ or "")).strip(),
        )
        return func

    return wrapper
