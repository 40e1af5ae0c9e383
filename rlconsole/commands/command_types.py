#!/usr/bin/env python3
# rlconsole/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- ReturnCode: the stable process-level result codes.
- CommandHandler: the callable protocol for any command implementation.
- CommandResult: an optional richer result a handler may return.
- CommandEntry: a registered command with its argument completion hints.
- COMPLETE_FILE: hint sentinel deferring argument completion to the filesystem.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Protocol, Sequence

# Hint value meaning "complete this command's arguments as filesystem paths".
COMPLETE_FILE = "__COMPLETE_FILE__"


class ReturnCode(IntEnum):
    """Result codes; the literal values are part of the public contract."""
    OK = 0
    ERROR = 1
    USAGE = 2
    QUIT = -1


class CommandHandler(Protocol):
    """Protocol for any command function: receives the full token list."""

    def __call__(self, args: list[str]) -> Any:  # pragma: no cover - signature only
        ...


@dataclass(slots=True)
class CommandResult:
    """
    Normalized result container from command execution.

    Attributes:
        ok: True if the command completed successfully.
        message: Human-readable summary or primary output.
        data: Optional machine-readable payload (dict/list/primitive).
    """
    ok: bool = True
    message: str = ""
    data: Any = None

    def __str__(self) -> str:
        return self.message if self.message else ("ok" if self.ok else "error")

    @property
    def code(self) -> int:
        return ReturnCode.OK if self.ok else ReturnCode.ERROR


@dataclass(slots=True)
class CommandEntry:
    """
    A registered command.

    Important fields:
        name: Unique name within one registry (token 0 of a command line).
        handler: Function implementing the command.
        hints: Ordered argument completion hints; COMPLETE_FILE anywhere in
            the list disables hint completion for this command.
        description: Short, user-facing description shown by `help`.
    """

    name: str
    handler: CommandHandler
    hints: tuple[str, ...] = field(default=())
    description: str = ""

    def __post_init__(self) -> None:
        self.hints = tuple(self.hints)

    @property
    def completes_files(self) -> bool:
        return COMPLETE_FILE in self.hints

    def invoke(self, args: Sequence[str]) -> Any:
        """Execute the underlying handler with the full token list."""
        return self.handler(list(args))
