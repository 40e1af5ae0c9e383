#!/usr/bin/env python3
# rlconsole/commands/__init__.py
from __future__ import annotations

"""
Package for command definitions and per-console registration.

Provides:
- Data structures and protocols (`CommandEntry`, `CommandResult`, `CommandHandler`).
- Result codes (`ReturnCode`) and the `COMPLETE_FILE` hint sentinel.
- The per-instance `CommandRegistry` and the `command` decorator.
"""


from .command_types import (
    COMPLETE_FILE,
    CommandEntry,
    CommandHandler,
    CommandResult,
    ReturnCode,
)
from .commands import CommandRegistry, command

__all__ = [
    "COMPLETE_FILE",
    "CommandEntry",
    "CommandHandler",
    "CommandResult",
    "ReturnCode",
    "CommandRegistry",
    "command",
]
