#!/usr/bin/env python3
# rlconsole/interface/completion.py
from __future__ import annotations

"""
Two-phase completion over the vocabulary of one console.

The engine asks for matches one at a time: it calls with state 0, 1, 2, ...
until it receives None. Every function here is a pure function of the console
it is given and the line being edited, so the shared engine can be pointed at
whichever console currently owns it.

Phases:
- Command names, when the word being completed starts the line (begidx 0,
  or only whitespace before it):
  every registered name containing the typed text anywhere.
- Arguments, for any later word: the hints declared by the command named by
  token 0, skipping hints already present elsewhere on the line.
"""

from typing import TYPE_CHECKING, Optional

from rlconsole.commands import CommandRegistry
from rlconsole.interface.parser import command_name, without_span

if TYPE_CHECKING:
    from rlconsole.interface.console import Console


def command_candidates(registry: CommandRegistry, text: str) -> list[str]:
    """Registered names containing `text`, in registry order."""
    return [name for name in registry.names() if text in name]


def argument_candidates(registry: CommandRegistry, text: str, line_buffer: str, begidx: int) -> list[str]:
    """
    Hints of the command on `line_buffer` that contain `text`.

    Returns an empty list when the command is unknown, declares no hints, or
    wants filesystem completion. A hint that already appears literally on the
    line (outside the fragment being completed) is not offered again.
    """
    name = command_name(line_buffer)
    entry = registry.get(name) if name is not None else None
    if entry is None or not entry.hints or entry.completes_files:
        return []

    rest_of_line = without_span(line_buffer, begidx, len(text))
    return [
        hint for hint in entry.hints
        if hint not in rest_of_line and text in hint
    ]


def defers_to_filesystem(registry: CommandRegistry, line_buffer: str) -> bool:
    """True when the command on `line_buffer` completes its arguments as paths."""
    name = command_name(line_buffer)
    entry = registry.get(name) if name is not None else None
    return entry is not None and entry.completes_files


def resolve(
    console: Optional["Console"],
    text: str,
    line_buffer: str,
    begidx: int,
    state: int,
) -> Optional[str]:
    """Return match number `state` for `text`, or None once exhausted."""
    if console is None:
        return None

    if not line_buffer[:begidx].strip():
        candidates = command_candidates(console.registry, text)
    else:
        candidates = argument_candidates(console.registry, text, line_buffer, begidx)

    return candidates[state] if 0 <= state < len(candidates) else None
