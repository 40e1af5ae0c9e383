#!/usr/bin/env python3
# rlconsole/interface/handler.py
from __future__ import annotations

"""
Command dispatch and help formatting.

`execute` is the error boundary of the console: unknown commands and handler
exceptions are reported on the operator channel and turned into return codes.
Nothing raised by a handler escapes it.
"""

import difflib
import logging
from typing import Any, TextIO

from rlconsole.commands import (
    COMPLETE_FILE,
    CommandEntry,
    CommandRegistry,
    CommandResult,
    ReturnCode,
)
from rlconsole.interface.parser import tokenize
from rlconsole.ui import format_table, print_line

logger = logging.getLogger(__name__)


def _suggest_similar_names(registry: CommandRegistry, name: str) -> str:
    """Return a short suggestion string for misspelled commands."""
    matches = difflib.get_close_matches(name, registry.names(), n=3, cutoff=0.6)
    return f" Did you mean: {', '.join(matches)}?" if matches else ""


def normalize_result(result: Any, output: TextIO | None = None) -> int:
    """
    Map whatever a handler returned to an integer return code.

    None/True -> OK, False -> ERROR, int -> itself, CommandResult -> its code
    (message printed first). Anything else is printed and counts as OK.
    """
    if result is None or result is True:
        return ReturnCode.OK
    if result is False:
        return ReturnCode.ERROR
    if isinstance(result, int):
        return int(result)
    if isinstance(result, CommandResult):
        if result.message:
            print_line(result.message, file=output)
        return result.code
    print_line(str(result), file=output)
    return ReturnCode.OK


def execute(registry: CommandRegistry, raw_line: str, output: TextIO | None = None) -> int:
    """
    Tokenize `raw_line`, look up token 0 in `registry` and run its handler.

    Returns:
        OK for a blank line, ERROR for an unknown command or a failing
        handler, otherwise the handler's normalized result.
    """
    tokens = tokenize(raw_line)
    if not tokens:
        return ReturnCode.OK

    command_name = tokens[0]
    entry = registry.get(command_name)
    if entry is None:
        logger.warning("Unknown command: %s", command_name)
        print_line(
            f"Command '{command_name}' not found.{_suggest_similar_names(registry, command_name)}",
            file=output,
        )
        return ReturnCode.ERROR

    logger.debug("Dispatching %s with %d argument(s)", command_name, len(tokens) - 1)
    try:
        result = entry.invoke(tokens)
    except Exception as exc:
        logger.debug("Command %s raised", command_name, exc_info=True)
        print_line(f"[error] {type(exc).__name__}: {exc}", file=output)
        return ReturnCode.ERROR
    return normalize_result(result, output)


# ---------------------------------------------------------------------------
# Help
# ---------------------------------------------------------------------------


def format_help(registry: CommandRegistry) -> str:
    """Render the listing printed by a bare `help`."""
    rows = [[entry.name, entry.description] for entry in registry.all()]
    return "Available commands are:\n" + format_table(rows)


def format_command_help(entry: CommandEntry) -> str:
    """Render help for a single command."""
    hints = ["<file>" if hint == COMPLETE_FILE else hint for hint in entry.hints]
    lines = [
        f"Name:        {entry.name}",
        f"Description: {entry.description or '(none)'}",
        f"Arguments:   {' '.join(hints) if hints else '(none)'}",
    ]
    return "\n".join(lines)
