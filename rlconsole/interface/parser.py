#!/usr/bin/env python3
# rlconsole/interface/parser.py
from __future__ import annotations

"""
Line parsing helpers shared by the dispatcher and the completion resolver.

Commands are split on runs of whitespace only; there is no quoting, escaping
or operator syntax.
"""

from typing import Optional


def tokenize(command_line: str) -> list[str]:
    """Split a raw command line into whitespace-separated tokens."""
    return command_line.split()


def command_name(line_buffer: str) -> Optional[str]:
    """Return token 0 of a line buffer, or None for a blank line."""
    tokens = tokenize(line_buffer)
    return tokens[0] if tokens else None


def without_span(line_buffer: str, begidx: int, length: int) -> str:
    """Return `line_buffer` with the `length` characters at `begidx` removed."""
    return line_buffer[:begidx] + line_buffer[begidx + length:]
