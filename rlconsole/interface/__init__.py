#!/usr/bin/env python3
# rlconsole/interface/__init__.py
from __future__ import annotations

"""
Package for the interactive console and everything it drives.

Provides:
- Parser helpers for whitespace tokenization.
- Two-phase completion (command names, then per-command argument hints).
- The SessionManager that shares one line-editing engine between consoles.
- Line-editing engines (prompt_toolkit / readline / plain).
- Command dispatch, help formatting and the script runner.
- The Console class tying them together.
"""


# Parser first (completion and handler depend on it)
from .parser import tokenize, command_name

from .completion import resolve, command_candidates, argument_candidates

# Session before engines (engines build HistorySnapshot values)
from .session import HistorySnapshot, SessionManager

from .engine import (
    BaseEngine,
    PlainEngine,
    PromptToolkitEngine,
    ReadlineEngine,
    make_engine,
    ENGINE_NAMES,
)

from .handler import execute, normalize_result, format_help, format_command_help
from .script import run_file
from .console import Console, DEFAULT_GREETING

__all__ = [
    # parser
    "tokenize",
    "command_name",
    # completion
    "resolve",
    "command_candidates",
    "argument_candidates",
    # session
    "HistorySnapshot",
    "SessionManager",
    # engines
    "BaseEngine",
    "PlainEngine",
    "PromptToolkitEngine",
    "ReadlineEngine",
    "make_engine",
    "ENGINE_NAMES",
    # handler
    "execute",
    "normalize_result",
    "format_help",
    "format_command_help",
    # script
    "run_file",
    # console
    "Console",
    "DEFAULT_GREETING",
]
