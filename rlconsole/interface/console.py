#!/usr/bin/env python3
# rlconsole/interface/console.py
from __future__ import annotations

"""
Embeddable command console.

A Console owns a command vocabulary and, once it has given up the engine at
least once, a private history snapshot. Any number of consoles can share one
SessionManager; each read reserves the engine first so history and completion
always belong to the console doing the reading.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, TextIO

from rlconsole.commands import (
    COMPLETE_FILE,
    CommandEntry,
    CommandRegistry,
    ReturnCode,
    command,
)
from rlconsole.interface.handler import execute, format_command_help, format_help
from rlconsole.interface.script import run_file
from rlconsole.interface.session import HistorySnapshot, SessionManager
from rlconsole.ui import print_line

logger = logging.getLogger(__name__)

DEFAULT_GREETING = "> "


class Console:
    """
    A named set of commands read from the shared engine.

    Built-in commands: help, run, quit, exit. Consoles are not copyable: the
    history snapshot they own would otherwise be aliased.
    """

    def __init__(
        self,
        session: SessionManager,
        greeting: str = DEFAULT_GREETING,
        *,
        output: Optional[TextIO] = None,
    ) -> None:
        self.session = session
        self.greeting = greeting
        self.output = output
        self.registry = CommandRegistry()
        self._history: Optional[HistorySnapshot] = None

        self.registry.add("help", self._help, description="List commands, or describe one: help [command]")
        self.registry.add("run", self._run, [COMPLETE_FILE], "Execute the commands in a script file")
        self.registry.add("quit", self._quit, description="Leave this console")
        self.registry.add("exit", self._quit, description="Leave this console")

    # ---------------- Built-ins ----------------

    def _help(self, args: list[str]) -> int:
        if len(args) < 2:
            print_line(format_help(self.registry), file=self.output)
            return ReturnCode.OK
        entry = self.registry.get(args[1])
        if entry is None:
            print_line(f"No such command: {args[1]}", file=self.output)
            return ReturnCode.ERROR
        print_line(format_command_help(entry), file=self.output)
        return ReturnCode.OK

    def _run(self, args: list[str]) -> int:
        if len(args) < 2:
            print_line(f"Usage: {args[0]} script_filename", file=self.output)
            return ReturnCode.USAGE
        return self.execute_file(args[1])

    @staticmethod
    def _quit(args: list[str]) -> int:
        return ReturnCode.QUIT

    # ---------------- Registration ----------------

    def register_command(
        self,
        name: str,
        handler: Callable[[list[str]], Any],
        hints: Iterable[str] = (),
        description: str = "",
    ) -> CommandEntry:
        """Add or replace a command; `hints` drive argument completion."""
        return self.registry.add(name, handler, hints, description)

    def command(
        self,
        *,
        name: str | None = None,
        hints: Iterable[str] = (),
        description: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of register_command."""
        return command(self.registry, name=name, hints=hints, description=description)

    def registered_commands(self) -> list[str]:
        return self.registry.names()

    # ---------------- Execution ----------------

    def execute(self, line: str) -> int:
        return execute(self.registry, line, self.output)

    def execute_file(self, path: str | Path) -> int:
        return run_file(self.registry, path, self.output)

    def read_line(self) -> int:
        """Read one line from the engine as this console and execute it."""
        self.session.reserve(self)

        line = self.session.engine.read_line(self.greeting)
        if line is None:
            # EOF leaves the cursor after the prompt
            print_line(file=self.output)
            return ReturnCode.QUIT

        if line:
            self.session.engine.add_history(line)
        return self.execute(line)

    def loop(self) -> int:
        """Read and execute lines until a command (or end of input) quits."""
        while True:
            try:
                result = self.read_line()
            except KeyboardInterrupt:
                print_line(file=self.output)
                continue
            if result == ReturnCode.QUIT:
                return result

    # ---------------- History ownership ----------------

    @property
    def history(self) -> Optional[HistorySnapshot]:
        """The history saved when this console last lost the engine."""
        return self._history

    def save_state(self) -> None:
        """Capture the engine's live history as this console's own."""
        self._history = self.session.engine.get_history_snapshot()

    def close(self) -> None:
        """Give the engine back and drop the owned history."""
        self.session.release(self)
        self._history = None

    def __enter__(self) -> "Console":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __copy__(self):
        raise TypeError("Console instances cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("Console instances cannot be copied")

    def __repr__(self) -> str:
        return f"Console(greeting={self.greeting!r}, commands={len(self.registry)})"
