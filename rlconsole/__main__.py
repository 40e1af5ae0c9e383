#!/usr/bin/env python3
# rlconsole/__main__.py
from __future__ import annotations
"""
Demo host: two consoles sharing one engine.

Usage:
    python -m rlconsole [script ...]

The main console offers a few sample commands plus `sub`, which opens a second
console with its own prompt, commands and history. Leaving the sub console
returns to the main one with the main history restored.
"""

import sys
from typing import Sequence

from rlconsole.commands import CommandResult, ReturnCode
from rlconsole.config import load_config
from rlconsole.interface import Console, SessionManager, make_engine
from rlconsole.ui import init_logger, print_line


def _build_sub_console(session: SessionManager, greeting: str) -> Console:
    sub = Console(session, greeting)

    @sub.command(hints=["--upper", "--lower"])
    def echo(args: list[str]) -> CommandResult:
        """Print the arguments back: echo [--upper|--lower] words..."""
        words = [w for w in args[1:] if w not in ("--upper", "--lower")]
        text = " ".join(words)
        if "--upper" in args:
            text = text.upper()
        elif "--lower" in args:
            text = text.lower()
        return CommandResult(message=text)

    return sub


def build_main_console(session: SessionManager, greeting: str) -> Console:
    console = Console(session, greeting)

    @console.command(hints=["add", "sub", "mul"])
    def calc(args: list[str]) -> int | CommandResult:
        """Integer arithmetic: calc add|sub|mul A B"""
        if len(args) != 4:
            print_line("Usage: calc add|sub|mul A B", file=console.output)
            return ReturnCode.USAGE
        op, a, b = args[1], int(args[2]), int(args[3])
        results = {"add": a + b, "sub": a - b, "mul": a * b}
        if op not in results:
            return CommandResult(ok=False, message=f"Unknown operation: {op}")
        return CommandResult(message=str(results[op]), data=results[op])

    @console.command(name="sub")
    def open_sub(args: list[str]) -> int:
        """Enter a nested console with its own commands and history"""
        with _build_sub_console(session, "sub> ") as sub:
            sub.loop()
        return ReturnCode.OK

    return console


def main(argv: Sequence[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    config = load_config()
    init_logger("rlconsole", config.log_level or "WARNING",
                str(config.log_file_path) if config.log_file_path else None)

    with make_engine(config.engine) as engine:
        session = SessionManager(engine, enable_completion=config.enable_completion)
        with build_main_console(session, config.prompt) as console:
            for script in argv:
                if console.execute_file(script) == ReturnCode.QUIT:
                    return 0
            console.loop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
