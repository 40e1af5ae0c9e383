#!/usr/bin/env python3
# rlconsole/interface/script.py
from __future__ import annotations

"""
Run a text file of console commands.

One command per line. Lines starting with '#' are comments and blank lines
are ignored; neither is echoed nor counted. Execution stops at the first
command that does not return OK and that code is returned, so a `quit` inside
a script ends the whole session.
"""

import logging
from pathlib import Path
from typing import TextIO

from rlconsole.commands import CommandRegistry, ReturnCode
from rlconsole.interface.handler import execute
from rlconsole.ui import print_line

logger = logging.getLogger(__name__)


def _is_skipped(line: str) -> bool:
    return line.startswith("#") or not line.strip()


def run_file(registry: CommandRegistry, path: str | Path, output: TextIO | None = None) -> int:
    """Execute every command in `path` against `registry`."""
    try:
        script = open(path, "r", encoding="utf-8")
    except OSError as exc:
        logger.warning("Cannot open script %s: %s", path, exc)
        print_line("Could not find the specified file to execute.", file=output)
        return ReturnCode.ERROR

    counter = 0
    with script:
        for raw in script:
            line = raw.rstrip("\r\n")
            if _is_skipped(line):
                continue

            print_line(f"[{counter}] {line}", file=output)
            logger.debug("%s:%d -> %s", path, counter, line)
            result = execute(registry, line, output)
            if result != ReturnCode.OK:
                logger.debug("Script %s stopped at command %d with code %d", path, counter, result)
                return result
            counter += 1
            print_line(file=output)

    return ReturnCode.OK
