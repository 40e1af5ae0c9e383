#!/usr/bin/env python3
# rlconsole/ui/utils/console.py
from __future__ import annotations

import sys
import threading
from typing import TextIO

# Single shared print mutex for operator output and log records.
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file: TextIO | None = None, flush: bool = False) -> None:
    """Write one line to the operator-visible channel (stdout unless given)."""
    stream = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        stream.write(f"{text}\n")
        if flush:
            stream.flush()
