#!/usr/bin/env python3
# rlconsole/__init__.py
from __future__ import annotations
"""
Embeddable interactive command consoles.

Several Console instances can share one line-editing engine through a
SessionManager; each keeps its own history and its own command vocabulary
for completion.

Keep this module to re-exports; wiring lives in rlconsole.interface.
"""

from rlconsole.commands import (  # noqa: F401
    COMPLETE_FILE,
    CommandEntry,
    CommandResult,
    ReturnCode,
)
from rlconsole.interface import (  # noqa: F401
    Console,
    SessionManager,
    make_engine,
)

__version__ = "0.1.0"

__all__ = [
    "COMPLETE_FILE",
    "CommandEntry",
    "CommandResult",
    "ReturnCode",
    "Console",
    "SessionManager",
    "make_engine",
]
