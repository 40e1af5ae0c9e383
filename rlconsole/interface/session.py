#!/usr/bin/env python3
# rlconsole/interface/session.py
from __future__ import annotations

"""
Ownership of the shared line-editing engine.

An engine has one live history buffer and one completion slot for the whole
process. The SessionManager lets several consoles share it: before a console
reads a line it reserves the engine, which checkpoints the previous owner's
history into that console and loads its own. The completion slot is filled
once with an adapter that always consults the current owner.

Single-threaded contract: a SessionManager and its consoles must be used from
one thread. Nothing here is locked; concurrent reads from several threads are
undefined behaviour and must be prevented by the host.
"""

import logging
import weakref
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

from rlconsole.interface import completion

if TYPE_CHECKING:
    from rlconsole.interface.console import Console
    from rlconsole.interface.engine import BaseEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HistorySnapshot:
    """Immutable copy of an engine's history, oldest entry first."""
    entries: tuple[str, ...] = ()

    @classmethod
    def of(cls, entries: Iterable[str]) -> "HistorySnapshot":
        return cls(tuple(entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)


class SessionManager:
    """Tracks which console currently owns `engine` and swaps history on change."""

    def __init__(self, engine: "BaseEngine", *, enable_completion: bool = True) -> None:
        self.engine = engine
        # Whatever the engine holds before any console touches it counts as
        # "no history" for consoles that never saved one.
        self.empty_snapshot: HistorySnapshot = engine.get_history_snapshot()
        self._current: Optional[weakref.ref[Console]] = None
        if enable_completion:
            engine.set_completer(self.complete, self.defers_to_filesystem)

    @property
    def current(self) -> Optional["Console"]:
        """The console that last reserved the engine, if it is still alive."""
        return self._current() if self._current is not None else None

    def reserve(self, console: "Console") -> None:
        """Make `console` the owner of the engine, swapping history if needed."""
        previous = self.current
        if previous is console:
            return

        if previous is not None:
            previous.save_state()

        snapshot = console.history
        self.engine.set_history_snapshot(snapshot if snapshot is not None else self.empty_snapshot)
        self._current = weakref.ref(console)
        logger.debug(
            "Engine reserved by %r (previous owner %r, %d history entries)",
            console.greeting, previous.greeting if previous is not None else None,
            len(snapshot) if snapshot is not None else 0,
        )

    def release(self, console: "Console") -> None:
        """Drop `console` as owner, leaving the engine with an empty history."""
        if self.current is not console:
            return
        self.engine.set_history_snapshot(self.empty_snapshot)
        self._current = None
        logger.debug("Engine released by %r", console.greeting)

    # ---------------------------------------------------------------------------
    # Engine callbacks
    # ---------------------------------------------------------------------------

    def complete(self, text: str, begidx: int, line_buffer: str, state: int) -> Optional[str]:
        """Completion adapter installed into the engine's single slot."""
        return completion.resolve(self.current, text, line_buffer, begidx, state)

    def defers_to_filesystem(self, line_buffer: str) -> bool:
        console = self.current
        if console is None:
            return False
        return completion.defers_to_filesystem(console.registry, line_buffer)
