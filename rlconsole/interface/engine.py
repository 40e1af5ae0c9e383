#!/usr/bin/env python3
# rlconsole/interface/engine.py
from __future__ import annotations

"""
Line-editing engines.

An engine is the process-wide editor the consoles share. It exposes blocking
line reads, one live history buffer that can be snapshotted and replaced, and
a single completion slot.

Selection order:
    1) prompt_toolkit (rich completion + history)
    2) readline / pyreadline3 (basic completion + history)
    3) plain input (last resort, no completion)
"""

import glob
import logging
import os
import sys
from typing import Callable, Optional

from rlconsole.interface.session import HistorySnapshot

logger = logging.getLogger(__name__)

# complete(text, begidx, line_buffer, state) -> match or None
CompleteCallback = Callable[[str, int, str, int], Optional[str]]
# path_fallback(line_buffer) -> True when arguments are filesystem paths
PathFallback = Callable[[str], bool]

ENGINE_NAMES = ("auto", "prompt_toolkit", "readline", "plain")


def collect_matches(complete: CompleteCallback, text: str, begidx: int, line_buffer: str) -> list[str]:
    """Call `complete` with state 0, 1, 2, ... until it runs out."""
    matches: list[str] = []
    state = 0
    while (match := complete(text, begidx, line_buffer, state)) is not None:
        matches.append(match)
        state += 1
    return matches


def path_matches(text: str) -> list[str]:
    """Filesystem entries starting with `text`; directories get a trailing separator."""
    expanded = os.path.expanduser(text)
    matches = []
    for path in sorted(glob.glob(glob.escape(expanded) + "*")):
        if os.path.isdir(path):
            path += os.sep
        if expanded != text:
            # Keep the user's '~' spelling
            path = text + path[len(expanded):]
        matches.append(path)
    return matches


class BaseEngine:
    """
    Interface shared by all engines.

    Subclasses implement the five primitives below. setup()/teardown() are
    optional hooks; the context manager support guarantees teardown.
    """

    name = "base"

    def read_line(self, prompt: str) -> Optional[str]:  # pragma: no cover - interface
        """Block for one line; None means end of input."""
        raise NotImplementedError

    def add_history(self, line: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def get_history_snapshot(self) -> HistorySnapshot:  # pragma: no cover - interface
        raise NotImplementedError

    def set_history_snapshot(self, snapshot: HistorySnapshot) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def set_completer(self, complete: CompleteCallback, path_fallback: Optional[PathFallback] = None) -> None:
        """Fill the engine's single completion slot (replacing any previous one)."""
        self._complete = complete
        self._path_fallback = path_fallback

    def setup(self) -> None:
        ...

    def teardown(self) -> None:
        ...

    # Context manager helpers
    def __enter__(self) -> "BaseEngine":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


# ===== Last resort: plain input =====
class PlainEngine(BaseEngine):
    """No editing and no completion; keeps history in a list."""

    name = "plain"

    def __init__(self, reader: Optional[Callable[[str], str]] = None) -> None:
        self._reader = reader or input
        self._history: list[str] = []
        self._complete: Optional[CompleteCallback] = None
        self._path_fallback: Optional[PathFallback] = None

    def read_line(self, prompt: str) -> Optional[str]:
        try:
            return self._reader(prompt)
        except EOFError:
            return None

    def add_history(self, line: str) -> None:
        self._history.append(line)

    def get_history_snapshot(self) -> HistorySnapshot:
        return HistorySnapshot.of(self._history)

    def set_history_snapshot(self, snapshot: HistorySnapshot) -> None:
        self._history = list(snapshot)


# ===== Preferred: prompt_toolkit =====
class PromptToolkitEngine(BaseEngine):
    """Rich line editor; history lives in an InMemoryHistory swapped per snapshot."""

    name = "prompt_toolkit"

    def __init__(self) -> None:
        from prompt_toolkit import prompt
        from prompt_toolkit.history import InMemoryHistory

        self._prompt = prompt
        self._history_class = InMemoryHistory
        self._history = InMemoryHistory()
        self.completer = None

    def set_completer(self, complete: CompleteCallback, path_fallback: Optional[PathFallback] = None) -> None:
        from prompt_toolkit.completion import Completer, Completion, PathCompleter
        from prompt_toolkit.document import Document

        path_completer = PathCompleter(expanduser=True)

        class _SessionCompleter(Completer):
            def get_completions(self, document, complete_event):
                # Same word boundaries as readline with " \t\n" delimiters
                word = document.get_word_before_cursor(WORD=True)
                begidx = len(document.text_before_cursor) - len(word)
                matches = collect_matches(complete, word, begidx, document.text)
                for match in matches:
                    yield Completion(match, start_position=-len(word))
                if not matches and begidx > 0 and path_fallback and path_fallback(document.text):
                    yield from path_completer.get_completions(
                        Document(word, len(word)), complete_event)

        self.completer = _SessionCompleter()

    def read_line(self, prompt: str) -> Optional[str]:
        try:
            return self._prompt(
                prompt,
                history=self._history,
                completer=self.completer,
                complete_while_typing=False,
            )
        except EOFError:
            return None

    def add_history(self, line: str) -> None:
        """
        Store `line` unless it repeats the newest entry.

        Unlike the readline and plain engines, consecutive duplicates collapse
        into one entry: prompt_toolkit applies that rule when it stores
        accepted input itself, and it cannot be switched off per prompt.
        """
        strings = self._history.get_strings()
        if not strings or strings[-1] != line:
            self._history.append_string(line)

    def get_history_snapshot(self) -> HistorySnapshot:
        return HistorySnapshot.of(self._history.get_strings())

    def set_history_snapshot(self, snapshot: HistorySnapshot) -> None:
        history = self._history_class()
        for entry in snapshot:
            history.append_string(entry)
        self._history = history


# ===== Fallback: readline / pyreadline3 =====
class ReadlineEngine(BaseEngine):
    """GNU readline (or pyreadline3) with basic completion and history."""

    name = "readline"

    def __init__(self) -> None:
        import readline  # type: ignore[attr-defined]

        self.readline = readline
        self._complete: Optional[CompleteCallback] = None
        self._path_fallback: Optional[PathFallback] = None
        self._matches: list[str] = []
        self._previous_completer = None
        # True when input() records lines itself and cannot be told not to
        self._input_records_history = False

    def setup(self) -> None:
        self._previous_completer = self.readline.get_completer()
        # Only whitespace separates words, so flags like '--x=y' complete whole
        self.readline.set_completer_delims(" \t\n")
        # History is added explicitly by the console, never by input()
        if hasattr(self.readline, "set_auto_history"):
            self.readline.set_auto_history(False)
        else:
            self._input_records_history = True
        self.readline.set_completer(self._readline_complete)
        self.readline.parse_and_bind("tab: complete")

    def teardown(self) -> None:
        self.readline.set_completer(self._previous_completer)

    def _readline_complete(self, text: str, state: int) -> Optional[str]:
        if state == 0:
            line_buffer = self.readline.get_line_buffer()
            begidx = self.readline.get_begidx()
            self._matches = []
            if self._complete is not None:
                self._matches = collect_matches(self._complete, text, begidx, line_buffer)
            if (not self._matches and begidx > 0
                    and self._path_fallback is not None and self._path_fallback(line_buffer)):
                self._matches = path_matches(text)
        return self._matches[state] if state < len(self._matches) else None

    def read_line(self, prompt: str) -> Optional[str]:
        try:
            return input(prompt)
        except EOFError:
            return None

    def add_history(self, line: str) -> None:
        if self._input_records_history:
            return
        self.readline.add_history(line)

    def get_history_snapshot(self) -> HistorySnapshot:
        length = self.readline.get_current_history_length()
        return HistorySnapshot.of(
            self.readline.get_history_item(i) for i in range(1, length + 1))

    def set_history_snapshot(self, snapshot: HistorySnapshot) -> None:
        self.readline.clear_history()
        for entry in snapshot:
            self.readline.add_history(entry)


_ENGINE_CLASSES: dict[str, type[BaseEngine]] = {
    "prompt_toolkit": PromptToolkitEngine,
    "readline": ReadlineEngine,
    "plain": PlainEngine,
}


def make_engine(preferred: str = "auto") -> BaseEngine:
    """
    Factory to select the best available engine at runtime.

    `preferred` names an engine to try first; "auto" walks the selection order,
    except that a non-interactive stdin always gets the plain engine.
    """
    if preferred not in ENGINE_NAMES:
        raise ValueError(f"Unknown engine {preferred!r}; expected one of {ENGINE_NAMES}")

    if preferred == "auto":
        if not sys.stdin.isatty():
            return PlainEngine()
        order = ["prompt_toolkit", "readline"]
    else:
        order = [preferred]

    for engine_name in order:
        if engine_name == "plain":
            break
        try:
            engine = _ENGINE_CLASSES[engine_name]()
        except Exception as exc:
            logger.debug("Engine %s unavailable: %s", engine_name, exc)
            continue
        logger.debug("Using %s engine", engine_name)
        return engine

    return PlainEngine()
