from __future__ import annotations

import io
from typing import Callable

import pytest

from rlconsole.interface import Console, PlainEngine, SessionManager


class ScriptedReader:
    """Stands in for input(): returns queued lines, then raises EOFError."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.prompts: list[str] = []

    def feed(self, *lines: str) -> None:
        self.lines.extend(lines)

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


@pytest.fixture
def reader() -> ScriptedReader:
    return ScriptedReader()


@pytest.fixture
def engine(reader: ScriptedReader) -> PlainEngine:
    return PlainEngine(reader)


@pytest.fixture
def session(engine: PlainEngine) -> SessionManager:
    return SessionManager(engine)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(session: SessionManager, output: io.StringIO) -> Console:
    return Console(session, "main> ", output=output)


@pytest.fixture
def make_console(session: SessionManager) -> Callable[[str], Console]:
    def factory(greeting: str) -> Console:
        return Console(session, greeting, output=io.StringIO())
    return factory
