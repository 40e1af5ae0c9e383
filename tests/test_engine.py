from __future__ import annotations

import io
import os
import sys
from pathlib import Path

import pytest

from rlconsole.interface import (
    Console,
    HistorySnapshot,
    PlainEngine,
    ReadlineEngine,
    SessionManager,
    make_engine,
)
from rlconsole.interface.engine import collect_matches, path_matches


def test_plain_engine_history_snapshots() -> None:
    engine = PlainEngine(lambda prompt: "x")
    engine.add_history("one")
    engine.add_history("two")

    snapshot = engine.get_history_snapshot()
    engine.add_history("three")
    assert snapshot.entries == ("one", "two")

    engine.set_history_snapshot(HistorySnapshot.of(["other"]))
    assert engine.get_history_snapshot().entries == ("other",)


def test_plain_engine_keeps_consecutive_duplicates() -> None:
    engine = PlainEngine(lambda prompt: "x")
    engine.add_history("same")
    engine.add_history("same")

    assert engine.get_history_snapshot().entries == ("same", "same")


def test_plain_engine_end_of_input() -> None:
    def reader(prompt: str) -> str:
        raise EOFError

    assert PlainEngine(reader).read_line("> ") is None


def test_collect_matches_stops_at_none() -> None:
    words = ["a", "b"]

    def complete(text, begidx, line, state):
        return words[state] if state < len(words) else None

    assert collect_matches(complete, "", 0, "") == ["a", "b"]


def test_path_matches(tmp_path: Path) -> None:
    (tmp_path / "alpha.txt").write_text("", encoding="utf-8")
    (tmp_path / "album").mkdir()
    (tmp_path / "beta.txt").write_text("", encoding="utf-8")

    matches = path_matches(str(tmp_path / "al"))

    assert matches == [str(tmp_path / "album") + os.sep, str(tmp_path / "alpha.txt")]


def test_make_engine_rejects_unknown_name() -> None:
    with pytest.raises(ValueError):
        make_engine("emacs")


def test_make_engine_plain_and_non_interactive(monkeypatch) -> None:
    assert isinstance(make_engine("plain"), PlainEngine)

    monkeypatch.setattr(sys, "stdin", io.StringIO())
    assert isinstance(make_engine("auto"), PlainEngine)


def test_engine_context_manager() -> None:
    with PlainEngine() as engine:
        assert isinstance(engine, PlainEngine)


# ---------------------------------------------------------------------------
# prompt_toolkit adapter
# ---------------------------------------------------------------------------


@pytest.fixture
def toolkit_session():
    pytest.importorskip("prompt_toolkit")
    from rlconsole.interface import PromptToolkitEngine

    engine = PromptToolkitEngine()
    return SessionManager(engine)


def _completions(engine, text: str) -> list[str]:
    from prompt_toolkit.completion import CompleteEvent
    from prompt_toolkit.document import Document

    document = Document(text, len(text))
    return [c.text for c in engine.completer.get_completions(document, CompleteEvent(completion_requested=True))]


def test_toolkit_history_snapshots(toolkit_session: SessionManager) -> None:
    engine = toolkit_session.engine
    engine.add_history("first")
    engine.add_history("first")
    engine.add_history("second")

    assert engine.get_history_snapshot().entries == ("first", "second")

    engine.set_history_snapshot(HistorySnapshot.of(["x", "y"]))
    assert engine.get_history_snapshot().entries == ("x", "y")


def test_toolkit_isolates_history_between_consoles(toolkit_session: SessionManager) -> None:
    engine = toolkit_session.engine
    x = Console(toolkit_session, "x> ", output=io.StringIO())
    y = Console(toolkit_session, "y> ", output=io.StringIO())

    toolkit_session.reserve(x)
    engine.add_history("h1")
    toolkit_session.reserve(y)
    engine.add_history("h3")
    toolkit_session.reserve(x)

    assert engine.get_history_snapshot().entries == ("h1",)
    assert y.history.entries == ("h3",)


def test_toolkit_completer_uses_current_console(toolkit_session: SessionManager) -> None:
    console = Console(toolkit_session, output=io.StringIO())
    console.register_command("mode", lambda args: 0, ["fast", "slow"])
    toolkit_session.reserve(console)
    engine = toolkit_session.engine

    assert set(_completions(engine, "e")) == {"help", "exit", "mode"}
    assert _completions(engine, "mode ") == ["fast", "slow"]
    assert _completions(engine, "mode fast s") == ["slow"]


def test_toolkit_completer_falls_back_to_paths(toolkit_session: SessionManager, tmp_path: Path) -> None:
    (tmp_path / "script.txt").write_text("help\n", encoding="utf-8")
    console = Console(toolkit_session, output=io.StringIO())
    toolkit_session.reserve(console)

    completions = _completions(toolkit_session.engine, f"run {tmp_path}{os.sep}scr")

    assert "ipt.txt" in completions


# ---------------------------------------------------------------------------
# readline adapter
# ---------------------------------------------------------------------------


@pytest.fixture
def readline_session():
    readline = pytest.importorskip("readline")
    if "libedit" in (readline.__doc__ or ""):
        pytest.skip("libedit numbers history items differently")

    readline.clear_history()
    engine = ReadlineEngine()
    engine.setup()
    yield SessionManager(engine)
    engine.teardown()
    readline.clear_history()


def _readline_matches(engine: ReadlineEngine, monkeypatch, line: str, begidx: int) -> list:
    monkeypatch.setattr(engine.readline, "get_line_buffer", lambda: line)
    monkeypatch.setattr(engine.readline, "get_begidx", lambda: begidx)
    text = line[begidx:]
    return [engine._readline_complete(text, state) for state in range(3)]


def test_readline_isolates_history_between_consoles(readline_session: SessionManager) -> None:
    engine = readline_session.engine
    x = Console(readline_session, "x> ", output=io.StringIO())
    y = Console(readline_session, "y> ", output=io.StringIO())

    readline_session.reserve(x)
    engine.add_history("h1")
    engine.add_history("h2")
    readline_session.reserve(y)
    assert engine.get_history_snapshot().entries == ()
    engine.add_history("h3")
    readline_session.reserve(x)

    assert engine.get_history_snapshot().entries == ("h1", "h2")
    assert y.history.entries == ("h3",)


def test_readline_keeps_consecutive_duplicates(readline_session: SessionManager) -> None:
    engine = readline_session.engine
    engine.add_history("same")
    engine.add_history("same")

    assert engine.get_history_snapshot().entries == ("same", "same")


def test_readline_completes_commands_and_hints(readline_session: SessionManager, monkeypatch) -> None:
    console = Console(readline_session, output=io.StringIO())
    console.register_command("mode", lambda args: 0, ["fast", "slow"])
    readline_session.reserve(console)
    engine = readline_session.engine

    assert _readline_matches(engine, monkeypatch, "xi", 0) == ["exit", None, None]
    assert _readline_matches(engine, monkeypatch, "mode ", 5) == ["fast", "slow", None]
    assert _readline_matches(engine, monkeypatch, "mode fast s", 10) == ["slow", None, None]


def test_readline_falls_back_to_paths(readline_session: SessionManager, monkeypatch, tmp_path: Path) -> None:
    (tmp_path / "script.txt").write_text("help\n", encoding="utf-8")
    console = Console(readline_session, output=io.StringIO())
    readline_session.reserve(console)

    matches = _readline_matches(readline_session.engine, monkeypatch, f"run {tmp_path}{os.sep}scr", 4)

    assert matches == [str(tmp_path / "script.txt"), None, None]


def test_readline_no_path_fallback_for_hinted_commands(readline_session: SessionManager, monkeypatch) -> None:
    console = Console(readline_session, output=io.StringIO())
    console.register_command("mode", lambda args: 0, ["fast"])
    readline_session.reserve(console)

    assert _readline_matches(readline_session.engine, monkeypatch, "mode /", 5) == [None, None, None]


def test_readline_teardown_restores_previous_completer() -> None:
    readline = pytest.importorskip("readline")

    def previous(text, state):
        return None

    readline.set_completer(previous)
    engine = ReadlineEngine()
    with engine:
        assert readline.get_completer() == engine._readline_complete
    assert readline.get_completer() is previous
    readline.set_completer(None)


def test_readline_without_auto_history_switch_does_not_add_twice(monkeypatch) -> None:
    readline = pytest.importorskip("readline")
    if "libedit" in (readline.__doc__ or ""):
        pytest.skip("libedit numbers history items differently")
    monkeypatch.delattr(readline, "set_auto_history", raising=False)

    readline.clear_history()
    engine = ReadlineEngine()
    with engine:
        engine.add_history("typed")
        assert engine.get_history_snapshot().entries == ()

        # Snapshot restores still load every entry
        engine.set_history_snapshot(HistorySnapshot.of(["a", "b"]))
        assert engine.get_history_snapshot().entries == ("a", "b")
    readline.clear_history()
