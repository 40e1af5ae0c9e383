from __future__ import annotations

import io
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rlconsole.ui import (
    ANSI,
    ColorizingStreamHandler,
    PlainFormatter,
    format_table,
    init_logger,
    print_line,
    strip_ansi,
)


def test_format_table_ignores_ansi_width() -> None:
    table = format_table([[ANSI["red"] + "a" + ANSI["reset"], "first"], ["bbb", "second"]])
    lines = [strip_ansi(line) for line in table.splitlines()]
    assert lines == ["\ta    first", "\tbbb  second"]


def test_print_line_to_stream() -> None:
    out = io.StringIO()
    print_line("hello", file=out)
    print_line(file=out)
    assert out.getvalue() == "hello\n\n"


def test_init_logger_is_idempotent(tmp_path: Path) -> None:
    name = "rlconsole.test-logger"
    logfile = tmp_path / "console.log"

    logger = init_logger(name, "INFO", str(logfile))
    init_logger(name, logging.ERROR, str(logfile))

    stream_handlers = [h for h in logger.handlers if isinstance(h, ColorizingStreamHandler)]
    file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(stream_handlers) == 1
    assert len(file_handlers) == 1
    assert stream_handlers[0].level == logging.ERROR

    logger.debug("to \x1b[31mfile\x1b[0m only")
    for handler in file_handlers:
        handler.flush()
    assert "to file only" in logfile.read_text(encoding="utf-8")

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_colorizing_handler_plain_for_non_tty() -> None:
    stream = io.StringIO()
    handler = ColorizingStreamHandler(stream)
    handler.setFormatter(PlainFormatter("%(message)s"))
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)

    handler.emit(record)

    assert stream.getvalue() == "careful\n"


def test_format_table_single_column_has_no_padding() -> None:
    assert format_table([["help"], ["quit"]]) == "\thelp\n\tquit"
