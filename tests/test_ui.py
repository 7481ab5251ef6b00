from __future__ import annotations

import io
import logging

from termcore.ui import ColorizingStreamHandler, colorize, format_table, init_logger, strip_ansi


def test_colorize_and_strip():
    text = colorize("ok", "green", "bold")
    assert text != "ok"
    assert strip_ansi(text) == "ok"
    assert colorize("ok", "no-such-style") == "ok"
    assert colorize("ok", "green", stream=io.StringIO()) == "ok"


def test_format_table_aligns_colored_cells():
    lines = format_table([[colorize("a", "red"), "bb"], ["ccc"]], headers=["X", "Y"])
    plain = [strip_ansi(line) for line in lines]
    assert plain[0] == plain[-1] == "-" * len(plain[1])
    assert plain[1] == "| X   | Y  |"
    assert plain[3] == "| a   | bb |"
    assert plain[4] == "| ccc |    |"
    assert format_table([]) == []


def test_format_table_without_border():
    assert format_table([["x"]], border=False) == ["| x |"]


def test_init_logger_is_idempotent(tmp_path):
    extra = logging.NullHandler()
    logger = init_logger("termcore.tests.ui", level="DEBUG",
                         logfile=tmp_path / "logs" / "app.log", extra_handlers=(extra,))
    try:
        init_logger("termcore.tests.ui", level="DEBUG",
                    logfile=tmp_path / "logs" / "app.log", extra_handlers=(extra,))
        assert len(logger.handlers) == 3
        assert sum(isinstance(h, ColorizingStreamHandler) for h in logger.handlers) == 1
        logger.debug("to file")
        for handler in logger.handlers:
            handler.flush()
        assert "to file" in (tmp_path / "logs" / "app.log").read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
