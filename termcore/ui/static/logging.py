#!/usr/bin/env python3
# termcore/ui/static/logging.py
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from termcore.ui.utils import ANSI, PRINT_MUTEX, strip_ansi, supports_color

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOGFILE_MAX_BYTES = 2_000_000
LOGFILE_BACKUPS = 3


class ColorizingStreamHandler(logging.StreamHandler):
    """Console handler: level-colored on a terminal, plain otherwise. Writes hold PRINT_MUTEX."""

    level_styles = {
        logging.DEBUG: "bright_black",
        logging.WARNING: "yellow",
        logging.ERROR: "red",
        logging.CRITICAL: "magenta",
    }

    def __init__(self, stream=None) -> None:
        super().__init__(stream if stream is not None else sys.stderr)
        self.use_color = supports_color(self.stream)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            text = self.format(record)
            style = self.level_styles.get(record.levelno)
            if not self.use_color:
                text = strip_ansi(text)
            elif style is not None:
                text = ANSI[style] + text + ANSI["reset"]
            with PRINT_MUTEX:
                self.stream.write(text + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


class PlainFormatter(logging.Formatter):
    """Strips escape sequences so log files stay readable."""

    def format(self, record: logging.LogRecord) -> str:
        return strip_ansi(super().format(record))


def _has_handler(logger: logging.Logger, kind: type[logging.Handler]) -> bool:
    return any(isinstance(h, kind) for h in logger.handlers)


def init_logger(
    name: str = "",
    level: int | str = logging.INFO,
    logfile: Optional[str | Path] = None,
    extra_handlers: tuple[logging.Handler, ...] = (),
) -> logging.Logger:
    """
    Configure and return the logger `name`.

    Calling this again is safe: the console handler, the rotating file
    handler and each extra handler (a LogBuffer, for example) are attached
    at most once. The file handler records DEBUG and up regardless of `level`.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    if not _has_handler(logger, ColorizingStreamHandler):
        console = ColorizingStreamHandler()
        console.setLevel(level)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console)

    if logfile and not _has_handler(logger, RotatingFileHandler):
        path = Path(logfile)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            path, maxBytes=LOGFILE_MAX_BYTES, backupCount=LOGFILE_BACKUPS, encoding="utf-8")
        rotating.setLevel(logging.DEBUG)
        rotating.setFormatter(PlainFormatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(rotating)

    for handler in extra_handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)

    return logger
