#!/usr/bin/env python3
# termcore/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .utils import (
    ANSI,
    CLEAR_SEQUENCE,
    colorize,
    strip_ansi,
    supports_color,
    PRINT_MUTEX,
    print_line,
    set_terminal_title,
)
from .static import (
    format_table,
    init_logger,
    ColorizingStreamHandler,
    PlainFormatter,
)

__all__ = [
    "ANSI",
    "CLEAR_SEQUENCE",
    "colorize",
    "strip_ansi",
    "supports_color",
    "PRINT_MUTEX",
    "print_line",
    "set_terminal_title",
    "format_table",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
