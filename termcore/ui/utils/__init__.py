#!/usr/bin/env python3
# termcore/ui/utils/__init__.py
from __future__ import annotations
from .ansi import (
    ANSI,
    CLEAR_SEQUENCE,
    colorize,
    strip_ansi,
    supports_color,
)
from .console import PRINT_MUTEX, print_line, set_terminal_title

__all__ = [
    "ANSI",
    "CLEAR_SEQUENCE",
    "colorize",
    "strip_ansi",
    "supports_color",
    "PRINT_MUTEX",
    "print_line",
    "set_terminal_title",
]
