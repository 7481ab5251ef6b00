#!/usr/bin/env python3
# termcore/ui/utils/ansi.py
from __future__ import annotations

import os
import re
from typing import TextIO

_SGR_CODES = {
    "reset": 0,
    "bold": 1,
    "dim": 2,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "magenta": 35,
    "cyan": 36,
    "bright_black": 90,
}

# Style name -> escape sequence
ANSI = {name: f"\x1b[{code}m" for name, code in _SGR_CODES.items()}

# Erase display, then move the cursor home
CLEAR_SEQUENCE = "\x1b[2J\x1b[H"

_CSI_PATTERN = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def strip_ansi(text: str) -> str:
    return _CSI_PATTERN.sub("", text)


def supports_color(stream: TextIO) -> bool:
    """True for an interactive stream, unless NO_COLOR is set."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def colorize(text: str, *styles: str, stream: TextIO | None = None) -> str:
    """
    Wrap `text` in the named styles followed by a reset.

    When `stream` is given and cannot show color, `text` comes back unchanged.
    Unknown style names are ignored.
    """
    if stream is not None and not supports_color(stream):
        return text
    prefix = "".join(ANSI[style] for style in styles if style in ANSI)
    if not prefix:
        return text
    return f"{prefix}{text}{ANSI['reset']}"
