#!/usr/bin/env python3
# termcore/ui/utils/console.py
from __future__ import annotations

import sys
import threading

# Single shared print mutex for all console output (streams, logging, boot lines).
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file=None, flush: bool = False) -> None:
    """Thread-safe single-line print."""
    target = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        target.write(f"{text}\n")
        if flush:
            target.flush()



def set_terminal_title(title_text: str) -> None:
    """Set the terminal window title via OSC 2 when stdout is a terminal."""
    if sys.stdout.isatty():
        with PRINT_MUTEX:
            sys.stdout.write(f"\x1b]2;{title_text}\x07")
            sys.stdout.flush()
