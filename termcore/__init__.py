#!/usr/bin/env python3
# termcore/__init__.py
from __future__ import annotations
"""
termcore: an embeddable line-oriented shell.

Subpackages expose their own APIs; nothing is wired up at import time.
Typical embedding:

    registry = CommandRegistry()
    load_commands(registry)
    terminal = Terminal(registry)
    code = await terminal.execute("echo hi | grep --pattern=hi", stdout, stderr)
"""

__version__ = "0.1.0"
