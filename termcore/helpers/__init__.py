#!/usr/bin/env python3
# termcore/helpers/__init__.py
from __future__ import annotations

from .ring_buffer import (
    BufferChange,
    ChangeAction,
    EmptyBufferError,
    RingBuffer,
)
from .history import CommandHistory, DEFAULT_HISTORY_SIZE
from .log_buffer import LogBuffer, LogEntry, DEFAULT_LOG_CAPACITY
from .paths import display_path, resolve_path

__all__ = [
    "BufferChange",
    "ChangeAction",
    "EmptyBufferError",
    "RingBuffer",
    "CommandHistory",
    "DEFAULT_HISTORY_SIZE",
    "LogBuffer",
    "LogEntry",
    "DEFAULT_LOG_CAPACITY",
    "display_path",
    "resolve_path",
]
