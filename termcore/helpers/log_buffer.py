#!/usr/bin/env python3
# termcore/helpers/log_buffer.py
from __future__ import annotations

"""
In-memory log retention.

`LogBuffer` is a logging.Handler that keeps the most recent records in a
RingBuffer. It may be fed from any thread; readers get snapshot copies.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .ring_buffer import RingBuffer

DEFAULT_LOG_CAPACITY = 10_000


@dataclass(frozen=True, slots=True)
class LogEntry:
    timestamp: datetime
    level: int
    logger: str
    message: str

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level)


class LogBuffer(logging.Handler):
    """Fixed-size store of recent log records."""

    def __init__(self, capacity: int = DEFAULT_LOG_CAPACITY, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._entries: RingBuffer[LogEntry] = RingBuffer(capacity)
        self._entries_lock = threading.Lock()
        self._listeners: list[Callable[[LogEntry], None]] = []

    @property
    def capacity(self) -> int:
        return self._entries.capacity

    def __len__(self) -> int:
        with self._entries_lock:
            return len(self._entries)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = LogEntry(
                timestamp=datetime.fromtimestamp(record.created),
                level=record.levelno,
                logger=record.name,
                message=record.getMessage(),
            )
        except Exception:
            self.handleError(record)
            return

        with self._entries_lock:
            self._entries.add(entry, notify=False)

        for listener in list(self._listeners):
            listener(entry)

    def entries(self, min_level: int = logging.NOTSET) -> list[LogEntry]:
        """Return a copy of retained entries at or above `min_level`, oldest first."""
        with self._entries_lock:
            snapshot = self._entries.snapshot()
        return [e for e in snapshot if e.level >= min_level]

    def clear(self) -> None:
        with self._entries_lock:
            self._entries.clear(notify=False)

    def add_listener(self, listener: Callable[[LogEntry], None]) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[LogEntry], None]) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass
