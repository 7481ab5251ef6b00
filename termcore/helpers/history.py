#!/usr/bin/env python3
# termcore/helpers/history.py
from __future__ import annotations

"""
Bounded command history.

Entries live in a RingBuffer so the oldest lines are evicted once the
configured maximum is reached. Readers always receive snapshot copies.
"""

import logging
from pathlib import Path
from typing import Iterator

from .ring_buffer import ChangeListener, RingBuffer

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SIZE = 1000


class CommandHistory:
    """Append-on-execute history with consecutive-duplicate suppression."""

    def __init__(self, max_size: int = DEFAULT_HISTORY_SIZE) -> None:
        self._buffer: RingBuffer[str] = RingBuffer(max_size)

    @property
    def max_size(self) -> int:
        return self._buffer.capacity

    def __len__(self) -> int:
        return len(self._buffer)

    def __iter__(self) -> Iterator[str]:
        return iter(self._buffer.snapshot())

    def entries(self) -> list[str]:
        """Return a snapshot, oldest first."""
        return self._buffer.snapshot()

    def add(self, line: str) -> bool:
        """Record `line`. Returns False when it was ignored."""
        if not line or not line.strip():
            return False
        if self._buffer and self._buffer.back() == line:
            return False
        self._buffer.add(line)
        return True

    def clear(self) -> None:
        self._buffer.clear()

    def delete(self, position: int) -> bool:
        """Delete the entry at 1-based `position`."""
        index = position - 1
        if not 0 <= index < len(self._buffer):
            return False

        remaining = self._buffer.snapshot()
        del remaining[index]
        self._buffer.replace_all(remaining)
        return True

    def add_listener(self, listener: ChangeListener) -> None:
        self._buffer.add_listener(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        self._buffer.remove_listener(listener)

    # ---------------- Persistence ----------------

    def load(self, path: Path) -> int:
        """Append entries from a UTF-8 file (one per line). Returns lines read."""
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return 0
        loaded = 0
        for line in text.splitlines():
            if self.add(line):
                loaded += 1
        logger.debug("Loaded %d history entries from %s", loaded, path)
        return loaded

    def save(self, path: Path) -> None:
        """Write the current entries, newest last."""
        path.parent.mkdir(parents=True, exist_ok=True)
        body = "\n".join(self.entries())
        path.write_text(body + ("\n" if body else ""), encoding="utf-8")
