#!/usr/bin/env python3
# termcore/interface/streams.py
from __future__ import annotations

"""
Line-oriented async text streams handed to commands.

Readers return one line at a time (without the newline) and None at end of
input. Writers accept text and lines. Pipe stages use ListTextWriter and
ListTextReader so a stage's whole output is buffered before the next runs.
"""

import asyncio
import io
from pathlib import Path
from typing import AsyncIterator, Iterable, TextIO

from termcore.ui import PRINT_MUTEX


class TextReader:
    """Base class for async line readers."""

    async def read_line(self) -> str | None:  # pragma: no cover - interface
        raise NotImplementedError

    async def read_all(self) -> list[str]:
        lines: list[str] = []
        while (line := await self.read_line()) is not None:
            lines.append(line)
        return lines

    def __aiter__(self) -> AsyncIterator[str]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[str]:
        while (line := await self.read_line()) is not None:
            yield line

    async def close(self) -> None:
        return None


class EmptyTextReader(TextReader):
    async def read_line(self) -> str | None:
        return None


class ListTextReader(TextReader):
    """Reads from an in-memory list of lines."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = list(lines)
        self._position = 0

    async def read_line(self) -> str | None:
        if self._position >= len(self._lines):
            return None
        line = self._lines[self._position]
        self._position += 1
        return line


class FileTextReader(TextReader):
    """Reads a UTF-8 text file line by line."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self._handle: TextIO | None = path.open("r", encoding="utf-8", newline=None)

    async def read_line(self) -> str | None:
        if self._handle is None:
            return None
        line = self._handle.readline()
        if line == "":
            await self.close()
            return None
        return line.rstrip("\r\n")

    async def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None


class StreamTextReader(TextReader):
    """Wraps a blocking text stream (e.g. sys.stdin); reads happen off the event loop."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    async def read_line(self) -> str | None:
        line = await asyncio.to_thread(self._stream.readline)
        if line == "":
            return None
        return line.rstrip("\r\n")


class TextWriter:
    """Base class for async text writers."""

    async def write(self, text: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    async def write_line(self, text: str = "") -> None:
        await self.write(text + "\n")

    async def flush(self) -> None:
        return None

    async def close(self) -> None:
        await self.flush()


class ListTextWriter(TextWriter):
    """Collects output as lines; a trailing partial line is kept until flushed or read."""

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._partial: list[str] = []

    async def write(self, text: str) -> None:
        if not text:
            return
        pieces = text.split("\n")
        self._partial.append(pieces[0])
        for piece in pieces[1:]:
            self._lines.append("".join(self._partial))
            self._partial = [piece] if piece else []

    async def flush(self) -> None:
        if self._partial:
            self._lines.append("".join(self._partial))
            self._partial = []

    @property
    def lines(self) -> list[str]:
        """Completed lines plus any pending partial line."""
        if self._partial:
            return [*self._lines, "".join(self._partial)]
        return list(self._lines)

    def to_reader(self) -> ListTextReader:
        return ListTextReader(self.lines)


class StringTextWriter(TextWriter):
    """Captures everything written into a string."""

    def __init__(self) -> None:
        self._buffer = io.StringIO()

    async def write(self, text: str) -> None:
        self._buffer.write(text)

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    def __str__(self) -> str:
        return self.getvalue()


class FileTextWriter(TextWriter):
    """Writes UTF-8 text to a file, truncating or appending. Parent directories are created."""

    def __init__(self, path: Path, append: bool = False) -> None:
        self.path = path
        path.parent.mkdir(parents=True, exist_ok=True)
        self._handle: TextIO | None = path.open("a" if append else "w", encoding="utf-8", newline="")

    async def write(self, text: str) -> None:
        if self._handle is None:
            raise ValueError(f"write to closed file: {self.path}")
        self._handle.write(text)

    async def flush(self) -> None:
        if self._handle is not None:
            self._handle.flush()

    async def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None


class StreamTextWriter(TextWriter):
    """Writes to a console stream under the shared print mutex."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    async def write(self, text: str) -> None:
        with PRINT_MUTEX:
            self._stream.write(text)

    async def flush(self) -> None:
        with PRINT_MUTEX:
            self._stream.flush()

    async def close(self) -> None:
        # The console stream is not ours to close.
        await self.flush()
