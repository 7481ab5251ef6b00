# termplugins/text/entrypoint.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import AsyncIterator

from termcore.commands import Command, CommandContext, ExitCode, command, option

DEFAULT_LINES = 10


# -------------------------- helpers --------------------------

@dataclass(slots=True)
class _Source:
    name: str
    lines: list[str]


async def _read_sources(context: CommandContext, tool: str) -> AsyncIterator[_Source | None]:
    """
    Yield each positional file (or stdin when there are none).

    A file that cannot be read is reported on stderr and yielded as None.
    """
    if not context.arguments:
        yield _Source("-", await context.stdin.read_all())
        return

    for name in context.arguments:
        if name == "-":
            yield _Source(name, await context.stdin.read_all())
            continue
        path = context.resolve(name)
        if path.is_dir():
            await context.stderr.write_line(f"{tool}: {name}: Is a directory")
            yield None
            continue
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            await context.stderr.write_line(f"{tool}: {name}: No such file or directory")
            yield None
            continue
        except OSError as exc:
            await context.stderr.write_line(f"{tool}: {name}: {exc.strerror or exc}")
            yield None
            continue
        yield _Source(name, text.splitlines())


def _parse_count(raw: str | None, tool: str) -> tuple[int, str]:
    """
    Parse a -n value. Returns (count, mode) where mode is '' for a plain
    count, '-' for a leading minus and '+' for a leading plus.
    """
    if raw is None or raw == "":
        return DEFAULT_LINES, ""
    mode = raw[0] if raw[0] in "+-" else ""
    digits = raw[1:] if mode else raw
    if not digits.isdigit():
        raise ValueError(f"{tool}: invalid number of lines: '{raw}'")
    return int(digits), mode


# ----------------------- commands -----------------------

@command(
    name="echo",
    description="Print arguments to stdout.",
    example="echo hello world",
)
class EchoCommand(Command):
    options = (
        option("no-newline", "n", description="Do not print the trailing newline"),
    )

    async def execute(self, context, cancel):
        text = " ".join(context.arguments)
        if self.no_newline:
            await context.stdout.write(text)
        else:
            await context.stdout.write_line(text)
        return ExitCode.SUCCESS


@command(
    name="cat",
    description="Concatenate files (or stdin) to stdout.",
    example="cat notes.txt -n",
)
class CatCommand(Command):
    options = (
        option("number", "n", description="Number all output lines"),
    )

    async def execute(self, context, cancel):
        result = ExitCode.SUCCESS
        number = 0
        async for source in _read_sources(context, "cat"):
            if source is None:
                result = ExitCode.RUNTIME_ERROR
                continue
            for line in source.lines:
                if self.number:
                    number += 1
                    await context.stdout.write_line(f"{number:6}\t{line}")
                else:
                    await context.stdout.write_line(line)
        return result


@command(
    name="grep",
    description="Print lines matching a regular expression.",
    example="cat log.txt | grep -p error -i",
)
class GrepCommand(Command):
    options = (
        option("pattern", "p", str, required=True, description="Pattern to search for"),
        option("ignorecase", "i", description="Ignore case distinctions"),
        option("invert", "v", description="Select non-matching lines"),
        option("count", "c", description="Only print count of matching lines"),
    )

    async def execute(self, context, cancel):
        flags = re.IGNORECASE if self.ignorecase else 0
        try:
            regex = re.compile(self.pattern, flags)
        except re.error as exc:
            await context.stderr.write_line(f"grep: invalid pattern: {exc}")
            return ExitCode.USAGE_ERROR

        show_names = len(context.arguments) > 1
        matches = 0
        failed = False
        async for source in _read_sources(context, "grep"):
            if source is None:
                failed = True
                continue
            source_matches = 0
            for line in source.lines:
                if (regex.search(line) is not None) == self.invert:
                    continue
                source_matches += 1
                if not self.count:
                    prefix = f"{source.name}:" if show_names else ""
                    await context.stdout.write_line(f"{prefix}{line}")
            if self.count:
                prefix = f"{source.name}:" if show_names else ""
                await context.stdout.write_line(f"{prefix}{source_matches}")
            matches += source_matches

        if failed:
            return ExitCode.RUNTIME_ERROR
        return ExitCode.SUCCESS if matches else ExitCode.RUNTIME_ERROR


class _HeadTailBase(Command):
    """Shared file/stdin walking and `==> name <==` headers for head and tail."""

    tool = ""

    options = (
        option("lines", "n", str, description="Number of lines (default: 10)"),
        option("quiet", "q", description="Never print headers giving file names"),
        option("verbose", "v", description="Always print headers giving file names"),
    )

    def select(self, lines: list[str], count: int, mode: str) -> list[str]:  # pragma: no cover - interface
        raise NotImplementedError

    async def execute(self, context, cancel):
        try:
            count, mode = _parse_count(self.lines, self.tool)
        except ValueError as exc:
            await context.stderr.write_line(str(exc))
            return ExitCode.USAGE_ERROR

        headers = self.verbose or (len(context.arguments) > 1 and not self.quiet)
        result = ExitCode.SUCCESS
        first = True
        async for source in _read_sources(context, self.tool):
            if source is None:
                result = ExitCode.RUNTIME_ERROR
                continue
            if headers:
                if not first:
                    await context.stdout.write_line()
                await context.stdout.write_line(f"==> {source.name} <==")
            first = False
            for line in self.select(source.lines, count, mode):
                await context.stdout.write_line(line)
        return result


@command(
    name="head",
    description="Print the first lines of files (or stdin).",
    example="head -n 5 notes.txt",
)
class HeadCommand(_HeadTailBase):
    tool = "head"

    def select(self, lines, count, mode):
        if mode == "-":
            # all but the last `count`
            return lines[:max(0, len(lines) - count)]
        return lines[:count]


@command(
    name="tail",
    description="Print the last lines of files (or stdin).",
    example="tail -n +3 notes.txt",
)
class TailCommand(_HeadTailBase):
    tool = "tail"

    def select(self, lines, count, mode):
        if mode == "+":
            # from line `count` (1-based) onwards
            return lines[max(0, count - 1):]
        return lines[max(0, len(lines) - count):] if count else []


@command(
    name="wc",
    description="Count lines, words and characters.",
    example="cat notes.txt | wc -l",
)
class WcCommand(Command):
    options = (
        option("lines", "l", description="Print the line count"),
        option("words", "w", description="Print the word count"),
        option("chars", "c", description="Print the character count"),
    )

    async def execute(self, context, cancel):
        selected = (self.lines, self.words, self.chars)
        if not any(selected):
            selected = (True, True, True)

        result = ExitCode.SUCCESS
        totals = [0, 0, 0]
        sources = 0
        async for source in _read_sources(context, "wc"):
            if source is None:
                result = ExitCode.RUNTIME_ERROR
                continue
            sources += 1
            counts = [
                len(source.lines),
                sum(len(line.split()) for line in source.lines),
                sum(len(line) + 1 for line in source.lines),
            ]
            totals = [a + b for a, b in zip(totals, counts)]
            await context.stdout.write_line(self._format(counts, selected, source.name))

        if sources > 1:
            await context.stdout.write_line(self._format(totals, selected, "total"))
        return result

    @staticmethod
    def _format(counts: list[int], selected: tuple[bool, ...], name: str) -> str:
        parts = [f"{value:7}" for value, wanted in zip(counts, selected) if wanted]
        if name != "-":
            parts.append(f" {name}")
        return "".join(parts)
