#!/usr/bin/env python3
# termcore/interface/executor.py
from __future__ import annotations

"""
Pipeline execution.

Stages run strictly one after another. Each stage:
1. reads from the caller's stdin, a `<` file, or the buffered output of the previous stage;
2. writes to a `>`/`>>` file, the caller's stdout (last stage), or a buffer for the next stage;
3. runs with reader/writer wrappers that check the cancellation token on every call.

The first stage returning anything other than SUCCESS ends the pipeline with that code.
"""

import logging
from typing import Any

from termcore.commands import CommandContext, ExitCode, SessionState

from .binder import BoundCommand, BoundPipeline
from .cancellation import CancellationToken
from .errors import CommandRuntimeError, OperationCancelled
from .parser import RedirectMode
from .streams import (
    EmptyTextReader,
    FileTextReader,
    FileTextWriter,
    ListTextWriter,
    TextReader,
    TextWriter,
)

logger = logging.getLogger(__name__)


class GuardedReader(TextReader):
    """Checks the token before every read."""

    def __init__(self, inner: TextReader, cancel: CancellationToken) -> None:
        self._inner = inner
        self._cancel = cancel

    async def read_line(self) -> str | None:
        self._cancel.raise_if_cancelled()
        return await self._inner.read_line()


class GuardedWriter(TextWriter):
    """Checks the token before every write."""

    def __init__(self, inner: TextWriter, cancel: CancellationToken) -> None:
        self._inner = inner
        self._cancel = cancel

    async def write(self, text: str) -> None:
        self._cancel.raise_if_cancelled()
        await self._inner.write(text)

    async def write_line(self, text: str = "") -> None:
        self._cancel.raise_if_cancelled()
        await self._inner.write_line(text)

    async def flush(self) -> None:
        await self._inner.flush()

    async def close(self) -> None:
        # Stage code must not close shared streams; the executor owns them.
        await self._inner.flush()


def normalize_exit_code(code: Any) -> int:
    """Map a command's return value to an exit code; None counts as SUCCESS."""
    if code is None:
        return ExitCode.SUCCESS
    value = int(code)
    try:
        return ExitCode(value)
    except ValueError:
        return value


class PipelineExecutor:
    """Runs bound pipelines for one session."""

    def __init__(self, session: SessionState) -> None:
        self._session = session

    async def execute(
        self,
        pipeline: BoundPipeline,
        stdin: TextReader,
        stdout: TextWriter,
        stderr: TextWriter,
        cancel: CancellationToken,
    ) -> int:
        result: int = ExitCode.SUCCESS
        previous: ListTextWriter | None = None
        last_index = len(pipeline.commands) - 1

        for index, bound in enumerate(pipeline.commands):
            cancel.raise_if_cancelled()

            try:
                reader = self._open_input(bound, index, stdin, previous)
            except CommandRuntimeError as exc:
                await stderr.write_line(f"{bound.name}: {exc}")
                return exc.exit_code

            try:
                writer, buffer = self._open_output(bound, index == last_index, stdout)
            except OSError as exc:
                if bound.redirections.stdin_path is not None:
                    await reader.close()
                await stderr.write_line(f"{bound.name}: cannot open {bound.redirections.stdout_path}: {exc.strerror or exc}")
                return ExitCode.RUNTIME_ERROR

            logger.debug("Running stage %d: %s %s", index, bound.name, list(bound.positional_arguments))
            try:
                result = await self._run_stage(bound, reader, writer, stderr, cancel)
            finally:
                if bound.redirections.stdin_path is not None:
                    await reader.close()
                if isinstance(writer, FileTextWriter):
                    await writer.close()
                else:
                    await writer.flush()

            if result != ExitCode.SUCCESS:
                logger.debug("Stage %d (%s) ended with %s; stopping pipeline", index, bound.name, result)
                return result
            previous = buffer

        return result

    async def _run_stage(
        self,
        bound: BoundCommand,
        reader: TextReader,
        writer: TextWriter,
        stderr: TextWriter,
        cancel: CancellationToken,
    ) -> int:
        context = CommandContext(
            stdin=GuardedReader(reader, cancel),
            stdout=GuardedWriter(writer, cancel),
            stderr=GuardedWriter(stderr, cancel),
            arguments=bound.positional_arguments,
            session=self._session,
        )
        try:
            code = await bound.command.execute(context, cancel)
        except OperationCancelled:
            raise
        except Exception as exc:
            logger.debug("Command %s raised", bound.name, exc_info=True)
            await stderr.write_line(f"Error executing {bound.name}: {exc}")
            return ExitCode.RUNTIME_ERROR
        return normalize_exit_code(code)

    def _open_input(
        self,
        bound: BoundCommand,
        index: int,
        stdin: TextReader,
        previous: ListTextWriter | None,
    ) -> TextReader:
        path_text = bound.redirections.stdin_path
        if path_text is not None:
            path = self._session.resolve(path_text)
            if not path.is_file():
                raise CommandRuntimeError(f"File not found: {path_text}")
            return FileTextReader(path)
        if previous is not None:
            return previous.to_reader()
        if index == 0:
            return stdin
        return EmptyTextReader()

    def _open_output(
        self,
        bound: BoundCommand,
        is_last: bool,
        stdout: TextWriter,
    ) -> tuple[TextWriter, ListTextWriter | None]:
        redirections = bound.redirections
        if redirections.stdout_path is not None:
            path = self._session.resolve(redirections.stdout_path)
            return FileTextWriter(path, append=redirections.stdout_mode is RedirectMode.APPEND), None
        if is_last:
            return stdout, None
        buffer = ListTextWriter()
        return buffer, buffer
