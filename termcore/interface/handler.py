#!/usr/bin/env python3
# termcore/interface/handler.py
from __future__ import annotations

"""
Terminal session: the boundary where a line of text becomes an exit code.

    text -> Parser (Tokenizer) -> Binder -> PipelineExecutor -> exit code

Every error raised on the way is rendered to stderr here:
- parse/tokenize errors -> "Parse error: ..." and USAGE_ERROR
- bind errors           -> the binder's message and USAGE_ERROR
- cancellation          -> "^C" and RUNTIME_ERROR
- anything unexpected   -> "Unexpected error: ..." and RUNTIME_ERROR (logged with traceback)
"""

import logging
import os
from pathlib import Path

from termcore.commands import CommandRegistry, ExitCode, SessionState
from termcore.helpers import DEFAULT_HISTORY_SIZE, CommandHistory, LogBuffer

from .binder import Binder
from .cancellation import CancellationToken
from .completion import CompletionEngine, CompletionResult
from .errors import BindException, CommandRuntimeError, OperationCancelled, ParseError, TerminalError
from .executor import PipelineExecutor
from .parser import Parser
from .streams import EmptyTextReader, ListTextReader, StringTextWriter, TextReader, TextWriter

logger = logging.getLogger(__name__)

# Short hint shown at startup
HELP_TEXT = "Type 'help <command>' for more information on a specific command."


class Terminal:
    """
    One shell session.

    Owns the command registry, history, log buffer and directory state; nothing
    is shared between Terminal instances.
    """

    def __init__(
        self,
        registry: CommandRegistry | None = None,
        *,
        home_directory: str | os.PathLike[str] | None = None,
        working_directory: str | os.PathLike[str] | None = None,
        history: CommandHistory | None = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
        log_buffer: LogBuffer | None = None,
    ) -> None:
        home = Path(home_directory) if home_directory is not None else Path.home()
        working = Path(working_directory) if working_directory is not None else home

        self.registry = registry if registry is not None else CommandRegistry()
        self.history = history if history is not None else CommandHistory(history_size)
        self.session = SessionState(
            working_directory=Path(os.path.abspath(working)),
            home_directory=Path(os.path.abspath(home)),
            registry=self.registry,
            history=self.history,
            log_buffer=log_buffer,
        )
        self.parser = Parser()
        self.binder = Binder(self.registry)
        self.executor = PipelineExecutor(self.session)
        self.completion = CompletionEngine(self.session)

    # ---------------- State ----------------

    @property
    def working_directory(self) -> Path:
        return self.session.working_directory

    @property
    def home_directory(self) -> Path:
        return self.session.home_directory

    @property
    def previous_working_directory(self) -> Path | None:
        return self.session.previous_working_directory

    @property
    def log_buffer(self) -> LogBuffer | None:
        return self.session.log_buffer

    def change_directory(self, path: str | os.PathLike[str]) -> Path:
        """Change the working directory; '-' returns to the previous one."""
        if os.fspath(path) == "-":
            if self.session.previous_working_directory is None:
                raise CommandRuntimeError("No previous directory")
            target = self.session.previous_working_directory
        else:
            target = self.session.resolve(path)
        if not target.is_dir():
            raise CommandRuntimeError(f"No such directory: {os.fspath(path)}")
        self.session.change_directory(target)
        return target

    # ---------------- Execution ----------------

    async def execute(
        self,
        line: str,
        stdout: TextWriter,
        stderr: TextWriter,
        stdin: TextReader | None = None,
        cancel: CancellationToken | None = None,
    ) -> int:
        """Run one input line and return its exit code."""
        if not line or not line.strip():
            return ExitCode.SUCCESS

        self.history.add(line.strip())
        cancel = cancel if cancel is not None else CancellationToken()
        stdin = stdin if stdin is not None else EmptyTextReader()

        try:
            pipeline = self.parser.parse(line)
            if pipeline.is_empty:
                return ExitCode.SUCCESS
            bound = self.binder.bind(pipeline)
            return await self.executor.execute(bound, stdin, stdout, stderr, cancel)
        except ParseError as exc:
            await stderr.write_line(f"Parse error: {exc}")
            return exc.exit_code
        except BindException as exc:
            await stderr.write_line(str(exc))
            return exc.exit_code
        except OperationCancelled as exc:
            await stderr.write_line("^C")
            return exc.exit_code
        except TerminalError as exc:
            await stderr.write_line(str(exc))
            return exc.exit_code
        except Exception as exc:
            logger.exception("Unexpected error while executing %r", line)
            await stderr.write_line(f"Unexpected error: {exc}")
            return ExitCode.RUNTIME_ERROR

    async def run(self, line: str, stdin_lines: list[str] | None = None) -> tuple[int, str, str]:
        """Execute `line` with captured output; returns (exit_code, stdout, stderr)."""
        stdout = StringTextWriter()
        stderr = StringTextWriter()
        stdin = ListTextReader(stdin_lines) if stdin_lines is not None else None
        code = await self.execute(line, stdout, stderr, stdin=stdin)
        return code, stdout.getvalue(), stderr.getvalue()

    def complete(self, text: str) -> CompletionResult:
        return self.completion.complete(text)
