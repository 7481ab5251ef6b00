#!/usr/bin/env python3
# termcore/interface/errors.py
from __future__ import annotations

"""
Error taxonomy for the shell front-end and execution engine.

Every error carries the exit code the Terminal reports when it reaches the
execution boundary:
- TokenizeError / ParseError / BindException -> USAGE_ERROR
- CommandRuntimeError / OperationCancelled   -> RUNTIME_ERROR
"""

from enum import Enum

from termcore.commands import ExitCode


class TerminalError(Exception):
    """Base class for errors surfaced as an exit code plus diagnostic text."""

    exit_code: ExitCode = ExitCode.RUNTIME_ERROR

    def __init__(self, message: str, exit_code: ExitCode | None = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code

    @property
    def message(self) -> str:
        return str(self)


class ParseError(TerminalError):
    """Structurally invalid input (dangling pipe, missing redirect path, ...)."""

    exit_code = ExitCode.USAGE_ERROR


class TokenizeErrorKind(Enum):
    UNCLOSED_QUOTE = "unclosed-quote"
    ILLEGAL_WHITESPACE = "illegal-whitespace"
    DANGLING_ESCAPE = "dangling-escape"


class TokenizeError(ParseError):
    """Lexically malformed input."""

    def __init__(self, message: str, kind: TokenizeErrorKind, position: int) -> None:
        super().__init__(message)
        self.kind = kind
        self.position = position


class BindException(TerminalError):
    """Unknown command/option, missing required option, bad value or duplicate list option."""

    exit_code = ExitCode.USAGE_ERROR

    def __init__(self, message: str, command_name: str | None = None) -> None:
        super().__init__(message)
        self.command_name = command_name


class CommandRuntimeError(TerminalError):
    """Command-level failure, e.g. a redirect source that does not exist."""

    exit_code = ExitCode.RUNTIME_ERROR


class OperationCancelled(TerminalError):
    """The pipeline's cancellation token was triggered."""

    exit_code = ExitCode.RUNTIME_ERROR

    def __init__(self, message: str = "operation cancelled") -> None:
        super().__init__(message)
