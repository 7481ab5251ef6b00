#!/usr/bin/env python3
# termcore/interface/__init__.py
from __future__ import annotations

"""
Package for the shell language front-end and execution engine.

Provides:
- Tokenizer and Parser (text -> Pipeline).
- Binder (Pipeline -> BoundPipeline against a CommandRegistry).
- PipelineExecutor and async text streams.
- Terminal session, completion and the command loader.
- CLI frontends live in `termcore.interface.cli` and are imported on demand.
"""


from .errors import (
    BindException,
    CommandRuntimeError,
    OperationCancelled,
    ParseError,
    TerminalError,
    TokenizeError,
    TokenizeErrorKind,
)
from .cancellation import CancellationToken
from .tokenizer import Span, Token, TokenKind, Tokenizer, tokenize
from .parser import (
    ParsedCommand,
    ParsedOption,
    Parser,
    Pipeline,
    RedirectMode,
    Redirections,
    parse,
)
from .binder import Binder, BoundCommand, BoundPipeline
from .streams import (
    EmptyTextReader,
    FileTextReader,
    FileTextWriter,
    ListTextReader,
    ListTextWriter,
    StreamTextReader,
    StreamTextWriter,
    StringTextWriter,
    TextReader,
    TextWriter,
)
from .executor import PipelineExecutor
from .completion import CompletionEngine, CompletionResult
from .handler import HELP_TEXT, Terminal
from .loader import load_commands

__all__ = [
    # errors
    "BindException",
    "CommandRuntimeError",
    "OperationCancelled",
    "ParseError",
    "TerminalError",
    "TokenizeError",
    "TokenizeErrorKind",
    "CancellationToken",
    # lexing / parsing
    "Span",
    "Token",
    "TokenKind",
    "Tokenizer",
    "tokenize",
    "ParsedCommand",
    "ParsedOption",
    "Parser",
    "Pipeline",
    "RedirectMode",
    "Redirections",
    "parse",
    # binding / execution
    "Binder",
    "BoundCommand",
    "BoundPipeline",
    "PipelineExecutor",
    # streams
    "EmptyTextReader",
    "FileTextReader",
    "FileTextWriter",
    "ListTextReader",
    "ListTextWriter",
    "StreamTextReader",
    "StreamTextWriter",
    "StringTextWriter",
    "TextReader",
    "TextWriter",
    # session
    "CompletionEngine",
    "CompletionResult",
    "HELP_TEXT",
    "Terminal",
    "load_commands",
]
