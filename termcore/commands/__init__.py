#!/usr/bin/env python3
# termcore/commands/__init__.py
from __future__ import annotations

"""
Package for command declaration and registration.

Provides:
- Data structures and protocols (`Command`, `CommandSpec`, `OptionDescriptor`,
  `ExitCode`, `CommandContext`, `CompletionContext`, `SessionState`).
- The registry and declaration helpers (`CommandRegistry`, `command`, `option`).

This package re-exports public APIs from:
- command_types.py
- commands.py
"""


# Re-export from submodules
from .command_types import (
    Command,
    CommandContext,
    CommandSpec,
    CompletionContext,
    ExitCode,
    OptionDescriptor,
    SessionState,
)
from .commands import CommandRegistry, command, is_command_class, option, spec_of

__all__ = [
    "Command",
    "CommandContext",
    "CommandSpec",
    "CompletionContext",
    "ExitCode",
    "OptionDescriptor",
    "SessionState",
    "CommandRegistry",
    "command",
    "is_command_class",
    "option",
    "spec_of",
]
