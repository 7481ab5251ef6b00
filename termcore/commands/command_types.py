#!/usr/bin/env python3
# termcore/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- ExitCode: process-style status returned by every command and pipeline.
- OptionDescriptor: static metadata for one bindable option.
- CommandSpec: a registered command type with its descriptors and a factory.
- Command: base class for command implementations.
- SessionState / CommandContext / CompletionContext: what a running command sees.
"""

import enum
import os
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Iterable, get_args, get_origin

from termcore.helpers import resolve_path

if TYPE_CHECKING:  # pragma: no cover - typing only
    from termcore.commands.commands import CommandRegistry
    from termcore.helpers import CommandHistory, LogBuffer
    from termcore.interface.cancellation import CancellationToken
    from termcore.interface.streams import TextReader, TextWriter


class ExitCode(IntEnum):
    SUCCESS = 0
    RUNTIME_ERROR = 1
    USAGE_ERROR = 2


# Scalar types the binder knows how to convert
SCALAR_TYPES: tuple[type, ...] = (str, int, float)


@dataclass(frozen=True, slots=True)
class OptionDescriptor:
    """
    Static metadata describing one bindable option.

    Attributes:
        long_name: Name used with '--' (required, case-sensitive).
        short_name: Single character used with '-' (optional).
        value_type: bool, str, int, float, an Enum subclass, or list[T] of those.
        required: The option must appear at least once in the stage.
        description: One-line help text.
        default: Value assigned before binding (ignored for bool and list).
    """
    long_name: str
    short_name: str | None = None
    value_type: Any = bool
    required: bool = False
    description: str = ""
    default: Any = None

    def __post_init__(self) -> None:
        if not self.long_name or self.long_name.startswith("-"):
            raise ValueError(f"invalid option long name: {self.long_name!r}")
        if self.short_name is not None and len(self.short_name) != 1:
            raise ValueError(
                f"short name for --{self.long_name} must be a single character")
        element = self.element_type
        if element is not bool and element not in SCALAR_TYPES and not _is_enum(element):
            raise TypeError(
                f"unsupported option type for --{self.long_name}: {self.value_type!r}")
        if self.is_list and element is bool:
            raise TypeError(f"--{self.long_name}: list of bool is not supported")

    @property
    def attr_name(self) -> str:
        return self.long_name.replace("-", "_")

    @property
    def is_bool(self) -> bool:
        return self.value_type is bool

    @property
    def is_list(self) -> bool:
        return get_origin(self.value_type) is list

    @property
    def element_type(self) -> Any:
        if self.is_list:
            args = get_args(self.value_type)
            return args[0] if args else str
        return self.value_type

    @property
    def type_name(self) -> str:
        element = self.element_type
        name = getattr(element, "__name__", str(element))
        return f"list[{name}]" if self.is_list else name

    def initial_value(self) -> Any:
        if self.is_bool:
            return False
        if self.is_list:
            return list(self.default) if self.default else []
        return self.default

    def __str__(self) -> str:
        short_part = f"-{self.short_name}, " if self.short_name else ""
        required = " (required)" if self.required else ""
        return f"{short_part}--{self.long_name}{required}: {self.type_name}"


def _is_enum(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, enum.Enum)


@dataclass(slots=True)
class CommandSpec:
    """
    A registered command type with metadata and a factory.

    Important fields:
        name: Primary unique command name.
        description: Short, user-facing description.
        factory: Zero-argument callable producing a fresh command instance.
        options: Declared option descriptors, in declaration order.
        category: Logical group for help output.
        aliases: Extra names resolving to the same command.
        example: One-line example usage string (optional).
        module: Python module path where the command is defined.
    """

    name: str
    description: str
    factory: Any
    options: tuple[OptionDescriptor, ...] = ()
    category: str = "general"
    aliases: list[str] = field(default_factory=list)
    example: str = ""
    module: str = field(default="", repr=False)
    _by_long: dict[str, OptionDescriptor] = field(default_factory=dict, repr=False)
    _by_short: dict[str, OptionDescriptor] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        for descriptor in self.options:
            if descriptor.long_name in self._by_long:
                raise ValueError(
                    f"{self.name}: duplicate option --{descriptor.long_name}")
            self._by_long[descriptor.long_name] = descriptor
            if descriptor.short_name is not None:
                if descriptor.short_name in self._by_short:
                    raise ValueError(
                        f"{self.name}: duplicate option -{descriptor.short_name}")
                self._by_short[descriptor.short_name] = descriptor

    def option_by_long(self, name: str) -> OptionDescriptor | None:
        return self._by_long.get(name)

    def option_by_short(self, name: str) -> OptionDescriptor | None:
        return self._by_short.get(name)

    def create(self) -> "Command":
        """Instantiate the command with every descriptor-backed field at its initial value."""
        instance = self.factory()
        for descriptor in self.options:
            setattr(instance, descriptor.attr_name, descriptor.initial_value())
        return instance

    def usage(self) -> str:
        parts = [self.name]
        for descriptor in self.options:
            flag = f"--{descriptor.long_name}"
            if not descriptor.is_bool:
                flag += f"=<{descriptor.type_name}>"
            parts.append(flag if descriptor.required else f"[{flag}]")
        parts.append("[args...]")
        return " ".join(parts)

    def generate_help(self) -> str:
        lines = [f"{self.name} - {self.description}", "", f"Usage: {self.usage()}"]
        if self.aliases:
            lines.append(f"Aliases: {', '.join(self.aliases)}")
        if self.options:
            lines.append("")
            lines.append("Options:")
            for descriptor in self.options:
                line = f"  {str(descriptor):<36}"
                if descriptor.description:
                    line += f" {descriptor.description}"
                lines.append(line.rstrip())
        if self.example:
            lines.append("")
            lines.append(f"Example: {self.example}")
        return "\n".join(lines)


class Command:
    """
    Base class for command implementations.

    Subclasses declare `options` and implement `execute`. The `@command`
    decorator attaches the resulting CommandSpec as `spec`.
    """

    spec: ClassVar[CommandSpec]
    options: ClassVar[tuple[OptionDescriptor, ...]] = ()

    @property
    def name(self) -> str:
        return type(self).spec.name

    @property
    def description(self) -> str:
        return type(self).spec.description

    async def execute(self, context: "CommandContext", cancel: "CancellationToken") -> ExitCode | int:  # pragma: no cover - interface
        raise NotImplementedError

    def get_completions(self, context: "CompletionContext") -> Iterable[str]:
        """Candidates for the word under the cursor. Lazy and restartable per call."""
        return ()


@dataclass(slots=True)
class SessionState:
    """Ambient terminal state shared by all stages of a session."""

    working_directory: Path
    home_directory: Path
    registry: "CommandRegistry"
    history: "CommandHistory"
    log_buffer: "LogBuffer | None" = None
    previous_working_directory: Path | None = None

    def change_directory(self, path: Path) -> None:
        if path != self.working_directory:
            self.previous_working_directory = self.working_directory
            self.working_directory = path

    def resolve(self, user_path: str | os.PathLike[str]) -> Path:
        return resolve_path(user_path, self.working_directory, self.home_directory)


@dataclass(slots=True)
class CommandContext:
    """Resolved streams, arguments and session for one pipeline stage."""

    stdin: "TextReader"
    stdout: "TextWriter"
    stderr: "TextWriter"
    arguments: tuple[str, ...]
    session: SessionState

    @property
    def working_directory(self) -> Path:
        return self.session.working_directory

    @property
    def home_directory(self) -> Path:
        return self.session.home_directory

    def resolve(self, user_path: str | os.PathLike[str]) -> Path:
        return self.session.resolve(user_path)


@dataclass(slots=True)
class CompletionContext:
    """Input state handed to `Command.get_completions`."""

    text: str
    current: str
    command_name: str
    arguments: tuple[str, ...]
    session: SessionState
