#!/usr/bin/env python3
# termcore/interface/binder.py
from __future__ import annotations

"""
Binding of parsed stages to registered commands.

For each stage the binder:
- resolves the command name in the registry (case-insensitive, aliases allowed),
- creates a fresh command instance,
- matches every option occurrence to a declared descriptor and converts its value,
- checks required options,
- returns the instance plus its final positional arguments.

Every failure is a BindException (USAGE_ERROR) naming the command.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Any

from termcore.commands import Command, CommandRegistry, CommandSpec, OptionDescriptor

from .errors import BindException
from .parser import ParsedCommand, ParsedOption, Pipeline, Redirections

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BoundCommand:
    command: Command
    spec: CommandSpec
    positional_arguments: tuple[str, ...] = ()
    redirections: Redirections = field(default_factory=Redirections)

    @property
    def name(self) -> str:
        return self.spec.name


@dataclass(slots=True)
class BoundPipeline:
    commands: list[BoundCommand] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.commands)


class Binder:
    """Binds pipelines against a CommandRegistry."""

    def __init__(self, registry: CommandRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    def bind(self, pipeline: Pipeline) -> BoundPipeline:
        """Bind every stage; the first failing stage aborts the whole pipeline."""
        bound = BoundPipeline()
        for parsed in pipeline.commands:
            bound.commands.append(self.bind_command(parsed))
        logger.debug("Bound pipeline: %s", " | ".join(c.name for c in bound.commands))
        return bound

    def bind_command(self, parsed: ParsedCommand) -> BoundCommand:
        spec = self._registry.get(parsed.command_name)
        if spec is None:
            raise BindException(
                f"command not found: {parsed.command_name}.{self._suggestion(parsed.command_name)}",
                parsed.command_name)

        instance = spec.create()
        positionals = list(parsed.positional_arguments)
        seen: set[str] = set()
        reinserted = 0

        for occurrence in parsed.options:
            descriptor = self._descriptor_for(spec, occurrence)
            first_time = descriptor.long_name not in seen
            seen.add(descriptor.long_name)

            if descriptor.is_bool:
                if occurrence.has_value and not occurrence.separate:
                    raise self._error(spec, f"boolean option --{descriptor.long_name} does not accept a value")
                if occurrence.separate:
                    # The following token was never meant as a value; give it back.
                    positionals.insert(occurrence.positional_index + reinserted, occurrence.raw_value or "")
                    reinserted += 1
                setattr(instance, descriptor.attr_name, True)
                continue

            if not occurrence.has_value:
                raise self._error(spec, f"option --{descriptor.long_name} requires a value")

            if descriptor.is_list:
                if not first_time:
                    raise self._error(
                        spec, f"list option --{descriptor.long_name} cannot be specified multiple times")
                items = split_unprotected(occurrence.raw_value or "", occurrence.value_protected)
                value: Any = [self._convert(spec, descriptor, item) for item in items]
            else:
                value = self._convert(spec, descriptor, occurrence.raw_value or "")
            setattr(instance, descriptor.attr_name, value)

        for descriptor in spec.options:
            if descriptor.required and descriptor.long_name not in seen:
                raise self._error(spec, f"required option --{descriptor.long_name} is missing")

        return BoundCommand(
            command=instance,
            spec=spec,
            positional_arguments=tuple(positionals),
            redirections=parsed.redirections,
        )

    # ---------------- Helpers ----------------

    def _suggestion(self, name: str) -> str:
        matches = self._registry.suggest(name)
        return f" Did you mean: {', '.join(matches)}?" if matches else ""

    def _descriptor_for(self, spec: CommandSpec, occurrence: ParsedOption) -> OptionDescriptor:
        if occurrence.is_long:
            descriptor = spec.option_by_long(occurrence.name)
        else:
            descriptor = spec.option_by_short(occurrence.name)
        if descriptor is None:
            raise self._error(spec, f"unknown option: {occurrence.display_name}")
        return descriptor

    @staticmethod
    def _error(spec: CommandSpec, message: str) -> BindException:
        return BindException(f"{spec.name}: {message}\n\n{spec.generate_help()}", spec.name)

    def _convert(self, spec: CommandSpec, descriptor: OptionDescriptor, raw: str) -> Any:
        try:
            return convert_value(raw, descriptor.element_type)
        except ValueError as exc:
            raise self._error(
                spec,
                f"failed to convert value '{raw}' for option --{descriptor.long_name}: {exc}") from exc


def convert_value(raw: str, target: Any) -> Any:
    """Convert one raw string to str, int, float or an Enum member (case-insensitive)."""
    if target is str:
        return raw
    if target is int:
        try:
            return int(raw.strip())
        except ValueError:
            raise ValueError(f"cannot convert '{raw}' to int") from None
    if target is float:
        try:
            return float(raw.strip())
        except ValueError:
            raise ValueError(f"cannot convert '{raw}' to float") from None
    if isinstance(target, type) and issubclass(target, enum.Enum):
        wanted = raw.strip().lower()
        for member in target:
            if member.name.lower() == wanted or str(member.value).lower() == wanted:
                return member
        valid = ", ".join(member.name.lower() for member in target)
        raise ValueError(f"cannot convert '{raw}' to {target.__name__}. Valid values: {valid}")
    raise ValueError(f"unsupported option type: {target!r}")


def split_unprotected(raw: str, protected: tuple[bool, ...] = ()) -> list[str]:
    """Split on commas that were neither quoted nor escaped. An empty value yields ['']."""
    parts: list[str] = []
    current: list[str] = []
    for index, ch in enumerate(raw):
        if ch == "," and not (index < len(protected) and protected[index]):
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return parts
