#!/usr/bin/env python3
# termcore/commands/commands.py
from __future__ import annotations

"""
Command registry and declaration utilities.

This module provides:
- CommandRegistry: lookup table of command specs and aliases, owned by a Terminal.
- command: class decorator that builds a CommandSpec from static declarations.
- option: factory for OptionDescriptor entries in a command's `options` tuple.
"""

import difflib
import logging
from typing import Any, Callable, Dict, Optional

from .command_types import Command, CommandSpec, OptionDescriptor

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Holds all command specs and provides lookup utilities."""

    def __init__(self) -> None:
        # Primary name -> spec
        self._commands_by_name: Dict[str, CommandSpec] = {}
        # Alias name -> primary name
        self._alias_to_primary: Dict[str, str] = {}
        # Category -> description text
        self._category_descriptions: Dict[str, str] = {}

    # ---------------- Registration ----------------

    def register(self, target: CommandSpec | type[Command]) -> CommandSpec:
        """Register a spec (or a decorated command class) and its aliases, ensuring no collisions."""
        spec = target if isinstance(target, CommandSpec) else spec_of(target)
        primary_key = spec.name.lower()

        if primary_key in self._commands_by_name or primary_key in self._alias_to_primary:
            raise ValueError(f"Command '{spec.name}' already registered.")

        for alias in spec.aliases:
            alias_key = alias.lower()
            if alias_key == primary_key or alias_key in self._commands_by_name or alias_key in self._alias_to_primary:
                raise ValueError(
                    f"Alias '{alias}' for '{spec.name}' collides with an existing name."
                )

        self._commands_by_name[primary_key] = spec
        for alias in spec.aliases:
            self._alias_to_primary[alias.lower()] = primary_key

        logger.debug("Registered command %s (%d options)", spec.name, len(spec.options))
        return spec

    # ---------------- Lookup ----------------

    def get(self, name: str) -> Optional[CommandSpec]:
        """Return the spec by primary name or alias, or None if not found."""
        key = name.lower()
        if key in self._commands_by_name:
            return self._commands_by_name[key]
        if key in self._alias_to_primary:
            return self._commands_by_name[self._alias_to_primary[key]]
        return None

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __len__(self) -> int:
        return len(self._commands_by_name)

    def all(self) -> list[CommandSpec]:
        """Return only primary commands (avoid duplicates in UIs)."""
        return list(self._commands_by_name.values())

    def names(self) -> list[str]:
        """Return a list of all primary names and aliases for completion."""
        return [*self._commands_by_name.keys(), *self._alias_to_primary.keys()]

    def suggest(self, name: str) -> list[str]:
        """Return up to three close matches for a misspelled command name."""
        return difflib.get_close_matches(name.lower(), self.names(), n=3, cutoff=0.6)

    # ---------------- Categories ----------------

    def categories(self) -> dict[str, list[CommandSpec]]:
        """Group commands by category for help output."""
        grouped: dict[str, list[CommandSpec]] = {}
        for spec in self._commands_by_name.values():
            grouped.setdefault(spec.category, []).append(spec)
        return grouped

    def set_category_description(self, category: str, description: str) -> None:
        """Set display text for a category in help menus."""
        self._category_descriptions[category] = description.strip()

    def get_category_description(self, category: str) -> str:
        """Return display text for a category, or an empty string."""
        return self._category_descriptions.get(category, "")

    # ---------------- Help ----------------

    def generate_help(self) -> str:
        """List every primary command with its description."""
        lines = ["Available commands:", ""]
        for spec in sorted(self._commands_by_name.values(), key=lambda s: s.name.lower()):
            lines.append(f"  {spec.name:<20} {spec.description}")
        return "\n".join(lines)


def option(
    long_name: str,
    short_name: str | None = None,
    value_type: Any = bool,
    *,
    required: bool = False,
    description: str = "",
    default: Any = None,
) -> OptionDescriptor:
    """Declare an option for a command's `options` tuple."""
    return OptionDescriptor(
        long_name=long_name,
        short_name=short_name,
        value_type=value_type,
        required=required,
        description=description,
        default=default,
    )


def command(
    *,
    name: str | None = None,
    description: str | None = None,
    example: str | None = None,
    category: str | None = None,
    aliases: list[str] | None = None,
) -> Callable[[type[Command]], type[Command]]:
    """
    Class decorator that turns a Command subclass into a registrable command.

    - Class name is transformed from CamelCase ('FooBarCommand') to 'foo-bar' if `name` is not provided.
    - The spec is built once here; nothing is registered globally.
    """

    def wrapper(cls: type[Command]) -> type[Command]:
        if not (isinstance(cls, type) and issubclass(cls, Command)):
            raise TypeError("@command can only decorate Command subclasses")

        spec = CommandSpec(
            name=name or _default_name(cls.__name__),
            description=(description or (cls.__doc__ or "")).strip(),
            factory=cls,
            options=tuple(cls.options),
            category=category or "general",
            aliases=list(aliases or []),
            example=example or "",
        )
        spec.module = cls.__module__
        cls.spec = spec
        return cls

    return wrapper


def spec_of(cls: Any) -> CommandSpec:
    """Return the CommandSpec attached by `@command`, or raise TypeError."""
    spec = cls.__dict__.get("spec") if isinstance(cls, type) else None
    if not isinstance(spec, CommandSpec):
        raise TypeError(f"{cls!r} is not decorated with @command")
    return spec


def is_command_class(obj: Any) -> bool:
    return isinstance(obj, type) and isinstance(obj.__dict__.get("spec"), CommandSpec)


def _default_name(class_name: str) -> str:
    base = class_name[:-len("Command")] if class_name.endswith("Command") and class_name != "Command" else class_name
    out: list[str] = []
    for i, ch in enumerate(base):
        if ch.isupper() and i > 0:
            out.append("-")
        out.append(ch.lower())
    return "".join(out)
