# termplugins/session/entrypoint.py
from __future__ import annotations

import logging
from enum import Enum

from termcore.commands import Command, CommandRegistry, ExitCode, command, option
from termcore.interface import HELP_TEXT
from termcore.ui import CLEAR_SEQUENCE, format_table


class LogLevel(Enum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


# -------------------------- help --------------------------

def _format_categories_table(registry: CommandRegistry) -> list[str]:
    """Render the categories overview table."""
    categories = registry.categories()
    if not categories:
        return ["No commands loaded."]

    rows = []
    for category_name in sorted(categories):
        command_count = len(categories[category_name])
        rows.append(
            [category_name,
             f"{command_count} command{'s' if command_count != 1 else ''}",
             registry.get_category_description(category_name)]
        )
    return format_table(rows, headers=["Category", "Commands", "Description"])


def _format_category_help(registry: CommandRegistry, category: str) -> list[str]:
    """Render the commands table for a specific category."""
    rows = []
    for spec in sorted(registry.categories().get(category, []), key=lambda s: s.name.lower()):
        alias_display = ", ".join(spec.aliases) if spec.aliases else "-"
        rows.append([spec.name, alias_display, spec.description])
    return format_table(rows, headers=["Command", "Aliases", "Description"])


@command(
    name="help",
    description="Show categories, a category's commands, or one command's usage.",
    example="help grep",
    aliases=["?"],
)
class HelpCommand(Command):
    options = (
        option("all", "a", description="List every command"),
    )

    async def execute(self, context, cancel):
        registry = context.session.registry

        if self.all:
            for category in sorted(registry.categories()):
                await context.stdout.write_line(f"[{category}]")
                for line in _format_category_help(registry, category):
                    await context.stdout.write_line(line)
            return ExitCode.SUCCESS

        if not context.arguments:
            for line in _format_categories_table(registry):
                await context.stdout.write_line(line)
            await context.stdout.write_line(HELP_TEXT)
            return ExitCode.SUCCESS

        name = context.arguments[0]
        spec = registry.get(name)
        if spec is not None:
            await context.stdout.write_line(spec.generate_help())
            return ExitCode.SUCCESS
        if name in registry.categories():
            for line in _format_category_help(registry, name):
                await context.stdout.write_line(line)
            return ExitCode.SUCCESS

        await context.stderr.write_line(f"help: no such command or category: {name}")
        return ExitCode.RUNTIME_ERROR

    def get_completions(self, context):
        registry = context.session.registry
        return sorted({*registry.names(), *registry.categories()})


# -------------------------- history --------------------------

@command(
    name="history",
    description="Display or manage command history.",
    example="history -n 20",
)
class HistoryCommand(Command):
    options = (
        option("clear", "c", description="Clear all history"),
        option("delete", "d", int, description="Delete the entry at this position"),
        option("number", "n", int, description="Display only the last N entries"),
        option("reverse", "r", description="Display newest first"),
    )

    async def execute(self, context, cancel):
        history = context.session.history

        if self.clear:
            history.clear()
            return ExitCode.SUCCESS

        if self.delete is not None:
            if not history.delete(self.delete):
                await context.stderr.write_line(f"history: position {self.delete} out of range")
                return ExitCode.RUNTIME_ERROR
            return ExitCode.SUCCESS

        numbered = list(enumerate(history.entries(), start=1))
        if self.number is not None:
            if self.number < 0:
                await context.stderr.write_line("history: --number must not be negative")
                return ExitCode.USAGE_ERROR
            numbered = numbered[max(0, len(numbered) - self.number):] if self.number else []
        if self.reverse:
            numbered.reverse()

        for position, line in numbered:
            await context.stdout.write_line(f"{position:5}  {line}")
        return ExitCode.SUCCESS


# -------------------------- log --------------------------

@command(
    name="log",
    description="Display retained log messages.",
    example="log --level=warning -t 20",
)
class LogCommand(Command):
    options = (
        option("level", "l", LogLevel, description="Minimum level to show"),
        option("tail", "t", int, description="Show the last N entries"),
        option("head", "H", int, description="Show the first N entries"),
        option("clear", "c", description="Discard retained entries"),
    )

    async def execute(self, context, cancel):
        log_buffer = context.session.log_buffer
        if log_buffer is None:
            await context.stderr.write_line("log: log buffer is not available")
            return ExitCode.RUNTIME_ERROR
        if self.head is not None and self.tail is not None:
            await context.stderr.write_line("log: cannot specify both --head and --tail")
            return ExitCode.USAGE_ERROR

        if self.clear:
            log_buffer.clear()
            return ExitCode.SUCCESS

        min_level = self.level.value if self.level is not None else logging.NOTSET
        entries = log_buffer.entries(min_level)
        if self.head is not None:
            entries = entries[:max(0, self.head)]
        elif self.tail is not None:
            entries = entries[max(0, len(entries) - self.tail):] if self.tail > 0 else []

        for entry in entries:
            stamp = entry.timestamp.strftime("%H:%M:%S")
            await context.stdout.write_line(f"{stamp} [{entry.level_name}] {entry.logger}: {entry.message}")
        return ExitCode.SUCCESS


# -------------------------- clear --------------------------

@command(
    name="clear",
    description="Clear the screen.",
    aliases=["cls"],
)
class ClearCommand(Command):
    async def execute(self, context, cancel):
        await context.stdout.write(CLEAR_SEQUENCE)
        return ExitCode.SUCCESS
