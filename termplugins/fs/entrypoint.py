# termplugins/fs/entrypoint.py
from __future__ import annotations

from datetime import datetime
from pathlib import Path

from termcore.commands import Command, CompletionContext, ExitCode, command, option
from termcore.helpers import display_path
from termcore.ui import format_table


# -------------------------- helpers --------------------------

def _fmt_size(n: int) -> str:
    units = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    f = float(n)
    while f >= 1024 and i < len(units) - 1:
        f /= 1024.0
        i += 1
    return f"{f:.1f} {units[i]}"


def _directory_candidates(context: CompletionContext) -> list[str]:
    """Directories below the word being completed, with a trailing '/'."""
    prefix = context.current
    cut = prefix.rfind("/")
    dir_text, name_prefix = prefix[:cut + 1], prefix[cut + 1:]
    base = context.session.resolve(dir_text) if dir_text else context.session.working_directory
    try:
        entries = sorted(base.iterdir())
    except OSError:
        return []
    return [
        f"{dir_text}{entry.name}/"
        for entry in entries
        if entry.is_dir() and entry.name.startswith(name_prefix)
        and (name_prefix.startswith(".") or not entry.name.startswith("."))
    ]


# ----------------------- commands -----------------------

@command(
    name="pwd",
    description="Print the current working directory.",
)
class PwdCommand(Command):
    options = (
        option("tilde", "t", description="Show the home directory as '~'"),
    )

    async def execute(self, context, cancel):
        cwd = context.working_directory
        text = display_path(cwd, context.home_directory) if self.tilde else cwd.as_posix()
        await context.stdout.write_line(text)
        return ExitCode.SUCCESS


@command(
    name="cd",
    description="Change the working directory ('-' for the previous one, none for home).",
    example="cd ~/projects",
)
class CdCommand(Command):
    async def execute(self, context, cancel):
        if len(context.arguments) > 1:
            await context.stderr.write_line("cd: too many arguments")
            return ExitCode.USAGE_ERROR

        session = context.session
        target_text = context.arguments[0] if context.arguments else "~"
        if target_text == "-":
            if session.previous_working_directory is None:
                await context.stderr.write_line("cd: no previous directory")
                return ExitCode.RUNTIME_ERROR
            target = session.previous_working_directory
        else:
            target = context.resolve(target_text)

        if not target.exists():
            await context.stderr.write_line(f"cd: {target_text}: No such file or directory")
            return ExitCode.RUNTIME_ERROR
        if not target.is_dir():
            await context.stderr.write_line(f"cd: {target_text}: Not a directory")
            return ExitCode.RUNTIME_ERROR

        session.change_directory(target)
        if target_text == "-":
            await context.stdout.write_line(target.as_posix())
        return ExitCode.SUCCESS

    def get_completions(self, context):
        return _directory_candidates(context)


@command(
    name="ls",
    description="List directory contents.",
    example="ls -la src",
    aliases=["dir"],
)
class LsCommand(Command):
    options = (
        option("all", "a", description="Include entries starting with '.'"),
        option("long", "l", description="Show size and modification time"),
    )

    async def execute(self, context, cancel):
        targets = list(context.arguments) or ["."]
        result = ExitCode.SUCCESS
        for index, name in enumerate(targets):
            path = context.resolve(name)
            if not path.exists():
                await context.stderr.write_line(f"ls: cannot access '{name}': No such file or directory")
                result = ExitCode.RUNTIME_ERROR
                continue

            if len(targets) > 1 and path.is_dir():
                if index:
                    await context.stdout.write_line()
                await context.stdout.write_line(f"{name}:")

            entries = self._entries(path)
            if self.long:
                for line in format_table(
                        [self._row(entry) for entry in entries],
                        headers=["Name", "Size", "Modified"],
                        border=False):
                    await context.stdout.write_line(line)
            else:
                for entry in entries:
                    await context.stdout.write_line(self._label(entry))
        return result

    def _entries(self, path: Path) -> list[Path]:
        if not path.is_dir():
            return [path]
        entries = sorted(path.iterdir(), key=lambda p: p.name.lower())
        if not self.all:
            entries = [p for p in entries if not p.name.startswith(".")]
        return entries

    @staticmethod
    def _label(entry: Path) -> str:
        return f"{entry.name}/" if entry.is_dir() else entry.name

    def _row(self, entry: Path) -> list[str]:
        stat = entry.stat()
        size = "-" if entry.is_dir() else _fmt_size(stat.st_size)
        modified = datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M")
        return [self._label(entry), size, modified]
