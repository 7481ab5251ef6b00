#!/usr/bin/env python3
# termcore/__main__.py
from __future__ import annotations

"""
Interactive entry point: `python -m termcore` or the `termcore` script.
"""

import asyncio
import sys

from termcore.boot import boot_sequence
from termcore.interface import HELP_TEXT
from termcore.interface.cli import execute_interactive, make_cli
from termcore.ui import colorize, print_line

_EXIT_WORDS = {"exit", "quit"}


async def repl() -> int:
    state = boot_sequence()
    terminal = state.terminal
    config = state.config

    if config.show_banner:
        print_line(colorize(f"termcore ({state.loaded_count} commands). {HELP_TEXT}", "cyan", stream=sys.stdout))

    last_code = 0
    cli = make_cli(terminal, config.prompt, enable_completion=config.enable_completion)
    async with cli:
        while True:
            try:
                line = await cli.get_line()
            except KeyboardInterrupt:
                continue
            except EOFError:
                break

            if line.strip().lower() in _EXIT_WORDS:
                break
            try:
                last_code = await execute_interactive(terminal, line)
            except KeyboardInterrupt:
                print_line("^C", file=sys.stderr)
                last_code = 1

    if config.history_file_path is not None:
        terminal.history.save(config.history_file_path)
    return int(last_code)


def main() -> None:
    sys.exit(asyncio.run(repl()))


if __name__ == "__main__":
    main()
