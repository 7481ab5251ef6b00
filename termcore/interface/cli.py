#!/usr/bin/env python3
# termcore/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends.

Selection order:
    1) prompt_toolkit (completion + history backed by the session's CommandHistory)
    2) plain input (stdin is not a terminal, or completion disabled)
"""

import asyncio
import logging
import signal
import sys
from typing import AsyncGenerator, Iterable

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import History
from prompt_toolkit.key_binding import KeyBindings

from termcore.helpers import CommandHistory, display_path

from .cancellation import CancellationToken
from .handler import Terminal
from .streams import StreamTextReader, StreamTextWriter

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "{cwd} $ "


class BaseCLI:
    """
    Base interface for CLI frontends.

    Subclasses implement `get_line`, which raises EOFError when input ends.
    `setup`/`teardown` run around the session; use the async context manager.
    """

    def __init__(self, terminal: Terminal, prompt: str | None = None) -> None:
        self.terminal = terminal
        self.prompt_template = prompt or DEFAULT_PROMPT

    def prompt_text(self) -> str:
        cwd = display_path(self.terminal.working_directory, self.terminal.home_directory)
        return self.prompt_template.replace("{cwd}", cwd)

    def setup(self) -> None:
        ...

    async def get_line(self) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def teardown(self) -> None:
        ...

    # Context manager helpers
    async def __aenter__(self) -> "BaseCLI":
        self.setup()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.teardown()


class PlainCLI(BaseCLI):
    """Reads lines with input() off the event loop. No completion."""

    async def get_line(self) -> str:
        return await asyncio.to_thread(input, self.prompt_text())


class TerminalHistory(History):
    """prompt_toolkit History over the session's CommandHistory."""

    def __init__(self, history: CommandHistory) -> None:
        super().__init__()
        self._history = history

    def load_history_strings(self) -> Iterable[str]:
        # Newest first
        return list(reversed(self._history.entries()))

    async def load(self) -> AsyncGenerator[str, None]:
        # Live entries on every prompt; nothing is cached.
        for item in self.load_history_strings():
            yield item

    def get_strings(self) -> list[str]:
        return self._history.entries()

    def store_string(self, string: str) -> None:
        # Terminal.execute records every executed line itself.
        pass


class TerminalCompleter(Completer):
    """Completion backed by Terminal.complete."""

    def __init__(self, terminal: Terminal) -> None:
        self._terminal = terminal

    def get_completions(self, document, complete_event):
        text_before_cursor = document.text_before_cursor
        result = self._terminal.complete(text_before_cursor)
        start_position = result.replace_start - len(text_before_cursor)
        for candidate in result.candidates:
            # replace exactly the current word
            yield Completion(candidate, start_position=start_position)


class PromptToolkitCLI(BaseCLI):
    """Rich line editor with history and live completion."""

    def __init__(self, terminal: Terminal, prompt: str | None = None, *, enable_completion: bool = True) -> None:
        super().__init__(terminal, prompt)
        self._completer = TerminalCompleter(terminal) if enable_completion else None

        # Key bindings to trigger completion when deleting characters.
        kb = KeyBindings()

        @kb.add("backspace")
        def _(event):
            b = event.app.current_buffer
            if b.read_only():
                return
            if b.selection_state:
                b.delete_selection()
            else:
                b.delete_before_cursor(1)
            if enable_completion:
                b.start_completion(select_first=False)

        self._session: PromptSession[str] = PromptSession(
            history=TerminalHistory(terminal.history),
            completer=self._completer,
            complete_while_typing=enable_completion,
            key_bindings=kb,
        )

    async def get_line(self) -> str:
        return await self._session.prompt_async(self.prompt_text())


def make_cli(terminal: Terminal, prompt: str | None = None, *, enable_completion: bool = True) -> BaseCLI:
    """
    Factory to select the best CLI frontend for the current stdin.
    """
    if sys.stdin.isatty() and sys.stdout.isatty():
        return PromptToolkitCLI(terminal, prompt, enable_completion=enable_completion)
    return PlainCLI(terminal, prompt)


async def execute_interactive(terminal: Terminal, line: str) -> int:
    """
    Run one line against the process streams.

    Ctrl-C while the pipeline runs cancels its token instead of killing the shell.
    """
    cancel = CancellationToken()
    loop = asyncio.get_running_loop()
    installed = False
    try:
        loop.add_signal_handler(signal.SIGINT, cancel.cancel)
        installed = True
    except (NotImplementedError, RuntimeError):
        # Windows event loops: Ctrl-C surfaces as KeyboardInterrupt instead.
        pass

    try:
        return await terminal.execute(
            line,
            StreamTextWriter(sys.stdout),
            StreamTextWriter(sys.stderr),
            stdin=StreamTextReader(sys.stdin),
            cancel=cancel,
        )
    except KeyboardInterrupt:
        cancel.cancel()
        raise
    finally:
        if installed:
            loop.remove_signal_handler(signal.SIGINT)
