#!/usr/bin/env python3
# termcore/boot/boot.py
from __future__ import annotations
"""
Boot sequence for termcore.

Steps:
- Load configuration.
- Initialize logging (console, optional file, in-memory LogBuffer).
- Build the command registry from the plugins package.
- Create the Terminal session and restore persisted history.

Each step prints a Linux-style [  OK  ] / [FAILED] line when `verbose` is set.
"""

import logging
import platform
import sys
from dataclasses import dataclass
from typing import Any, Callable

from termcore.commands import CommandRegistry
from termcore.config import AppConfig, load_config
from termcore.helpers import CommandHistory, LogBuffer
from termcore.interface import Terminal, load_commands
from termcore.ui import colorize, init_logger, print_line, set_terminal_title


@dataclass(slots=True)
class BootState:
    terminal: Terminal
    logger: logging.Logger
    config: AppConfig
    loaded_count: int


def _step(label: str, fn: Callable[[], Any], verbose: bool) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        if verbose:
            print_line(
                colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red", stream=sys.stdout)
            )
        raise
    if verbose:
        print_line(colorize(f"[  OK  ] {label}", "green", stream=sys.stdout))
    return out


def boot_sequence(
    config: AppConfig | None = None,
    *,
    commands_package: str = "termplugins",
    verbose: bool | None = None,
) -> BootState:
    # ---------- config ----------
    if config is None:
        config = _step("Load configuration", load_config, verbose is not False)
    show = config.show_banner if verbose is None else verbose

    _step(
        f"Detect environment: {platform.system()} {platform.release()} / Python {platform.python_version()}",
        lambda: None,
        show,
    )

    # ---------- logging ----------
    log_buffer = LogBuffer(config.log_buffer_size)
    logger = _step(
        "Initialize logger",
        lambda: init_logger(
            "termcore",
            level=config.log_level or logging.WARNING,
            logfile=config.log_file_path,
            extra_handlers=(log_buffer,),
        ),
        show,
    )

    # ---------- commands ----------
    registry = CommandRegistry()
    loaded_count = _step(
        f"Load commands from '{commands_package}'",
        lambda: load_commands(registry, commands_package),
        show,
    )
    _step("Collect category descriptions", registry.categories, show)

    # ---------- session ----------
    history = CommandHistory(config.history_size)
    if config.history_file_path is not None:
        _step("Restore history", lambda: history.load(config.history_file_path), show)

    terminal = _step(
        "Create terminal session",
        lambda: Terminal(
            registry,
            home_directory=config.home_path,
            working_directory=config.working_path,
            history=history,
            log_buffer=log_buffer,
        ),
        show,
    )
    if show:
        set_terminal_title(f"termcore • {loaded_count} cmds")
    _step("Boot complete", lambda: None, show)
    logger.info("Booted with %d commands", loaded_count)

    return BootState(
        terminal=terminal,
        logger=logger,
        config=config,
        loaded_count=loaded_count,
    )
