#!/usr/bin/env python3
# termcore/helpers/paths.py
from __future__ import annotations

import os
from pathlib import Path


def resolve_path(user_path: str | os.PathLike[str], working_directory: Path, home_directory: Path) -> Path:
    """
    Resolve a user-supplied path against the session's directories.

    - '~' and '~/...' expand to the session home (not the process home).
    - Relative paths are taken relative to `working_directory`.
    - The result is normalized but symlinks are not resolved.
    """
    text = os.fspath(user_path)
    if text == "~":
        return Path(os.path.normpath(home_directory))
    if text.startswith(("~/", "~\\")):
        text = str(home_directory / text[2:])

    candidate = Path(text)
    if not candidate.is_absolute():
        candidate = working_directory / candidate
    return Path(os.path.normpath(candidate))


def display_path(path: Path, home_directory: Path) -> str:
    """Render `path` with the session home collapsed to '~'."""
    try:
        relative = path.relative_to(home_directory)
    except ValueError:
        return path.as_posix()
    rel = relative.as_posix()
    return "~" if rel == "." else f"~/{rel}"
