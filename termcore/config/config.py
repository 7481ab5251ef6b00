#!/usr/bin/env python3
# termcore/config/config.py
from __future__ import annotations

"""
Layered configuration for a termcore session.

Sources, later ones winning:
  1) DEFAULTS below
  2) Files in the base directory, in order: .env, config.ini, config.json, config.toml
  3) TERMCORE_* environment variables (TERMCORE_HISTORY_SIZE=500 sets HISTORY_SIZE)

Keys are case-insensitive and nested tables flatten with '_'
(`[history] size = 50` is HISTORY_SIZE). Values are checked once, in
`_build`, and a bad value raises ValueError naming its key. Nothing is
created on disk here.
"""

import configparser
import json
import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

ENV_PREFIX = "TERMCORE_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULTS: dict[str, Any] = {
    "HOME_PATH": None,          # session home; None means the user's home
    "WORKING_PATH": None,       # relative to HOME_PATH; None means HOME_PATH
    "HISTORY_SIZE": 1000,
    "HISTORY_FILE_PATH": None,
    "LOG_BUFFER_SIZE": 10_000,
    "LOG_LEVEL": None,
    "LOG_FILE_PATH": None,
    "PROMPT": None,
    "SHOW_BANNER": True,
    "ENABLE_COMPLETION": True,
}


@dataclass(frozen=True)
class AppConfig:
    home_path: Path
    working_path: Path
    history_size: int
    history_file_path: Path | None
    log_buffer_size: int
    log_level: str | None
    log_file_path: Path | None
    prompt: str | None
    show_banner: bool
    enable_completion: bool

    # keys no field claims, kept so plugins can read their own settings
    extra: dict[str, Any] = field(default_factory=dict)


# ---------------- Readers ----------------

_ENV_LINE = re.compile(r"([A-Za-z_]\w*)\s*=\s*(.*)")


def _read_dotenv(path: Path) -> dict[str, Any]:
    """KEY=VALUE per line; '#' comments and one level of matching quotes are stripped."""
    values: dict[str, Any] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line.startswith("#"):
            continue
        match = _ENV_LINE.fullmatch(line)
        if match is None:
            continue
        key, value = match.group(1), match.group(2).strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[key] = value
    return values


def _read_ini(path: Path) -> dict[str, Any]:
    parser = configparser.ConfigParser()
    parser.read(path, encoding="utf-8")
    # section names are only grouping; keys are taken as-is
    return {key: value for section in parser.sections() for key, value in parser.items(section)}


def _read_json(path: Path) -> dict[str, Any]:
    return _flatten(json.loads(path.read_text(encoding="utf-8")))


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        return _flatten(tomllib.load(handle))


def _flatten(data: Any, prefix: str = "") -> dict[str, Any]:
    if not isinstance(data, Mapping):
        return {}
    flat: dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}_{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten(value, name))
        else:
            flat[name] = value
    return flat


_FILE_READERS: tuple[tuple[str, Callable[[Path], dict[str, Any]]], ...] = (
    (".env", _read_dotenv),
    ("config.ini", _read_ini),
    ("config.json", _read_json),
    ("config.toml", _read_toml),
)


def _collect(base: Path, environ: Mapping[str, str]) -> dict[str, Any]:
    layered: dict[str, Any] = dict(DEFAULTS)

    for filename, reader in _FILE_READERS:
        path = base / filename
        if not path.is_file():
            continue
        try:
            values = reader(path)
        except (json.JSONDecodeError, tomllib.TOMLDecodeError, configparser.Error) as exc:
            raise ValueError(f"{path.name}: {exc}") from exc
        layered.update((str(k).upper(), v) for k, v in values.items())

    for name, value in environ.items():
        if name.startswith(ENV_PREFIX) and name.isupper():
            layered[name[len(ENV_PREFIX):]] = value
    return layered


# ---------------- Coercion ----------------

def _blank(value: Any) -> bool:
    return value is None or str(value).strip().lower() in ("", "none")


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "y", "on"):
        return True
    if text in ("0", "false", "no", "n", "off"):
        return False
    raise ValueError(f"{key}: expected boolean, got {value!r}")


def _to_positive_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key}: expected integer, got {value!r}")
    try:
        number = value if isinstance(value, int) else int(str(value).strip())
    except ValueError:
        raise ValueError(f"{key}: expected integer, got {value!r}") from None
    if number < 1:
        raise ValueError(f"{key} must be >= 1")
    return number


def _to_path(value: Any, relative_to: Path) -> Path:
    path = Path(os.path.expandvars(os.path.expanduser(str(value))))
    if not path.is_absolute():
        path = relative_to / path
    return path.resolve()


def _to_optional_path(value: Any, relative_to: Path) -> Path | None:
    return None if _blank(value) else _to_path(value, relative_to)


def _to_log_level(value: Any) -> str | None:
    if _blank(value):
        return None
    level = str(value).strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {list(LOG_LEVELS)}, got {value!r}")
    return level


def _build(values: dict[str, Any], base: Path) -> AppConfig:
    home = (Path.home().resolve() if _blank(values["HOME_PATH"])
            else _to_path(values["HOME_PATH"], base))
    working = home if _blank(values["WORKING_PATH"]) else _to_path(values["WORKING_PATH"], home)

    return AppConfig(
        home_path=home,
        working_path=working,
        history_size=_to_positive_int("HISTORY_SIZE", values["HISTORY_SIZE"]),
        history_file_path=_to_optional_path(values["HISTORY_FILE_PATH"], base),
        log_buffer_size=_to_positive_int("LOG_BUFFER_SIZE", values["LOG_BUFFER_SIZE"]),
        log_level=_to_log_level(values["LOG_LEVEL"]),
        log_file_path=_to_optional_path(values["LOG_FILE_PATH"], base),
        prompt=None if _blank(values["PROMPT"]) else str(values["PROMPT"]),
        show_banner=_to_bool("SHOW_BANNER", values["SHOW_BANNER"]),
        enable_completion=_to_bool("ENABLE_COMPLETION", values["ENABLE_COMPLETION"]),
        extra={k: v for k, v in values.items() if k not in DEFAULTS},
    )


def load_config(base: Path | None = None, environ: Mapping[str, str] | None = None) -> AppConfig:
    """
    Read every source under `base` (default: the current directory) plus
    `environ` (default: os.environ) and return the validated result.
    """
    base = (base or Path.cwd()).resolve()
    return _build(_collect(base, os.environ if environ is None else environ), base)
