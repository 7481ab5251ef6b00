#!/usr/bin/env python3
# termcore/config/__init__.py
from __future__ import annotations

"""
Configuration package.

Exports:
- load_config: layered defaults / files / TERMCORE_* environment loader.
- AppConfig: frozen result of a successful load.
"""

from .config import DEFAULTS, ENV_PREFIX, AppConfig, load_config

__all__ = ["AppConfig", "DEFAULTS", "ENV_PREFIX", "load_config"]
