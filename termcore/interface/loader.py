#!/usr/bin/env python3
# termcore/interface/loader.py
from __future__ import annotations

"""
Dynamic command loader.

Features:
- Imports all modules under a given package (default: 'termplugins').
- Supports 'entrypoint.py' inside a subpackage defining @command classes.
- Registers every @command class into the registry it is given (no global state).
- Derives categories from module paths if not explicitly set.
- Collects category descriptions from either CATEGORY_DESCRIPTION or module docstring.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from types import ModuleType

from termcore.commands import CommandRegistry, is_command_class, spec_of

logger = logging.getLogger(__name__)


def _register_from_module(registry: CommandRegistry, module: ModuleType) -> int:
    """Register @command classes defined (not merely imported) in `module`."""
    registered_count = 0
    for value in vars(module).values():
        if is_command_class(value) and value.__module__ == module.__name__:
            registry.register(spec_of(value))
            registered_count += 1
    return registered_count


def load_commands(registry: CommandRegistry, commands_package: str = "termplugins") -> int:
    """
    Import all modules under the given package and register their commands.

    Supported layouts:
      1) Plain modules: termplugins/foo.py  -> import termplugins.foo
      2) Packages with an entrypoint: termplugins/bar/entrypoint.py
         -> import termplugins.bar.entrypoint

    Returns the number of commands registered.
    """

    package = importlib.import_module(commands_package)
    package_paths = [str(p) for p in getattr(package, "__path__", [])]

    if not package_paths:
        raise RuntimeError(
            f"'{commands_package}' must be a package (folder) with modules."
        )

    registered_count = 0
    discovered_subpackages: set[str] = set()

    for base_path in package_paths:
        for modinfo in pkgutil.iter_modules([base_path]):
            module_name = modinfo.name
            if module_name.startswith("_"):
                # Ignore private modules
                continue

            if modinfo.ispkg:
                discovered_subpackages.add(module_name)
                entrypoint_path = Path(base_path) / module_name / "entrypoint.py"
                target = (f"{commands_package}.{module_name}.entrypoint" if entrypoint_path.exists()
                          else f"{commands_package}.{module_name}")
            else:
                target = f"{commands_package}.{module_name}"

            module = importlib.import_module(target)
            registered_count += _register_from_module(registry, module)

    _assign_categories_from_modules(registry, commands_package)
    _collect_category_descriptions(registry, commands_package, discovered_subpackages)

    logger.debug("Loaded %d commands from %s", registered_count, commands_package)
    return registered_count


def _assign_categories_from_modules(registry: CommandRegistry, commands_package: str) -> None:
    """
    Derive category from first subpackage segment (e.g. 'text.entrypoint')
    if not explicitly set (default 'general').
    """
    prefix = f"{commands_package}."
    for spec in registry.all():
        if spec.category != "general" or not spec.module.startswith(prefix):
            continue
        segments = spec.module[len(prefix):].split(".")
        if len(segments) >= 2:
            spec.category = segments[0]


def _collect_category_descriptions(registry: CommandRegistry, commands_package: str, subpackages: set[str]) -> None:
    """
    Category description is taken from:
      1) <package>.<category>.CATEGORY_DESCRIPTION (string), or
      2) <package>.<category> module docstring (__doc__), else "".
    """
    for category in subpackages:
        module = importlib.import_module(f"{commands_package}.{category}")

        description_text = ""
        value = getattr(module, "CATEGORY_DESCRIPTION", None)
        if isinstance(value, str):
            description_text = value.strip()
        elif isinstance(getattr(module, "__doc__", None), str):
            description_text = (module.__doc__ or "").strip()

        registry.set_category_description(category, description_text)
