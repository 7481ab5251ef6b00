from __future__ import annotations

import pytest

from termcore.commands import CommandRegistry
from termcore.interface import Terminal, load_commands


@pytest.fixture
def registry() -> CommandRegistry:
    reg = CommandRegistry()
    load_commands(reg, "termplugins")
    return reg


@pytest.fixture
def terminal(registry, tmp_path) -> Terminal:
    return Terminal(registry, home_directory=tmp_path, working_directory=tmp_path)
