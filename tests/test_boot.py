from __future__ import annotations

import logging

import pytest

from termcore.boot import boot_sequence
from termcore.config import load_config


@pytest.fixture
def config(tmp_path):
    return load_config(tmp_path, environ={
        "TERMCORE_HOME_PATH": str(tmp_path),
        "TERMCORE_HISTORY_FILE_PATH": "history.txt",
        "TERMCORE_LOG_LEVEL": "INFO",
        "TERMCORE_SHOW_BANNER": "false",
    })


def test_boot_builds_session(config, tmp_path):
    (tmp_path / "history.txt").write_text("echo restored\n", encoding="utf-8")

    state = boot_sequence(config, verbose=False)
    try:
        assert state.loaded_count == len(state.terminal.registry) > 0
        assert state.terminal.home_directory == tmp_path.resolve()
        assert state.terminal.history.entries() == ["echo restored"]
        assert state.terminal.log_buffer is not None
        messages = [e.message for e in state.terminal.log_buffer.entries(logging.INFO)]
        assert any("Booted with" in m for m in messages)
    finally:
        for handler in list(state.logger.handlers):
            state.logger.removeHandler(handler)
            handler.close()


@pytest.mark.asyncio
async def test_booted_terminal_runs_commands(config):
    state = boot_sequence(config, verbose=False)
    try:
        code, out, _ = await state.terminal.run("echo ok | wc -l")
        assert code == 0
        assert out.strip() == "1"
    finally:
        for handler in list(state.logger.handlers):
            state.logger.removeHandler(handler)
            handler.close()
