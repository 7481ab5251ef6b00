from __future__ import annotations

import pytest

from termcore.commands import ExitCode
from termcore.interface import CommandRuntimeError


@pytest.mark.asyncio
async def test_blank_line_is_success_and_not_recorded(terminal):
    assert await terminal.run("   ") == (ExitCode.SUCCESS, "", "")
    assert terminal.history.entries() == []


@pytest.mark.asyncio
async def test_pipeline_through_builtin_commands(terminal):
    code, out, err = await terminal.run("echo foo | grep --pattern=foo")
    assert code == ExitCode.SUCCESS
    assert out == "foo\n"
    assert err == ""


@pytest.mark.asyncio
async def test_bind_failure_in_any_stage_runs_nothing(terminal):
    code, out, err = await terminal.run("echo foo | grep --unknown=1 | echo bar")
    assert code == ExitCode.USAGE_ERROR
    assert out == ""
    assert err.startswith("grep: unknown option: --unknown")
    assert "Usage: grep" in err


@pytest.mark.asyncio
async def test_parse_error_prefix(terminal):
    code, out, err = await terminal.run('echo "unterminated')
    assert code == ExitCode.USAGE_ERROR
    assert err.startswith("Parse error: Unclosed double quote")


@pytest.mark.asyncio
async def test_unknown_command(terminal):
    code, _, err = await terminal.run("ehco hi")
    assert code == ExitCode.USAGE_ERROR
    assert "command not found: ehco." in err
    assert "echo" in err


@pytest.mark.asyncio
async def test_lines_are_recorded_in_history(terminal):
    await terminal.run("echo one")
    await terminal.run("nope")
    await terminal.run("echo one")
    assert terminal.history.entries() == ["echo one", "nope", "echo one"]


def test_change_directory(terminal, tmp_path):
    (tmp_path / "sub").mkdir()
    assert terminal.change_directory("sub") == tmp_path / "sub"
    assert terminal.previous_working_directory == tmp_path
    assert terminal.change_directory("-") == tmp_path
    with pytest.raises(CommandRuntimeError):
        terminal.change_directory("missing")


def test_terminals_do_not_share_state(registry, tmp_path):
    from termcore.interface import Terminal

    a = Terminal(registry, home_directory=tmp_path)
    b = Terminal(registry, home_directory=tmp_path)
    a.history.add("only in a")
    assert b.history.entries() == []
