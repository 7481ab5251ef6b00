from __future__ import annotations

import pytest

from termcore.commands import Command, CommandRegistry, ExitCode, command, option
from termcore.interface import (
    CancellationToken,
    ListTextReader,
    ListTextWriter,
    OperationCancelled,
    StringTextWriter,
    Terminal,
)
from termcore.interface.executor import normalize_exit_code

CALLS: list[str] = []


@command(name="emit")
class EmitCommand(Command):
    """Write each argument on its own line."""

    async def execute(self, context, cancel):
        CALLS.append("emit")
        for arg in context.arguments:
            await context.stdout.write_line(arg)
        return ExitCode.SUCCESS


@command(name="upper")
class UpperCommand(Command):
    async def execute(self, context, cancel):
        CALLS.append("upper")
        async for line in context.stdin:
            await context.stdout.write_line(line.upper())


@command(name="fail")
class FailCommand(Command):
    options = (option("code", "c", int, default=1),)

    async def execute(self, context, cancel):
        CALLS.append("fail")
        await context.stderr.write_line("failing")
        return self.code


@command(name="boom")
class BoomCommand(Command):
    async def execute(self, context, cancel):
        CALLS.append("boom")
        raise RuntimeError("kaput")


@command(name="stop")
class StopCommand(Command):
    async def execute(self, context, cancel):
        CALLS.append("stop")
        cancel.cancel()
        await context.stdout.write_line("never shown")


@pytest.fixture
def term(tmp_path):
    CALLS.clear()
    reg = CommandRegistry()
    for cls in (EmitCommand, UpperCommand, FailCommand, BoomCommand, StopCommand):
        reg.register(cls)
    return Terminal(reg, home_directory=tmp_path)


@pytest.mark.asyncio
async def test_pipe_feeds_next_stage(term):
    code, out, err = await term.run("emit a b | upper")
    assert code == ExitCode.SUCCESS
    assert out == "A\nB\n"
    assert err == ""


@pytest.mark.asyncio
async def test_first_stage_reads_caller_stdin(term):
    code, out, _ = await term.run("upper", stdin_lines=["x", "y"])
    assert code == 0
    assert out == "X\nY\n"


@pytest.mark.asyncio
async def test_input_redirect_replaces_caller_stdin(term, tmp_path):
    (tmp_path / "in.txt").write_text("file\n", encoding="utf-8")
    code, out, _ = await term.run("upper < in.txt | upper", stdin_lines=["ignored"])
    assert code == 0
    assert out == "FILE\n"


@pytest.mark.asyncio
async def test_non_zero_stage_stops_pipeline(term):
    code, out, err = await term.run("emit a | fail -c 3 | upper")
    assert code == 3
    assert out == ""
    assert err == "failing\n"
    assert CALLS == ["emit", "fail"]


@pytest.mark.asyncio
async def test_exception_becomes_runtime_error(term):
    code, out, err = await term.run("boom | emit x")
    assert code == ExitCode.RUNTIME_ERROR
    assert err == "Error executing boom: kaput\n"
    assert CALLS == ["boom"]


@pytest.mark.asyncio
async def test_missing_input_file(term):
    code, _, err = await term.run("upper < nope.txt")
    assert code == ExitCode.RUNTIME_ERROR
    assert err == "upper: File not found: nope.txt\n"
    assert CALLS == []


@pytest.mark.asyncio
async def test_redirect_overwrite_and_append(term, tmp_path):
    assert (await term.run("emit one > out/log.txt"))[0] == 0
    assert (await term.run("emit two >> out/log.txt"))[0] == 0
    assert (tmp_path / "out" / "log.txt").read_text(encoding="utf-8") == "one\ntwo\n"

    code, out, _ = await term.run("emit three > out/log.txt")
    assert (code, out) == (0, "")
    assert (tmp_path / "out" / "log.txt").read_text(encoding="utf-8") == "three\n"


@pytest.mark.asyncio
async def test_cancellation_reports_caret_c(term):
    code, out, err = await term.run("stop | emit x")
    assert code == ExitCode.RUNTIME_ERROR
    assert out == ""
    assert err == "^C\n"
    assert CALLS == ["stop"]


@pytest.mark.asyncio
async def test_pre_cancelled_token_runs_nothing(term):
    token = CancellationToken()
    token.cancel()
    out, err = StringTextWriter(), StringTextWriter()
    code = await term.execute("emit x", out, err, cancel=token)
    assert code == ExitCode.RUNTIME_ERROR
    assert CALLS == []


@pytest.mark.asyncio
async def test_list_writer_keeps_partial_line():
    writer = ListTextWriter()
    await writer.write("a\nb")
    assert writer.lines == ["a", "b"]
    await writer.write("c\n")
    assert writer.lines == ["a", "bc"]
    assert await writer.to_reader().read_all() == ["a", "bc"]
    assert await ListTextReader([]).read_line() is None


def test_cancellation_token():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel()
    assert token.cancelled
    with pytest.raises(OperationCancelled):
        token.raise_if_cancelled()


def test_normalize_exit_code():
    assert normalize_exit_code(None) is ExitCode.SUCCESS
    assert normalize_exit_code(2) is ExitCode.USAGE_ERROR
    assert normalize_exit_code(42) == 42
