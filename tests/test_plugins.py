from __future__ import annotations

import logging

import pytest

from termcore.commands import ExitCode
from termcore.helpers import LogBuffer
from termcore.interface import Terminal
from termcore.ui import CLEAR_SEQUENCE


@pytest.fixture
def files(tmp_path):
    (tmp_path / "a.txt").write_text("alpha\nbeta\ngamma\n", encoding="utf-8")
    (tmp_path / "b.txt").write_text("one two\nthree\n", encoding="utf-8")
    (tmp_path / "dir").mkdir()
    (tmp_path / ".hidden").write_text("", encoding="utf-8")
    return tmp_path


# ---------------- text ----------------

@pytest.mark.asyncio
async def test_echo(terminal):
    assert await terminal.run("echo hello   world") == (0, "hello world\n", "")
    assert (await terminal.run("echo -n hi"))[1] == "hi"
    assert (await terminal.run("echo -- -n"))[1] == "-n\n"


@pytest.mark.asyncio
async def test_cat_files_and_stdin(terminal, files):
    code, out, _ = await terminal.run("cat a.txt -n")
    assert code == 0
    assert out.splitlines()[0] == "     1\talpha"
    assert (await terminal.run("cat", stdin_lines=["x"]))[1] == "x\n"


@pytest.mark.asyncio
async def test_cat_missing_file(terminal, files):
    code, out, err = await terminal.run("cat a.txt missing.txt")
    assert code == ExitCode.RUNTIME_ERROR
    assert out == "alpha\nbeta\ngamma\n"
    assert err == "cat: missing.txt: No such file or directory\n"


@pytest.mark.asyncio
async def test_grep(terminal, files):
    assert (await terminal.run("cat a.txt | grep -p A -i"))[1] == "alpha\nbeta\ngamma\n"
    assert (await terminal.run("grep -p ^b a.txt"))[1] == "beta\n"
    assert (await terminal.run("grep -p a -v -c b.txt"))[1] == "2\n"
    assert (await terminal.run("grep -p zzz a.txt"))[0] == ExitCode.RUNTIME_ERROR
    assert (await terminal.run("grep -p ( a.txt"))[0] == ExitCode.USAGE_ERROR


@pytest.mark.asyncio
async def test_grep_requires_pattern(terminal):
    code, _, err = await terminal.run("grep a.txt")
    assert code == ExitCode.USAGE_ERROR
    assert "required option --pattern is missing" in err


@pytest.mark.asyncio
async def test_head_and_tail(terminal, files):
    assert (await terminal.run("head -n 1 a.txt"))[1] == "alpha\n"
    assert (await terminal.run("head -n -1 a.txt"))[1] == "alpha\nbeta\n"
    assert (await terminal.run("tail -n 1 a.txt"))[1] == "gamma\n"
    assert (await terminal.run("tail -n +2 a.txt"))[1] == "beta\ngamma\n"
    assert (await terminal.run("head -n x a.txt"))[0] == ExitCode.USAGE_ERROR


@pytest.mark.asyncio
async def test_tail_count_larger_than_input(terminal, files):
    (files / "six.txt").write_text("".join(f"{n}\n" for n in range(1, 7)), encoding="utf-8")
    assert (await terminal.run("tail six.txt"))[1] == "1\n2\n3\n4\n5\n6\n"
    assert (await terminal.run("tail -n 20 a.txt"))[1] == "alpha\nbeta\ngamma\n"
    assert (await terminal.run("cat a.txt | tail -n 4"))[1] == "alpha\nbeta\ngamma\n"


@pytest.mark.asyncio
async def test_head_headers_for_several_files(terminal, files):
    _, out, _ = await terminal.run("head -n 1 a.txt b.txt")
    assert out == "==> a.txt <==\nalpha\n\n==> b.txt <==\none two\n"


@pytest.mark.asyncio
async def test_wc(terminal, files):
    assert (await terminal.run("cat a.txt | wc -l"))[1].strip() == "3"
    _, out, _ = await terminal.run("wc -w a.txt b.txt")
    assert [line.split() for line in out.splitlines()] == [
        ["3", "a.txt"], ["3", "b.txt"], ["6", "total"]]


# ---------------- fs ----------------

@pytest.mark.asyncio
async def test_pwd_and_cd(terminal, files):
    assert (await terminal.run("pwd"))[1] == f"{files.as_posix()}\n"
    assert (await terminal.run("cd dir"))[0] == 0
    assert terminal.working_directory == files / "dir"
    assert (await terminal.run("pwd -t"))[1] == "~/dir\n"
    assert (await terminal.run("cd -"))[1] == f"{files.as_posix()}\n"
    assert (await terminal.run("cd"))[0] == 0
    assert terminal.working_directory == files


@pytest.mark.asyncio
async def test_cd_errors(terminal, files):
    assert (await terminal.run("cd nope"))[0] == ExitCode.RUNTIME_ERROR
    assert (await terminal.run("cd a.txt"))[2] == "cd: a.txt: Not a directory\n"
    assert (await terminal.run("cd a b"))[0] == ExitCode.USAGE_ERROR


@pytest.mark.asyncio
async def test_ls(terminal, files):
    assert (await terminal.run("ls"))[1] == "a.txt\nb.txt\ndir/\n"
    assert ".hidden" in (await terminal.run("ls -a"))[1]
    code, out, _ = await terminal.run("ls -l")
    assert code == 0
    assert "Size" in out.splitlines()[0]
    assert (await terminal.run("ls nope"))[0] == ExitCode.RUNTIME_ERROR


# ---------------- session ----------------

@pytest.mark.asyncio
async def test_help(terminal):
    code, out, _ = await terminal.run("help")
    assert code == 0
    assert "text" in out and "fs" in out and "session" in out
    assert (await terminal.run("help grep"))[1].startswith("grep - ")
    assert "echo" in (await terminal.run("help text"))[1]
    assert (await terminal.run("help nothing"))[0] == ExitCode.RUNTIME_ERROR


@pytest.mark.asyncio
async def test_history_command(terminal):
    await terminal.run("echo a")
    await terminal.run("echo b")
    _, out, _ = await terminal.run("history -n 2")
    assert out == "    2  echo b\n    3  history -n 2\n"
    assert (await terminal.run("history -d 1"))[0] == 0
    assert terminal.history.entries()[0] == "echo b"
    await terminal.run("history -c")
    assert terminal.history.entries() == []


@pytest.mark.asyncio
async def test_history_number_larger_than_history(terminal):
    for word in ("a", "b", "c"):
        await terminal.run(f"echo {word}")
    _, out, _ = await terminal.run("history -n 5")
    assert out.splitlines() == [
        "    1  echo a", "    2  echo b", "    3  echo c", "    4  history -n 5"]


@pytest.mark.asyncio
async def test_log_command(registry, tmp_path):
    buffer = LogBuffer(10)
    buffer.emit(logging.LogRecord("termcore.x", logging.INFO, __file__, 1, "started", None, None))
    buffer.emit(logging.LogRecord("termcore.x", logging.ERROR, __file__, 2, "broke", None, None))
    term = Terminal(registry, home_directory=tmp_path, log_buffer=buffer)

    _, out, _ = await term.run("log --level=error")
    assert out.endswith("[ERROR] termcore.x: broke\n")
    assert len((await term.run("log -t 1"))[1].splitlines()) == 1
    assert (await term.run("log --head=1 --tail=1"))[0] == ExitCode.USAGE_ERROR
    assert (await term.run("log -c"))[0] == 0
    assert len(buffer) == 0


@pytest.mark.asyncio
async def test_log_tail_larger_than_buffer(registry, tmp_path):
    buffer = LogBuffer(10)
    for number, message in enumerate(("one", "two", "three"), start=1):
        buffer.emit(logging.LogRecord("termcore.x", logging.INFO, __file__, number, message, None, None))
    term = Terminal(registry, home_directory=tmp_path, log_buffer=buffer)

    _, out, _ = await term.run("log --tail=5")
    assert [line.rsplit(": ", 1)[1] for line in out.splitlines()] == ["one", "two", "three"]


@pytest.mark.asyncio
async def test_log_without_buffer(terminal):
    code, _, err = await terminal.run("log")
    assert code == ExitCode.RUNTIME_ERROR
    assert "not available" in err


@pytest.mark.asyncio
async def test_clear(terminal):
    assert (await terminal.run("cls"))[1] == CLEAR_SEQUENCE
