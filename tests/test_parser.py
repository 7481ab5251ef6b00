from __future__ import annotations

import pytest

from termcore.interface import ParseError, RedirectMode, parse
from termcore.interface.parser import looks_like_option


def test_empty_input_is_empty_pipeline():
    assert parse("").is_empty
    assert parse("    ").is_empty


def test_stages_split_on_pipe():
    pipeline = parse("cat a.txt | grep -p x | wc -l")
    assert [c.command_name for c in pipeline.commands] == ["cat", "grep", "wc"]
    assert pipeline.commands[0].positional_arguments == ["a.txt"]


def test_long_option_with_inline_value():
    cmd = parse("grep --pattern=a=b").commands[0]
    opt = cmd.options[0]
    assert (opt.name, opt.is_long, opt.has_value, opt.raw_value) == ("pattern", True, True, "a=b")
    assert not opt.separate


def test_short_option_bundle():
    cmd = parse("ls -la dir").commands[0]
    assert [o.name for o in cmd.options] == ["l", "a"]
    assert all(not o.has_value for o in cmd.options)
    assert cmd.positional_arguments == ["dir"]


def test_bundle_value_goes_to_last_flag():
    cmd = parse("x -ab=3").commands[0]
    assert [(o.name, o.raw_value) for o in cmd.options] == [("a", None), ("b", "3")]


def test_separate_value_is_recorded_with_position():
    cmd = parse("head a.txt -n 5 b.txt").commands[0]
    opt = cmd.options[0]
    assert opt.separate
    assert opt.raw_value == "5"
    assert opt.positional_index == 1
    assert cmd.positional_arguments == ["a.txt", "b.txt"]


def test_separate_value_accepts_negative_number():
    opt = parse("head -n -3").commands[0].options[0]
    assert opt.raw_value == "-3"


def test_option_like_word_is_not_taken_as_value():
    cmd = parse("ls -l -a").commands[0]
    assert [o.has_value for o in cmd.options] == [False, False]


def test_end_of_options_marker():
    cmd = parse("echo -- -n --x --").commands[0]
    assert cmd.options == []
    assert cmd.positional_arguments == ["-n", "--x", "--"]


def test_negative_number_is_positional():
    assert parse("echo -5").commands[0].positional_arguments == ["-5"]


def test_redirections():
    cmd = parse("cat < in.txt > out.txt").commands[0]
    assert cmd.redirections.stdin_path == "in.txt"
    assert cmd.redirections.stdout_path == "out.txt"
    assert cmd.redirections.stdout_mode is RedirectMode.OVERWRITE
    append = parse("echo hi >> log.txt").commands[0]
    assert append.redirections.stdout_mode is RedirectMode.APPEND


def test_last_redirect_wins():
    cmd = parse("echo hi > a > b").commands[0]
    assert cmd.redirections.stdout_path == "b"


def test_value_protection_carried_through_option():
    opt = parse('x --tags="a,b",c').commands[0].options[0]
    assert opt.raw_value == "a,b,c"
    assert opt.value_protected == (True, True, True, False, False)


@pytest.mark.parametrize("text, message", [
    ("| echo", "Empty command before pipe"),
    ("echo |", "Empty command after pipe"),
    ("echo a > out | wc", "Cannot use pipe after stdout redirection"),
    ("echo >", "Expected file path after >"),
    ("cat < | wc", "Expected file path after <"),
    ("< in.txt", "Command name is missing"),
    ("x --=1", "Invalid option format"),
    ("x -=1", "Invalid option format"),
])
def test_parse_errors(text, message):
    with pytest.raises(ParseError) as info:
        parse(text)
    assert message in str(info.value)


@pytest.mark.parametrize("text, expected", [
    ("-a", True),
    ("--all", True),
    ("-", False),
    ("--", False),
    ("-1", False),
    ("a", False),
])
def test_looks_like_option(text, expected):
    assert looks_like_option(text) is expected
