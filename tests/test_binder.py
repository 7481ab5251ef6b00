from __future__ import annotations

from enum import Enum

import pytest

from termcore.commands import Command, CommandRegistry, ExitCode, command, option
from termcore.interface import Binder, BindException, parse
from termcore.interface.binder import convert_value, split_unprotected


class Color(Enum):
    RED = "red"
    DARK_BLUE = "dark-blue"


@command(name="probe", description="Binding probe", aliases=["pr"])
class ProbeCommand(Command):
    options = (
        option("verbose", "v"),
        option("force", "f"),
        option("count", "n", int, default=1),
        option("ratio", "r", float),
        option("color", "c", Color),
        option("tags", "t", list[str]),
        option("ids", None, list[int]),
    )

    async def execute(self, context, cancel):
        return ExitCode.SUCCESS


@command(name="needs")
class NeedsCommand(Command):
    options = (option("target", "t", str, required=True),)

    async def execute(self, context, cancel):
        return ExitCode.SUCCESS


@pytest.fixture
def binder():
    reg = CommandRegistry()
    reg.register(ProbeCommand)
    reg.register(NeedsCommand)
    return Binder(reg)


def bind_one(binder, text):
    return binder.bind(parse(text)).commands[0]


def test_defaults_before_binding(binder):
    bound = bind_one(binder, "probe")
    cmd = bound.command
    assert (cmd.verbose, cmd.count, cmd.ratio, cmd.tags) == (False, 1, None, [])


def test_alias_and_case_insensitive_lookup(binder):
    assert bind_one(binder, "PR").name == "probe"


def test_scalar_conversions(binder):
    cmd = bind_one(binder, "probe --count=3 -r 0.5 --color=DARK-BLUE").command
    assert cmd.count == 3
    assert cmd.ratio == 0.5
    assert cmd.color is Color.DARK_BLUE


def test_enum_matches_member_name(binder):
    assert bind_one(binder, "probe -c=dark_blue").command.color is Color.DARK_BLUE


def test_bundle_sets_every_flag(binder):
    cmd = bind_one(binder, "probe -vf").command
    assert cmd.verbose and cmd.force


def test_separate_value_returned_to_positionals_for_bool(binder):
    bound = bind_one(binder, "probe a -v b c")
    assert bound.command.verbose
    assert bound.positional_arguments == ("a", "b", "c")


def test_bool_with_inline_value_is_rejected(binder):
    with pytest.raises(BindException, match="does not accept a value"):
        bind_one(binder, "probe --verbose=yes")


def test_list_splits_on_unquoted_commas(binder):
    cmd = bind_one(binder, 'probe --tags=a,"b,c",d\\,e --ids=1,2').command
    assert cmd.tags == ["a", "b,c", "d,e"]
    assert cmd.ids == [1, 2]


def test_list_cannot_repeat(binder):
    with pytest.raises(BindException, match="cannot be specified multiple times"):
        bind_one(binder, "probe --tags=a --tags=b")


def test_scalar_repeat_last_wins(binder):
    assert bind_one(binder, "probe -n=1 -n=7").command.count == 7


def test_missing_value(binder):
    with pytest.raises(BindException, match="requires a value"):
        bind_one(binder, "probe --count")


def test_conversion_failure_names_option(binder):
    with pytest.raises(BindException) as info:
        bind_one(binder, "probe --count=abc")
    assert "--count" in str(info.value)
    assert "Usage: probe" in str(info.value)


def test_unknown_option(binder):
    with pytest.raises(BindException, match="unknown option: -z"):
        bind_one(binder, "probe -z")


def test_required_option(binder):
    with pytest.raises(BindException, match="required option --target is missing"):
        bind_one(binder, "needs")
    assert bind_one(binder, "needs -t x").command.target == "x"


def test_unknown_command_suggests(binder):
    with pytest.raises(BindException) as info:
        bind_one(binder, "prob")
    assert "command not found: prob." in str(info.value)
    assert "Did you mean: probe" in str(info.value)
    assert info.value.exit_code == ExitCode.USAGE_ERROR


def test_fresh_instance_per_bind(binder):
    first = bind_one(binder, "probe -v").command
    second = bind_one(binder, "probe").command
    assert first is not second
    assert not second.verbose


def test_first_failing_stage_aborts(binder):
    with pytest.raises(BindException):
        binder.bind(parse("probe | nope | probe"))


def test_split_unprotected():
    assert split_unprotected("") == [""]
    assert split_unprotected("a,,b") == ["a", "", "b"]
    assert split_unprotected("a,b", (False, True, False)) == ["a,b"]


def test_convert_value_errors():
    with pytest.raises(ValueError):
        convert_value("1.5", int)
    with pytest.raises(ValueError, match="Valid values"):
        convert_value("green", Color)
