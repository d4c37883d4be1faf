"""Tests for the fish generator."""

from shellcomp.completions.generators.fish import generate_fish
from shellcomp.completions.models import CommandDescriptor, FlagDescriptor, FlagKind


def test_helper_functions(app_model):
    script = generate_fish(app_model, "mycli")
    assert script.startswith("\nfunction __fish_mycli_needs_command\n")
    assert "function __fish_mycli_using_command\n" in script


def test_no_trailing_newline(app_model):
    assert not generate_fish(app_model, "mycli").endswith("\n")


def test_command_directive(app_model):
    lines = generate_fish(app_model, "mycli").splitlines()
    assert "complete -f -c mycli -n '__fish_mycli_needs_command' -a apps:list -d \"List applications\"" in lines
    assert "complete -f -c mycli -n '__fish_mycli_needs_command' -a version -d \"Show the version\"" in lines


def test_sanitized_description(app_model):
    script = generate_fish(app_model, "mycli")
    assert r'-a apps:deploy -d "Deploy an app with \\\"quotes\\\" and \\\`ticks\\\` \\[beta\\]"' in script


def test_flag_directives(app_model):
    lines = generate_fish(app_model, "mycli").splitlines()
    prefix = "complete -f -c mycli -n '__fish_mycli_using_command apps:deploy'"
    assert f'{prefix} -l force -s f -d "Skip \\\\[confirmation\\\\]"' in lines
    assert f'{prefix} -l region -s r -r -a "eu us" -d "Target region"' in lines
    assert f'{prefix} -l tag -d "Tag to apply"' in lines
    assert not any("-l trace" in line for line in lines)


def test_flags_follow_their_command(app_model):
    lines = generate_fish(app_model, "mycli").splitlines()
    command = lines.index("complete -f -c mycli -n '__fish_mycli_needs_command' -a apps:list -d \"List applications\"")
    assert lines[command + 1].startswith("complete -f -c mycli -n '__fish_mycli_using_command apps:list' -l json")


def test_flag_without_description():
    commands = (CommandDescriptor(id="foo", flags={"bar": FlagDescriptor(FlagKind.BOOLEAN)}),)
    assert generate_fish(commands, "mycli").endswith("complete -f -c mycli -n '__fish_mycli_using_command foo' -l bar")


def test_empty_model():
    script = generate_fish((), "mycli")
    assert "complete" not in script
    assert script.endswith("return 1\nend")
