"""Tests for writing completion files and setup instructions."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from shellcomp.commands.registry import CommandRegistry
from shellcomp.completions import handlers
from shellcomp.completions.discovery import build_command_model
from shellcomp.completions.handlers import (
    CompletionPaths,
    create,
    fish_completions_dir,
    instructions,
    render_script,
    select_topic_style,
)
from shellcomp.completions.models import TopicStyle
from shellcomp.completions.setup_scripts import bash_setup_script, zsh_setup_script
from shellcomp.config import Settings
from shellcomp.constants import TOPIC_SEPARATOR_ENV
from shellcomp.models import ShellcompError, UsageError

from .test_discovery import BrokenFlags


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(cli_bin="mycli", cache_dir=tmp_path / "cache")


@pytest.fixture
def paths(settings: Settings, tmp_path: Path) -> CompletionPaths:
    return CompletionPaths.for_settings(settings, fish_dir=tmp_path / "fish")


@pytest.fixture
def no_env_override(monkeypatch):
    monkeypatch.delenv(TOPIC_SEPARATOR_ENV, raising=False)


class TestTopicStyle:
    def test_colon_by_default(self):
        assert select_topic_style(":", {}) == TopicStyle.COLON

    def test_space_when_configured(self):
        assert select_topic_style(" ", {}) == TopicStyle.SPACE

    def test_env_forces_colon(self):
        assert select_topic_style(" ", {TOPIC_SEPARATOR_ENV: "colon"}) == TopicStyle.COLON

    def test_other_env_values_ignored(self):
        assert select_topic_style(" ", {TOPIC_SEPARATOR_ENV: "space"}) == TopicStyle.SPACE

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv(TOPIC_SEPARATOR_ENV, "colon")
        assert select_topic_style(" ") == TopicStyle.COLON


class TestPaths:
    def test_layout(self, paths: CompletionPaths, tmp_path: Path):
        cache = tmp_path / "cache"
        assert paths.bash_setup == cache / "autocomplete" / "bash_setup"
        assert paths.zsh_setup == cache / "autocomplete" / "zsh_setup"
        assert paths.error_log == cache / "autocomplete" / "autocomplete.log"
        assert paths.bash_completion == cache / "autocomplete" / "functions" / "bash" / "mycli.bash"
        assert paths.zsh_completion == cache / "autocomplete" / "functions" / "zsh" / "_mycli"
        assert paths.fish_completion == tmp_path / "fish" / "mycli.fish"

    def test_fish_dir_from_pkg_config(self, settings: Settings, mocker):
        mocker.patch("shellcomp.completions.handlers.fish_completions_dir", return_value=Path("/usr/share/fish/vendor_completions.d"))
        paths = CompletionPaths.for_settings(settings)
        assert paths.fish_completion == Path("/usr/share/fish/vendor_completions.d/mycli.fish")


class TestFishCompletionsDir:
    def test_pkg_config_answer(self, mocker):
        mocker.patch.object(
            handlers.subprocess,
            "run",
            return_value=subprocess.CompletedProcess([], 0, stdout="/usr/share/fish/vendor_completions.d\n", stderr=""),
        )
        assert fish_completions_dir() == Path("/usr/share/fish/vendor_completions.d")

    def test_pkg_config_missing(self, mocker):
        mocker.patch.object(handlers.subprocess, "run", side_effect=FileNotFoundError("pkg-config"))
        assert fish_completions_dir() == Path("~/.config/fish/completions").expanduser()

    def test_fish_unknown_to_pkg_config(self, mocker):
        mocker.patch.object(handlers.subprocess, "run", side_effect=subprocess.CalledProcessError(1, "pkg-config"))
        assert fish_completions_dir() == Path("~/.config/fish/completions").expanduser()

    def test_empty_answer(self, mocker):
        mocker.patch.object(handlers.subprocess, "run", return_value=subprocess.CompletedProcess([], 0, stdout="\n", stderr=""))
        assert fish_completions_dir() == Path("~/.config/fish/completions").expanduser()


class TestSetupScripts:
    def test_bash(self, tmp_path: Path):
        script = bash_setup_script(tmp_path, "my-cli")
        assert script == f"MY_CLI_AC_BASH_COMPFUNC_PATH={tmp_path}/my-cli.bash && test -f $MY_CLI_AC_BASH_COMPFUNC_PATH && source $MY_CLI_AC_BASH_COMPFUNC_PATH;\n"

    def test_zsh(self, tmp_path: Path):
        script = zsh_setup_script(tmp_path)
        assert f"fpath=(\n{tmp_path}\n$fpath\n);" in script
        assert script.endswith("autoload -Uz compinit;\ncompinit;\n")


def test_render_script(minimal_registry):
    settings = Settings(cli_bin="mycli", topic_separator=" ")
    snapshot = build_command_model(minimal_registry)
    spaces = render_script("bash", snapshot, settings, env={})
    colon = render_script("bash", snapshot, settings, env={TOPIC_SEPARATOR_ENV: "colon"})
    assert "join_by" in spaces
    assert "join_by" not in colon


@pytest.mark.usefixtures("no_env_override")
class TestCreate:
    @pytest.mark.asyncio
    async def test_writes_every_file(self, settings: Settings, paths: CompletionPaths, app_registry: CommandRegistry):
        snapshot = await create(settings, app_registry, paths)
        assert len(snapshot.commands) == 4
        for path in (paths.bash_setup, paths.zsh_setup, paths.bash_completion, paths.zsh_completion, paths.fish_completion):
            assert path.is_file(), path
        assert not paths.error_log.exists()

    @pytest.mark.asyncio
    async def test_file_contents(self, settings: Settings, paths: CompletionPaths, minimal_registry: CommandRegistry):
        await create(settings, minimal_registry, paths)
        assert '"baz\\:qux:"' in paths.zsh_completion.read_text()
        assert "\nfoo --bar\n" in paths.bash_completion.read_text()
        assert "-a baz:qux" in paths.fish_completion.read_text()
        assert str(paths.bash_completion) in paths.bash_setup.read_text()
        assert str(paths.zsh_functions_dir) in paths.zsh_setup.read_text()

    @pytest.mark.asyncio
    async def test_idempotent(self, settings: Settings, paths: CompletionPaths, app_registry: CommandRegistry):
        await create(settings, app_registry, paths)
        first = paths.zsh_completion.read_bytes()
        await create(settings, app_registry, paths)
        assert paths.zsh_completion.read_bytes() == first

    @pytest.mark.asyncio
    async def test_space_style(self, tmp_path: Path, app_registry: CommandRegistry):
        settings = Settings(cli_bin="mycli", topic_separator=" ", cache_dir=tmp_path / "cache")
        paths = CompletionPaths.for_settings(settings, fish_dir=tmp_path / "fish")
        await create(settings, app_registry, paths)
        assert "_set_subcommands" in paths.zsh_completion.read_text()
        assert "join_by" in paths.bash_completion.read_text()

    @pytest.mark.asyncio
    async def test_env_override_selects_colon(self, tmp_path: Path, app_registry: CommandRegistry):
        settings = Settings(cli_bin="mycli", topic_separator=" ", cache_dir=tmp_path / "cache")
        paths = CompletionPaths.for_settings(settings, fish_dir=tmp_path / "fish")
        await create(settings, app_registry, paths, env={TOPIC_SEPARATOR_ENV: "colon"})
        assert "_set_subcommands" not in paths.zsh_completion.read_text()
        assert "join_by" not in paths.bash_completion.read_text()

    @pytest.mark.asyncio
    async def test_skipped_commands_logged(self, settings: Settings, paths: CompletionPaths, minimal_registry: CommandRegistry):
        minimal_registry.add_commands("broken", [BrokenFlags])
        snapshot = await create(settings, minimal_registry, paths)
        assert [s.id for s in snapshot.skipped] == ["broken:flags"]
        log = paths.error_log.read_text()
        assert "Skipped broken:flags: flag mode has unknown type 'choice'" in log
        assert "foo" in paths.fish_completion.read_text()

    @pytest.mark.asyncio
    async def test_unwritable_cache(self, tmp_path: Path, minimal_registry: CommandRegistry):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        settings = Settings(cli_bin="mycli", cache_dir=blocker)
        paths = CompletionPaths.for_settings(settings, fish_dir=tmp_path / "fish")
        with pytest.raises(ShellcompError):
            await create(settings, minimal_registry, paths)

    @pytest.mark.asyncio
    async def test_windows_refused(self, settings: Settings, paths: CompletionPaths, minimal_registry: CommandRegistry):
        with patch.object(handlers.sys, "platform", "win32"), pytest.raises(ShellcompError, match="Windows"):
            await create(settings, minimal_registry, paths)
        assert not paths.autocomplete_dir.exists()


class TestInstructions:
    def test_bash(self, settings: Settings, paths: CompletionPaths):
        text = instructions("bash", settings, paths)
        assert text.startswith("Setup Instructions for MYCLI CLI Autocomplete ---")
        assert f"MYCLI_AC_BASH_SETUP_PATH={paths.bash_setup}" in text
        assert "~/.bashrc" in text

    def test_zsh(self, settings: Settings, paths: CompletionPaths):
        text = instructions("zsh", settings, paths)
        assert f"MYCLI_AC_ZSH_SETUP_PATH={paths.zsh_setup}" in text
        assert "compaudit -D" in text

    def test_fish(self, settings: Settings, paths: CompletionPaths):
        assert str(paths.fish_completion) in instructions("fish", settings, paths)

    def test_unknown_shell(self, settings: Settings, paths: CompletionPaths):
        with pytest.raises(UsageError):
            instructions("tcsh", settings, paths)
