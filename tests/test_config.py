"""Tests for config module."""

import io

from man_completions import diagnostics
from man_completions.config import ManParseConfig
from man_completions.errors import ConfigurationConflict


class TestManParseConfig:
    """Test running over a manpath."""

    def test_parse(self, man_tree):
        """Test that every top-level command with flags is returned."""
        cmds, errors = ManParseConfig(manpath=[str(man_tree)]).parse()
        assert list(cmds) == ["git", "ls"]
        assert [sub.name for sub in cmds["git"].subcommands] == ["log"]
        assert len(errors) == 1

    def test_exclude_commands(self, man_tree):
        """Test that excluded commands are skipped."""
        config = ManParseConfig(manpath=[str(man_tree)], exclude_commands="^ls$")
        cmds, errors = config.parse()
        assert list(cmds) == ["git"]

    def test_include_commands(self, man_tree):
        """Test that only included commands are parsed."""
        cmds, errors = ManParseConfig().with_manpath([str(man_tree)]).only_commands("^l").parse()
        assert list(cmds) == ["ls"]
        assert errors == []

    def test_conflict(self, man_tree):
        """Test that a command both included and excluded is excluded, with a warning."""
        config = ManParseConfig(
            manpath=[str(man_tree)], include_commands="ls", exclude_commands="ls"
        )
        cmds, errors = config.parse()
        assert cmds == {}
        assert len(errors) == 1
        assert isinstance(errors[0], ConfigurationConflict)
        assert errors[0].cmd_name == "ls"
        assert any("Warning" in line for line in diagnostics.diagnostic_output)

    def test_exclude_sections(self, man_tree):
        """Test that excluded sections aren't searched."""
        config = ManParseConfig(manpath=[str(man_tree)]).excluding_sections([1])
        assert config.find_manpages() == []

    def test_exclude_dirs(self, man_tree):
        """Test that excluded directories aren't searched."""
        config = ManParseConfig(manpath=[str(man_tree)]).excluding_dirs([str(man_tree / "man1")])
        assert config.find_manpages() == []

    def test_explicit_subcommand(self, man_tree):
        """Test that a command can be placed under another explicitly."""
        config = ManParseConfig(manpath=[str(man_tree)]).subcommand("ls", ["git", "ls"])
        cmds, errors = config.parse()
        assert list(cmds) == ["git"]
        assert [sub.name for sub in cmds["git"].subcommands] == ["log", "ls"]

    def test_not_subcommand(self, man_tree):
        config = ManParseConfig(manpath=[str(man_tree)]).not_subcommand("git-log")
        cmds, errors = config.parse()
        assert list(cmds) == ["git", "git-log", "ls"]

    def test_jobs(self, man_tree):
        """Test that parsing on threads gives the same result."""
        serial, serial_errors = ManParseConfig(manpath=[str(man_tree)]).parse()
        threaded, threaded_errors = ManParseConfig(manpath=[str(man_tree)], jobs=4).parse()
        assert threaded == serial
        assert [str(err) for err in threaded_errors] == [str(err) for err in serial_errors]

    def test_progress(self, man_tree):
        """Test that progress is reported per command."""
        progress = io.StringIO()
        ManParseConfig(manpath=[str(man_tree)], progress=progress).parse()
        assert "2 / 2 : ls" in progress.getvalue()
