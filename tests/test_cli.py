"""Tests for the command line interface."""

import os
import re
import sys
from pathlib import Path

import pexpect
import pytest

from man_completions.cli import main
from man_completions.gen import json as gen_json
from man_completions.types import CommandInfo, Flag

ROOT = str(Path(__file__).resolve().parent.parent)

# Default timeout for failing to match.
TIMEOUT_SECS = 10


def spawn(args):
    """Run `python -m man_completions` on a pseudo-tty."""
    env = dict(os.environ)
    env["PYTHONPATH"] = ROOT + os.pathsep + env.get("PYTHONPATH", "")
    return pexpect.spawn(
        sys.executable,
        ["-m", "man_completions"] + args,
        env=env,
        encoding="utf-8",
        timeout=TIMEOUT_SECS,
    )


@pytest.fixture
def conf(temp_dir):
    """A JSON description of foo."""
    path = temp_dir / "foo.json"
    cmd = CommandInfo("foo", flags=[Flag(["-a", "--all"], "Everything")])
    path.write_text(gen_json.generate(cmd)[1], encoding="utf-8")
    return path


class TestFor:
    """Test generating from a JSON description."""

    def test_stdout(self, conf, capsys):
        """Test that completions go to stdout without an output directory."""
        assert main(["for", "zsh", str(conf)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("#compdef _foo foo\n")
        assert "'--all[Everything]'" in out

    def test_out_dir(self, conf, temp_dir):
        """Test that completions are written into the output directory."""
        out_dir = temp_dir / "out"
        assert main(["for", "nu", str(conf), str(out_dir)]) == 0
        text = (out_dir / "foo-completions.nu").read_text()
        assert "--all(-a) # Everything" in text

    def test_bad_conf(self, temp_dir, capsys):
        """Test that a malformed description fails with its location."""
        path = temp_dir / "bad.json"
        path.write_text('{"name": "foo",\n "flags": [}\n', encoding="utf-8")
        assert main(["for", "bash", str(path)]) == 1
        err = capsys.readouterr().err
        assert re.search(re.escape(str(path)) + r":2:\d+: ", err)

    def test_non_string_desc(self, temp_dir, capsys):
        """Test that a numeric description is rejected before generating."""
        path = temp_dir / "foo.json"
        path.write_text(
            '{"name": "foo", "flags": [{"forms": ["-a"], "desc": 5}]}', encoding="utf-8"
        )
        assert main(["for", "zsh", str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "at flags[0].desc: expected a string" in captured.err

    def test_unknown_extension(self, temp_dir, capsys):
        assert main(["for", "bash", str(temp_dir / "foo.yaml")]) == 1
        assert "unrecognizable extension" in capsys.readouterr().err

    def test_unknown_shell(self, conf):
        """Test that argparse rejects shells that aren't supported."""
        with pytest.raises(SystemExit):
            main(["for", "fish", str(conf)])


class TestMan:
    """Test generating from man pages."""

    def test_out_dir(self, man_tree, temp_dir):
        """Test that a file is written for each command."""
        out_dir = temp_dir / "out"
        assert main(["man", "-d", str(man_tree), "bash", str(out_dir)]) == 0
        assert sorted(os.listdir(str(out_dir))) == ["_git.bash", "_ls.bash"]

    def test_filters(self, man_tree, capsys):
        """Test that the command filters are applied."""
        assert main(["man", "-d", str(man_tree), "-C", "^git", "json"]) == 0
        out = capsys.readouterr().out
        assert '"name": "ls"' in out
        assert '"name": "git"' not in out

    def test_errors_reported(self, man_tree, capsys):
        """Test that per-command errors are reported at verbosity 1."""
        assert main(["-v", "1", "man", "-d", str(man_tree), "zsh"]) == 0
        assert "Unsupported manpage format" in capsys.readouterr().err

    def test_no_manpages(self, temp_dir, capsys):
        """Test that finding nothing is an error."""
        assert main(["man", "-d", str(temp_dir), "zsh"]) == 1
        assert "No man pages found" in capsys.readouterr().err

    def test_bad_section(self, man_tree):
        with pytest.raises(SystemExit):
            main(["man", "-d", str(man_tree), "-S", "9", "zsh"])


class TestSpawned:
    """Test running the module as a program."""

    def test_for(self, conf):
        """Test that the module runs and exits cleanly."""
        proc = spawn(["for", "zsh", str(conf)])
        proc.expect("#compdef _foo foo")
        proc.expect(re.escape("'-a[Everything]'"))
        proc.expect(pexpect.EOF)
        proc.close()
        assert proc.exitstatus == 0

    def test_bad_conf(self, temp_dir):
        """Test that the exit status shows the failure."""
        path = temp_dir / "bad.json"
        path.write_text("{", encoding="utf-8")
        proc = spawn(["for", "zsh", str(path)])
        proc.expect(re.escape(str(path)) + r":1:\d+: ")
        proc.expect(pexpect.EOF)
        proc.close()
        assert proc.exitstatus == 1
