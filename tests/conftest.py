"""Pytest configuration and fixtures for man_completions tests."""

import bz2
import gzip
import tempfile
from pathlib import Path

import pytest

from man_completions import diagnostics


@pytest.fixture(autouse=True)
def reset_diagnostics():
    """Start every test quiet, with nothing buffered."""
    diagnostics.set_verbosity(diagnostics.NOT_VERBOSE)
    diagnostics.diagnostic_output[:] = []
    yield
    diagnostics.set_verbosity(diagnostics.NOT_VERBOSE)
    diagnostics.diagnostic_output[:] = []


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def make_page(name, synopsis, options):
    """Build a man page listing (option line, description) pairs under .SH "OPTIONS"."""
    lines = [
        ".TH %s 1" % name.upper(),
        ".SH NAME",
        "%s \\- a command for testing" % name,
        ".SH SYNOPSIS",
        synopsis,
        '.SH "OPTIONS"',
    ]
    for option, desc in options:
        lines += [".PP", option, ".RS 4", desc, ".RE"]
    return "\n".join(lines) + "\n"


def write_page(path, text):
    """Write a man page, compressing it if the name asks for it."""
    data = text.encode("utf-8")
    if path.name.endswith(".gz"):
        with gzip.open(str(path), "wb") as fd:
            fd.write(data)
    elif path.name.endswith(".bz2"):
        with bz2.BZ2File(str(path), "wb") as fd:
            fd.write(data)
    else:
        path.write_bytes(data)
    return path


@pytest.fixture
def man_tree(temp_dir):
    """A manpath with git (and two git subcommand pages) and ls in man1."""
    man1 = temp_dir / "man1"
    man1.mkdir()
    write_page(
        man1 / "git.1.gz",
        make_page(
            "git",
            "git [--version] [--help] <command> [<args>]",
            [
                (r"\fB\-h\fR, \fB\-\-help\fR", "Show help."),
                (r"\fB\-\-version\fR", "Print the version."),
            ],
        ),
    )
    write_page(
        man1 / "git-log.1",
        make_page(
            "git-log",
            "git log [<options>]",
            [(r"\fB\-\-oneline\fR", "One line per commit.")],
        ),
    )
    write_page(
        man1 / "git-empty.1.bz2",
        make_page("git-empty", "git empty", []),
    )
    write_page(
        man1 / "ls.1",
        make_page(
            "ls",
            "ls [OPTION]... [FILE]...",
            [
                (r"\fB\-a\fR, \fB\-\-all\fR", "Do not ignore hidden entries."),
                (r"\fB\-l\fR", "Use a long listing format."),
            ],
        ),
    )
    return temp_dir
