"""Tests for diagnostics module."""

import io

from man_completions import diagnostics
from man_completions.diagnostics import (
    BRIEF_VERBOSE,
    NOT_VERBOSE,
    VERY_VERBOSE,
    add_diagnostic,
    flush_diagnostics,
)


def test_verbosity_filter():
    diagnostics.set_verbosity(BRIEF_VERBOSE)
    add_diagnostic("always", NOT_VERBOSE)
    add_diagnostic("brief", BRIEF_VERBOSE)
    add_diagnostic("chatty", VERY_VERBOSE)
    assert diagnostics.diagnostic_output == ["always", "brief"]


def test_flush():
    """Flushing prints everything once and empties the buffer."""
    add_diagnostic("one", NOT_VERBOSE)
    add_diagnostic("two", NOT_VERBOSE)
    where = io.StringIO()
    flush_diagnostics(where)
    flush_diagnostics(where)
    assert where.getvalue() == "one\ntwo\n"
    assert diagnostics.diagnostic_output == []
