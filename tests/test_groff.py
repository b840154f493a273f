"""Tests for groff module."""

from man_completions.groff import get_section, remove_groff_formatting, truncate


class TestRemoveGroffFormatting:
    """Test stripping of font switches and escapes."""

    def test_font_switches_and_dashes(self):
        """Test that bold/roman switches go and escaped dashes become dashes."""
        assert remove_groff_formatting(r"\fB\-h\fR, \fB\-\-help\fR") == "-h, --help"

    def test_quotes(self):
        """Test that quote glyphs become single quotes."""
        assert remove_groff_formatting(r"\(aqx\(aq \(lqy\(rq") == "'x' 'y'"

    def test_escaped_space(self):
        """Test that an escaped space becomes a plain space."""
        assert remove_groff_formatting(r"\-\-foo\ bar") == "--foo bar"

    def test_leaves_paragraph_directives(self):
        """Test that the directives parsers split on are kept."""
        text = ".PP\n\\fB\\-a\\fR\n.RS 4\nAll.\n.RE\n"
        assert remove_groff_formatting(text) == ".PP\n-a\n.RS 4\nAll.\n.RE\n"

    def test_idempotent(self):
        """Test that normalizing twice changes nothing more."""
        for text in [r"\\fBfB\-x", r"\fI\fB\-\-all\fP", ".sp\n.PD 0\n\\-v"]:
            once = remove_groff_formatting(text)
            assert remove_groff_formatting(once) == once


class TestGetSection:
    """Test finding a section's content."""

    PAGE = ".SH NAME\nfoo\n.SH OPTIONS\nbody\n.SH SEE ALSO\nbar\n"

    def test_section_until_next_heading(self):
        """Test that content stops at the next .SH."""
        assert get_section("OPTIONS", self.PAGE) == "\nbody\n"

    def test_last_section(self):
        """Test that the last section runs to the end of the page."""
        assert get_section("SEE ALSO", self.PAGE) == "\nbar\n"

    def test_missing_section(self):
        """Test that an absent section gives None."""
        assert get_section("DESCRIPTION", self.PAGE) is None

    def test_quoted_title(self):
        """Test that quoted and unquoted titles are different sections."""
        page = '.SH "OPTIONS"\nquoted\n'
        assert get_section('"OPTIONS"', page) == "\nquoted\n"
        assert get_section("OPTIONS", page) is None


def test_truncate():
    assert truncate("  one\ntwo three ", 7) == "one two"
