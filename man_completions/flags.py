"""Turning an option line and its description into a Flag."""

import re

from .diagnostics import add_diagnostic
from .groff import truncate
from .types import Flag

# Maximum length of a description, after which it is cut and ELLIPSIS added
MAX_DESC_LEN = 80

ELLIPSIS = "..."

g_re_option_delim = re.compile(r'[ ,="|]')
g_re_optional_arg = re.compile(r"\[.*\]")
g_re_placeholder = re.compile(r"<.*")
# Something like `--foo=(+|\-)x` would otherwise be read as --foo and -x
g_re_trailing_syntax = re.compile(r"-[()\[\]].*$")
g_re_subsection = re.compile(r"\.SS.*", re.DOTALL)
g_re_sentence_end = re.compile(r"\.\s+")

g_option_trim_chars = " \t\r\n[](){}.:!"


def unquote(data):
    if len(data) < 2:
        return data
    if (data[0] == '"' and data[-1] == '"') or (data[0] == "'" and data[-1] == "'"):
        return data[1:-1]
    return data


def truncate_desc(desc):
    if len(desc) > MAX_DESC_LEN:
        return desc[: MAX_DESC_LEN - len(ELLIPSIS)] + ELLIPSIS
    return desc


def clean_desc(desc):
    # Get rid of subsection headings that bled into the end
    desc = g_re_subsection.sub("", desc)
    desc = desc.strip().replace("\n", " ")
    desc = desc.rstrip(".")
    # Clean up some probably bogus escapes
    desc = desc.replace("\\'", "").replace("\\.", "")
    # Remove extra spaces after sentence ends
    desc = g_re_sentence_end.sub(". ", desc)
    return truncate_desc(desc)


def parse_forms(options):
    forms = []
    for optionstr in g_re_option_delim.split(unquote(options.strip())):
        option = g_re_optional_arg.sub("", optionstr)
        option = g_re_placeholder.sub("", option)
        option = option.strip(g_option_trim_chars)
        option = g_re_trailing_syntax.sub("", option)

        # Skip some problematic cases
        if not option.startswith("-") or option in ["-", "--"]:
            continue
        if any(c in "{}()" for c in option):
            continue
        if option not in forms:
            forms.append(option)
    return forms


def make_flag(options, desc=None):
    """Parse a line of options and the description that goes with it.

    Returns None if the line has no usable option spellings.
    """
    forms = parse_forms(options)
    if not forms:
        add_diagnostic(
            "No options found in %r, desc: %r"
            % (options.strip(), truncate(desc or "", 40))
        )
        return None

    if desc is not None:
        desc = clean_desc(desc) or None
    return Flag(forms, desc)
