"""Just enough groff handling to get at option lists.

This is not a roff interpreter: font switches, escapes and a handful of
spacing directives are dropped so option spellings can be split into words,
while the directives the parsers split on (.SH, .PP, .TP, .IP, .RS, .RE, .It)
are left alone.
"""

import re

# Match roff numeric expressions
NUM_RE = r"(\d+(\.\d)?)"

g_re_paragraph_distance = re.compile(r"\.PD \d+")
g_re_vertical_space = re.compile(r"\.sp( %si?v?)?" % NUM_RE)

# Order matters: .BI and .BR have to go before .B
g_removals = [
    "\\fI",
    "\\fP",
    "\\f1",
    "\\fB",
    "\\fR",
    "\\e",
    ".BI",
    ".BR",
    ".B",
    "0.5i",
    ".rb",
    "\\^",
    "{ ",
    " }",
    "\\&",
    "\f",
    ".Pp",
]

g_replacements = [
    ("\\ ", " "),
    ("\\-", "-"),
]

# Quote glyphs (\(aq, \(dq and the like) all become a single quote
g_re_quote = re.compile(r"\\\([ocadlr]q")


def remove_groff_formatting_once(data):
    for removal in g_removals:
        data = data.replace(removal, "")
    data = g_re_paragraph_distance.sub("", data)
    for old, new in g_replacements:
        data = data.replace(old, new)
    data = g_re_quote.sub("'", data)
    return g_re_vertical_space.sub("", data)


def remove_groff_formatting(data):
    # A removal can join two halves into a new escape (`\\fBfB`), so keep
    # going until nothing changes
    while True:
        cleaned = remove_groff_formatting_once(data)
        if cleaned == data:
            return cleaned
        data = cleaned


def regex_for_section(title):
    return re.compile(r"\.SH %s(.*?)(\.SH|\Z)" % re.escape(title), re.DOTALL)


def get_section(title, text):
    """Get the contents of the section with the given title, or None"""
    matched = regex_for_section(title).search(text)
    if matched is None:
        return None
    return matched.group(1)


def truncate(s, length):
    """Shorten text for diagnostics, also trimming it and dropping newlines"""
    s = s.strip().replace("\n", " ")
    return s[:length]
