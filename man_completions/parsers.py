"""Parsers for the different ways man pages lay out their options.

Every parser looks at the whole page, decides for itself whether the page
uses its layout, and returns the flags it could recover. A parser that does
not recognize a page returns an empty list; none of them raise on malformed
markup.
"""

import re

from .diagnostics import add_diagnostic
from .flags import make_flag
from .groff import get_section, remove_groff_formatting, truncate


def split_first_line(data):
    """Split normalized paragraph text into (options, description or None)"""
    data = data.strip()
    if "\n" in data:
        options, desc = data.split("\n", 1)
        return options, desc
    return data, None


class ManParser(object):
    # The section this parser reads options from
    section = None

    def is_my_type(self, manpage):
        return get_section(self.section, manpage) is not None

    def parse_man_page(self, cmd_name, manpage):
        options_section = get_section(self.section, manpage)
        if options_section is None:
            return []
        return self.parse_section(cmd_name, options_section)

    def parse_section(self, cmd_name, options_section):
        return []

    def add_flag(self, flags, options, desc):
        flag = make_flag(options, desc)
        if flag is not None:
            flags.append(flag)


class Type1ManParser(ManParser):
    """Options as `.PP` paragraphs, description indented by `.RS 4`/`.RE`"""

    section = '"OPTIONS"'

    g_re_tp = re.compile(r"\.TP(?: \d+)?(.*?)(?=\.TP|\Z)", re.DOTALL)

    def parse_section(self, cmd_name, options_section):
        flags = []
        found_para = False

        paras = options_section.split(".PP")
        for para in paras[1:]:
            end = para.find(".RE")
            if end == -1:
                add_diagnostic(
                    "In command %s, no .RE found to end description, para: %s"
                    % (cmd_name, truncate(para, 40))
                )
                continue
            found_para = True
            data = remove_groff_formatting(para[:end]).split(".RS 4")
            self.add_flag(flags, data[0], data[1] if len(data) > 1 else None)

        if not found_para:
            add_diagnostic("Trying .TP fallback for %s" % cmd_name)
            return self.fallback(cmd_name, options_section)
        return flags

    def fallback(self, cmd_name, options_section):
        flags = []
        for matched in self.g_re_tp.finditer(options_section):
            options, desc = split_first_line(remove_groff_formatting(matched.group(1)))
            if not desc or not desc.strip():
                add_diagnostic(
                    "In command %s, unable to split option from description: %s"
                    % (cmd_name, truncate(options, 40))
                )
                continue
            self.add_flag(flags, options, desc)
        return flags


class Type2ManParser(ManParser):
    """Options as `.IP`/`.TP` paragraphs, the first line being the options"""

    section = "OPTIONS"

    g_re_para = re.compile(r"\.[IT]P(?: \d+(?:\.\d)?i?)?")
    g_re_para_end = re.compile(r"\.(IP|TP|UNINDENT|UN|SH)")
    # pod2man index entries
    g_re_index = re.compile(r"^\.IX .*\n?", re.MULTILINE)

    def parse_section(self, cmd_name, options_section):
        flags = []
        options_section = self.g_re_index.sub("", options_section)
        paras = self.g_re_para.split(options_section)
        for para in paras[1:]:
            end = self.g_re_para_end.search(para)
            if end is not None:
                para = para[: end.start()]
            options, desc = split_first_line(remove_groff_formatting(para))
            if desc is None:
                add_diagnostic(
                    "In command %s, no description, data: %s"
                    % (cmd_name, truncate(options, 40))
                )
            self.add_flag(flags, options, desc)
        return flags


class Type3ManParser(ManParser):
    """Options as `.TP` or `.HP` runs inside the DESCRIPTION section.

    Some pages (sed, for one) put the options after `.HP` and start the
    description with `.IP`, so that shape is handled too.
    """

    section = "DESCRIPTION"

    g_re_run = re.compile(r"\.[HT]P(.*?)(?=\.[HPT]P|\Z)", re.DOTALL)

    def parse_section(self, cmd_name, options_section):
        flags = []
        for matched in self.g_re_run.finditer(options_section):
            data = matched.group(1)
            if ".IP" in data:
                options, desc = data.split(".IP", 1)
                self.add_flag(
                    flags,
                    remove_groff_formatting(options),
                    remove_groff_formatting(desc),
                )
                continue

            options, desc = split_first_line(remove_groff_formatting(data))
            if desc is None:
                add_diagnostic(
                    "In command %s, no description, data: %s"
                    % (cmd_name, truncate(options, 40))
                )
                continue
            self.add_flag(flags, options, desc)
        return flags


class Type4ManParser(ManParser):
    """Single-letter functions (tar style), each introduced by `.TP`"""

    section = "FUNCTION LETTERS"

    def parse_section(self, cmd_name, options_section):
        flags = []
        for para in options_section.split(".TP")[1:]:
            options, desc = split_first_line(remove_groff_formatting(para))
            if desc is None:
                add_diagnostic(
                    "In command %s, no description, data: %s"
                    % (cmd_name, truncate(options, 40))
                )
                continue
            self.add_flag(flags, options, desc)
        return flags


class TypeScdocManParser(ManParser):
    """Pages generated by scdoc"""

    section = "OPTIONS"

    g_re_generator = re.compile(r'\.\\" Generated by scdoc.*?\.SH OPTIONS', re.DOTALL)

    def is_my_type(self, manpage):
        return self.g_re_generator.search(manpage) is not None

    def parse_man_page(self, cmd_name, manpage):
        if not self.is_my_type(manpage):
            return []
        return super().parse_man_page(cmd_name, manpage)

    def parse_section(self, cmd_name, options_section):
        flags = []
        # Whatever follows the last .RE is not an option
        for option in options_section.split(".RE")[:-1]:
            option = remove_groff_formatting(option).split("\n")
            option_clean = [
                line for line in option if line.strip() not in ["", ".P", ".RS 4"]
            ]

            # Should be at least two lines, the name and the description
            if len(option_clean) < 2:
                add_diagnostic(
                    "In command %s, unable to split option from description" % cmd_name
                )
                continue
            self.add_flag(flags, option_clean[0], option_clean[1])
        return flags


class TypePodManParser(ManParser):
    """Pages generated by pod2man, with `.IP "options" 4` items and `.IX` index entries"""

    section = "OPTIONS"

    g_re_item = re.compile(
        r'\.IP "(.*?)"(?: \d+(?:\.\d)?)?\n(.*?)(?=\.IP |\.SH|\.SS|\Z)', re.DOTALL
    )
    g_re_index = re.compile(r"^\.IX .*$", re.MULTILINE)

    def is_my_type(self, manpage):
        return self.get_options_section(manpage) is not None

    def get_options_section(self, manpage):
        for title in ['"OPTIONS"', "OPTIONS"]:
            options_section = get_section(title, manpage)
            if options_section is not None and ".IX Item" in options_section:
                return options_section
        return None

    def parse_man_page(self, cmd_name, manpage):
        options_section = self.get_options_section(manpage)
        if options_section is None:
            return []
        return self.parse_section(cmd_name, options_section)

    def parse_section(self, cmd_name, options_section):
        flags = []
        for matched in self.g_re_item.finditer(options_section):
            options = remove_groff_formatting(matched.group(1))
            desc = self.g_re_index.sub("", matched.group(2))
            desc = remove_groff_formatting(desc.replace(".PP", "")).strip()
            self.add_flag(flags, options, desc or None)
        return flags


class TypeDarwinManParser(ManParser):
    """mdoc pages (macOS and the BSDs) listing options with `.It Fl`"""

    g_re_flag_macro = re.compile(r"(\...) Fl ")
    g_re_inline_flag = re.compile(r"(^|\s)Fl ")
    g_re_list_end = re.compile(r"\n\.El.*", re.DOTALL)

    def is_my_type(self, manpage):
        return ".Sh DESCRIPTION" in manpage

    def trim_groff(self, line):
        # Remove initial period
        if line.startswith("."):
            line = line[1:]
        # Skip leading groff crud
        while re.match(r"[A-Z][a-z]\s", line):
            line = line[3:]

        # If the line ends with a space and then a period or comma, then erase the space
        # This hack handles lines of the form '.Ar projectname .'
        if line.endswith(" ,") or line.endswith(" ."):
            line = line[:-2] + line[-1]
        return line

    # Replace some groff escapes. There's a lot we don't bother to handle.
    def groff_replace_escapes(self, cmd_name, line):
        line = line.replace(".Nm", cmd_name)
        line = line.replace("\\ ", " ")
        line = line.replace(r"\& ", "")
        line = line.replace(".Pp", "")
        return line

    def clean_desc(self, cmd_name, desc):
        desc_lines = []
        for line in self.g_re_list_end.sub("", desc).splitlines():
            line = line.strip()
            # Ignore comments
            if line.startswith(r".\""):
                continue
            if line.startswith("."):
                line = self.groff_replace_escapes(cmd_name, line)
                line = self.trim_groff(line).strip()
            if line:
                desc_lines.append(line)
        return " ".join(desc_lines)

    def parse_man_page(self, cmd_name, manpage):
        start = manpage.find(".Sh DESCRIPTION")
        if start == -1:
            return []

        # Options may be listed in sections after DESCRIPTION too
        content = manpage[start:]
        # `Fl` is a dash
        content = self.g_re_flag_macro.sub(r"\1 -", content).replace(".Fl ", "-")

        flags = []
        for para in content.split(".It")[1:]:
            options, _, desc = para.partition("\n")
            options = self.g_re_inline_flag.sub(r"\1-", options)
            self.add_flag(flags, options, self.clean_desc(cmd_name, desc))
        return flags


# In the order their results are concatenated
PARSERS = [
    Type1ManParser(),
    Type2ManParser(),
    Type3ManParser(),
    Type4ManParser(),
    TypeScdocManParser(),
    TypePodManParser(),
    TypeDarwinManParser(),
]


def parse_manpage_text(cmd_name, text):
    """Parse flags from a man page using every parser that recognizes it.

    Results are concatenated in parser order; a flag found by two parsers
    shows up twice.
    """
    flags = []
    for parser in PARSERS:
        if not parser.is_my_type(text):
            continue
        found = parser.parse_man_page(cmd_name, text)
        add_diagnostic(
            "%s found %d flags for %s" % (parser.__class__.__name__, len(found), cmd_name)
        )
        flags.extend(found)
    return flags
