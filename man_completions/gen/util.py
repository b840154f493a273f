"""Helpers shared by the completion generators."""


class Output(object):
    """Collects lines of text, indenting each by the current level"""

    def __init__(self, indent_str):
        self.indent_str = indent_str
        self.level = 0
        self.lines = []

    def indent(self):
        self.level += 1

    def dedent(self):
        if self.level == 0:
            raise ValueError("Output is not indented")
        self.level -= 1

    def writeln(self, line=""):
        # Every line of a multi-line string gets the indentation
        for part in line.split("\n"):
            if part:
                self.lines.append(self.indent_str * self.level + part)
            else:
                self.lines.append("")

    def text(self):
        return "\n".join(self.lines) + "\n"


def quote(s):
    """Wrap in single quotes (escaping single quotes inside) for Bash and Zsh"""
    return "'" + s.replace("'", "'\"'\"'") + "'"
