"""Errors reported while finding, parsing and reading command descriptions.

Apart from DeserializationError, none of these are raised out of a run: they
are collected per command and reported once everything has been parsed.
"""


class ManCompletionsError(Exception):
    """Base class for everything this package reports"""


class IoError(ManCompletionsError):
    """A man page could not be opened or decompressed"""

    def __init__(self, path, cause):
        self.path = str(path)
        self.cause = cause
        super().__init__("Unable to read %s: %s" % (self.path, cause))


class ManpageNotFound(ManCompletionsError):
    """A detected (sub)command has no man page of its own"""

    def __init__(self, cmd_name):
        self.cmd_name = cmd_name
        super().__init__("Could not find manpage for %s" % cmd_name)


class UnsupportedFormat(ManCompletionsError):
    """None of the parsers recognized anything in a man page"""

    def __init__(self, path):
        self.path = str(path)
        super().__init__("Unsupported manpage format: %s" % self.path)


class ConfigurationConflict(ManCompletionsError):
    """A command matched both the include and the exclude filter"""

    def __init__(self, cmd_name):
        self.cmd_name = cmd_name
        super().__init__(
            "%s matches both the commands to include and to exclude, excluding it"
            % cmd_name
        )


class DeserializationError(ManCompletionsError):
    """A command description file could not be turned into a CommandInfo.

    Syntax errors carry a 1-based ``line`` and ``column`` and, as ``snippet``,
    the offending source line. Values of the wrong shape carry ``where``, the
    path to the value, e.g. `flags[0].forms`.
    """

    def __init__(
        self, file_path, message, line=None, column=None, snippet=None, where=None
    ):
        self.file_path = str(file_path)
        self.message = message
        self.where = where
        self.line = line
        self.column = column
        self.snippet = snippet
        super().__init__(self.render())

    def render(self):
        if self.line is None:
            if self.where is not None:
                where = self.where or "top level"
                return "%s: at %s: %s" % (self.file_path, where, self.message)
            return "%s: %s" % (self.file_path, self.message)
        res = "%s:%d:%d: %s" % (self.file_path, self.line, self.column, self.message)
        if self.snippet is not None:
            res += "\n    %s\n    %s^" % (self.snippet, " " * (self.column - 1))
        return res


class NoExtension(DeserializationError):
    def __init__(self, file_path):
        super().__init__(file_path, "file has no extension")


class UnrecognizedExtension(DeserializationError):
    def __init__(self, file_path):
        super().__init__(file_path, "file has an unrecognizable extension")
