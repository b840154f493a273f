"""Configuration for a run over the system's man pages, and the run itself."""

import re
from multiprocessing.pool import ThreadPool

from .diagnostics import BRIEF_VERBOSE, NOT_VERBOSE, add_diagnostic
from .errors import ConfigurationConflict
from .manpages import enumerate_manpages, get_cmd_name, get_manpath
from .subcommands import detect_subcommands, parse_from


def compile_pattern(pattern):
    if pattern is None or hasattr(pattern, "search"):
        return pattern
    return re.compile(pattern)


class ManParseConfig(object):
    """Which man pages to parse, and how.

    ``include_commands`` and ``exclude_commands`` are regular expressions
    searched for in each page's command name. A command matching both is
    excluded. ``explicit_subcommands`` maps a page's command name to the words
    it should be filed under (e.g. "git-commit" to ["git", "commit"]) without
    looking for evidence in the page. With ``jobs`` above 1, top-level
    commands are parsed on that many threads.

    The setters return the config so they can be chained.
    """

    def __init__(
        self,
        manpath=None,
        exclude_dirs=(),
        exclude_sections=(),
        include_commands=None,
        exclude_commands=None,
        not_subcommands=(),
        explicit_subcommands=None,
        jobs=1,
        progress=None,
    ):
        self.manpath = list(manpath) if manpath else None
        self.exclude_dirs = list(exclude_dirs)
        self.exclude_sections = list(exclude_sections)
        self.include_commands = compile_pattern(include_commands)
        self.exclude_commands = compile_pattern(exclude_commands)
        self.not_subcommands = list(not_subcommands)
        self.explicit_subcommands = dict(explicit_subcommands or {})
        self.jobs = jobs
        # Stream to report progress on, if any
        self.progress = progress

    def with_manpath(self, dirs):
        self.manpath = list(dirs)
        return self

    def excluding_dirs(self, dirs):
        self.exclude_dirs.extend(dirs)
        return self

    def excluding_sections(self, sections):
        self.exclude_sections.extend(sections)
        return self

    def only_commands(self, pattern):
        self.include_commands = compile_pattern(pattern)
        return self

    def excluding_commands(self, pattern):
        self.exclude_commands = compile_pattern(pattern)
        return self

    def not_subcommand(self, cmd_name):
        self.not_subcommands.append(cmd_name)
        return self

    def subcommand(self, cmd_name, words):
        self.explicit_subcommands[cmd_name] = list(words)
        return self

    def with_jobs(self, jobs):
        self.jobs = jobs
        return self

    def is_included(self, cmd_name):
        """Whether a command passes the filters, and the conflict if there is one"""
        included = self.include_commands is None or bool(
            self.include_commands.search(cmd_name)
        )
        excluded = self.exclude_commands is not None and bool(
            self.exclude_commands.search(cmd_name)
        )
        if excluded and included and self.include_commands is not None:
            return False, ConfigurationConflict(cmd_name)
        return included and not excluded, None

    def find_manpages(self):
        """Return the paths of every man page these filters let through"""
        manpath = self.manpath or get_manpath()
        return enumerate_manpages(manpath, self.exclude_dirs, self.exclude_sections)

    def filter_manpages(self, manpages):
        kept = []
        errors = []
        conflicted = set()
        for page in manpages:
            cmd_name = get_cmd_name(page)
            included, conflict = self.is_included(cmd_name)
            if conflict is not None and cmd_name not in conflicted:
                conflicted.add(cmd_name)
                add_diagnostic("Warning: %s" % conflict, NOT_VERBOSE)
                errors.append(conflict)
            if included:
                kept.append(page)
        return kept, errors

    def parse(self, manpages=None):
        """Parse the man pages into a tree of commands.

        Returns a dict of top-level command names to CommandInfo, sorted by
        name, and a list of every error found along the way. Commands without
        any flags anywhere in their tree are left out.
        """
        if manpages is None:
            manpages = self.find_manpages()
        manpages, errors = self.filter_manpages(manpages)

        tree = detect_subcommands(
            manpages, self.explicit_subcommands, self.not_subcommands
        )
        names = sorted(tree)

        def parse_one(cmd_name):
            return parse_from(cmd_name, tree[cmd_name])

        if self.jobs > 1 and len(names) > 1:
            pool = ThreadPool(processes=self.jobs)
            try:
                results = list(self.report_progress(names, pool.imap(parse_one, names)))
            finally:
                pool.close()
                pool.join()
        else:
            results = list(self.report_progress(names, map(parse_one, names)))

        res = {}
        for cmd_name, (cmd_info, cmd_errors) in zip(names, results):
            errors.extend(cmd_errors)
            if cmd_info is not None:
                res[cmd_name] = cmd_info
            else:
                add_diagnostic("No flags found for %s" % cmd_name, BRIEF_VERBOSE)
        add_diagnostic(
            "Successfully parsed %d / %d commands" % (len(res), len(names)),
            BRIEF_VERBOSE,
        )
        return res, errors

    def report_progress(self, names, results):
        if self.progress is None:
            for result in results:
                yield result
            return

        total_count = len(names)
        padding_len = len(str(total_count))
        last_progress_string_length = 0
        for index, (cmd_name, result) in enumerate(zip(names, results), 1):
            progress_str = "  {0} / {1} : {2}".format(
                str(index).rjust(padding_len), total_count, cmd_name
            )
            # Pad on the right with spaces so we overwrite whatever we wrote last time
            padded_progress_str = progress_str.ljust(last_progress_string_length)
            last_progress_string_length = len(progress_str)
            self.progress.write("\r{0}\r".format(padded_progress_str))
            self.progress.flush()
            yield result
        self.progress.write("\n")
