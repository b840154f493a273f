"""Working out which man pages document subcommands, and building the tree.

A page named git-commit-tree.1 might document `git-commit-tree`,
`git commit-tree` or `git commit tree`. The only evidence used is the page's
own text: a split is accepted when its words, hyphens escaped the way roff
writes them, appear in the page.
"""

from .diagnostics import BRIEF_VERBOSE, add_diagnostic
from .errors import IoError, ManpageNotFound, UnsupportedFormat
from .manpages import get_cmd_name, read_manpage
from .parsers import parse_manpage_text
from .types import CommandInfo


class CmdPreInfo(object):
    """A command and its detected subcommands, before any page is parsed.

    ``path`` is None when the command has no man page of its own.
    """

    def __init__(self, path=None, subcmds=None):
        self.path = path
        self.subcmds = subcmds if subcmds is not None else {}

    def __repr__(self):
        return "CmdPreInfo(%r, %r)" % (self.path, self.subcmds)


def all_possible_subcommands(hyphens, cmd):
    """Find every way to split a hyphenated name into two or more words.

    ``hyphens`` holds the index of the start of the current substring, then
    the index just past each hyphen inside it, then the index just past the
    end of the substring (one more than its length).
    """
    if len(hyphens) == 2:
        return []

    res = []
    for i in range(1, len(hyphens) - 1):
        mid = hyphens[i]
        all_right = all_possible_subcommands(hyphens[i:], cmd)
        all_right.append([cmd[mid : hyphens[-1] - 1]])
        for right in all_right:
            all_left = all_possible_subcommands(hyphens[: i + 1], cmd)
            all_left.append([cmd[hyphens[0] : mid - 1]])
            for left in all_left:
                res.append(left + right)
    return res


def detect_subcommand(cmd_name, text):
    """Try to detect if the given command is actually a subcommand.

    `git-log` becomes ["git", "log"] if the page mentions `git log`; a name
    with no hyphens, or with no evidence for any split, stays a single word.
    """
    hyphens = [0]
    for i, c in enumerate(cmd_name):
        if c == "-":
            hyphens.append(i + 1)
    hyphens.append(len(cmd_name) + 1)

    if len(hyphens) > 2:
        for poss in all_possible_subcommands(hyphens, cmd_name):
            # Leading, trailing or doubled hyphens leave empty words
            if not all(poss):
                continue
            as_sub_cmd = " ".join(poss).replace("-", "\\-")
            if as_sub_cmd in text:
                add_diagnostic("Detected %s as subcommand %s" % (cmd_name, as_sub_cmd))
                return poss

    return [cmd_name]


def insert_subcmd(subcommands, cmd_parts, path):
    """Insert a command, as a list of words, into a tree of subcommands.

    The first page inserted for a command keeps its place.
    """
    head, rest = cmd_parts[0], cmd_parts[1:]
    cmd = subcommands.get(head)
    if cmd is None:
        cmd = subcommands[head] = CmdPreInfo()
    if rest:
        insert_subcmd(cmd.subcmds, rest, path)
    elif cmd.path is None:
        cmd.path = path


def detect_subcommands(manpages, explicit_subcmds=None, not_subcmds=()):
    """Make a tree relating commands to their subcommands.

    ``explicit_subcmds`` maps a page's command name to the words it should be
    filed under, skipping detection. Names in ``not_subcmds`` are never split.
    Pages that can't be read are left out.
    """
    explicit_subcmds = dict(explicit_subcmds or {})
    not_subcmds = set(not_subcmds)

    res = {}
    for page in manpages:
        cmd_name = get_cmd_name(page)
        if cmd_name in explicit_subcmds:
            insert_subcmd(res, list(explicit_subcmds[cmd_name]), page)
        elif cmd_name in not_subcmds:
            insert_subcmd(res, [cmd_name], page)
        else:
            try:
                text = read_manpage(page)
            except OSError as err:
                add_diagnostic("Cannot open %s: %s" % (page, err), BRIEF_VERBOSE)
                continue
            insert_subcmd(res, detect_subcommand(cmd_name, text), page)
    return res


def parse_from(cmd_name, pre_info):
    """Parse a command and its subcommands.

    Returns the CommandInfo (None if nothing in the subtree had any flags)
    and every error encountered along the way.
    """
    # Positional arguments are not recovered from man pages
    args = []
    subcommands = []
    errors = []
    flags = []

    if pre_info.path is not None:
        try:
            text = read_manpage(pre_info.path)
        except OSError as err:
            errors.append(IoError(pre_info.path, err))
        else:
            flags = parse_manpage_text(cmd_name, text)
            if not flags:
                errors.append(UnsupportedFormat(pre_info.path))
    else:
        errors.append(ManpageNotFound(cmd_name))

    for sub_name, sub_info in pre_info.subcmds.items():
        sub_cmd, sub_errors = parse_from("%s %s" % (cmd_name, sub_name), sub_info)
        if sub_cmd is not None:
            subcommands.append(sub_cmd)
        errors.extend(sub_errors)

    if not flags and not args and not subcommands:
        return None, errors

    subcommands.sort(key=lambda cmd: cmd.name)
    cmd_info = CommandInfo(
        name=cmd_name.split(" ")[-1],
        flags=flags,
        args=args,
        subcommands=subcommands,
    )
    return cmd_info, errors
