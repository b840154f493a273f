"""man-completions: Generate shell completions from man pages or JSON"""

import argparse
import re
import sys

from . import diagnostics
from .config import ManParseConfig
from .deser import parse as parse_deser
from .diagnostics import BRIEF_VERBOSE, NOT_VERBOSE, add_diagnostic, flush_diagnostics
from .errors import DeserializationError
from .gen import SHELLS, write_completions


def comma_list(value):
    return [item for item in value.split(",") if item]


def regex(value):
    try:
        return re.compile(value)
    except re.error as err:
        raise argparse.ArgumentTypeError("invalid regex %r: %s" % (value, err))


def section_list(value):
    sections = []
    for item in comma_list(value):
        try:
            section = int(item)
        except ValueError:
            raise argparse.ArgumentTypeError("%r is not a section number" % item)
        if not 1 <= section <= 8:
            raise argparse.ArgumentTypeError("section %d is not between 1 and 8" % section)
        sections.append(section)
    return sections


def make_parser():
    parser = argparse.ArgumentParser(
        prog="man-completions",
        description="man-completions: Generate shell completions from man pages",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        type=int,
        choices=[0, 1, 2],
        default=0,
        help="The level of debug output to show",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    man = subparsers.add_parser("man", help="Generate completions from man pages")
    man.add_argument("shell", choices=SHELLS, help="What to generate completions for")
    man.add_argument(
        "out",
        nargs="?",
        help="The directory to save the completions in (default: stdout)",
    )
    man.add_argument(
        "-d",
        "--dirs",
        action="append",
        help="Directories to search for man pages in, instead of the manpath",
    )
    man.add_argument(
        "-i",
        "--ignore",
        type=comma_list,
        default=[],
        help="Directories to exclude (comma separated)",
    )
    man.add_argument(
        "-S",
        "--sections-exclude",
        type=section_list,
        default=[],
        help="Man sections to exclude (comma separated, 1-8)",
    )
    man.add_argument(
        "-c", "--cmds", type=regex, help="Only parse commands matching this regex"
    )
    man.add_argument(
        "-C", "--exclude-cmds", type=regex, help="Don't parse commands matching this regex"
    )
    man.add_argument(
        "-n",
        "--not-subcmds",
        type=comma_list,
        default=[],
        help="Commands that are not subcommands (comma separated)",
    )
    man.add_argument(
        "-j", "--jobs", type=int, default=1, help="How many threads to parse with"
    )
    man.add_argument(
        "-p",
        "--progress",
        help="Whether to show progress",
        action="store_true",
    )

    for_ = subparsers.add_parser(
        "for", help="Generate completions from a JSON description of a command"
    )
    for_.add_argument("shell", choices=SHELLS, help="What to generate completions for")
    for_.add_argument("conf", help="The file describing the command")
    for_.add_argument(
        "out",
        nargs="?",
        help="The directory to save the completions in (default: stdout)",
    )
    return parser


def report_errors(errors):
    for err in errors:
        add_diagnostic(str(err), BRIEF_VERBOSE)


def run_man(args):
    config = ManParseConfig(
        manpath=args.dirs,
        exclude_dirs=args.ignore,
        exclude_sections=args.sections_exclude,
        include_commands=args.cmds,
        exclude_commands=args.exclude_cmds,
        not_subcommands=args.not_subcmds,
        jobs=args.jobs,
        progress=sys.stderr if args.progress else None,
    )
    manpages = config.find_manpages()
    if not manpages:
        add_diagnostic("No man pages found", NOT_VERBOSE)
        return 1

    cmds, errors = config.parse(manpages)
    report_errors(errors)
    write_completions(args.shell, cmds.values(), args.out, sys.stdout)
    return 0


def run_for(args):
    try:
        cmd = parse_deser(args.conf)
    except DeserializationError as err:
        add_diagnostic(err.render(), NOT_VERBOSE)
        return 1
    write_completions(args.shell, [cmd], args.out, sys.stdout)
    return 0


def main(argv=None):
    args = make_parser().parse_args(argv)
    diagnostics.set_verbosity(args.verbose)
    try:
        if args.command == "man":
            return run_man(args)
        return run_for(args)
    finally:
        flush_diagnostics(sys.stderr)
