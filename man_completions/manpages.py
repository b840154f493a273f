"""Finding man pages on the system and reading them."""

import bz2
import gzip
import os
import re
import subprocess
from subprocess import DEVNULL

from .diagnostics import NOT_VERBOSE, add_diagnostic

# Truncated or corrupt archives
DECOMPRESS_ERRORS = (EOFError, ValueError)

lzma_available = True
try:
    import lzma

    DECOMPRESS_ERRORS += (lzma.LZMAError,)
except ImportError:
    lzma_available = False

SECTIONS = ["man1", "man2", "man3", "man4", "man5", "man6", "man7", "man8"]

DEFAULT_MANPATH = ["/usr/share/man", "/usr/local/man", "/usr/local/share/man"]


def get_manpath():
    """Return the directories man(1) would search, most specific first"""
    parent_paths = []

    if os.getenv("MANPATH"):
        parent_paths = os.getenv("MANPATH").strip().split(":")

    # Most (GNU, macOS, Haiku) modern implementations of man support being called with `--path`.
    # Traditional implementations require a second `manpath` program: examples include FreeBSD and Solaris.
    if not parent_paths:
        for prog in [["man", "--path"], ["manpath"]]:
            try:
                output = subprocess.check_output(prog, stderr=DEVNULL)
                output = output.decode("latin-1")
                parent_paths = output.strip().split(":")
                break
            except (OSError, subprocess.CalledProcessError):
                continue
    # Fallback: With mandoc (OpenBSD, embedded Linux) and NetBSD man, the only way to get the default manpath is by reading /etc.
    if not parent_paths:
        try:
            with open("/etc/man.conf", "r") as file:
                data = file.read()
                for key in ["MANPATH", "_default"]:
                    for match in re.findall(r"^%s\s+(.*)$" % key, data, re.I | re.M):
                        parent_paths.append(match)
        except OSError:
            pass
    # Fallback: hard-code some common paths. These should be likely for FHS Linux distros, BSDs, and macOS.
    if not parent_paths:
        parent_paths = list(DEFAULT_MANPATH)
        add_diagnostic(
            "Unable to get the manpath, falling back to %s. "
            "Explicitly set $MANPATH to fix this error." % ":".join(parent_paths),
            NOT_VERBOSE,
        )

    return [path for path in parent_paths if path]


def section_number(section_dir):
    # man1 -> 1
    return int(section_dir[3:])


def enumerate_manpages(manpath, exclude_dirs=(), exclude_sections=()):
    """Return every man page under the manpath's section directories.

    Pages come in manpath order, then by section, then by name, so the page
    from the most specific directory is seen first.
    """
    excluded = set(os.path.realpath(d) for d in exclude_dirs)
    result = []
    for parent_path in manpath:
        if os.path.realpath(parent_path) in excluded:
            continue
        for section in SECTIONS:
            if section_number(section) in exclude_sections:
                continue
            directory_path = os.path.join(parent_path, section)
            if os.path.realpath(directory_path) in excluded:
                continue
            try:
                names = os.listdir(directory_path)
            except OSError:
                names = []
            for name in sorted(names):
                path = os.path.join(directory_path, name)
                if os.path.isfile(path):
                    result.append(path)

    suffixes = set(os.path.splitext(m)[1][1:] for m in result)
    if ("xz" in suffixes or "lzma" in suffixes) and not lzma_available:
        add_diagnostic(
            'At least one man page is compressed with lzma or xz, but the "lzma" module is not available.'
            " Any man page compressed with either will be skipped.",
            NOT_VERBOSE,
        )
    return result


def get_cmd_name(manpage_path):
    """Get the command a man page documents, e.g. /foo/cowsay.1.gz -> cowsay"""
    file_name = os.path.basename(str(manpage_path))
    return file_name.split(".", 1)[0]


def read_manpage(manpage_path):
    """Read a man page, decompressing it if necessary.

    Raises OSError if the page can't be read or decompressed.
    """
    manpage_path = str(manpage_path)
    add_diagnostic("Reading man page at " + manpage_path)
    try:
        if manpage_path.endswith(".gz"):
            with gzip.open(manpage_path, "rb") as fd:
                manpage = fd.read()
        elif manpage_path.endswith(".bz2"):
            with bz2.BZ2File(manpage_path, "rb") as fd:
                manpage = fd.read()
        elif manpage_path.endswith((".xz", ".lzma")):
            if not lzma_available:
                raise OSError("lzma module is not available to read %s" % manpage_path)
            with lzma.LZMAFile(manpage_path, "rb") as fd:
                manpage = fd.read()
        else:
            with open(manpage_path, "rb") as fd:
                manpage = fd.read()
    except DECOMPRESS_ERRORS as err:
        raise OSError("Unable to decompress %s: %s" % (manpage_path, err))
    return manpage.decode("utf-8", errors="replace")
