"""Completion generators, one module per output format.

Each module has a ``generate(cmd)`` returning ``(file name, text)``.
"""

import os

from . import bash, json, nu, zsh

GENERATORS = {
    "zsh": zsh.generate,
    "bash": bash.generate,
    "nu": nu.generate,
    "json": json.generate,
}

SHELLS = sorted(GENERATORS)


def generate(shell, cmd):
    try:
        generator = GENERATORS[shell]
    except KeyError:
        raise ValueError("Unsupported shell %r, expected one of %s" % (shell, ", ".join(SHELLS)))
    return generator(cmd)


def write_completions(shell, cmds, out_dir=None, where=None):
    """Generate completions for each command.

    With an ``out_dir`` they are written to files there (the directory is
    created if needed) and the paths written are returned; otherwise the text
    goes to ``where``.
    """
    if out_dir is not None:
        os.makedirs(out_dir, exist_ok=True)
    written = []
    for cmd in cmds:
        file_name, text = generate(shell, cmd)
        if out_dir is None:
            where.write(text)
            continue
        path = os.path.join(out_dir, file_name)
        with open(path, "w") as fd:
            fd.write(text)
        written.append(path)
    return written
