"""Bash completions: a single function switching on the word position."""

from .util import Output


def generate(cmd):
    """Generate a completion file for Bash, returning (file name, text)"""
    comp_name = "_comp_cmd_%s" % cmd.name

    out = Output("\t")
    out.writeln("#!/usr/bin/env bash")
    out.writeln()
    out.writeln("function %s {" % comp_name)
    out.indent()
    out.writeln("COMPREPLY=()")

    generate_cmd(cmd, 1, out)

    out.writeln("return 0")
    out.dedent()
    out.writeln("}")
    out.writeln()
    out.writeln("complete -F %s %s" % (comp_name, cmd.name))

    return "_%s.bash" % cmd.name, out.text()


def generate_cmd(cmd, pos, out):
    out.writeln("case $COMP_CWORD in")
    out.indent()

    words = []
    for flag in cmd.flags:
        words.extend(flag.forms)
    words.extend(sub.name for sub in cmd.subcommands)

    # The word being completed belongs to this command
    out.writeln("%d) COMPREPLY=($(compgen -W '%s' -- $2)) ;;" % (pos, " ".join(words)))

    # The word being completed belongs to a subcommand further along
    if cmd.subcommands:
        out.writeln("*)")
        out.indent()
        out.writeln("case ${COMP_WORDS[%d]} in" % pos)
        out.indent()
        for sub in cmd.subcommands:
            out.writeln("%s)" % sub.name)
            out.indent()
            generate_cmd(sub, pos + 1, out)
            out.writeln(";;")
            out.dedent()
        out.dedent()
        out.writeln("esac")
        out.writeln(";;")
        out.dedent()

    out.dedent()
    out.writeln("esac")
