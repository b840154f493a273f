"""Zsh completions: one `_arguments` function per command and subcommand.

A shortened example for git, assuming only `git pull` and `git checkout`:

    #compdef _git git

    function _git {
        local line

        _arguments -C \\
            '-h[Show help]' \\
            ': :(checkout pull)' \\
            '*::arg:->args'

        case $line[1] in
            checkout) _git_checkout;;
            pull) _git_pull;;
        esac
    }

    function _git_checkout {
        _arguments \\
            '-b[Make new branch]'
    }
"""

from .util import Output, quote

INDENT = "    "


def escape_desc(desc):
    # Brackets end the description in an _arguments spec
    return desc.replace("[", "\\[").replace("]", "\\]")


def generate(cmd):
    """Generate a completion file for Zsh, returning (file name, text)"""
    comp_name = "_" + cmd.name
    out = Output(INDENT)
    out.writeln("#compdef %s %s" % (comp_name, cmd.name))
    generate_fn(cmd, out, comp_name)
    return "%s.zsh" % comp_name, out.text()


def generate_fn(cmd, out, fn_name):
    """Generate the function for one node, then one for each of its children.

    The function for `foo bar` is named `_foo_bar`.
    """
    out.writeln()
    out.writeln("function %s {" % fn_name)
    out.indent()

    specs = []
    for flag in cmd.flags:
        desc = escape_desc(flag.desc or "")
        for form in flag.forms:
            specs.append(quote("%s[%s]" % (form, desc)))

    if cmd.subcommands:
        out.writeln("local line")
        out.writeln()
        sub_names = " ".join(sub.name for sub in cmd.subcommands)
        specs.append("': :(%s)'" % sub_names)
        specs.append("'*::arg:->args'")
        arguments = "_arguments -C"
    else:
        arguments = "_arguments"

    if specs:
        out.writeln(arguments + " \\")
        out.indent()
        for spec in specs[:-1]:
            out.writeln(spec + " \\")
        out.writeln(specs[-1])
        out.dedent()
    else:
        out.writeln(arguments)

    if cmd.subcommands:
        out.writeln()
        # `*::arg:->args` shifts the words, so the subcommand is always first
        out.writeln("case $line[1] in")
        out.indent()
        for sub in cmd.subcommands:
            out.writeln("%s) %s_%s;;" % (sub.name, fn_name, sub.name))
        out.dedent()
        out.writeln("esac")

    out.dedent()
    out.writeln("}")

    for sub in cmd.subcommands:
        generate_fn(sub, out, "%s_%s" % (fn_name, sub.name))
