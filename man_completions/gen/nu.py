"""Nushell completions: an `export extern` per command and subcommand.

Flags that take a typed argument get a `nu-complete` command defined ahead of
the extern, which the extern's signature then uses as its completer.
"""

import json

from ..types import Any, CommandName, Dir, Path, Run, Strings, Unknown
from .util import Output


def generate(cmd):
    """Generate completions for Nushell, returning (file name, text)"""
    out = Output("  ")
    generate_cmd(cmd.name, cmd, out)
    return "%s-completions.nu" % cmd.name, out.text()


def nu_string(s):
    # Nu double-quoted strings take the same escapes as JSON
    return json.dumps(s, ensure_ascii=False)


def to_ident(form):
    """Turn a flag spelling into something usable in a completer's name"""
    # Flags with underscores could collide here, but that's unlikely
    return form.lstrip("-").replace("-", "_")


def complete_type(typ):
    """Generate Nu code producing the completions for an argument type"""
    if isinstance(typ, Strings):
        records = []
        for value, desc in typ.strs:
            if desc is None:
                records.append("{value: %s}" % nu_string(value))
            else:
                records.append(
                    "{value: %s, description: %s}" % (nu_string(value), nu_string(desc))
                )
        return "[%s]" % ", ".join(records)
    if isinstance(typ, Run):
        if typ.sep is None:
            return "(%s) | lines" % typ.cmd
        sep = nu_string(typ.sep)
        return (
            "(%s) | lines | each {|line| let parts = ($line | split row --number 2 %s); "
            "{value: ($parts | first), description: ($parts | skip 1 | str join %s)} }"
            % (typ.cmd, sep, sep)
        )
    if isinstance(typ, Any):
        return "[%s]" % " ".join("...(%s)" % complete_type(inner) for inner in typ.types)
    if isinstance(typ, Dir):
        return "ls | where type == dir | get name"
    if isinstance(typ, CommandName):
        return (
            "$env.PATH | where {|dir| $dir | path exists } "
            "| each {|dir| ls $dir | get name | path basename } | flatten | uniq"
        )
    if isinstance(typ, (Path, Unknown)):
        return "ls | get name"
    raise TypeError("Can't complete %r" % typ)


def type_annotation(decl, ident, typ, completers):
    if typ is None:
        return ""
    if isinstance(typ, Unknown):
        return ": string"
    completers.append((ident, typ))
    return ': string@"nu-complete %s %s"' % (decl, ident)


def generate_cmd(decl, cmd, out):
    # The flags are collected first: the completers they need must be defined
    # before the extern that refers to them
    entries = []
    completers = []
    for flag in cmd.flags:
        long_forms = [form for form in flag.forms if form.startswith("--")]
        short_forms = [
            form for form in flag.forms if len(form) == 2 and not form.startswith("--")
        ]
        if not long_forms and not short_forms:
            continue

        type_str = type_annotation(decl, to_ident(flag.forms[0]), flag.typ, completers)
        desc_str = ""
        if flag.desc is not None:
            desc_str = " # " + flag.desc.replace("\n", " ")

        # Pair off as many long and short forms as possible
        pairs = min(len(long_forms), len(short_forms))
        for long_form, short_form in zip(long_forms, short_forms):
            entries.append("%s(%s)%s%s" % (long_form, short_form, type_str, desc_str))
        for form in long_forms[pairs:] + short_forms[pairs:]:
            entries.append("%s%s%s" % (form, type_str, desc_str))

    for i, arg in enumerate(cmd.args, 1):
        ident = "arg%d" % i
        entries.append(ident + "?" + (type_annotation(decl, ident, arg, completers) or ": string"))

    defined = set()
    for ident, typ in completers:
        if ident in defined:
            continue
        defined.add(ident)
        out.writeln('def "nu-complete %s %s" [] {' % (decl, ident))
        out.indent()
        out.writeln(complete_type(typ))
        out.dedent()
        out.writeln("}")
        out.writeln()

    if cmd.desc is not None:
        for line in cmd.desc.splitlines():
            out.writeln("# " + line)
    out.writeln('export extern "%s" [' % decl)
    out.indent()
    for entry in entries:
        out.writeln(entry)
    out.dedent()
    out.writeln("]")
    out.writeln()

    for sub in cmd.subcommands:
        generate_cmd("%s %s" % (decl, sub.name), sub, out)
