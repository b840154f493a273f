"""The parsed description of a command: its flags, arguments and subcommands.

Both the man page parsers and the JSON reader produce these, and every
generator consumes them.
"""

from typing import List, Optional


class ShapeError(ValueError):
    """A serialized command has a value of the wrong shape.

    ``where`` locates the value, e.g. `subcommands[0].flags[1].forms`.
    """

    def __init__(self, where, message):
        self.where = where
        self.message = message
        super().__init__("%s: %s" % (where or "top level", message))


def join_path(where, key):
    if isinstance(key, int):
        return "%s[%d]" % (where, key)
    return "%s.%s" % (where, key) if where else key


def expect_list(value, where):
    if not isinstance(value, list):
        raise ShapeError(where, "expected a list")
    return value


def optional_str(data, key, where):
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ShapeError(join_path(where, key), "expected a string")
    return value


class ArgType(object):
    """How to complete an argument. Subclasses form a closed set."""

    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self):
        return hash(type(self).__name__)

    def __repr__(self):
        fields = ", ".join("%s=%r" % item for item in sorted(vars(self).items()))
        return "%s(%s)" % (type(self).__name__, fields)

    def to_dict(self):
        return type(self).__name__

    @staticmethod
    def from_dict(data, where=""):
        if isinstance(data, str):
            variant = UNIT_TYPES.get(data)
            if variant is None:
                raise ShapeError(where, "unknown argument type %r" % data)
            return variant()
        if not isinstance(data, dict) or len(data) != 1:
            raise ShapeError(where, "argument type must be a string or a single-key object")
        (tag, payload), = data.items()
        where = join_path(where, tag)
        if tag == "Run":
            if not isinstance(payload, dict) or not isinstance(payload.get("cmd"), str):
                raise ShapeError(where, "Run needs an object with a string 'cmd'")
            return Run(payload["cmd"], optional_str(payload, "sep", where))
        if tag == "Strings":
            strs = []
            for i, entry in enumerate(expect_list(payload, where)):
                if isinstance(entry, str):
                    strs.append((entry, None))
                    continue
                if (
                    not isinstance(entry, list)
                    or len(entry) != 2
                    or not isinstance(entry[0], str)
                    or not (entry[1] is None or isinstance(entry[1], str))
                ):
                    raise ShapeError(
                        join_path(where, i), "expected a string or [value, description]"
                    )
                strs.append((entry[0], entry[1]))
            return Strings(strs)
        if tag == "Any":
            return Any(
                [
                    ArgType.from_dict(typ, join_path(where, i))
                    for i, typ in enumerate(expect_list(payload, where))
                ]
            )
        raise ShapeError(where, "unknown argument type %r" % tag)


class Path(ArgType):
    """Complete using either file or directory paths"""


class Dir(ArgType):
    """Complete using directory paths"""


class CommandName(ArgType):
    """Complete with the name of a command"""


class Unknown(ArgType):
    pass


class Run(ArgType):
    """Complete by running a command.

    ``sep`` splits each output line into a value (first) and a description
    (second). Without it the command is assumed to only print values.
    """

    def __init__(self, cmd, sep=None):
        self.cmd = cmd
        self.sep = sep

    def to_dict(self):
        return {"Run": {"cmd": self.cmd, "sep": self.sep}}


class Strings(ArgType):
    """Only these strings are allowed, each with an optional description"""

    def __init__(self, strs):
        self.strs = [(value, desc) for value, desc in strs]

    def to_dict(self):
        return {"Strings": [[value, desc] for value, desc in self.strs]}


class Any(ArgType):
    """Any of the given types work"""

    def __init__(self, types):
        self.types = list(types)

    def to_dict(self):
        return {"Any": [typ.to_dict() for typ in self.types]}


UNIT_TYPES = {cls.__name__: cls for cls in (Path, Dir, CommandName, Unknown)}


class Flag(object):
    """A parsed flag with all of its spellings"""

    def __init__(
        self,
        forms: List[str],
        desc: Optional[str] = None,
        typ: Optional[ArgType] = None,
    ):
        self.forms = list(forms)
        self.desc = desc
        self.typ = typ

    def __eq__(self, other):
        return (
            isinstance(other, Flag)
            and self.forms == other.forms
            and self.desc == other.desc
            and self.typ == other.typ
        )

    def __repr__(self):
        return "Flag(%r, %r, %r)" % (self.forms, self.desc, self.typ)

    def to_dict(self):
        res = {"forms": list(self.forms)}
        if self.desc is not None:
            res["desc"] = self.desc
        if self.typ is not None:
            res["typ"] = self.typ.to_dict()
        return res

    @classmethod
    def from_dict(cls, data, where=""):
        if not isinstance(data, dict):
            raise ShapeError(where, "flag must be an object")
        forms = data.get("forms")
        if not isinstance(forms, list) or not forms:
            raise ShapeError(join_path(where, "forms"), "flag needs a non-empty list of forms")
        for i, form in enumerate(forms):
            if not isinstance(form, str) or not form:
                raise ShapeError(
                    join_path(join_path(where, "forms"), i), "expected a non-empty string"
                )
        typ = data.get("typ")
        return cls(
            forms,
            optional_str(data, "desc", where),
            None if typ is None else ArgType.from_dict(typ, join_path(where, "typ")),
        )


class CommandInfo(object):
    """Flags parsed from a command, as well as its parsed subcommands"""

    def __init__(
        self,
        name: str,
        desc: Optional[str] = None,
        flags: Optional[List[Flag]] = None,
        args: Optional[List[ArgType]] = None,
        subcommands: Optional[List["CommandInfo"]] = None,
    ):
        self.name = name
        self.desc = desc
        self.flags = flags or []
        self.args = args or []
        self.subcommands = subcommands or []

    def __eq__(self, other):
        return isinstance(other, CommandInfo) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return "CommandInfo(%r, flags=%d, subcommands=%r)" % (
            self.name,
            len(self.flags),
            [sub.name for sub in self.subcommands],
        )

    def to_dict(self):
        res = {"name": self.name}
        if self.desc is not None:
            res["desc"] = self.desc
        if self.flags:
            res["flags"] = [flag.to_dict() for flag in self.flags]
        if self.args:
            res["args"] = [arg.to_dict() for arg in self.args]
        if self.subcommands:
            res["subcommands"] = [sub.to_dict() for sub in self.subcommands]
        return res

    @classmethod
    def from_dict(cls, data, where=""):
        if not isinstance(data, dict):
            raise ShapeError(where, "command must be an object")
        if not isinstance(data.get("name"), str) or not data["name"]:
            raise ShapeError(join_path(where, "name"), "command needs a non-empty string name")

        def items(key):
            return [
                (join_path(join_path(where, key), i), item)
                for i, item in enumerate(expect_list(data.get(key, []), join_path(where, key)))
            ]

        subcommands = [cls.from_dict(sub, at) for at, sub in items("subcommands")]
        names = [sub.name for sub in subcommands]
        if len(set(names)) != len(names):
            raise ShapeError(
                join_path(where, "subcommands"),
                "duplicate subcommand names in %r" % data["name"],
            )
        return cls(
            data["name"],
            optional_str(data, "desc", where),
            [Flag.from_dict(flag, at) for at, flag in items("flags")],
            [ArgType.from_dict(arg, at) for at, arg in items("args")],
            subcommands,
        )
