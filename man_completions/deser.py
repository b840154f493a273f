"""Reading command descriptions written by hand (or dumped by gen.json)."""

import json
import os

from .errors import DeserializationError, NoExtension, UnrecognizedExtension
from .types import CommandInfo, ShapeError

FORMATS = ["json"]


def parse(file_path):
    """Parse a command description, picking the format by file extension"""
    file_path = str(file_path)
    ext = os.path.splitext(file_path)[1]
    if not ext:
        raise NoExtension(file_path)
    fmt = ext[1:].lower()
    if fmt not in FORMATS:
        raise UnrecognizedExtension(file_path)

    try:
        with open(file_path, "r", encoding="utf-8") as fd:
            text = fd.read()
    except OSError as err:
        raise DeserializationError(file_path, "could not read file: %s" % err)
    return parse_from_str(text, fmt, file_path)


def parse_from_str(text, fmt="json", file_path="<string>"):
    if fmt not in FORMATS:
        raise DeserializationError(file_path, "unrecognized format %r" % fmt)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        lines = text.splitlines()
        snippet = lines[err.lineno - 1] if err.lineno <= len(lines) else None
        raise DeserializationError(file_path, err.msg, err.lineno, err.colno, snippet)

    try:
        return CommandInfo.from_dict(data)
    except ShapeError as err:
        raise DeserializationError(file_path, err.message, where=err.where)
