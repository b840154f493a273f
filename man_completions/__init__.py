"""Generate shell completions from man pages."""

from .config import ManParseConfig
from .deser import parse as parse_deser
from .parsers import parse_manpage_text
from .subcommands import detect_subcommand, parse_from
from .types import CommandInfo, Flag

__version__ = "0.1.0"
