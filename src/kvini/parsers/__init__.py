from __future__ import annotations

from kvini.parsers.errors import (
    EmptyKey,
    ExpectedKeyEquals,
    IniParseError,
    InvalidSectionHeader,
    KeyBeforeSection,
)
from kvini.parsers.ini_parser import iter_lines, parse_ini, parse_ini_entries, unquote
from kvini.parsers.types import IniEntry, ini_key

__all__ = [
    "EmptyKey",
    "ExpectedKeyEquals",
    "IniEntry",
    "IniParseError",
    "InvalidSectionHeader",
    "KeyBeforeSection",
    "ini_key",
    "iter_lines",
    "parse_ini",
    "parse_ini_entries",
    "unquote",
]
