from __future__ import annotations

from kvini.parsers import IniEntry, IniParseError, parse_ini, parse_ini_entries

__version__ = "0.1.0"

__all__ = ["IniEntry", "IniParseError", "__version__", "parse_ini", "parse_ini_entries"]
