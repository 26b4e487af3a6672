from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    OK = 0
    NOT_FOUND = 1
    ERROR = 2


class IniLoadError(Exception):
    """ini-file could not be read or decoded into text."""


class ConfigError(Exception):
    """Tool config file is not valid TOML or has invalid settings."""
