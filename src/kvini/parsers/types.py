from __future__ import annotations

from dataclasses import dataclass


def ini_key(section: str, key: str) -> str:
    """Composite mapping key: section.key"""
    return f"{section}.{key}"


@dataclass(frozen=True)
class IniEntry:
    """ A completed (section, key, value) triple from an ini-file."""
    section: str
    key: str
    value: str
    line: int

    @property
    def composite_key(self) -> str:
        return ini_key(self.section, self.key)
