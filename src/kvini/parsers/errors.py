from __future__ import annotations


class IniParseError(ValueError):
    """Base class for ini-file grammar errors. Always carries the line number."""

    def __init__(self, line: int, reason: str) -> None:
        self.line = line
        self.reason = reason
        super().__init__(f"line {line}: {reason}")


class KeyBeforeSection(IniParseError):
    def __init__(self, line: int) -> None:
        super().__init__(line, "only comments or empty lines can be before first section")


class InvalidSectionHeader(IniParseError):
    def __init__(self, line: int, reason: str = "invalid section name") -> None:
        super().__init__(line, reason)


class ExpectedKeyEquals(IniParseError):
    def __init__(self, line: int) -> None:
        super().__init__(line, "expected key=...")


class EmptyKey(IniParseError):
    def __init__(self, line: int) -> None:
        super().__init__(line, "empty key")
