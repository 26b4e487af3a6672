from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel, Field

_TRUE = {"1", "t", "true", "y", "yes"}


def parse_overrides(items: Iterable[str]) -> Dict[str, str]:
    """
    Parse command line overrides: section.key=value

    Value may be empty. Later items win.
    """
    out: Dict[str, str] = {}
    for item in items:
        key, sep, val = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"expected section.key=value, got: {item!r}")
        out[key] = val
    return out


class RunOptions(BaseModel):
    """
    Run options merged from ini-file and command line.

    For ini-file options key is combined as section.key.
    Command line overrides take precedence over ini-file values.
    Defaults are kept apart: they are used only if key is not defined at all.
    """

    key_value: Dict[str, str] = Field(default_factory=dict)
    default_key_value: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def merge(
        cls,
        ini: Optional[Mapping[str, str]],
        overrides: Optional[Mapping[str, str]] = None,
        defaults: Optional[Mapping[str, str]] = None,
    ) -> "RunOptions":
        kv: Dict[str, str] = dict(ini or {})
        kv.update(overrides or {})
        dflt = {k: v for k, v in (defaults or {}).items() if v != ""}
        return cls(key_value=kv, default_key_value=dflt)

    def is_exist(self, key: str) -> bool:
        return key in self.key_value

    def string_exist(self, key: str) -> Tuple[str, bool, bool]:
        """
        Return (value, is_exist, is_default).

        is_exist is True if defined by ini-file or command line,
        is_default is True if value is a non-empty default.
        """
        if key in self.key_value:
            return self.key_value[key], True, False
        if key in self.default_key_value:
            return self.default_key_value[key], False, True
        return "", False, False

    def get_string(self, key: str) -> str:
        return self.string_exist(key)[0]

    def get_bool(self, key: str) -> bool:
        # not defined, empty or not a boolean: False
        val, is_exist, _ = self.string_exist(key)
        if not is_exist:
            return False
        return val.strip().lower() in _TRUE

    def get_int(self, key: str, default: int = 0) -> int:
        val, is_exist, _ = self.string_exist(key)
        if not is_exist or not val.strip():
            return default
        try:
            return int(val.strip())
        except ValueError:
            return default

    def get_float(self, key: str, default: float = 0.0) -> float:
        val, is_exist, _ = self.string_exist(key)
        if not is_exist or not val.strip():
            return default
        try:
            return float(val)
        except ValueError:
            return default

