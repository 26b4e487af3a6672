from __future__ import annotations

import json
from typing import Dict, List, Mapping, Tuple

import yaml

from kvini.parsers.ini_parser import (
    COMMENT_CHARS,
    CONTINUATION_CHAR,
    QUOTE_CHARS,
    scan_value,
    unquote,
)


def split_key(composite: str) -> Tuple[str, str]:
    """section.key -> (section, key), split at the first dot."""
    section, dot, key = composite.partition(".")
    if not dot or not section or not key:
        raise ValueError(f"expected section.key, got: {composite!r}")
    return section, key


def _quote(s: str) -> str:
    for q in ('"', "'"):
        if q not in s:
            return f"{q}{s}{q}"
    raise ValueError(f"cannot write value with both kinds of quotes: {s!r}")


def _needs_quotes(s: str, *, is_key: bool) -> bool:
    if s != s.strip():
        return True
    if any(c in COMMENT_CHARS for c in s):
        return True
    if s[:1] in QUOTE_CHARS or s.endswith(CONTINUATION_CHAR):
        return True
    if is_key:
        return "=" in s or s.startswith("[") or any(c in QUOTE_CHARS for c in s)
    return False


def _reads_back(val: str) -> bool:
    # written unquoted after "key =", value scans and unquotes to itself
    frag = scan_value(val)
    return not frag.continued and frag.text == val and unquote(val) == val


def format_key(key: str) -> str:
    if not key:
        raise ValueError("empty key")
    return _quote(key) if _needs_quotes(key, is_key=True) else key


def format_value(val: str) -> str:
    if "\r" in val or "\n" in val:
        raise ValueError(f"cannot write multi-line value: {val!r}")
    if not val:
        return ""
    if not _needs_quotes(val, is_key=False):
        return val
    if all(q in val for q in QUOTE_CHARS) and _reads_back(val):
        return val
    return _quote(val)


def dump_ini(kv: Mapping[str, str], *, sort_keys: bool = False) -> str:
    """
    Write section.key => value mapping as ini-file text.

    Values which would not read back as is are quoted. Keys are grouped
    by section in order of first appearance (or sorted).
    """
    sections: Dict[str, List[Tuple[str, str]]] = {}
    items = sorted(kv.items()) if sort_keys else list(kv.items())
    for composite, val in items:
        section, key = split_key(composite)
        sections.setdefault(section, []).append((key, val))

    lines: List[str] = []
    for section, pairs in sections.items():
        if lines:
            lines.append("")
        lines.append(f"[{section}]")
        for key, val in pairs:
            v = format_value(val)
            lines.append(f"{format_key(key)} = {v}" if v else f"{format_key(key)} =")

    return "\n".join(lines) + "\n" if lines else ""


def dump_json(kv: Mapping[str, str], *, sort_keys: bool = False) -> str:
    return json.dumps(dict(kv), indent=2, ensure_ascii=False, sort_keys=sort_keys) + "\n"


def dump_yaml(kv: Mapping[str, str], *, sort_keys: bool = False) -> str:
    return yaml.safe_dump(dict(kv), sort_keys=sort_keys, allow_unicode=True, default_flow_style=False)
