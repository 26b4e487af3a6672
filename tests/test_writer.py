from __future__ import annotations

import json

import pytest
import yaml

from kvini.core.writer import (
    dump_ini,
    dump_json,
    dump_yaml,
    format_key,
    format_value,
    split_key,
)
from kvini.parsers import parse_ini


def test_dump_ini_groups_by_section() -> None:
    kv = {"a.k": "1", "b.x": "2", "a.j": ""}
    assert dump_ini(kv) == "[a]\nk = 1\nj =\n\n[b]\nx = 2\n"


def test_dump_ini_sorted() -> None:
    kv = {"b.x": "2", "a.k": "1"}
    assert dump_ini(kv, sort_keys=True).startswith("[a]\n")


def test_dump_then_parse_is_identity() -> None:
    kv = {
        "a.k": "plain value",
        "a.spaced": "  padded  ",
        "a.semi": "x;y # z",
        "a.quoted": '"looks quoted"',
        "a.apos": "it's",
        "a.both": "say \"hi\" it's",
        "a.slash": "C:\\temp\\",
        "a.eq": "1=2",
        "a.empty": "",
        "a.b.dotted": "section with dot",
        "b.x = y": "key with equals",
        "b.[k": "key like a header",
        "b. pad ": "key with spaces",
        "b.q\"k": "key with a quote",
    }
    assert parse_ini(dump_ini(kv)) == kv


def test_parse_dump_parse_is_stable() -> None:
    text = "[s]\nk = a ; c\nq = 'x;y'\n[t]\nm = line1 \\\n  line2\n"
    kv = parse_ini(text)
    assert parse_ini(dump_ini(kv)) == kv


def test_format_value_picks_free_quote_char() -> None:
    assert format_value("a;b") == '"a;b"'
    assert format_value('say "hi" ;') == "'say \"hi\" ;'"
    assert format_value("it's") == "it's"


def test_format_value_with_both_quotes_written_plain() -> None:
    val = "a\"b;c'd"
    assert parse_ini(f"[a]\nk = {val}\n") == {"a.k": val}
    assert format_value(val) == val
    assert parse_ini(dump_ini({"a.k": val})) == {"a.k": val}


def test_format_value_rejects_unwritable() -> None:
    with pytest.raises(ValueError):
        format_value("x ; \" and '")
    with pytest.raises(ValueError):
        format_value("two\nlines")


def test_format_key() -> None:
    assert format_key("k") == "k"
    assert format_key("a=b") == '"a=b"'
    with pytest.raises(ValueError):
        format_key("")


def test_split_key() -> None:
    assert split_key("a.b.c") == ("a", "b.c")
    with pytest.raises(ValueError):
        split_key("nodot")


def test_dump_json_and_yaml() -> None:
    kv = {"a.k": "v", "a.n": "16807", "b.e": ""}
    assert json.loads(dump_json(kv)) == kv
    assert yaml.safe_load(dump_yaml(kv)) == kv
