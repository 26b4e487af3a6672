from __future__ import annotations

import pytest

from kvini.core.options import RunOptions, parse_overrides


def test_parse_overrides() -> None:
    assert parse_overrides(["a.k=1", "a.e=", "a.k=2", " b.x = y "]) == {
        "a.k": "2",
        "a.e": "",
        "b.x": " y ",
    }


@pytest.mark.parametrize("item", ["nokey", "=v", "  =v"])
def test_parse_overrides_invalid(item: str) -> None:
    with pytest.raises(ValueError):
        parse_overrides([item])


def test_command_line_wins_over_ini() -> None:
    opts = RunOptions.merge({"a.k": "ini", "a.j": "keep"}, {"a.k": "cli"})
    assert opts.key_value == {"a.k": "cli", "a.j": "keep"}


def test_string_exist_and_defaults() -> None:
    opts = RunOptions.merge({"a.k": "v"}, defaults={"a.d": "dflt", "a.empty": ""})

    assert opts.string_exist("a.k") == ("v", True, False)
    assert opts.string_exist("a.d") == ("dflt", False, True)
    assert opts.string_exist("a.empty") == ("", False, False)
    assert opts.string_exist("a.none") == ("", False, False)
    assert opts.get_string("a.d") == "dflt"
    assert opts.is_exist("a.k")
    assert not opts.is_exist("a.d")


def test_typed_getters() -> None:
    opts = RunOptions.merge(
        {
            "a.t": "true",
            "a.one": "1",
            "a.yes": "YES",
            "a.f": "false",
            "a.bad": "maybe",
            "a.empty": "",
            "a.n": " 5000 ",
            "a.x": "5k",
            "a.pi": "3.14",
        }
    )

    assert opts.get_bool("a.t")
    assert opts.get_bool("a.one")
    assert opts.get_bool("a.yes")
    assert not opts.get_bool("a.f")
    assert not opts.get_bool("a.bad")
    assert not opts.get_bool("a.empty")
    assert not opts.get_bool("a.missing")

    assert opts.get_int("a.n", 1) == 5000
    assert opts.get_int("a.x", 7) == 7
    assert opts.get_int("a.empty", 7) == 7
    assert opts.get_int("a.missing") == 0

    assert opts.get_float("a.pi") == pytest.approx(3.14)
    assert opts.get_float("a.x", 1.5) == 1.5
