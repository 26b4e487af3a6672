from __future__ import annotations

import codecs
from pathlib import Path

import pytest

from kvini.core.errors import IniLoadError
from kvini.core.loader import decode_bytes, detect_encoding, load_ini, read_ini_text
from kvini.parsers import ExpectedKeyEquals

TEXT = "[a]\nk = café\n"


def test_detect_encoding_by_bom() -> None:
    assert detect_encoding(codecs.BOM_UTF8 + b"x") == "utf-8-sig"
    assert detect_encoding(codecs.BOM_UTF16_LE + b"x\x00") == "utf-16"
    assert detect_encoding(codecs.BOM_UTF32_LE + b"x\x00\x00\x00") == "utf-32"
    assert detect_encoding(b"[a]") == "utf-8"


@pytest.mark.parametrize("enc", ["utf-8-sig", "utf-16", "utf-32"])
def test_decode_bytes_with_bom(enc: str) -> None:
    assert decode_bytes(TEXT.encode(enc)) == TEXT


def test_decode_bytes_explicit_code_page() -> None:
    assert decode_bytes(TEXT.encode("windows-1252"), "windows-1252") == TEXT


def test_decode_bytes_drops_bom_with_explicit_utf8() -> None:
    assert decode_bytes(codecs.BOM_UTF8 + TEXT.encode("utf-8"), "utf-8") == TEXT


def test_decode_bytes_errors() -> None:
    with pytest.raises(IniLoadError):
        decode_bytes(b"x", "no-such-codec")
    with pytest.raises(IniLoadError):
        decode_bytes(TEXT.encode("windows-1252"))


def test_load_ini(tmp_path: Path) -> None:
    p = tmp_path / "app.ini"
    p.write_bytes(TEXT.encode("windows-1252"))
    assert load_ini(p, "windows-1252") == {"a.k": "café"}
    assert load_ini(str(p), "cp1252") == {"a.k": "café"}


def test_load_ini_empty_path_means_no_file() -> None:
    assert load_ini("") is None
    assert load_ini(None) is None


def test_load_ini_missing_file(tmp_path: Path) -> None:
    with pytest.raises(IniLoadError, match="reading ini-file failed"):
        load_ini(tmp_path / "missing.ini")


def test_read_ini_text_size_limit(tmp_path: Path) -> None:
    p = tmp_path / "big.ini"
    p.write_text(TEXT, encoding="utf-8")
    with pytest.raises(IniLoadError, match="too large"):
        read_ini_text(p, max_file_bytes=4)


def test_load_ini_parse_error_propagates(tmp_path: Path) -> None:
    p = tmp_path / "bad.ini"
    p.write_text("[a]\nnovalue\n", encoding="utf-8")
    with pytest.raises(ExpectedKeyEquals) as ei:
        load_ini(p)
    assert ei.value.line == 2
