from __future__ import annotations

import codecs
import logging
from pathlib import Path
from typing import Dict, Optional, Union

from kvini.core.errors import IniLoadError
from kvini.parsers.ini_parser import parse_ini

logger = logging.getLogger(__name__)

# utf-32 first: its little endian BOM starts with utf-16 little endian BOM
_BOMS = (
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def detect_encoding(data: bytes) -> str:
    """Encoding by byte order mark, utf-8 if there is no BOM."""
    for bom, name in _BOMS:
        if data.startswith(bom):
            return name
    return "utf-8"


def decode_bytes(data: bytes, encoding: Optional[str] = None) -> str:
    """
    Convert raw ini-file bytes to text.

    Explicit encoding (code page name, e.g. windows-1252) wins over BOM detection.
    Leading BOM is never part of the result.
    """
    if encoding:
        try:
            codecs.lookup(encoding)
        except LookupError as e:
            raise IniLoadError(f"unknown encoding: {encoding}") from e
    else:
        encoding = detect_encoding(data)

    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as e:
        raise IniLoadError(f"cannot decode as {encoding}: {e}") from e

    if text.startswith("\ufeff"):
        text = text[1:]
    return text


def read_ini_text(
    path: Union[str, Path],
    encoding: Optional[str] = None,
    *,
    max_file_bytes: Optional[int] = None,
) -> str:
    """Read ini-file bytes and convert them to text."""
    p = Path(path)
    try:
        size = p.stat().st_size
        if max_file_bytes is not None and size > max_file_bytes:
            raise IniLoadError(f"ini-file too large: {p} ({size} > {max_file_bytes} bytes)")
        data = p.read_bytes()
    except OSError as e:
        raise IniLoadError(f"reading ini-file failed: {p}: {e}") from e

    try:
        return decode_bytes(data, encoding)
    except IniLoadError as e:
        raise IniLoadError(f"reading ini-file to utf-8 failed: {p}: {e}") from e


def load_ini(
    path: Union[str, Path, None],
    encoding: Optional[str] = None,
    *,
    max_file_bytes: Optional[int] = None,
) -> Optional[Dict[str, str]]:
    """
    Read ini-file, convert to text and parse into section.key => value.

    Return None if path is empty (no ini-file).
    Raises IniLoadError if file can't be read or decoded and
    IniParseError if content is malformed.
    """
    if not path:
        return None

    kv = parse_ini(read_ini_text(path, encoding, max_file_bytes=max_file_bytes))
    logger.debug("loaded %d key(s) from %s", len(kv), path)
    return kv
