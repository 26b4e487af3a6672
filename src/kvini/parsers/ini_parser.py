from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union

from kvini.parsers.errors import (
    EmptyKey,
    ExpectedKeyEquals,
    InvalidSectionHeader,
    KeyBeforeSection,
)
from kvini.parsers.types import IniEntry

logger = logging.getLogger(__name__)

COMMENT_CHARS = ";#"
QUOTE_CHARS = "\"'"
CONTINUATION_CHAR = "\\"

_LINE_END_RE = re.compile(r"\r\n|\r|\n")


class QuoteState(str, Enum):
    """Scanner quote state. Only the character that opened a quote can close it."""

    NORMAL = ""
    IN_SINGLE = "'"
    IN_DOUBLE = '"'

    @property
    def is_open(self) -> bool:
        return self is not QuoteState.NORMAL

    def step(self, c: str) -> "QuoteState":
        if self is QuoteState.NORMAL:
            if c == "'":
                return QuoteState.IN_SINGLE
            if c == '"':
                return QuoteState.IN_DOUBLE
            return self
        if c == self.value:
            return QuoteState.NORMAL
        return self


# ----------------------------
# Line splitter
# ----------------------------

def iter_lines(text: str) -> Iterator[Tuple[int, str]]:
    """
    Yield (line_number, line) pairs, line numbers start from 1.

    CR, LF and CRLF each end one line; the marker itself is dropped.
    """
    if not text:
        return

    pos = 0
    n = 0
    for m in _LINE_END_RE.finditer(text):
        n += 1
        yield n, text[pos:m.start()]
        pos = m.end()

    if pos < len(text):
        yield n + 1, text[pos:]


# ----------------------------
# Line classifier
# ----------------------------

@dataclass(frozen=True)
class Blank:
    pass


@dataclass(frozen=True)
class SectionHeader:
    name: str


@dataclass(frozen=True)
class ContentLine:
    text: str


LineKind = Union[Blank, SectionHeader, ContentLine]


def _section_name(line: str, lineno: int) -> str:
    # line is stripped and starts with [
    quote = QuoteState.NORMAL
    for end, c in enumerate(line):
        if not quote.is_open:
            if c == "]":
                break
            if c in COMMENT_CHARS:
                raise InvalidSectionHeader(lineno, "invalid section name: comment before ]")
        quote = quote.step(c)
    else:
        raise InvalidSectionHeader(lineno, "invalid section name: missing ]")

    name = line[1:end].strip()
    if not name:
        raise InvalidSectionHeader(lineno, "empty section name")
    return name


def classify_line(line: str, lineno: int, *, pending: bool = False) -> LineKind:
    """
    Classify one physical line.

    While an entry is pending continuation only an empty line ends it: comment
    and section header lookalikes are appended to the value as content.
    """
    s = line.strip()
    if not s:
        return Blank()

    if pending:
        return ContentLine(line)

    if s[0] in COMMENT_CHARS:
        return Blank()
    if s[0] == "[":
        return SectionHeader(_section_name(s, lineno))
    return ContentLine(line)


# ----------------------------
# Key/value scanner
# ----------------------------

def unquote(src: str) -> str:
    """
    Trim and strip one pair of matching boundary quotes.

    Quotes are stripped only when every inner occurrence of the quote char is
    doubled, so '"a" "b"' stays as is while '" x "" y "' becomes ' x "" y '.
    """
    s = (src or "").strip()
    if len(s) >= 2 and s[0] in QUOTE_CHARS and s[0] == s[-1]:
        inner = s[1:-1]
        if s[0] not in inner.replace(s[0] * 2, ""):
            return inner
    return s


@dataclass(frozen=True)
class ValueFragment:
    text: str
    quote: QuoteState
    continued: bool


def _finish_fragment(body: str, quote: QuoteState) -> ValueFragment:
    stripped = body.rstrip()
    if not stripped.endswith(CONTINUATION_CHAR):
        return ValueFragment(body, quote, False)

    body = stripped[:-1]
    if quote.is_open:
        return ValueFragment(body, quote, True)

    # outside of quotes whitespace before \ collapses into single space
    trimmed = body.rstrip()
    if trimmed != body:
        trimmed += " "
    return ValueFragment(trimmed, quote, True)


def scan_value(text: str, quote: QuoteState = QuoteState.NORMAL) -> ValueFragment:
    """
    Scan value text starting from the given quote state.

    Comment starts at the first ; or # outside of quotes. A quote left open
    suppresses comments up to the end of line.
    """
    end = len(text)
    for k, c in enumerate(text):
        if not quote.is_open and c in COMMENT_CHARS:
            end = k
            break
        quote = quote.step(c)
    return _finish_fragment(text[:end], quote)


def scan_entry_line(text: str, lineno: int) -> Tuple[str, ValueFragment]:
    """Split line into unquoted key and first value fragment at first = outside of quotes."""
    quote = QuoteState.NORMAL
    for k, c in enumerate(text):
        if not quote.is_open:
            if c == "=":
                key = unquote(text[:k])
                if not key:
                    raise EmptyKey(lineno)
                return key, scan_value(text[k + 1:])
            if c in COMMENT_CHARS:
                break
        quote = quote.step(c)

    raise ExpectedKeyEquals(lineno)


# ----------------------------
# Continuation accumulator + result builder
# ----------------------------

@dataclass
class _PendingEntry:
    section: str
    key: str
    line: int
    parts: List[str] = field(default_factory=list)
    quote: QuoteState = QuoteState.NORMAL

    def add(self, fragment: ValueFragment) -> None:
        self.parts.append(fragment.text)
        self.quote = fragment.quote

    def finish(self) -> IniEntry:
        if self.quote.is_open:
            logger.debug(
                "line %d: unbalanced %s quote in value of %s.%s",
                self.line, self.quote.value, self.section, self.key,
            )
        return IniEntry(
            section=self.section,
            key=self.key,
            value=unquote("".join(self.parts)),
            line=self.line,
        )


def parse_ini_entries(text: str) -> List[IniEntry]:
    """
    Parse ini-file content into entries, in document order.

    Duplicate keys are all reported; see parse_ini() for last-write-wins mapping.
    Raises IniParseError subclasses on grammar errors, nothing is returned then.
    """
    out: List[IniEntry] = []
    if text is None:
        return out

    section: Optional[str] = None
    pending: Optional[_PendingEntry] = None

    for lineno, line in iter_lines(text):
        kind = classify_line(line, lineno, pending=pending is not None)

        if pending is not None and not isinstance(kind, ContentLine):
            logger.debug("line %d: flush %s.%s at boundary", lineno, pending.section, pending.key)
            out.append(pending.finish())
            pending = None

        if isinstance(kind, Blank):
            continue
        if isinstance(kind, SectionHeader):
            section = kind.name
            continue

        if pending is not None:
            fragment = scan_value(kind.text.lstrip(), pending.quote)
        else:
            if section is None:
                raise KeyBeforeSection(lineno)
            key, fragment = scan_entry_line(kind.text, lineno)
            pending = _PendingEntry(section=section, key=key, line=lineno)

        pending.add(fragment)
        if not fragment.continued:
            out.append(pending.finish())
            pending = None

    if pending is not None:
        logger.debug("end of document: flush %s.%s", pending.section, pending.key)
        out.append(pending.finish())

    return out


def parse_ini(text: str) -> Dict[str, str]:
    """
    INI -> mapping of section.key => value.

    Later duplicates of the same section.key overwrite earlier ones.
    """
    kv: Dict[str, str] = {}
    for e in parse_ini_entries(text):
        kv[e.composite_key] = e.value
    return kv
