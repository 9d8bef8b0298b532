"""Grammar for label and annotation strings.

Accepted forms:

    env=prod                      single label
    env: prod\\ntier: web          block of ``key: value`` lines
    example.com/owner=a=b         annotation, split on the first ``=`` only

Keys follow the usual label-key convention: an optional DNS-style prefix
ending in ``/`` followed by a name made of alphanumerics, ``-``, ``_`` and
``.`` that starts and ends with an alphanumeric character.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List, Optional

_SEGMENT = r"[A-Za-z0-9](?:[-A-Za-z0-9_.]*[A-Za-z0-9])?"
_PREFIX = r"[A-Za-z0-9](?:[-A-Za-z0-9.]*[A-Za-z0-9])?"
KEY_PATTERN = re.compile(rf"^(?:{_PREFIX}/)?{_SEGMENT}$")


@dataclass(frozen=True)
class KeyValue:
    """A single label or annotation."""
    key: str
    value: str

    def to_dict(self) -> dict:
        return {"key": self.key, "value": self.value}


class ParseError(ValueError):
    """Raised when a label or annotation string does not match the grammar.

    Attributes:
        input: The offending fragment (whole token or single block line)
        reason: Human readable description of the problem
        line: 1-based line number inside a block, None for single pairs
    """

    def __init__(self, input: str, reason: str, line: Optional[int] = None):
        self.input = input
        self.reason = reason
        self.line = line
        where = f"line {line}: " if line is not None else ""
        super().__init__(f"{where}{reason} in {input!r}")


def validate_key(key: str, fragment: str, line: Optional[int] = None) -> str:
    """Check a label/annotation key against the key pattern.

    Raises:
        ParseError: If the key is empty or contains invalid characters
    """
    if not key:
        raise ParseError(fragment, "empty key", line)
    if not KEY_PATTERN.match(key):
        raise ParseError(
            fragment,
            f"invalid key {key!r} (expected [prefix/]name of alphanumerics, '-', '_' or '.')",
            line,
        )
    return key


def _validate_value(value: str, fragment: str, line: Optional[int] = None) -> str:
    if value and not value.isprintable():
        raise ParseError(fragment, "value contains non-printable characters", line)
    return value


def parse_label(text: str) -> KeyValue:
    """Parse a single ``key=value`` label.

    The value may be empty but must not contain another ``=``.
    """
    if not text:
        raise ParseError(text, "empty input")
    key, sep, value = text.partition("=")
    if not sep:
        raise ParseError(text, "missing '=' separator")
    validate_key(key, text)
    if "=" in value:
        raise ParseError(text, "label value must not contain '='")
    return KeyValue(key, _validate_value(value, text))


def parse_label_block(text: str) -> List[KeyValue]:
    """Parse a block of ``key: value`` lines, one label per line.

    Blank lines are skipped; surrounding whitespace of keys and values is
    removed. Values are the remainder of the line after the first ``:``.
    """
    pairs: List[KeyValue] = []
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue
        key, sep, value = line.partition(":")
        if not sep:
            raise ParseError(raw_line, "missing ':' separator", lineno)
        key = key.strip()
        value = value.strip()
        validate_key(key, raw_line, lineno)
        pairs.append(KeyValue(key, _validate_value(value, raw_line, lineno)))
    if not pairs:
        raise ParseError(text, "no labels found")
    return pairs


def parse_labels(text: str) -> List[KeyValue]:
    """Parse either a single ``key=value`` label or a ``key: value`` block.

    Multi-line input is always a block. For one line, whichever separator
    appears first wins, so ``a: b=c`` is a block line and ``a=b:c`` a pair.
    """
    if not text or not text.strip():
        raise ParseError(text, "empty input")
    if "\n" in text.strip("\r\n"):
        return parse_label_block(text)
    line = text.strip("\r\n")
    eq = line.find("=")
    colon = line.find(":")
    if eq == -1 and colon == -1:
        raise ParseError(line, "missing '=' or ':' separator")
    if eq != -1 and (colon == -1 or eq < colon):
        return [parse_label(line)]
    return parse_label_block(line)


def parse_annotation(text: str) -> KeyValue:
    """Parse a single ``key=value`` annotation.

    Only the first ``=`` separates key from value; the value may contain
    further ``=`` characters or be empty.
    """
    if not text:
        raise ParseError(text, "empty input")
    key, sep, value = text.partition("=")
    if not sep:
        raise ParseError(text, "missing '=' separator")
    validate_key(key, text)
    return KeyValue(key, _validate_value(value, text))


def render_label(pair: KeyValue) -> str:
    return f"{pair.key}={pair.value}"
