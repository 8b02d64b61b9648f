"""Name normalization: casing and separator rules shared by output and lookups."""

from __future__ import annotations

import re

CASINGS = ("upper", "lower", "title", "none")

_WHITESPACE_RE = re.compile(r"\s+")
# First word character after a word boundary: "quick-fox" -> "Quick-Fox"
_WORD_START_RE = re.compile(r"\b\w")
_LINE_SPLIT_RE = re.compile(r"\r?\n")


def normalize_name(raw: str, separator: str, casing: str | None) -> str:
    """Canonical display/comparison form of a name.

    Trims, applies casing, then replaces every whitespace run with the
    separator (inserted literally, so "" and "\\" are both fine).
    """
    s = raw.strip()

    if casing == "upper":
        s = s.upper()
    elif casing == "lower":
        s = s.lower()
    elif casing == "title":
        s = _title_case(s, separator)

    return _WHITESPACE_RE.sub(lambda _: separator, s)


def _title_case(text: str, separator: str) -> str:
    """Lowercase, then capitalize each word.

    Words start after a word boundary or after the separator, so
    "Quick_Brown" stays put when "_" is the separator.
    """
    def _capitalize(part: str) -> str:
        return _WORD_START_RE.sub(lambda m: m.group(0).upper(), part)

    text = text.lower()
    if separator and not separator.isspace():
        return separator.join(_capitalize(part) for part in text.split(separator))
    return _capitalize(text)


def build_blacklist(text: str | None, separator: str, casing: str | None) -> frozenset[str]:
    """Parse multi-line user text into a set of normalized names.

    One name per line; blank lines are skipped. Entries are normalized with
    the request's own separator/casing so they compare against its output.
    """
    if not text:
        return frozenset()

    names = set()
    for line in _LINE_SPLIT_RE.split(text):
        line = line.strip()
        if line:
            names.add(normalize_name(line, separator, casing))
    return frozenset(names)
