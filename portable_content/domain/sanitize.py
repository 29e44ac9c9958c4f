"""
Text cleaning primitives shared by the content sanitizer and block strategies.

Each helper is a pure str -> str function and is idempotent on its own output.
"""

from __future__ import annotations

import re

# ASCII control characters except tab, line feed and carriage return
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
# A run of bare CRs counts as one break; CRLF is a single break
_LINE_BREAKS = re.compile(r"\r\n|\r+")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_WHITESPACE_RUN = re.compile(r"\s+")
_NON_TOKEN_CHARS = re.compile(r"[^A-Za-z0-9_]")

SCALAR_TYPES = (str, int, float, bool)


def is_scalar(value: object) -> bool:
    """True for values that have an unambiguous string form."""
    return isinstance(value, SCALAR_TYPES)


def strip_control_chars(text: str) -> str:
    """Remove ASCII control characters, keeping tab/newline/CR and all non-ASCII."""
    return _CONTROL_CHARS.sub("", text)


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and CR to LF."""
    return _LINE_BREAKS.sub("\n", text)


def collapse_newlines(text: str) -> str:
    """Limit consecutive newlines to two (one paragraph break)."""
    return _EXCESS_NEWLINES.sub("\n\n", text)


def collapse_whitespace(text: str) -> str:
    """Replace every whitespace run, newlines included, with a single space."""
    return _WHITESPACE_RUN.sub(" ", text)


def strip_non_token_chars(text: str) -> str:
    """Keep only ASCII letters, digits and underscores."""
    return _NON_TOKEN_CHARS.sub("", text)


def clean_token(value: object) -> str:
    """Sanitize an identifier-like field (content type)."""
    if not is_scalar(value):
        return ""
    return strip_non_token_chars(str(value).strip())


def clean_single_line(value: object) -> str | None:
    """
    Sanitize a one-line human-readable field (title).

    Returns None when nothing is left, so callers can treat it as absent.
    """
    if not is_scalar(value):
        return None
    text = collapse_whitespace(strip_control_chars(str(value))).strip()
    return text or None


def clean_paragraphs(value: object) -> str | None:
    """
    Sanitize a multi-paragraph field (summary).

    Line endings become LF and blank-line runs shrink to one paragraph break.
    Returns None when nothing is left.
    """
    if not is_scalar(value):
        return None
    text = strip_control_chars(str(value))
    text = collapse_newlines(normalize_line_endings(text)).strip()
    return text or None


def normalize_kind(value: object) -> str:
    """Lowercase, trimmed form of a block kind token."""
    if not isinstance(value, str):
        return ""
    return value.strip().lower()
