"""
Date formatting and output key templating.

Patterns use moment-style tokens (YYYY, MM, DD, ...) as understood by
pendulum. Text inside [] is literal. ``escape_literal`` brackets every
run of a user pattern that is not a recognized token, so a key pattern
such as ``birthday (YYYY)`` cannot have its letters read as tokens.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Protocol

import pendulum

logger = logging.getLogger(__name__)

DEFAULT_KEY_PATTERN = "[birthday]-YYYY"
DEFAULT_DATE_FORMAT = "YYYY-MM-DD"
FORMAT_ERROR_TEXT = "格式错误"

# Multi-character tokens precede their single-character prefixes
_TOKEN_RE = re.compile(
    r"\[[^\[\]]*\]"
    r"|YYYY|YY"
    r"|Qo|Q"
    r"|MMMM|MMM|Mo|MM|M"
    r"|DDDD|DDD|Do|DD|D"
    r"|dddd|ddd|dd|d|E"
    r"|Wo|WW|W"
    r"|HH|H|hh|h|mm|m|ss|s"
    r"|SSS|SS|S"
    r"|A|a|X|x|ZZ|Z"
)


class DateFormatter(Protocol):
    """Formats a calendar date with a token pattern."""

    def format(self, pattern: str, day: date) -> str:
        ...


class PendulumFormatter:
    """DateFormatter backed by pendulum's token formatter."""

    def __init__(self, locale: str = "zh"):
        self.locale = locale

    def format(self, pattern: str, day: date) -> str:
        moment = pendulum.local(day.year, day.month, day.day)
        return moment.format(pattern, locale=self.locale)

    def __repr__(self) -> str:
        return f"PendulumFormatter(locale={self.locale!r})"


def _split_pattern(pattern: str) -> list[tuple[bool, str]]:
    """Split into (is_literal, text) pieces, merging adjacent literals."""
    pieces: list[tuple[bool, str]] = []

    def add_literal(text: str) -> None:
        if not text:
            return
        if pieces and pieces[-1][0]:
            pieces[-1] = (True, pieces[-1][1] + text)
        else:
            pieces.append((True, text))

    last = 0
    for match in _TOKEN_RE.finditer(pattern):
        add_literal(pattern[last:match.start()])
        token = match.group(0)
        if token.startswith("["):
            add_literal(token[1:-1])
        else:
            pieces.append((False, token))
        last = match.end()
    add_literal(pattern[last:])

    return pieces


def _escape_chars(text: str) -> str:
    return "".join(f"\\{char}" for char in text)


def _wrap_literal(text: str) -> str:
    parts = []
    for chunk in re.split(r"(\[)", text):
        if chunk == "[":
            parts.append("\\[")
        elif chunk:
            parts.append(f"[{chunk}]")
    return "".join(parts)


def escape_literal(pattern: str) -> str:
    """
    Turn a user pattern into a formatter pattern with all literal text escaped.

    Recognized tokens pass through. Bracketed runs and any other text become
    bracket groups. A literal ``]`` cannot sit inside or after a bracket group
    without being read as its end, so when one is present every literal
    character is backslash-escaped instead.

    Args:
        pattern: User pattern, e.g. "[birthday]-YYYY" or "生日 YYYY"

    Returns:
        Pattern safe to pass to DateFormatter.format
    """
    pieces = _split_pattern(pattern)
    per_char = any(is_literal and "]" in text for is_literal, text in pieces)

    escaped = []
    for is_literal, text in pieces:
        if not is_literal:
            escaped.append(text)
        elif per_char:
            escaped.append(_escape_chars(text))
        else:
            escaped.append(_wrap_literal(text))
    return "".join(escaped)


def format_sample_key(formatter: DateFormatter, pattern: str | None, today: date | None = None) -> str:
    """Preview of the range-mode key for ``today``; returns FORMAT_ERROR_TEXT on failure."""
    safe_pattern = (pattern or "").strip() or DEFAULT_KEY_PATTERN
    try:
        return formatter.format(escape_literal(safe_pattern), today or pendulum.today().date())
    except Exception as e:
        logger.warning("Key pattern preview failed for %r: %s", safe_pattern, e)
        return FORMAT_ERROR_TEXT


def format_sample_date(formatter: DateFormatter, pattern: str | None, today: date | None = None) -> str:
    """Preview of the output date format for ``today``; returns FORMAT_ERROR_TEXT on failure."""
    fmt = (pattern or "").strip() or DEFAULT_DATE_FORMAT
    try:
        return formatter.format(fmt, today or pendulum.today().date())
    except Exception as e:
        logger.warning("Date format preview failed for %r: %s", fmt, e)
        return FORMAT_ERROR_TEXT
