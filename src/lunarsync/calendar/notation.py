"""
Lunar date notation parser.

Accepted forms (whitespace around the value is ignored):
    2023-02-10
    2023-闰02-10
    农历2023-闰02-10
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

LUNAR_TAG = "农历"
LEAP_MARKER = "闰"

LUNAR_INPUT_RE = re.compile(
    rf"^(?:{LUNAR_TAG})?\s*([0-9]{{4}})-({LEAP_MARKER})?([0-9]{{2}})-([0-9]{{2}})\s*$"
)


@dataclass(frozen=True)
class LunarDate:
    """A date as written in lunar notation. Month and day are not range-checked."""

    year: int
    month: int
    day: int
    is_leap: bool = False

    def __str__(self) -> str:
        marker = LEAP_MARKER if self.is_leap else ""
        return f"{LUNAR_TAG}{self.year:04d}-{marker}{self.month:02d}-{self.day:02d}"


def parse_lunar(raw: Any) -> LunarDate | None:
    """
    Parse lunar notation into a LunarDate.

    Args:
        raw: Value read from the source key

    Returns:
        LunarDate, or None when the value does not match the notation
    """
    if not isinstance(raw, str):
        return None

    match = LUNAR_INPUT_RE.match(raw)
    if not match:
        return None

    year, leap, month, day = match.groups()
    return LunarDate(
        year=int(year),
        month=int(month),
        day=int(day),
        is_leap=leap is not None,
    )
