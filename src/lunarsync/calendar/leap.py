"""
Leap month handling.

A date written in a leap month (闰月) only exists in years whose lunar
calendar inserts that same leap month. The strategy decides what happens
in every other year:

    strict   - the date does not occur that year
    forward  - use the ordinary month of the same number
    backward - use the following ordinary month (month 12 stays 12)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from lunarsync.calendar.converters import LunarSolarConverter
from lunarsync.calendar.notation import LunarDate

logger = logging.getLogger(__name__)


class LeapStrategy(Enum):
    """Policy for leap-month dates in years without that leap month."""

    STRICT = "strict"
    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def label(self) -> str:
        return LEAP_STRATEGY_LABELS[self]


LEAP_STRATEGY_LABELS = {
    LeapStrategy.STRICT: "严格闰月",
    LeapStrategy.FORWARD: "向前折算",
    LeapStrategy.BACKWARD: "向后折算",
}

LEAP_STRATEGY_LOOKUP: dict[str, LeapStrategy] = {
    **{label: strategy for strategy, label in LEAP_STRATEGY_LABELS.items()},
    **{strategy.value: strategy for strategy in LeapStrategy},
}


def parse_leap_strategy(value: Any, fallback: LeapStrategy) -> LeapStrategy:
    """Map an override value to a strategy; anything unrecognized yields ``fallback``."""
    if isinstance(value, str):
        mapped = LEAP_STRATEGY_LOOKUP.get(value.strip())
        if mapped:
            return mapped
    return fallback


@dataclass(frozen=True)
class ResolvedLunarMonth:
    """Month to feed the converter for one target year."""

    month: int
    is_leap: bool

    @property
    def signed_month(self) -> int:
        return -self.month if self.is_leap else self.month


class LeapMonthResolver:
    """
    Decide which lunar month a date falls in for a given year.

    Usage:
        resolver = LeapMonthResolver(ChineseLunarConverter())
        resolver.resolve(2024, parse_lunar("2023-闰02-10"), LeapStrategy.BACKWARD)
        # ResolvedLunarMonth(month=3, is_leap=False)
    """

    def __init__(self, converter: LunarSolarConverter):
        self.converter = converter

    def year_has_leap_month(self, year: int, month: int) -> bool:
        """True when ``year`` inserts a leap month numbered ``month``. Lookup errors count as False."""
        try:
            return self.converter.leap_month(year) == month
        except Exception as e:
            logger.warning("Leap month lookup failed for %d: %s", year, e)
            return False

    def resolve(
        self,
        year: int,
        lunar: LunarDate,
        strategy: LeapStrategy,
    ) -> ResolvedLunarMonth | None:
        """
        Resolve the effective month of ``lunar`` in ``year``.

        Returns:
            ResolvedLunarMonth, or None when the strict strategy finds no
            matching leap month
        """
        if not lunar.is_leap:
            return ResolvedLunarMonth(lunar.month, False)

        if self.year_has_leap_month(year, lunar.month):
            return ResolvedLunarMonth(lunar.month, True)

        if strategy is LeapStrategy.STRICT:
            return None
        if strategy is LeapStrategy.FORWARD:
            return ResolvedLunarMonth(lunar.month, False)
        return ResolvedLunarMonth(min(lunar.month + 1, 12), False)
