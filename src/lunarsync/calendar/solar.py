"""
Solar date resolution for lunar notation.

Turns a LunarDate into Gregorian dates: for one year, for the next
occurrence on or after today, or for every year of a window around a
center year.
"""

from __future__ import annotations

import logging
from datetime import date

import pendulum

from lunarsync.calendar.converters import LunarSolarConverter
from lunarsync.calendar.formatting import DateFormatter, escape_literal
from lunarsync.calendar.leap import LeapMonthResolver, LeapStrategy
from lunarsync.calendar.notation import LunarDate

logger = logging.getLogger(__name__)

# Leap months recur on a ~19 year cycle; 80 years covers more than four
MAX_SEARCH_YEARS = 80


class SolarDateResolver:
    """
    Lunar to solar date resolution on top of a converter and a formatter.

    Usage:
        resolver = SolarDateResolver(ChineseLunarConverter(), PendulumFormatter())
        lunar = parse_lunar("农历2023-闰02-10")
        resolver.find_next_occurrence(lunar, LeapStrategy.FORWARD)
        resolver.build_range(lunar, LeapStrategy.FORWARD, 2025, 1, 1, "[birthday]-YYYY", "YYYY-MM-DD")
    """

    def __init__(self, converter: LunarSolarConverter, formatter: DateFormatter):
        """
        Initialize resolver.

        Args:
            converter: Lunar calendar primitive
            formatter: Date formatter used for range keys and values
        """
        self.converter = converter
        self.formatter = formatter
        self.leap_resolver = LeapMonthResolver(converter)

    def to_solar(self, year: int, lunar: LunarDate, strategy: LeapStrategy) -> date | None:
        """
        Convert ``lunar`` as it falls in lunar year ``year``.

        Returns:
            The solar date, or None when the date does not occur that year
        """
        resolved = self.leap_resolver.resolve(year, lunar, strategy)
        if resolved is None:
            return None

        try:
            solar = self.converter.to_solar(year, resolved.signed_month, lunar.day)
        except Exception as e:
            logger.warning(
                "Lunar conversion failed (year=%d, lunar=%s, strategy=%s): %s",
                year,
                lunar,
                strategy.value,
                e,
            )
            return None

        return date(solar.year, solar.month, solar.day)

    def find_next_occurrence(
        self,
        lunar: LunarDate,
        strategy: LeapStrategy,
        today: date | None = None,
    ) -> date | None:
        """
        Find the first occurrence on or after ``today``.

        Starts with the current year and scans forward up to MAX_SEARCH_YEARS.

        Args:
            lunar: Parsed lunar date
            strategy: Leap month strategy
            today: Reference day (defaults to the local current date)

        Returns:
            Earliest solar date >= today, or None if none in the window
        """
        today = today or pendulum.today().date()

        for offset in range(MAX_SEARCH_YEARS):
            solar = self.to_solar(today.year + offset, lunar, strategy)
            if solar is not None and solar >= today:
                return solar

        logger.debug("No occurrence of %s within %d years of %s", lunar, MAX_SEARCH_YEARS, today)
        return None

    def build_range(
        self,
        lunar: LunarDate,
        strategy: LeapStrategy,
        center_year: int,
        past: int,
        future: int,
        key_pattern: str,
        date_format: str,
    ) -> dict[str, str]:
        """
        Build keyed outputs for every year in ``[center - past, center + future]``.

        Years without a valid date are left out. Keys come from
        ``key_pattern`` with literal text escaped; when two years produce
        the same key the later year wins.

        Returns:
            Mapping of output key to formatted date
        """
        fmt_key = escape_literal(key_pattern)
        outputs: dict[str, str] = {}

        for year in range(center_year - past, center_year + future + 1):
            solar = self.to_solar(year, lunar, strategy)
            if solar is None:
                continue
            key = self.formatter.format(fmt_key, solar)
            outputs[key] = self.formatter.format(date_format, solar)

        return outputs
