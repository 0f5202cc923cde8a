"""
Lunar/solar conversion backends.

Two calendars are supported:
    chinese - lunar_python (default, matches the 农历 notation)
    korean  - korean-lunar-calendar (Korean Astronomy and Space Science
              Institute tables, years 1000-2050)

Both take the month signed: a negative month means the leap month of that
number. Invalid dates raise ConversionError.

Usage:
    converter = get_converter("chinese")
    converter.leap_month(2023)        # 2
    converter.to_solar(2023, -2, 10)  # datetime.date(2023, 3, 31)
"""

from __future__ import annotations

from datetime import date
from typing import Protocol

from korean_lunar_calendar import KoreanLunarCalendar
from lunar_python import Lunar, LunarMonth, LunarYear

from lunarsync.core.exceptions import ConfigurationError, ConversionError


class LunarSolarConverter(Protocol):
    """Deterministic lunar calendar primitive."""

    def leap_month(self, year: int) -> int:
        """Return the leap month number of a lunar year, 0 when there is none."""
        ...

    def to_solar(self, year: int, month: int, day: int) -> date:
        """Convert a lunar date (negative month = leap month) to a solar date."""
        ...


class ChineseLunarConverter:
    """Chinese lunisolar calendar backed by lunar_python."""

    name = "chinese"

    def leap_month(self, year: int) -> int:
        return LunarYear.fromYear(year).getLeapMonth()

    def to_solar(self, year: int, month: int, day: int) -> date:
        lunar_month = LunarMonth.fromYm(year, month)
        if lunar_month is None:
            raise ConversionError("Lunar month does not exist", year, month, day)
        if not 1 <= day <= lunar_month.getDayCount():
            raise ConversionError(
                f"Lunar month has only {lunar_month.getDayCount()} days",
                year,
                month,
                day,
            )

        solar = Lunar.fromYmd(year, month, day).getSolar()
        return date(solar.getYear(), solar.getMonth(), solar.getDay())

    def __repr__(self) -> str:
        return "ChineseLunarConverter()"


class KoreanLunarConverter:
    """Korean lunisolar calendar backed by korean-lunar-calendar."""

    name = "korean"

    def leap_month(self, year: int) -> int:
        for month in range(1, 13):
            calendar = KoreanLunarCalendar()
            # isIntercalation stays set only when the year's leap month is this one
            if calendar.setLunarDate(year, month, 1, True) and calendar.isIntercalation:
                return month
        return 0

    def to_solar(self, year: int, month: int, day: int) -> date:
        is_leap = month < 0
        calendar = KoreanLunarCalendar()

        if not calendar.setLunarDate(year, abs(month), day, is_leap):
            raise ConversionError("Lunar date out of range", year, month, day)
        if is_leap and not calendar.isIntercalation:
            raise ConversionError("Year has no such leap month", year, month, day)

        return date(
            calendar.solarYear,
            calendar.solarMonth,
            calendar.solarDay,
        )

    def __repr__(self) -> str:
        return "KoreanLunarConverter()"


CONVERTERS: dict[str, type[ChineseLunarConverter] | type[KoreanLunarConverter]] = {
    ChineseLunarConverter.name: ChineseLunarConverter,
    KoreanLunarConverter.name: KoreanLunarConverter,
}


def get_converter(name: str) -> LunarSolarConverter:
    """
    Create the converter for a calendar name.

    Raises:
        ConfigurationError: If the calendar name is unknown
    """
    try:
        return CONVERTERS[name]()
    except KeyError as e:
        raise ConfigurationError(
            f"Unknown calendar: {name}",
            details={"supported": sorted(CONVERTERS)},
        ) from e
