"""Lunar calendar notation, leap handling, conversion and formatting."""

from lunarsync.calendar.converters import (
    ChineseLunarConverter,
    KoreanLunarConverter,
    LunarSolarConverter,
    get_converter,
)
from lunarsync.calendar.formatting import DateFormatter, PendulumFormatter, escape_literal
from lunarsync.calendar.leap import (
    LeapMonthResolver,
    LeapStrategy,
    ResolvedLunarMonth,
    parse_leap_strategy,
)
from lunarsync.calendar.notation import LunarDate, parse_lunar
from lunarsync.calendar.solar import MAX_SEARCH_YEARS, SolarDateResolver

__all__ = [
    "ChineseLunarConverter",
    "KoreanLunarConverter",
    "LunarSolarConverter",
    "get_converter",
    "DateFormatter",
    "PendulumFormatter",
    "escape_literal",
    "LeapMonthResolver",
    "LeapStrategy",
    "ResolvedLunarMonth",
    "parse_leap_strategy",
    "LunarDate",
    "parse_lunar",
    "MAX_SEARCH_YEARS",
    "SolarDateResolver",
]
