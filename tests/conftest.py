"""
Shared fixtures for lunarsync tests.

FakeConverter is a deterministic calendar: every lunar month has 30 days
unless listed as short, lunar month M day D of year Y falls on day
(M-1)*30 + (D-1) of solar year Y, and a leap month lands 15 days after
its ordinary month.
"""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

import pytest

from lunarsync.calendar.formatting import PendulumFormatter
from lunarsync.calendar.solar import SolarDateResolver
from lunarsync.core.exceptions import ConversionError
from lunarsync.core.settings import ConversionSettings


def fake_solar(year: int, month: int, day: int, is_leap: bool = False) -> date:
    """Solar date FakeConverter returns for a lunar date."""
    offset = (month - 1) * 30 + (day - 1) + (15 if is_leap else 0)
    return date(year, 1, 1) + timedelta(days=offset)


class FakeConverter:
    """Table-driven LunarSolarConverter double."""

    def __init__(
        self,
        leap_months: dict[int, int] | None = None,
        short_months: set[tuple[int, int]] | None = None,
        broken_years: set[int] | None = None,
    ):
        self.leap_months = leap_months or {}
        self.short_months = short_months or set()
        self.broken_years = broken_years or set()
        self.solar_calls: list[tuple[int, int, int]] = []

    def leap_month(self, year: int) -> int:
        if year in self.broken_years:
            raise ConversionError("Unsupported year", year)
        return self.leap_months.get(year, 0)

    def to_solar(self, year: int, month: int, day: int) -> date:
        self.solar_calls.append((year, month, day))
        if year in self.broken_years:
            raise ConversionError("Unsupported year", year, month, day)
        if month < 0 and self.leap_months.get(year) != -month:
            raise ConversionError("No such leap month", year, month, day)
        days = 29 if (year, month) in self.short_months else 30
        if not 1 <= day <= days:
            raise ConversionError("Day out of range", year, month, day)
        return fake_solar(year, abs(month), day, month < 0)


@pytest.fixture
def converter():
    """Converter with a leap 2nd month in 2023 and 2026, leap 12th month in 2030"""
    return FakeConverter(leap_months={2023: 2, 2026: 2, 2030: 12})


@pytest.fixture
def formatter():
    return PendulumFormatter("en")


@pytest.fixture
def resolver(converter, formatter):
    return SolarDateResolver(converter, formatter)


@pytest.fixture
def settings():
    return ConversionSettings(locale="en")


@pytest.fixture
def today():
    return date(2025, 6, 1)


@pytest.fixture
def write_note(tmp_path: Path):
    """Create a note file below tmp_path"""

    def _write(relative: str, text: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
