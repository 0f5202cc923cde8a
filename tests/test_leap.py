"""
Tests for leap strategy parsing and leap month resolution.
"""

from __future__ import annotations

import pytest

from lunarsync.calendar.leap import (
    LeapMonthResolver,
    LeapStrategy,
    ResolvedLunarMonth,
    parse_leap_strategy,
)
from lunarsync.calendar.notation import LunarDate

from conftest import FakeConverter

ALL_STRATEGIES = list(LeapStrategy)


class TestParseLeapStrategy:
    """Override lookup is total"""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("strict", LeapStrategy.STRICT),
            ("forward", LeapStrategy.FORWARD),
            ("backward", LeapStrategy.BACKWARD),
            ("严格闰月", LeapStrategy.STRICT),
            ("向前折算", LeapStrategy.FORWARD),
            ("向后折算", LeapStrategy.BACKWARD),
            ("  向后折算 ", LeapStrategy.BACKWARD),
        ],
    )
    def test_recognized(self, value: str, expected: LeapStrategy):
        assert parse_leap_strategy(value, LeapStrategy.FORWARD) is expected

    @pytest.mark.parametrize("value", [None, "", "Strict", "sideways", 1, ["strict"]])
    def test_unrecognized_falls_back(self, value):
        assert parse_leap_strategy(value, LeapStrategy.BACKWARD) is LeapStrategy.BACKWARD

    def test_labels(self):
        assert LeapStrategy.STRICT.label == "严格闰月"
        assert LeapStrategy.FORWARD.label == "向前折算"
        assert LeapStrategy.BACKWARD.label == "向后折算"


class TestResolvedLunarMonth:
    """Signed month for the converter"""

    def test_signed_month(self):
        assert ResolvedLunarMonth(4, True).signed_month == -4
        assert ResolvedLunarMonth(4, False).signed_month == 4


class TestLeapMonthResolver:
    """Resolution per strategy"""

    @pytest.fixture
    def resolver(self):
        return LeapMonthResolver(FakeConverter(leap_months={2023: 2, 2030: 12}, broken_years={1800}))

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    @pytest.mark.parametrize("year", [2023, 2024, 1800])
    @pytest.mark.parametrize("month", [1, 2, 12])
    def test_non_leap_unchanged(self, resolver, strategy, year, month):
        """Non-leap dates ignore the strategy"""
        result = resolver.resolve(year, LunarDate(2000, month, 5), strategy)
        assert result == ResolvedLunarMonth(month, False)

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES)
    def test_leap_year_matches(self, resolver, strategy):
        """A year with the same leap month keeps the leap month"""
        result = resolver.resolve(2023, LunarDate(2023, 2, 10, True), strategy)
        assert result == ResolvedLunarMonth(2, True)

    def test_strict_without_leap(self, resolver):
        assert resolver.resolve(2024, LunarDate(2023, 2, 10, True), LeapStrategy.STRICT) is None

    def test_strict_other_leap_month(self, resolver):
        """Year has a leap month, but not this one"""
        assert resolver.resolve(2023, LunarDate(2020, 4, 1, True), LeapStrategy.STRICT) is None

    def test_forward_without_leap(self, resolver):
        result = resolver.resolve(2024, LunarDate(2023, 2, 10, True), LeapStrategy.FORWARD)
        assert result == ResolvedLunarMonth(2, False)

    def test_backward_without_leap(self, resolver):
        result = resolver.resolve(2024, LunarDate(2023, 2, 10, True), LeapStrategy.BACKWARD)
        assert result == ResolvedLunarMonth(3, False)

    def test_backward_clamps_month_12(self, resolver):
        """Month 12 stays 12, no rollover into the next year"""
        result = resolver.resolve(2031, LunarDate(2030, 12, 1, True), LeapStrategy.BACKWARD)
        assert result == ResolvedLunarMonth(12, False)

    def test_backward_month_12_with_leap(self, resolver):
        result = resolver.resolve(2030, LunarDate(2030, 12, 1, True), LeapStrategy.BACKWARD)
        assert result == ResolvedLunarMonth(12, True)

    def test_lookup_failure_counts_as_no_leap(self, resolver):
        lunar = LunarDate(2023, 2, 10, True)
        assert resolver.year_has_leap_month(1800, 2) is False
        assert resolver.resolve(1800, lunar, LeapStrategy.STRICT) is None
        assert resolver.resolve(1800, lunar, LeapStrategy.FORWARD) == ResolvedLunarMonth(2, False)
