"""
Conversion settings.

Values come from Config (YAML + environment) and are normalized on load:
blank strings fall back to defaults, range bounds are floored and clamped
to zero, unknown modes and strategies fall back to their defaults. An
invalid value is never kept.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from lunarsync.calendar.converters import CONVERTERS
from lunarsync.calendar.formatting import DEFAULT_DATE_FORMAT, DEFAULT_KEY_PATTERN
from lunarsync.calendar.leap import LeapStrategy, parse_leap_strategy
from lunarsync.core.config import Config

logger = logging.getLogger(__name__)


class OutputMode(Enum):
    """Where results are written."""

    SINGLE = "single"  # next occurrence under one key
    RANGE = "range"  # one key per year around the current year


DEFAULT_SOURCE_KEY = "lunar-birthday"
DEFAULT_OUTPUT_KEY = "birthday"
DEFAULT_LEAP_STRATEGY_KEY = "闰月处理模式"
DEFAULT_CALENDAR = "chinese"
DEFAULT_LOCALE = "zh"


def normalize_path(path: str) -> str:
    """Vault-relative path with forward slashes and no leading/trailing or repeated slashes."""
    cleaned = path.strip().replace("\\", "/")
    cleaned = re.sub(r"/+", "/", cleaned)
    return cleaned.strip("/")


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    return str(value).strip() or default


def _non_negative_int(value: Any, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning("Non-numeric range bound %r, using 0", value)
        return 0
    if not math.isfinite(number):
        logger.warning("Non-finite range bound %r, using 0", value)
        return 0
    return max(0, math.floor(number))


def _targets(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        logger.warning("Ignoring targets of type %s", type(value).__name__)
        return []
    normalized = [normalize_path(str(item)) for item in value if item is not None]
    return [item for item in normalized if item]


@dataclass
class ConversionSettings:
    """
    Options for one conversion run.

    Usage:
        settings = ConversionSettings.from_config(Config())
        settings.output_mode is OutputMode.SINGLE
    """

    source_key: str = DEFAULT_SOURCE_KEY
    output_mode: OutputMode = OutputMode.SINGLE
    output_key_single: str = DEFAULT_OUTPUT_KEY
    output_key_pattern: str = DEFAULT_KEY_PATTERN
    output_date_format: str = DEFAULT_DATE_FORMAT
    range_past: int = 1
    range_future: int = 1
    default_leap_strategy: LeapStrategy = LeapStrategy.FORWARD
    leap_strategy_key: str = DEFAULT_LEAP_STRATEGY_KEY
    targets: list[str] = field(default_factory=list)
    calendar: str = DEFAULT_CALENDAR
    locale: str = DEFAULT_LOCALE

    def __post_init__(self) -> None:
        self.range_past = _non_negative_int(self.range_past, 0)
        self.range_future = _non_negative_int(self.range_future, 0)

    @classmethod
    def from_config(cls, config: Config) -> ConversionSettings:
        """Build normalized settings from a Config."""
        mode_value = _text(config.get("output_mode"), OutputMode.SINGLE.value).lower()
        try:
            output_mode = OutputMode(mode_value)
        except ValueError:
            logger.warning("Unknown output mode %r, using single", mode_value)
            output_mode = OutputMode.SINGLE

        calendar = _text(config.get("calendar"), DEFAULT_CALENDAR).lower()
        if calendar not in CONVERTERS:
            logger.warning("Unknown calendar %r, using %s", calendar, DEFAULT_CALENDAR)
            calendar = DEFAULT_CALENDAR

        return cls(
            source_key=_text(config.get("source_key"), DEFAULT_SOURCE_KEY),
            output_mode=output_mode,
            output_key_single=_text(config.get("output_key_single"), DEFAULT_OUTPUT_KEY),
            output_key_pattern=_text(config.get("output_key_pattern"), DEFAULT_KEY_PATTERN),
            output_date_format=_text(config.get("output_date_format"), DEFAULT_DATE_FORMAT),
            range_past=_non_negative_int(config.get("range_past"), 1),
            range_future=_non_negative_int(config.get("range_future"), 1),
            default_leap_strategy=parse_leap_strategy(
                config.get("default_leap_strategy"), LeapStrategy.FORWARD
            ),
            leap_strategy_key=_text(config.get("leap_strategy_key"), DEFAULT_LEAP_STRATEGY_KEY),
            targets=_targets(config.get("targets")),
            calendar=calendar,
            locale=_text(config.get("locale"), DEFAULT_LOCALE),
        )
