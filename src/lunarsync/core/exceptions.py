"""
Custom exceptions for lunarsync.

Exception hierarchy:
    LunarSyncError (base)
    ├── ConfigurationError
    ├── ConversionError
    └── FrontmatterError
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class LunarSyncError(Exception):
    """Base exception for all lunarsync errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Additional error details (optional)
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ConfigurationError(LunarSyncError):
    """
    Raised when configuration is invalid or missing.

    Examples:
        - Explicitly given config file does not exist
        - Invalid YAML syntax in the config file
    """

    pass


class ConversionError(LunarSyncError):
    """
    Raised by a converter when a lunar date does not exist.

    Examples:
        - Day 30 requested in a 29-day lunar month
        - Leap month requested for a year without that leap month
        - Year outside the converter's supported range
    """

    def __init__(
        self,
        message: str,
        year: int | None = None,
        month: int | None = None,
        day: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize conversion error.

        Args:
            message: Error message
            year: Lunar year that failed
            month: Lunar month (negative for a leap month)
            day: Lunar day
            details: Additional error details
        """
        super().__init__(message, details)
        self.year = year
        self.month = month
        self.day = day

    def __str__(self) -> str:
        if self.year is not None:
            return f"{self.message} [{self.year}/{self.month}/{self.day}]"
        return self.message


class FrontmatterError(LunarSyncError):
    """
    Raised when a note's front matter block cannot be decoded.

    Examples:
        - Invalid YAML between the --- delimiters
        - YAML that is a list or scalar instead of a mapping
    """

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message
