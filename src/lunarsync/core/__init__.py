"""Core modules for lunarsync."""

from lunarsync.core.config import Config
from lunarsync.core.exceptions import (
    ConfigurationError,
    ConversionError,
    FrontmatterError,
    LunarSyncError,
)
from lunarsync.core.settings import ConversionSettings, OutputMode

__all__ = [
    "Config",
    "ConversionSettings",
    "OutputMode",
    "LunarSyncError",
    "ConfigurationError",
    "ConversionError",
    "FrontmatterError",
]
