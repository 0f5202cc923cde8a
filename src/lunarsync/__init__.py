"""
lunarsync - lunar to solar date sync for Markdown notes.

Reads lunar-calendar dates from note front matter, resolves leap months
under a configurable strategy and writes the Gregorian dates back into
the same front matter block.
"""

__version__ = "1.0.0"

from lunarsync.core.config import Config
from lunarsync.core.exceptions import (
    ConfigurationError,
    ConversionError,
    FrontmatterError,
    LunarSyncError,
)
from lunarsync.core.settings import ConversionSettings, OutputMode
from lunarsync.cli.main import cli

__all__ = [
    "__version__",
    "Config",
    "ConversionSettings",
    "OutputMode",
    "LunarSyncError",
    "ConfigurationError",
    "ConversionError",
    "FrontmatterError",
    "cli",
]
