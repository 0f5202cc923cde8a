"""Command line interface for lunarsync."""

from lunarsync.cli.main import cli

__all__ = ["cli"]
