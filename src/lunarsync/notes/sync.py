"""
Batch runner for a vault.

Two entry points mirror the two commands: one note ("the active note")
and every note within the configured targets. Notes are processed
sequentially; each run ends with a tally of outcomes.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from lunarsync.calendar.converters import LunarSolarConverter, get_converter
from lunarsync.calendar.formatting import DateFormatter, PendulumFormatter
from lunarsync.calendar.solar import SolarDateResolver
from lunarsync.core.settings import ConversionSettings
from lunarsync.notes.planner import (
    DocumentOutcome,
    DocumentProcessor,
    DocumentUpdatePlanner,
    OutcomeStatus,
)
from lunarsync.notes.vault import Vault

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    """Outcomes of one run"""
    outcomes: list[DocumentOutcome] = field(default_factory=list)

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def updated(self) -> int:
        return self.count(OutcomeStatus.UPDATED)

    @property
    def unchanged(self) -> int:
        return self.count(OutcomeStatus.UNCHANGED)

    @property
    def skipped(self) -> int:
        return self.count(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self.count(OutcomeStatus.FAILED)

    def skip_reasons(self) -> dict[str, int]:
        return dict(Counter(o.reason for o in self.outcomes if o.status is OutcomeStatus.SKIPPED))

    def summary(self) -> str:
        return (
            f"农历→公历：已更新 {self.updated}，未变更 {self.unchanged}，"
            f"跳过 {self.skipped}，失败 {self.failed}。"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "updated": self.updated,
            "unchanged": self.unchanged,
            "skipped": self.skipped,
            "failed": self.failed,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


class LunarSync:
    """
    Lunar to solar synchronization over a vault.

    Example:
        sync = LunarSync(settings, Vault("notes"))
        report = sync.run_on_all()
        print(report.summary())
    """

    def __init__(
        self,
        settings: ConversionSettings,
        vault: Vault,
        converter: LunarSolarConverter | None = None,
        formatter: DateFormatter | None = None,
        dry_run: bool = False,
    ):
        """
        Initialize the runner.

        Args:
            settings: Normalized conversion settings
            vault: Vault holding the notes
            converter: Lunar calendar backend (defaults to settings.calendar)
            formatter: Date formatter (defaults to pendulum with settings.locale)
            dry_run: Plan and diff without writing
        """
        self.settings = settings
        self.vault = vault
        self.converter = converter or get_converter(settings.calendar)
        self.formatter = formatter or PendulumFormatter(settings.locale)

        resolver = SolarDateResolver(self.converter, self.formatter)
        self.processor = DocumentProcessor(DocumentUpdatePlanner(settings, resolver), dry_run=dry_run)

    def run_on_file(self, path: Path, today: date | None = None) -> SyncReport:
        """Process a single note."""
        outcome = self.processor.process(path, self.vault.relative_name(path), today)
        return self._report([outcome])

    def run_on_all(self, today: date | None = None) -> SyncReport:
        """Process every note within the configured targets, in path order."""
        notes = self.vault.select(self.settings.targets)
        logger.info("Processing %d notes in %s", len(notes), self.vault.root)

        outcomes = [self.processor.process(self.vault.path_of(note), note, today) for note in notes]
        return self._report(outcomes)

    def _report(self, outcomes: list[DocumentOutcome]) -> SyncReport:
        report = SyncReport(outcomes)
        for outcome in outcomes:
            logger.debug(
                "%s: %s%s",
                outcome.path,
                outcome.status.value,
                f" ({outcome.reason})" if outcome.reason else "",
            )
        logger.info(report.summary())
        return report
