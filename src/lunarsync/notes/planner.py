"""
DocumentUpdatePlanner - per-note conversion.

Stages:
1. Front matter present?           (else skipped: no-frontmatter)
2. Source key holds a string?      (else skipped: no-source-key)
3. Source parses as lunar notation (else skipped: invalid-format)
4. Leap strategy override
5. Single / range outputs          (none: skipped: no-solar)
6. Diff against existing values, write when something changed

Any exception inside a note ends as failed: exception. One note never
stops a batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

import pendulum

from lunarsync.calendar.leap import parse_leap_strategy
from lunarsync.calendar.notation import parse_lunar
from lunarsync.calendar.solar import SolarDateResolver
from lunarsync.core.settings import ConversionSettings, OutputMode
from lunarsync.notes.frontmatter import changed_entries, render_frontmatter, split_frontmatter

logger = logging.getLogger(__name__)

SKIP_NO_FRONTMATTER = "no-frontmatter"
SKIP_NO_SOURCE_KEY = "no-source-key"
SKIP_INVALID_FORMAT = "invalid-format"
SKIP_NO_SOLAR = "no-solar"
FAIL_EXCEPTION = "exception"


class OutcomeStatus(Enum):
    """Terminal state of one note."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class DocumentOutcome:
    """Result of processing one note"""
    path: str
    status: OutcomeStatus
    reason: str | None = None
    updates: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "status": self.status.value,
            "reason": self.reason,
            "updates": dict(self.updates),
        }


@dataclass
class UpdatePlan:
    """Entries to write, or the reason there are none."""
    updates: dict[str, str] = field(default_factory=dict)
    skip_reason: str | None = None

    @property
    def skipped(self) -> bool:
        return self.skip_reason is not None


class DocumentUpdatePlanner:
    """
    Compute the front matter entries a note should carry.

    Example:
        planner = DocumentUpdatePlanner(settings, resolver)
        plan = planner.plan({"lunar-birthday": "农历1990-08-15"})
        plan.updates  # {"birthday": "2026-09-25"}
    """

    def __init__(self, settings: ConversionSettings, resolver: SolarDateResolver):
        self.settings = settings
        self.resolver = resolver

    def plan(self, metadata: dict[str, Any] | None, today: date | None = None) -> UpdatePlan:
        """
        Plan outputs for one note's metadata.

        Args:
            metadata: Decoded front matter, None when the note has no block
            today: Reference day (defaults to the local current date)
        """
        if metadata is None:
            return UpdatePlan(skip_reason=SKIP_NO_FRONTMATTER)

        raw = metadata.get(self.settings.source_key)
        if not isinstance(raw, str):
            return UpdatePlan(skip_reason=SKIP_NO_SOURCE_KEY)

        lunar = parse_lunar(raw)
        if lunar is None:
            return UpdatePlan(skip_reason=SKIP_INVALID_FORMAT)

        strategy = parse_leap_strategy(
            metadata.get(self.settings.leap_strategy_key),
            self.settings.default_leap_strategy,
        )
        today = today or pendulum.today().date()

        if self.settings.output_mode is OutputMode.SINGLE:
            solar = self.resolver.find_next_occurrence(lunar, strategy, today)
            if solar is None:
                return UpdatePlan(skip_reason=SKIP_NO_SOLAR)
            formatted = self.resolver.formatter.format(self.settings.output_date_format, solar)
            return UpdatePlan(updates={self.settings.output_key_single: formatted})

        updates = self.resolver.build_range(
            lunar,
            strategy,
            today.year,
            self.settings.range_past,
            self.settings.range_future,
            self.settings.output_key_pattern,
            self.settings.output_date_format,
        )
        if not updates:
            return UpdatePlan(skip_reason=SKIP_NO_SOLAR)
        return UpdatePlan(updates=updates)


class DocumentProcessor:
    """
    Read, plan and conditionally rewrite notes, one at a time.

    With ``dry_run`` the note is never written; UPDATED then means the
    note would change.
    """

    def __init__(self, planner: DocumentUpdatePlanner, dry_run: bool = False):
        self.planner = planner
        self.dry_run = dry_run

    def process(self, path: Path, display_path: str | None = None, today: date | None = None) -> DocumentOutcome:
        """
        Process one note file.

        Args:
            path: Note file on disk
            display_path: Name used in the outcome and logs (defaults to ``path``)
            today: Reference day

        Returns:
            DocumentOutcome
        """
        name = display_path or str(path)
        try:
            text = path.read_text(encoding="utf-8")
            document = split_frontmatter(text, name)

            plan = self.planner.plan(document.metadata, today)
            if plan.skipped:
                return DocumentOutcome(name, OutcomeStatus.SKIPPED, plan.skip_reason)

            changes = changed_entries(document.metadata, plan.updates)
            if not changes:
                return DocumentOutcome(name, OutcomeStatus.UNCHANGED)

            if not self.dry_run:
                merged = {**document.metadata, **changes}
                path.write_text(render_frontmatter(merged, document.body), encoding="utf-8")
            return DocumentOutcome(name, OutcomeStatus.UPDATED, updates=changes)

        except Exception:
            logger.exception("Failed to process note: %s", name)
            return DocumentOutcome(name, OutcomeStatus.FAILED, FAIL_EXCEPTION)
