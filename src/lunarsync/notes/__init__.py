"""Note front matter processing."""

from lunarsync.notes.frontmatter import NoteDocument, changed_entries, render_frontmatter, split_frontmatter
from lunarsync.notes.planner import (
    DocumentOutcome,
    DocumentProcessor,
    DocumentUpdatePlanner,
    OutcomeStatus,
    UpdatePlan,
)
from lunarsync.notes.sync import LunarSync, SyncReport
from lunarsync.notes.vault import Vault, matches_target

__all__ = [
    "NoteDocument",
    "changed_entries",
    "render_frontmatter",
    "split_frontmatter",
    "DocumentOutcome",
    "DocumentProcessor",
    "DocumentUpdatePlanner",
    "OutcomeStatus",
    "UpdatePlan",
    "LunarSync",
    "SyncReport",
    "Vault",
    "matches_target",
]
