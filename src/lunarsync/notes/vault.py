"""
Vault - a directory tree of Markdown notes.

Notes are addressed by their vault-relative POSIX path ("People/mom.md").
"""

from __future__ import annotations

import logging
from pathlib import Path

from lunarsync.core.settings import normalize_path

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"


def matches_target(note_path: str, target: str) -> bool:
    """True when ``note_path`` is ``target`` itself or lies under it as a folder."""
    if note_path == target:
        return True
    prefix = target if target.endswith("/") else f"{target}/"
    return note_path.startswith(prefix)


class Vault:
    """
    Markdown notes below a root directory.

    Usage:
        vault = Vault(Path("~/notes").expanduser())
        for note in vault.select(["People", "Family/dad.md"]):
            print(note)
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def markdown_files(self) -> list[str]:
        """All notes in the vault, sorted, as vault-relative paths."""
        if not self.root.is_dir():
            logger.warning("Vault root is not a directory: %s", self.root)
            return []

        notes = [
            path.relative_to(self.root).as_posix()
            for path in self.root.rglob(f"*{NOTE_SUFFIX}")
            if path.is_file()
        ]
        return sorted(notes)

    def select(self, targets: list[str] | None = None) -> list[str]:
        """
        Notes within the target scope.

        Args:
            targets: Files or folders relative to the root; empty means every note

        Returns:
            Matching vault-relative paths
        """
        normalized = [t for t in (normalize_path(t) for t in targets or []) if t]
        notes = self.markdown_files()
        if not normalized:
            return notes
        return [note for note in notes if any(matches_target(note, t) for t in normalized)]

    def exists(self, relative: str) -> bool:
        """True when a file or folder exists at ``relative``."""
        return self.path_of(relative).exists()

    def path_of(self, relative: str) -> Path:
        return self.root / normalize_path(relative)

    def relative_name(self, path: Path) -> str:
        """Vault-relative name of ``path``, or the path itself when it lies outside the vault."""
        try:
            return path.resolve().relative_to(self.root.resolve()).as_posix()
        except ValueError:
            return str(path)

    def __repr__(self) -> str:
        return f"Vault(root={self.root})"
