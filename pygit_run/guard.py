"""Dirty-check guard: vetoes mutating commands on repositories with local changes."""

from __future__ import annotations

import logging
from pathlib import Path

from pygit_run.protocols import GitClient


class DirtyCheckGuard:
    """Inspects a repository's working tree before a mutating command."""

    def __init__(self, git: GitClient):
        self.git = git
        self._logger = logging.getLogger(__name__)

    def is_dirty(self, path: Path) -> bool:
        """Return True if `git status --porcelain` reports anything.

        Not bounded by a timeout. Errors from the status query propagate.
        """
        status = self.git.status_porcelain(path)
        dirty = bool(status.strip())
        if dirty:
            self._logger.debug("Uncommitted changes in %s", path)
        return dirty
