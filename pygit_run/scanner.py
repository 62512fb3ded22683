"""Repository scanner: finds git repos under a directory."""

from __future__ import annotations

import fnmatch
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from pygit_run.models import RepositoryDescriptor


class RepositoryScanner:
    """Responsible for finding git repositories"""

    def __init__(self, include_patterns: Sequence[str] = (), exclude_patterns: Sequence[str] = ()):
        """Create a scanner with optional glob patterns matched against repository names."""
        self.include_patterns = tuple(include_patterns or ())
        self.exclude_patterns = tuple(exclude_patterns or ())

    def find_repositories(self, search_dir: Path) -> Iterator[RepositoryDescriptor]:
        """Find all git repositories, descending into repositories to find nested ones.

        Symlinks are not followed and a repository is reported at most once.
        """
        seen_real_paths: set[str] = set()
        for dirpath, dirnames, _filenames in os.walk(search_dir, followlinks=False):
            dirnames.sort()
            if '.git' not in dirnames:
                continue
            dirnames.remove('.git')

            current = Path(dirpath)
            real_path = str(current.resolve())
            if real_path in seen_real_paths:
                continue
            seen_real_paths.add(real_path)

            repo = RepositoryDescriptor.from_path(current)
            if not self._should_skip(repo.name):
                yield repo

    def _should_skip(self, name: str) -> bool:
        """Include patterns must match (when given); any exclude match skips."""
        if self.include_patterns and not any(fnmatch.fnmatch(name, p) for p in self.include_patterns):
            return True
        return any(fnmatch.fnmatch(name, p) for p in self.exclude_patterns)
