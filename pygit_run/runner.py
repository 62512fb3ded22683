"""CommandRunner: runs one git command against a single repository."""

from __future__ import annotations

import logging
import time

from git.exc import GitError

from pygit_run.git_client import SubprocessGitClient
from pygit_run.guard import DirtyCheckGuard
from pygit_run.models import (
    ExecutionConfig,
    ExecutionOutcome,
    OutcomeKind,
    RepositoryDescriptor,
)
from pygit_run.protocols import GitClient
from pygit_run.strategies import (
    AllBranchesPullStrategy,
    CommandStrategy,
    SingleCommandStrategy,
)

SKIPPED_DIRTY_MESSAGE = "Repository has uncommitted changes (skipped)"


class CommandRunner:
    """Responsible for running a command in a single repository.

    Produces exactly one ExecutionOutcome per call and never prints; all
    subprocess and GitPython errors end up in the outcome.
    """

    def __init__(self, config: ExecutionConfig, git: GitClient | None = None):
        """Create a runner. Uses a SubprocessGitClient unless one is injected."""
        self.config = config
        self.git = git or SubprocessGitClient()
        self.guard = DirtyCheckGuard(self.git)
        self._logger = logging.getLogger(__name__)

        self.strategies: list[CommandStrategy] = [
            AllBranchesPullStrategy(self.git, config),
            SingleCommandStrategy(self.git, config),
        ]

    def run(self, repo: RepositoryDescriptor, command: str | None = None) -> ExecutionOutcome:
        """Run `command` (default: the configured one) in repo and return its outcome."""
        command = command or self.config.command
        started = time.perf_counter()

        if self.config.ignore_dirty and command == 'pull':
            try:
                dirty = self.guard.is_dirty(repo.path)
            except (GitError, OSError) as e:
                return self._early_outcome(
                    repo, command, OutcomeKind.TOOLING_ERROR, started,
                    f"Error checking repository status: {e}"
                )
            if dirty:
                return self._early_outcome(
                    repo, command, OutcomeKind.SKIPPED, started, SKIPPED_DIRTY_MESSAGE
                )

        strategy = next(s for s in self.strategies if s.can_handle(command))
        self._logger.debug("%s: %s handles '%s'", repo.name, type(strategy).__name__, command)
        return strategy.execute(repo, command, started)

    def _early_outcome(self, repo: RepositoryDescriptor, command: str, kind: OutcomeKind,
                       started: float, message: str) -> ExecutionOutcome:
        """Outcome for a command that was never started."""
        return ExecutionOutcome(
            repository=repo,
            command_label=command,
            kind=kind,
            error_message=message,
            duration=time.perf_counter() - started,
        )
