"""Command strategies: how a command is carried out in one repository."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

from pygit_run.config import format_duration
from pygit_run.models import (
    CommandResult,
    ExecutionConfig,
    ExecutionOutcome,
    OutcomeKind,
    RepositoryDescriptor,
)
from pygit_run.protocols import GitClient

ALL_BRANCHES_LABEL = 'pull --all'


def parse_remote_branches(listing: str, remote_name: str = 'origin') -> list[str]:
    """Extract branch names from `git branch -r` output.

    Blank lines and symbolic refs (`origin/HEAD -> origin/main`) are skipped
    and the leading `<remote>/` prefix is removed.
    """
    prefix = f"{remote_name}/"
    branches = []
    for line in listing.splitlines():
        line = line.strip()
        if not line or '->' in line:
            continue
        if line.startswith(prefix):
            line = line[len(prefix):]
        branches.append(line)
    return branches


class CommandStrategy(ABC):
    """Abstract strategy for running a command in a repository."""

    def __init__(self, git: GitClient, config: ExecutionConfig):
        """Initialize with a git client and the batch configuration."""
        self.git = git
        self.config = config
        self._logger = logging.getLogger(__name__)

    @abstractmethod
    def can_handle(self, command: str) -> bool:
        """Return True if this strategy applies to the given command."""
        pass

    @abstractmethod
    def execute(self, repo: RepositoryDescriptor, command: str, started: float) -> ExecutionOutcome:
        """Run the command. `started` is the perf_counter() value the duration is measured from."""
        pass

    def _timeout_message(self) -> str:
        return f"timed out after {format_duration(self.config.timeout)}"


class AllBranchesPullStrategy(CommandStrategy):
    """Strategy for `pull` with --all-branches: pull every remote branch in turn."""

    def can_handle(self, command: str) -> bool:
        """Match the pull command when all branches were requested."""
        return command == 'pull' and self.config.all_branches

    def execute(self, repo: RepositoryDescriptor, command: str, started: float) -> ExecutionOutcome:
        """List remote branches, then pull each one, stopping at the first failure."""
        listing = self.git.run(repo.path, ['branch', '-r'], self.config.timeout, merge_stderr=False)
        if not listing.success:
            detail = f"command {self._timeout_message()}" if listing.timed_out else listing.error_text
            return self._outcome(
                repo,
                OutcomeKind.TIMEOUT if listing.timed_out else OutcomeKind.TOOLING_ERROR,
                started,
                error_message=f"Error getting remote branches: {detail}",
            )

        branches = parse_remote_branches(listing.output, self.config.remote_name)
        self._logger.debug("%s: pulling %d remote branches", repo.name, len(branches))

        blocks: list[str] = []
        for branch in branches:
            result = self.git.run(repo.path, ['pull', self.config.remote_name, branch], self.config.timeout)
            if not result.success:
                return self._outcome(
                    repo,
                    OutcomeKind.TIMEOUT if result.timed_out else OutcomeKind.FAILED,
                    started,
                    output='\n'.join(blocks),
                    error_message=f"Error pulling branch {branch}: {self._describe(result)}",
                )
            blocks.append(f"Branch {branch}: {result.output}")

        return self._outcome(repo, OutcomeKind.SUCCESS, started, output='\n'.join(blocks))

    def _describe(self, result: CommandResult) -> str:
        if result.timed_out:
            return f"command {self._timeout_message()}"
        return result.error_text

    def _outcome(self, repo: RepositoryDescriptor, kind: OutcomeKind, started: float,
                 output: str = '', error_message: str = '') -> ExecutionOutcome:
        return ExecutionOutcome(
            repository=repo,
            command_label=ALL_BRANCHES_LABEL,
            kind=kind,
            output=output,
            error_message=error_message,
            duration=time.perf_counter() - started,
        )


class SingleCommandStrategy(CommandStrategy):
    """Strategy for any other command: one bounded git invocation."""

    def can_handle(self, command: str) -> bool:
        """Fallback strategy: handles every command."""
        return True

    def execute(self, repo: RepositoryDescriptor, command: str, started: float) -> ExecutionOutcome:
        """Run `git <command>` with the configured timeout and classify the result."""
        result = self.git.run(repo.path, command.split(), self.config.timeout)

        if result.success:
            kind, error_message = OutcomeKind.SUCCESS, ''
        elif result.timed_out:
            kind, error_message = OutcomeKind.TIMEOUT, f"Command {self._timeout_message()}"
        else:
            kind, error_message = OutcomeKind.FAILED, result.error_text

        return ExecutionOutcome(
            repository=repo,
            command_label=command,
            kind=kind,
            output=result.output,
            error_message=error_message,
            duration=time.perf_counter() - started,
        )
