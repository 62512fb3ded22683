"""ExecutionScheduler: runs a git command across multiple repositories."""

from __future__ import annotations

import concurrent.futures
import logging
import time
from pathlib import Path

from tqdm import tqdm

from pygit_run.config import format_duration
from pygit_run.models import (
    BatchResult,
    ExecutionConfig,
    ExecutionOutcome,
    OutcomeKind,
    RepositoryDescriptor,
)
from pygit_run.output import BufferedOutputHandler
from pygit_run.protocols import GitClient, OutputHandler
from pygit_run.runner import CommandRunner
from pygit_run.scanner import RepositoryScanner


class ExecutionScheduler:
    """Main orchestrator - dispatches one command per repository and gathers outcomes.

    Sequential mode returns outcomes in input order. Parallel mode returns
    them in completion order; use BatchResult.sorted_outcomes() for a stable
    presentation order.
    """

    def __init__(
        self,
        config: ExecutionConfig,
        output: OutputHandler,
        git: GitClient | None = None,
        color: bool = True,
    ):
        """Create a scheduler with the given config and output handler."""
        self.config = config
        self.output = output
        self.color = color
        self.runner = CommandRunner(config, git)
        self.scanner = RepositoryScanner(config.include_patterns, config.exclude_patterns)
        self._logger = logging.getLogger(__name__)

    def run_all(self, search_dir: Path) -> BatchResult:
        """Discover repositories under search_dir and run the configured command in each."""
        repos = list(self.scanner.find_repositories(search_dir))

        if not repos:
            self.output.warning(f"No git repositories found in {search_dir}")
            return BatchResult()

        self.output.success(f"Found {len(repos)} repositories:")
        for repo in repos:
            self.output.info(f"• {repo.name} ({repo.path})", indent=1)

        start = time.perf_counter()
        outcomes = self.run(repos)
        return BatchResult(outcomes, time.perf_counter() - start)

    def run(self, repos: list[RepositoryDescriptor], command: str | None = None) -> list[ExecutionOutcome]:
        """Run command (default: the configured one) in every repository. Returns one outcome per repo."""
        command = command or self.config.command
        self._logger.debug(
            "Running 'git %s' in %d repositories (parallel=%s, workers=%d)",
            command, len(repos), self.config.parallel, self.config.max_workers
        )
        if self.config.parallel:
            return self._run_parallel(repos, command)
        return self._run_sequential(repos, command)

    def _run_sequential(self, repos: list[RepositoryDescriptor], command: str) -> list[ExecutionOutcome]:
        """Run repositories one at a time with a progress bar."""
        outcomes = []

        with tqdm(total=len(repos), desc=f"git {command}", unit="repo",
                  disable=self.config.json_output) as pbar:
            for repo in repos:
                pbar.set_postfix_str(repo.name, refresh=True)
                outcomes.append(self._run_single(repo, command, self.output))
                pbar.update(1)

        return outcomes

    def _run_parallel(self, repos: list[RepositoryDescriptor], command: str) -> list[ExecutionOutcome]:
        """Run repositories on a bounded thread pool with buffered output per repository."""
        outcomes = []

        def _run_with_buffer(repo: RepositoryDescriptor) -> tuple[ExecutionOutcome, BufferedOutputHandler]:
            buf = BufferedOutputHandler(color=self.color)
            outcome = self._run_single(repo, command, buf)
            return outcome, buf

        with concurrent.futures.ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = {executor.submit(_run_with_buffer, repo): repo for repo in repos}

            with tqdm(total=len(repos), desc=f"git {command}", unit="repo",
                      disable=self.config.json_output) as pbar:
                for future in concurrent.futures.as_completed(futures):
                    repo = futures[future]
                    try:
                        outcome, buf = future.result()
                        buf.flush_to(self.output)
                    except Exception as e:
                        self.output.error(f"Error running in {repo.path}: {e}")
                        outcome = self._unexpected_failure(repo, command, e)
                    outcomes.append(outcome)
                    pbar.set_postfix_str(repo.name, refresh=True)
                    pbar.update(1)

        return outcomes

    def _run_single(self, repo: RepositoryDescriptor, command: str, output: OutputHandler) -> ExecutionOutcome:
        """Run the command in one repository; never raises."""
        if self.config.verbose:
            output.info(f"Executing 'git {command}' in {repo.path}...")

        try:
            outcome = self.runner.run(repo, command)
        except Exception as e:
            self._logger.exception("Unexpected error in %s", repo.path)
            outcome = self._unexpected_failure(repo, command, e)

        if self.config.verbose:
            self._print_outcome(outcome, output)
        return outcome

    def _unexpected_failure(self, repo: RepositoryDescriptor, command: str, error: Exception) -> ExecutionOutcome:
        return ExecutionOutcome(
            repository=repo,
            command_label=command,
            kind=OutcomeKind.FAILED,
            error_message=f"Unexpected error: {error}",
        )

    def _print_outcome(self, outcome: ExecutionOutcome, output: OutputHandler):
        """Print the per-repository status line shown in verbose mode."""
        line = f"{outcome.repository.name} ({format_duration(outcome.duration)})"
        if outcome.succeeded:
            output.success(f"✓ {line}")
        elif outcome.skipped:
            output.warning(f"⚠ {line}")
        else:
            output.error(f"✗ {line}")

        if outcome.error_message:
            output.info(f"Error: {outcome.error_message}", indent=1)
        if outcome.output.strip():
            output.info(f"Output: {outcome.output.strip()}", indent=1)
