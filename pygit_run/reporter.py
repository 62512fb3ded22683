"""SummaryReporter: generates and displays the final report."""

from __future__ import annotations

from pygit_run.config import format_duration
from pygit_run.models import BatchResult, ExecutionOutcome
from pygit_run.output import SECTION_WIDTH
from pygit_run.protocols import OutputHandler


class SummaryReporter:
    """Generates and displays summary reports"""

    def __init__(self, output: OutputHandler):
        """Create a reporter that writes to the given output handler."""
        self.output = output

    def print_summary(self, result: BatchResult, verbose: bool = False):
        """Print every outcome sorted by repository name, then the totals."""
        self.output.section("Summary:")

        for outcome in result.sorted_outcomes():
            self._print_outcome(outcome, verbose)

        self.output.info("")
        self.output.info(
            f"Total: {len(result.outcomes)} repositories processed in {format_duration(result.duration)}"
        )
        if result.successful:
            self.output.success(f"Successful: {result.successful}")
        if result.skipped:
            self.output.warning(f"Skipped: {result.skipped}")
        if result.failed:
            self.output.error(f"Failed: {result.failed}")

        if result.failed:
            self.output.info("")
            self.output.warning("⚠ Some repositories failed. Check the errors above.")
        elif result.skipped:
            self.output.info("")
            self.output.warning("⚠ Some repositories were skipped. Check the warnings above.")
        self.output.info("=" * SECTION_WIDTH)

    def _print_outcome(self, outcome: ExecutionOutcome, verbose: bool):
        """Print one repository line plus its error and, when verbose, its output."""
        line = f"{outcome.repository.name} ({format_duration(outcome.duration)})"
        if outcome.succeeded:
            self.output.success(f"✓ {line}")
        elif outcome.skipped:
            self.output.warning(f"⚠ {line}")
        else:
            self.output.error(f"✗ {line}")

        if outcome.error_message:
            if outcome.skipped:
                self.output.warning(f"⚠ {outcome.error_message}", indent=1)
            else:
                self.output.error(f"✗ {outcome.error_message}", indent=1)

        if verbose and outcome.output.strip():
            self.output.info(f"ℹ {outcome.output.strip()}", indent=1)
