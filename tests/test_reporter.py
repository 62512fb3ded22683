"""Tests for SummaryReporter."""

from pathlib import Path

from pygit_run import (
    BatchResult,
    BufferedOutputHandler,
    ExecutionOutcome,
    OutcomeKind,
    RepositoryDescriptor,
    SummaryReporter,
)


def _outcome(name: str, kind: OutcomeKind = OutcomeKind.SUCCESS, **kwargs) -> ExecutionOutcome:
    return ExecutionOutcome(RepositoryDescriptor(Path(f"/work/{name}"), name), "pull", kind, **kwargs)


def _report(result: BatchResult, verbose: bool = False) -> list[str]:
    out = BufferedOutputHandler(color=False)
    SummaryReporter(out).print_summary(result, verbose=verbose)
    return out.messages


class TestSummaryReporter:
    def test_sorted_by_name(self):
        messages = _report(BatchResult([_outcome("zeta"), _outcome("alpha"), _outcome("mid")]))
        lines = [m for m in messages if m.startswith("✓")]
        assert [line.split()[1] for line in lines] == ["alpha", "mid", "zeta"]

    def test_totals(self):
        result = BatchResult([
            _outcome("a"),
            _outcome("b", OutcomeKind.FAILED, error_message="fatal: boom"),
            _outcome("c", OutcomeKind.SKIPPED, error_message="Repository has uncommitted changes (skipped)"),
        ], duration=2.5)
        messages = _report(result)

        assert "Total: 3 repositories processed in 2.5s" in messages
        assert "Successful: 1" in messages
        assert "Failed: 1" in messages
        assert "Skipped: 1" in messages
        assert "⚠ Some repositories failed. Check the errors above." in messages

    def test_skip_rendered_as_warning(self):
        result = BatchResult([
            _outcome("dirty", OutcomeKind.SKIPPED, error_message="Repository has uncommitted changes (skipped)"),
            _outcome("broken", OutcomeKind.FAILED, error_message="fatal: boom"),
        ])
        messages = _report(result)

        assert "  ⚠ Repository has uncommitted changes (skipped)" in messages
        assert "  ✗ fatal: boom" in messages

    def test_skip_kind_not_message_decides(self):
        result = BatchResult([
            _outcome("odd", OutcomeKind.FAILED, error_message="error: path 'skipped' not found"),
        ])
        messages = _report(result)
        assert "  ✗ error: path 'skipped' not found" in messages

    def test_output_only_when_verbose(self):
        result = BatchResult([_outcome("a", output="Already up to date.\n")])
        assert not any("Already up to date." in m for m in _report(result))
        assert "  ℹ Already up to date." in _report(result, verbose=True)

    def test_all_successful(self):
        messages = _report(BatchResult([_outcome("a"), _outcome("b")]))
        assert "Successful: 2" in messages
        assert not any(m.startswith("Failed") for m in messages)
        assert not any("Some repositories failed" in m for m in messages)

    def test_skipped_headline_is_a_warning(self):
        result = BatchResult([
            _outcome("dirty", OutcomeKind.SKIPPED, error_message="Repository has uncommitted changes (skipped)"),
        ])
        out = BufferedOutputHandler(color=False)
        SummaryReporter(out).print_summary(result)

        headline = next(m for m in out.messages if "dirty (" in m)
        assert headline.startswith("⚠ dirty")
        assert not any(m.startswith("✗") for m in out.messages)

    def test_only_skips_banner_does_not_report_failures(self):
        result = BatchResult([
            _outcome("ok"),
            _outcome("dirty", OutcomeKind.SKIPPED, error_message="Repository has uncommitted changes (skipped)"),
        ])
        messages = _report(result)

        assert "Skipped: 1" in messages
        assert not any(m.startswith("Failed") for m in messages)
        assert not any("Some repositories failed" in m for m in messages)
        assert "⚠ Some repositories were skipped. Check the warnings above." in messages
