"""Tests for domain models (dataclasses, enums)."""

import dataclasses
from pathlib import Path

import pytest

from pygit_run import (
    BatchResult,
    CommandResult,
    ExecutionConfig,
    ExecutionOutcome,
    OutcomeKind,
    RepositoryDescriptor,
)


def _outcome(name: str, kind: OutcomeKind = OutcomeKind.SUCCESS, **kwargs) -> ExecutionOutcome:
    repo = RepositoryDescriptor(Path(f"/tmp/{name}"), name)
    return ExecutionOutcome(repo, "pull", kind, **kwargs)


class TestRepositoryDescriptor:
    def test_from_path(self):
        repo = RepositoryDescriptor.from_path(Path("/work/api"))
        assert repo.name == "api"
        assert repo.path == Path("/work/api")

    def test_frozen(self):
        repo = RepositoryDescriptor(Path("/work/api"), "api")
        with pytest.raises(dataclasses.FrozenInstanceError):
            repo.name = "other"

    def test_hashable(self):
        a = RepositoryDescriptor(Path("/work/api"), "api")
        b = RepositoryDescriptor(Path("/work/api"), "api")
        assert {a, b} == {a}


class TestExecutionConfig:
    def test_defaults(self):
        config = ExecutionConfig()
        assert config.command == "pull"
        assert config.parallel is True
        assert config.max_workers == 4
        assert config.timeout == 30.0
        assert config.ignore_dirty is False
        assert config.all_branches is False
        assert config.verbose is False
        assert config.remote_name == "origin"
        assert config.include_patterns == ()
        assert config.exclude_patterns == ()

    def test_frozen(self):
        config = ExecutionConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.parallel = False

    def test_patterns_stored_as_tuples(self):
        include = ["api-*"]
        config = ExecutionConfig(include_patterns=include, exclude_patterns=["old-*"])
        include.append("web-*")

        assert config.include_patterns == ("api-*",)
        assert config.exclude_patterns == ("old-*",)
        assert hash(config) == hash(config.with_updates())

    def test_with_updates(self):
        config = ExecutionConfig(command="status")
        updated = config.with_updates(parallel=False, max_workers=2)
        assert updated.parallel is False
        assert updated.max_workers == 2
        assert updated.command == "status"
        assert config.parallel is True


class TestCommandResult:
    def test_error_text_prefers_error(self):
        result = CommandResult(False, ("pull",), "ignored", error=OSError("git missing"))
        assert result.error_text == "git missing"

    def test_error_text_uses_output(self):
        result = CommandResult(False, ("pull",), "  fatal: refusing\n", exit_status=128)
        assert result.error_text == "fatal: refusing"

    def test_error_text_falls_back_to_status(self):
        result = CommandResult(False, ("diff", "--quiet"), "", exit_status=1)
        assert result.error_text == "exit status 1"


class TestExecutionOutcome:
    def test_kind_properties(self):
        assert _outcome("a").succeeded is True
        skipped = _outcome("a", OutcomeKind.SKIPPED)
        assert skipped.succeeded is False
        assert skipped.skipped is True
        timed_out = _outcome("a", OutcomeKind.TIMEOUT)
        assert timed_out.timed_out is True
        assert timed_out.skipped is False

    def test_frozen(self):
        outcome = _outcome("a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            outcome.output = "changed"

    def test_to_dict(self):
        outcome = _outcome("api", OutcomeKind.FAILED, output="out", error_message="boom", duration=1.23456)
        data = outcome.to_dict()
        assert data == {
            'name': 'api',
            'path': '/tmp/api',
            'command': 'pull',
            'kind': 'FAILED',
            'succeeded': False,
            'output': 'out',
            'error': 'boom',
            'duration': 1.235,
        }


class TestBatchResult:
    def test_empty(self):
        result = BatchResult()
        assert result.has_failures() is False
        assert result.successful == 0
        assert result.failed == 0
        assert result.skipped == 0

    def test_sorted_outcomes_by_name(self):
        result = BatchResult([_outcome("zeta"), _outcome("alpha"), _outcome("mid")])
        assert [o.repository.name for o in result.sorted_outcomes()] == ["alpha", "mid", "zeta"]

    def test_sorted_outcomes_ties_broken_by_path(self):
        a = ExecutionOutcome(RepositoryDescriptor(Path("/b/lib"), "lib"), "pull", OutcomeKind.SUCCESS)
        b = ExecutionOutcome(RepositoryDescriptor(Path("/a/lib"), "lib"), "pull", OutcomeKind.SUCCESS)
        assert BatchResult([a, b]).sorted_outcomes() == [b, a]

    def test_counts(self):
        result = BatchResult([
            _outcome("a"),
            _outcome("b", OutcomeKind.SKIPPED),
            _outcome("c", OutcomeKind.FAILED),
            _outcome("d", OutcomeKind.TIMEOUT),
            _outcome("e", OutcomeKind.TOOLING_ERROR),
        ])
        assert result.successful == 1
        assert result.skipped == 1
        assert result.failed == 3
        assert result.count(OutcomeKind.TIMEOUT) == 1

    def test_skip_counts_as_failure_for_exit_code(self):
        result = BatchResult([_outcome("a"), _outcome("b", OutcomeKind.SKIPPED)])
        assert result.has_failures() is True

    def test_all_success(self):
        assert BatchResult([_outcome("a"), _outcome("b")]).has_failures() is False

    def test_to_dict(self):
        result = BatchResult([_outcome("b", OutcomeKind.FAILED), _outcome("a")], duration=2.0)
        data = result.to_dict()
        assert data['repos_processed'] == 2
        assert data['successful'] == 1
        assert data['failed'] == 1
        assert data['has_failures'] is True
        assert [r['name'] for r in data['results']] == ["a", "b"]
        assert data['results'][1]['kind'] == "FAILED"
