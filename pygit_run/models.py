"""Domain models: enums, dataclasses, and configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class OutcomeKind(Enum):
    """Type-safe outcome categories"""
    SUCCESS = auto()
    FAILED = auto()
    TIMEOUT = auto()
    SKIPPED = auto()
    TOOLING_ERROR = auto()


@dataclass(frozen=True)
class RepositoryDescriptor:
    """A discovered repository: working directory path and display name"""
    path: Path
    name: str

    @classmethod
    def from_path(cls, path: Path) -> RepositoryDescriptor:
        """Build a descriptor named after the repository directory."""
        return cls(path=path, name=path.name)


@dataclass(frozen=True)
class ExecutionConfig:
    """Configuration for a batch run. Shared read-only by every worker."""
    command: str = 'pull'
    parallel: bool = True
    max_workers: int = 4
    timeout: float = 30.0
    ignore_dirty: bool = False
    all_branches: bool = False
    verbose: bool = False
    remote_name: str = 'origin'
    include_patterns: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()
    json_output: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'include_patterns', tuple(self.include_patterns))
        object.__setattr__(self, 'exclude_patterns', tuple(self.exclude_patterns))

    def with_updates(self, **kwargs) -> ExecutionConfig:
        """Return a new ExecutionConfig with the given fields replaced."""
        current = {f.name: getattr(self, f.name) for f in self.__dataclass_fields__.values()}
        current.update(kwargs)
        return ExecutionConfig(**current)


@dataclass(frozen=True)
class CommandResult:
    """Result of a single git subprocess"""
    success: bool
    args: tuple[str, ...]
    output: str = ''
    exit_status: int | None = None
    timed_out: bool = False
    error: Exception | None = None

    @property
    def error_text(self) -> str:
        """The process's own error text, falling back to its exit status."""
        if self.error is not None:
            return str(self.error)
        text = self.output.strip()
        if text:
            return text
        return f"exit status {self.exit_status}"


@dataclass(frozen=True)
class ExecutionOutcome:
    """Result of running one command against one repository"""
    repository: RepositoryDescriptor
    command_label: str
    kind: OutcomeKind
    output: str = ''
    error_message: str = ''
    duration: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def skipped(self) -> bool:
        return self.kind is OutcomeKind.SKIPPED

    @property
    def timed_out(self) -> bool:
        return self.kind is OutcomeKind.TIMEOUT

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict for JSON output."""
        return {
            'name': self.repository.name,
            'path': str(self.repository.path),
            'command': self.command_label,
            'kind': self.kind.name,
            'succeeded': self.succeeded,
            'output': self.output,
            'error': self.error_message,
            'duration': round(self.duration, 3),
        }


@dataclass
class BatchResult:
    """Outcomes of one scheduler run plus its wall-clock duration"""
    outcomes: list[ExecutionOutcome] = field(default_factory=list)
    duration: float = 0.0

    def sorted_outcomes(self) -> list[ExecutionOutcome]:
        """Outcomes ordered by repository name, then path."""
        return sorted(self.outcomes, key=lambda o: (o.repository.name, str(o.repository.path)))

    def count(self, kind: OutcomeKind) -> int:
        return sum(1 for outcome in self.outcomes if outcome.kind is kind)

    @property
    def successful(self) -> int:
        return self.count(OutcomeKind.SUCCESS)

    @property
    def skipped(self) -> int:
        return self.count(OutcomeKind.SKIPPED)

    @property
    def failed(self) -> int:
        """Hard failures: everything that neither succeeded nor was skipped."""
        return len(self.outcomes) - self.successful - self.skipped

    def has_failures(self) -> bool:
        """Return True if any repository did not succeed (skips included)."""
        return any(not outcome.succeeded for outcome in self.outcomes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict for JSON output."""
        return {
            'repos_processed': len(self.outcomes),
            'successful': self.successful,
            'failed': self.failed,
            'skipped': self.skipped,
            'duration': round(self.duration, 3),
            'results': [outcome.to_dict() for outcome in self.sorted_outcomes()],
            'has_failures': self.has_failures(),
        }
