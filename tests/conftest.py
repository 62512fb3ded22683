"""Shared test doubles."""

from __future__ import annotations

import threading
import time
from collections.abc import Sequence
from pathlib import Path

import pytest

from pygit_run import CommandResult


class FakeGitClient:
    """Fake git client: scripted responses keyed by (repo name, command line)."""

    def __init__(self):
        self.responses: dict[tuple[str, str], CommandResult] = {}
        self.delays: dict[str, float] = {}
        self.status: dict[str, str] = {}
        self.status_errors: dict[str, Exception] = {}
        self.calls: list[tuple[str, tuple[str, ...], float | None]] = []
        self._lock = threading.Lock()

    def respond(self, repo: str, command: str, *, success: bool = True, output: str = '',
                exit_status: int | None = None, timed_out: bool = False) -> None:
        if exit_status is None:
            exit_status = 0 if success else 1
        self.responses[(repo, command)] = CommandResult(
            success, tuple(command.split()), output,
            exit_status=None if timed_out else exit_status, timed_out=timed_out,
        )

    def run(self, path: Path, args: Sequence[str], timeout: float | None = None,
            merge_stderr: bool = True) -> CommandResult:
        name = Path(path).name
        with self._lock:
            self.calls.append((name, tuple(args), timeout))
        delay = self.delays.get(name, 0.0)
        if delay:
            time.sleep(delay)
        return self.responses.get(
            (name, ' '.join(args)),
            CommandResult(True, tuple(args), f"{name}: ok\n", exit_status=0),
        )

    def status_porcelain(self, path: Path) -> str:
        name = Path(path).name
        if name in self.status_errors:
            raise self.status_errors[name]
        return self.status.get(name, '')

    def commands_for(self, repo: str) -> list[str]:
        return [' '.join(args) for name, args, _ in self.calls if name == repo]


@pytest.fixture
def fake_git() -> FakeGitClient:
    return FakeGitClient()
