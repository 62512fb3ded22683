"""Protocols for dependency injection."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pygit_run.models import CommandResult


class GitClient(Protocol):
    """Protocol for invoking the external git client"""

    def run(
        self,
        path: Path,
        args: Sequence[str],
        timeout: float | None = None,
        merge_stderr: bool = True,
    ) -> CommandResult: ...

    def status_porcelain(self, path: Path) -> str: ...


class OutputHandler(Protocol):
    """Protocol for handling output"""

    def info(self, message: str, indent: int = 0) -> None: ...
    def success(self, message: str, indent: int = 0) -> None: ...
    def warning(self, message: str, indent: int = 0) -> None: ...
    def error(self, message: str, indent: int = 0) -> None: ...
    def section(self, title: str) -> None: ...
    def debug(self, message: str) -> None: ...
