"""Subprocess-based git client."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from collections.abc import Sequence
from pathlib import Path

from git import Git
from git.exc import GitCommandNotFound

from pygit_run.models import CommandResult


class SubprocessGitClient:
    """Runs the git executable resolved by GitPython, one process per call"""

    def __init__(self, executable: str | None = None):
        """Create a client. Defaults to GitPython's configured git executable."""
        self.executable = executable or Git.GIT_PYTHON_GIT_EXECUTABLE or 'git'
        self._logger = logging.getLogger(__name__)

    def run(
        self,
        path: Path,
        args: Sequence[str],
        timeout: float | None = None,
        merge_stderr: bool = True,
    ) -> CommandResult:
        """Run `git <args>` in path.

        git runs in its own session. When timeout elapses the whole process
        group is killed, including children such as the fetch behind a pull.
        """
        argv = (self.executable, *args)
        self._logger.debug("Running %s in %s (timeout=%s)", ' '.join(argv), path, timeout)
        try:
            proc = subprocess.Popen(
                argv,
                cwd=path,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
                text=True,
                errors='replace',
                start_new_session=True,
            )
        except OSError as e:
            return CommandResult(False, tuple(args), error=GitCommandNotFound(list(argv), e))

        with proc:
            try:
                stdout, stderr = proc.communicate(timeout=timeout)
            except subprocess.TimeoutExpired as e:
                self._kill_group(proc)
                stdout, _ = proc.communicate()
                return CommandResult(False, tuple(args), stdout or '', timed_out=True, error=e)

        if proc.returncode != 0:
            output = stdout
            if not merge_stderr and stderr:
                output = stderr
            return CommandResult(False, tuple(args), output, exit_status=proc.returncode)
        return CommandResult(True, tuple(args), stdout, exit_status=0)

    def _kill_group(self, proc: subprocess.Popen) -> None:
        """SIGKILL every process in the session started for proc."""
        self._logger.debug("Killing process group %s", proc.pid)
        if os.name != 'posix':
            proc.kill()
            return
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            self._logger.debug("Process group %s already exited", proc.pid)

    def status_porcelain(self, path: Path) -> str:
        """Return `git status --porcelain` output. GitPython errors propagate."""
        return Git(str(path)).status('--porcelain')
