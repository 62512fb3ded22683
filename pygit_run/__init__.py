"""
pygit-run: run a git command across many repositories

Recursively discovers git repositories under a directory and runs the same
git subcommand in each one, sequentially or on a bounded worker pool.
"""

from colorama import init as colorama_init

colorama_init(autoreset=True)

__version__ = "1.0.0"

# Re-export public API so `from pygit_run import X` keeps working.
from pygit_run.cli import main  # noqa: E402
from pygit_run.config import (  # noqa: E402
    create_argument_parser,
    format_duration,
    load_config_file,
    parse_duration,
)
from pygit_run.git_client import SubprocessGitClient  # noqa: E402
from pygit_run.guard import DirtyCheckGuard  # noqa: E402
from pygit_run.models import (  # noqa: E402
    BatchResult,
    CommandResult,
    ExecutionConfig,
    ExecutionOutcome,
    OutcomeKind,
    RepositoryDescriptor,
)
from pygit_run.orchestrator import ExecutionScheduler  # noqa: E402
from pygit_run.output import (  # noqa: E402
    SECTION_WIDTH,
    BufferedOutputHandler,
    ConsoleOutputHandler,
    NullOutputHandler,
    should_use_color,
)
from pygit_run.protocols import GitClient, OutputHandler  # noqa: E402
from pygit_run.reporter import SummaryReporter  # noqa: E402
from pygit_run.runner import SKIPPED_DIRTY_MESSAGE, CommandRunner  # noqa: E402
from pygit_run.scanner import RepositoryScanner  # noqa: E402
from pygit_run.strategies import (  # noqa: E402
    AllBranchesPullStrategy,
    CommandStrategy,
    SingleCommandStrategy,
    parse_remote_branches,
)

__all__ = [
    "__version__",
    # Models
    "BatchResult",
    "CommandResult",
    "ExecutionConfig",
    "ExecutionOutcome",
    "OutcomeKind",
    "RepositoryDescriptor",
    # Protocols
    "GitClient",
    "OutputHandler",
    # Implementations
    "SubprocessGitClient",
    "BufferedOutputHandler",
    "ConsoleOutputHandler",
    "NullOutputHandler",
    "SECTION_WIDTH",
    "should_use_color",
    # Strategies
    "AllBranchesPullStrategy",
    "CommandStrategy",
    "SingleCommandStrategy",
    "parse_remote_branches",
    # Services
    "CommandRunner",
    "DirtyCheckGuard",
    "ExecutionScheduler",
    "RepositoryScanner",
    "SummaryReporter",
    "SKIPPED_DIRTY_MESSAGE",
    # Config / CLI
    "create_argument_parser",
    "format_duration",
    "load_config_file",
    "parse_duration",
    "main",
]
