"""Configuration: argument parser, config file loader, and duration parsing."""

from __future__ import annotations

import argparse
import math
import re
from pathlib import Path
from typing import Any

try:
    import tomllib
except ModuleNotFoundError:
    try:
        import tomli as tomllib  # type: ignore[no-redef]
    except ImportError:
        tomllib = None  # type: ignore[assignment]

CONFIG_FILENAME = '.pygitrunrc.toml'

_DURATION_PART = re.compile(r'(\d+(?:\.\d+)?)(ms|s|m|h)')
_DURATION_UNITS = {'ms': 0.001, 's': 1.0, 'm': 60.0, 'h': 3600.0}


def parse_duration(value: str | int | float) -> float:
    """Parse '30s', '1m30s', '500ms', '2h' or a plain number of seconds.

    Raises ValueError for malformed text and for nan or infinite values.
    """
    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        text = value.strip()
        try:
            seconds = float(text)
        except ValueError:
            seconds = _sum_units(text, value)
    if not math.isfinite(seconds):
        raise ValueError(f"invalid duration: '{value}'")
    return seconds


def _sum_units(text: str, value: str) -> float:
    pos = 0
    total = 0.0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if pos == 0 or pos != len(text):
        raise ValueError(f"invalid duration: '{value}'")
    return total


def format_duration(seconds: float) -> str:
    """Render seconds compactly: 500ms, 1.25s, 30s, 1m30s."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    minutes, secs = divmod(seconds, 60)
    if minutes:
        return f"{int(minutes)}m{int(secs)}s"
    return f"{round(secs, 2):g}s"


def split_patterns(values: list[str] | str | None) -> list[str]:
    """Flatten comma-separated pattern strings into a clean list."""
    if not values:
        return []
    if isinstance(values, str):
        values = [values]
    return [p.strip() for value in values for p in value.split(',') if p.strip()]


def create_argument_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with all pygit-run flags."""
    # Lazy import to avoid circular dependency with __init__.py
    from pygit_run import __version__

    parser = argparse.ArgumentParser(
        description="Run a git command in every repository under a directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s ~/workspace                              # git pull everywhere
  %(prog)s ~/projects -c status --sequential        # one repo at a time
  %(prog)s ~/repos --all-branches                   # pull every remote branch
  %(prog)s --include '*-service' --exclude 'test-*' # filter by repo name
        """
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('directory', nargs='?', default='.',
                       help='Root directory to search (default: current)')
    parser.add_argument('-c', '--command', default='pull',
                       help='Git command to execute (default: pull)')
    parser.add_argument('--parallel', dest='parallel', action='store_true', default=True,
                       help='Run repositories in parallel (default)')
    parser.add_argument('--sequential', dest='parallel', action='store_false',
                       help='Run repositories one at a time')
    parser.add_argument('--max-workers', type=int, default=4,
                       help='Max parallel workers (default: 4)')
    parser.add_argument('--timeout', type=parse_duration, default=30.0,
                       help='Timeout for each git command, e.g. 30s, 2m, 500ms (default: 30s)')
    parser.add_argument('--ignore-dirty', action='store_true',
                       help='Skip pull on repositories with uncommitted changes')
    parser.add_argument('--all-branches', action='store_true',
                       help='Pull every remote branch (only with the pull command)')
    parser.add_argument('--include', action='append', default=[],
                       help='Comma-separated glob patterns of repository names to include')
    parser.add_argument('--exclude', action='append', default=[],
                       help='Comma-separated glob patterns of repository names to exclude')
    parser.add_argument('--remote', default='origin',
                       help='Remote used by --all-branches (default: origin)')
    parser.add_argument('--verbose', action='store_true',
                       help='Verbose output')
    parser.add_argument('--no-color', action='store_true',
                       help='Disable colored output')
    parser.add_argument('--json', dest='json_output', action='store_true',
                       help='Output results as JSON (suppresses normal output)')
    parser.add_argument('--config', type=str, default=None,
                       help=f'Path to config file (default: {CONFIG_FILENAME} in search dir or home)')

    return parser


def load_config_file(search_dir: Path, config_path: str | None = None) -> dict[str, Any]:
    """Load .pygitrunrc.toml from explicit path, search dir, or home dir.

    Returns empty dict if not found or tomllib is unavailable.
    """
    candidates = [Path(config_path)] if config_path else [search_dir / CONFIG_FILENAME, Path.home() / CONFIG_FILENAME]
    for path in candidates:
        if path.is_file():
            if tomllib is None:
                print(f"Warning: Found {path} but tomllib/tomli not available (Python 3.11+ or pip install tomli). Ignoring.")
                return {}
            try:
                with open(path, 'rb') as f:
                    return tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                print(f"Warning: Failed to parse {path}: {e}")
                return {}
    if config_path:
        print(f"Warning: Config file '{config_path}' not found. Ignoring.")
    return {}
