"""CLI entry point: main() function."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from colorama import Fore, Style

from pygit_run.config import (
    create_argument_parser,
    load_config_file,
    parse_duration,
    split_patterns,
)
from pygit_run.models import ExecutionConfig
from pygit_run.orchestrator import ExecutionScheduler
from pygit_run.output import ConsoleOutputHandler, NullOutputHandler, should_use_color
from pygit_run.reporter import SummaryReporter


def _fail(message: str, color: bool) -> None:
    text = f"{Fore.RED}Error: {message}{Style.RESET_ALL}" if color else f"Error: {message}"
    print(text, file=sys.stderr)
    sys.exit(1)


def main(argv: list[str] | None = None):
    """Main entry point"""
    parser = create_argument_parser()
    argv = sys.argv[1:] if argv is None else argv
    args = parser.parse_args(argv)

    search_dir = Path(args.directory).resolve()
    file_config = load_config_file(search_dir, args.config)

    # Determine which args were explicitly set on CLI
    cli_explicit = set()
    for action in parser._actions:
        if action.dest in ('help', 'version'):
            continue
        for opt_string in action.option_strings:
            if any(arg == opt_string or arg.startswith(opt_string + '=') for arg in argv):
                cli_explicit.add(action.dest)
                break

    def effective(dest: str, toml_key: str, transform=None):
        if dest in cli_explicit:
            return getattr(args, dest)
        if toml_key in file_config:
            val = file_config[toml_key]
            return transform(val) if transform else val
        return getattr(args, dest)

    color = should_use_color(effective('no_color', 'no_color'))

    if not search_dir.exists() or not search_dir.is_dir():
        _fail(f"Invalid directory '{search_dir}'", color)

    try:
        timeout = effective('timeout', 'timeout', parse_duration)
    except ValueError as e:
        _fail(f"Invalid timeout: {e}", color)

    config = ExecutionConfig(
        command=effective('command', 'command').strip(),
        parallel=effective('parallel', 'parallel'),
        max_workers=effective('max_workers', 'max_workers'),
        timeout=timeout,
        ignore_dirty=effective('ignore_dirty', 'ignore_dirty'),
        all_branches=effective('all_branches', 'all_branches'),
        verbose=effective('verbose', 'verbose'),
        remote_name=effective('remote', 'remote_name'),
        include_patterns=tuple(split_patterns(effective('include', 'include_patterns'))),
        exclude_patterns=tuple(split_patterns(effective('exclude', 'exclude_patterns'))),
        json_output=effective('json_output', 'json_output'),
    )

    if not config.command:
        _fail("Git command cannot be empty", color)
    if config.max_workers <= 0:
        _fail("Number of workers must be positive", color)
    if config.timeout <= 0:
        _fail("Timeout must be positive", color)

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    output = NullOutputHandler() if config.json_output else ConsoleOutputHandler(verbose=config.verbose, color=color)

    if config.verbose:
        output.info(f"Root path: {search_dir}")
        output.info(f"Command: git {config.command}")
        output.info(f"Parallel: {config.parallel}")
        if config.parallel:
            output.info(f"Max workers: {config.max_workers}")
        output.info(f"Timeout: {config.timeout:g}s")
        output.info("")

    scheduler = ExecutionScheduler(config, output, color=color)

    try:
        result = scheduler.run_all(search_dir)

        if config.json_output:
            print(json.dumps(result.to_dict(), indent=2))
        elif result.outcomes:
            reporter = SummaryReporter(output)
            reporter.print_summary(result, verbose=config.verbose)

        sys.exit(1 if result.has_failures() else 0)

    except KeyboardInterrupt:
        if not config.json_output:
            output.warning("\n\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        if config.json_output:
            print(json.dumps({'error': str(e)}, indent=2))
        else:
            output.error(f"\nUnexpected error: {e}")
            if config.verbose:
                import traceback
                traceback.print_exc()
        sys.exit(1)
