"""Output handler implementations: console, null, buffered."""

from __future__ import annotations

import os
import sys

from colorama import Fore, Style
from tqdm import tqdm

from pygit_run.protocols import OutputHandler

SECTION_WIDTH = 50


def should_use_color(no_color: bool = False, stream=None) -> bool:
    """Decide once, at startup, whether console output gets ANSI colors."""
    if no_color or os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('TERM', '') == 'dumb':
        return False
    stream = stream or sys.stdout
    return stream.isatty()


def _paint(color: str, message: str, enabled: bool) -> str:
    return f"{color}{message}{Style.RESET_ALL}" if enabled else message


class ConsoleOutputHandler:
    """Console output with optional colors."""

    def __init__(self, verbose: bool = False, color: bool = True):
        """Create a console handler. Set verbose=True to enable debug output."""
        self.verbose = verbose
        self.color = color

    def info(self, message: str, indent: int = 0) -> None:
        """Print an informational message."""
        tqdm.write("  " * indent + message)

    def success(self, message: str, indent: int = 0) -> None:
        """Print a green success message."""
        tqdm.write("  " * indent + _paint(Fore.GREEN, message, self.color))

    def warning(self, message: str, indent: int = 0) -> None:
        """Print a yellow warning message."""
        tqdm.write("  " * indent + _paint(Fore.YELLOW, message, self.color))

    def error(self, message: str, indent: int = 0) -> None:
        """Print a red error message."""
        tqdm.write("  " * indent + _paint(Fore.RED, message, self.color))

    def section(self, title: str) -> None:
        """Print a section header with a divider line."""
        tqdm.write("")
        tqdm.write(title)
        tqdm.write("-" * SECTION_WIDTH)

    def debug(self, message: str) -> None:
        """Print a cyan debug message (only when verbose is enabled)."""
        if self.verbose:
            tqdm.write(_paint(Fore.CYAN, f"[DEBUG] {message}", self.color))


class NullOutputHandler:
    """Silent output handler for testing and JSON mode."""

    def info(self, message: str, indent: int = 0) -> None:
        """No-op."""
        pass

    def success(self, message: str, indent: int = 0) -> None:
        """No-op."""
        pass

    def warning(self, message: str, indent: int = 0) -> None:
        """No-op."""
        pass

    def error(self, message: str, indent: int = 0) -> None:
        """No-op."""
        pass

    def section(self, title: str) -> None:
        """No-op."""
        pass

    def debug(self, message: str) -> None:
        """No-op."""
        pass


class BufferedOutputHandler:
    """Collects one repository's messages for deferred printing (parallel mode)."""

    def __init__(self, color: bool = True):
        """Initialize with an empty message buffer."""
        self.color = color
        self.messages: list[str] = []

    def info(self, message: str, indent: int = 0) -> None:
        """Buffer an informational message."""
        self.messages.append("  " * indent + message)

    def success(self, message: str, indent: int = 0) -> None:
        """Buffer a green success message."""
        self.messages.append("  " * indent + _paint(Fore.GREEN, message, self.color))

    def warning(self, message: str, indent: int = 0) -> None:
        """Buffer a yellow warning message."""
        self.messages.append("  " * indent + _paint(Fore.YELLOW, message, self.color))

    def error(self, message: str, indent: int = 0) -> None:
        """Buffer a red error message."""
        self.messages.append("  " * indent + _paint(Fore.RED, message, self.color))

    def section(self, title: str) -> None:
        """Buffer a section header with a divider line."""
        self.messages.append("")
        self.messages.append(title)
        self.messages.append("-" * SECTION_WIDTH)

    def debug(self, message: str) -> None:
        """No-op (debug suppressed in parallel mode)."""
        pass

    def flush_to(self, target: OutputHandler) -> None:
        """Write all buffered messages to a target handler and clear the buffer."""
        for msg in self.messages:
            target.info(msg)
        self.messages.clear()
