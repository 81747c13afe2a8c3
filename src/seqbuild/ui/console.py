"""Console output formatting utilities for seqbuild."""

from __future__ import annotations

import sys
from typing import Optional, TextIO


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False, stream: Optional[TextIO] = None):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
            stream: Where trace lines and errors go (defaults to stderr at call time)
        """
        self.debug = debug
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # resolved lazily so test harnesses that swap sys.stderr are honoured
        return self._stream if self._stream is not None else sys.stderr

    def print_trace(self, command: str) -> None:
        """Echo a command before it runs, like `set -x`."""
        print(f"+ {command}", file=self.stream, flush=True)

    def print_phase(self, title: str) -> None:
        """Print a banner when the run moves on to a new kind of step."""
        print(title, file=self.stream, flush=True)

    def print_step_failed(
        self,
        name: str,
        command: str,
        exit_code: int,
        reason: str,
        hint: Optional[str] = None,
    ) -> None:
        """
        Print failure message for the step that stopped the run.

        Args:
            name: Step label
            command: The command line that failed
            exit_code: Exit code that will be propagated
            reason: One-line failure reason
            hint: Optional hint for user
        """
        print(f"\nSTEP FAILED: {name}", file=self.stream)
        print(f"Command: {command}", file=self.stream)
        print(f"Exit code: {exit_code}", file=self.stream)
        print(f"Error: {reason}", file=self.stream)
        if hint:
            print(f"Hint: {hint}", file=self.stream)

    def print_results(self, executed: int, total: int, ok: bool) -> None:
        """Print final results summary."""
        status = "SUCCESS" if ok else "FAILED"
        print(f"\nBUILD {status} ({executed}/{total} steps run)", file=self.stream)

    def print_plan_step(self, index: int, kind: str, command: str, cwd: str, missing: bool) -> None:
        """Print one line of the build plan."""
        flag = "  (missing directory)" if missing else ""
        print(f"{index:>3}. [{kind}] {cwd}: {command}{flag}")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=self.stream)
        print(f"{message}", file=self.stream)
        if details:
            for detail in details:
                print(f"  {detail}", file=self.stream)
        if suggestion:
            print(f"\n{suggestion}", file=self.stream)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc(file=self.stream)
        else:
            print(f"Error: {exc}", file=self.stream)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=self.stream)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
