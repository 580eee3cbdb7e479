"""Console output formatting utilities for taskdeck."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

if TYPE_CHECKING:
    from ..errors import CommandFailed, TaskdeckError
    from ..model import Command, Target


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_target_start(self, name: str) -> None:
        print(f"\nTARGET: {name}")

    def print_command(self, command: "Command", dry_run: bool = False) -> None:
        prefix = "WOULD RUN" if dry_run else "RUN"
        where = f" (in {command.cwd})" if command.cwd else ""
        print(f"{prefix}: {command.display}{where}")

    def print_success(self, name: str) -> None:
        print("STATUS: success")

    def print_failure(self, name: str, failure: "CommandFailed") -> None:
        """
        Print a failed command with its status.

        Signals are shown by number; a reason (missing tool, bad cwd) is
        printed when the command never started.
        """
        print(f"COMMAND FAILED: {failure.command.label}", file=sys.stderr)
        if failure.signal is not None:
            print(f"Signal: {failure.signal}", file=sys.stderr)
        else:
            print(f"Exit code: {failure.status}", file=sys.stderr)
        if failure.reason:
            print(f"Hint: {failure.reason}", file=sys.stderr)

    def print_targets(self, targets: Iterable["Target"], default: Optional[str] = None) -> None:
        """Print available targets with descriptions."""
        print("TARGETS")
        for t in targets:
            marker = " (default)" if t.name == default else ""
            desc = f"  {t.description}" if t.description else ""
            print(f"  {t.name}{marker}{desc}")
            if self.debug:
                for c in t.commands:
                    print(f"      {c.display}")

    def print_environment(self, platform: str, overlay: Mapping[str, str]) -> None:
        print(f"Platform: {platform}")
        print("Overlay:")
        if not overlay:
            print("  (empty)")
        for key, value in overlay.items():
            print(f"  {key}={value}")

    def print_results(self, results: Mapping[str, str]) -> None:
        """Print final results summary."""
        print("\n" + "=" * 40)
        print("RESULTS")
        print("=" * 40)
        for name, status in results.items():
            print(f"  {name}: {status.upper()}")

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
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_taskdeck_error(self, exc: "TaskdeckError", suggestion: Optional[str] = None) -> None:
        details = [f"{k}: {v}" for k, v in exc.details.items()]
        self.print_error(exc.kind.replace("_", " "), exc.message, details=details or None, suggestion=suggestion)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


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
