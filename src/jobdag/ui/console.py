"""Console output formatting utilities for jobdag."""

from __future__ import annotations

import sys
from typing import List, Optional


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_run_started(self, workflow: str, job_count: int) -> None:
        """Print run start information."""
        print("\nRUN STARTED")
        print(f"Workflow: {workflow}")
        print(f"Jobs: {job_count}")
        print()

    def print_plan(self, ids_ordered: List[str]) -> None:
        """Print the validated execution order, one job per line."""
        for idx, job_id in enumerate(ids_ordered, start=1):
            print(f"{idx:>3}. {job_id}")

    def print_job_result(
        self,
        job_id: str,
        command: str,
        exit_code: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> None:
        """
        Print the one-line outcome of a job.

        Args:
            job_id: Job id
            command: Command text that was run
            exit_code: Exit status, or None if the command never started
            reason: Why the command could not be launched
        """
        if exit_code is None:
            print(f"Job {job_id}: {command}: could not launch ({reason})")
        else:
            print(f"Job {job_id}: {command}: exit {exit_code}")

    def print_results(self, results: dict[str, str]) -> None:
        """Print final results summary."""
        print("\n" + "=" * 40)
        print("RESULTS")
        print("=" * 40)
        for job, status in results.items():
            status_display = status.upper() if status != "ok" else "SUCCESS"
            print(f"  {job}: {status_display}")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
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
