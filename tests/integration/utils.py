"""Utility functions for integration tests."""

import os
import subprocess
import sys


def get_cli_with_starting_args() -> list[str]:
    """Get the command that runs the triage-tracker CLI with the current interpreter."""
    return [sys.executable, "-m", "triage_tracker.configuration.cli"]


def run_cli(args: list[str], env: dict[str, str] | None = None) -> subprocess.CompletedProcess[str]:
    """Helper to run the CLI as a subprocess and capture output.

    Args:
        args: List of command line arguments to pass to the CLI.
        env: Environment variables to set on top of the current environment.

    Returns:
        subprocess.CompletedProcess: The result of running the CLI command.
    """
    complete_command = get_cli_with_starting_args() + args
    print(f"Running command: {' '.join(complete_command)}")
    result = subprocess.run(
        complete_command,
        capture_output=True,
        text=True,
        env={**os.environ, "COLUMNS": "250", **(env or {})},
    )
    print(f"Command result: {result.returncode}")
    print(f"Command stdout: {result.stdout}")
    print(f"Command stderr: {result.stderr}")
    return result
