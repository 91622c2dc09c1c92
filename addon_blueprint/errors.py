"""
Addon Blueprint Errors

SilentError marks failures whose message is meant for the user as-is,
without a traceback.
"""

from __future__ import annotations


class SilentError(Exception):
    """User-facing fatal error. Generation stops, nothing is rolled back."""


class CommandError(SilentError):
    """An external command exited with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command failed with exit code {returncode}: {' '.join(command)}"
        if stderr.strip():
            message += f"\n{stderr.strip()}"
        super().__init__(message)
