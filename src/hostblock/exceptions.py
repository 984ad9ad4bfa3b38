"""
hostblock exceptions and error handling utilities.

The managed-block editor never raises on file content; everything here is
raised by the I/O side (hosts file access, elevated re-execution, config).
"""

from __future__ import annotations

import logging
import subprocess
import traceback
from typing import Optional, Any, Dict


class HostblockError(Exception):
    """Base exception for all hostblock errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class HostsFileNotFoundError(HostblockError):
    """Raised when the hosts file or its directory cannot be found."""

    pass


class HostsPermissionError(HostblockError):
    """Raised when the hosts file cannot be read or written for lack of rights."""

    pass


class HostsEncodingError(HostblockError):
    """Raised when the hosts file text does not fit the configured encoding."""

    pass


class HostsIOError(HostblockError):
    """Raised for any other OS-level failure reading or writing the hosts file."""

    pass


class HostblockConfigError(HostblockError):
    """Raised when there's an issue with hostblock configuration."""

    pass


class ElevationError(HostblockError):
    """Raised when the elevated helper process cannot be run or fails."""

    pass


class ErrorHandler:
    """Centralized error handling utilities."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def log_and_raise(
        self,
        exception_class: type[HostblockError],
        message: str,
        original_error: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log an error and raise a hostblock exception chained to *original_error*."""
        error_details = details or {}

        if original_error:
            error_details["original_error"] = str(original_error)
            error_details["original_type"] = type(original_error).__name__

        self.logger.error(f"❌ {message}")
        if original_error:
            self.logger.debug(f"Original error: {original_error}")
            self.logger.debug(f"Traceback: {traceback.format_exc()}")

        raise exception_class(message, error_details) from original_error

    def handle_subprocess_error(
        self, cmd: list[str], error: Exception, operation: str = "command execution"
    ) -> None:
        """Handle subprocess errors consistently."""
        # Encoded PowerShell payloads are long; the program name is enough.
        shown = cmd[0] if cmd else ""
        if isinstance(error, subprocess.CalledProcessError):
            details = {
                "command": shown,
                "returncode": error.returncode,
                "stderr": error.stderr if error.stderr else "No error output",
            }
            self.log_and_raise(
                ElevationError,
                f"Failed {operation}: {shown} exited with {error.returncode}",
                error,
                details,
            )
        elif isinstance(error, FileNotFoundError):
            self.log_and_raise(
                ElevationError,
                f"Cannot run {operation}: '{shown}' not found on PATH",
                error,
                {"command": shown},
            )
        else:
            self.log_and_raise(
                ElevationError,
                f"Unexpected error during {operation}",
                error,
                {"command": shown},
            )


def format_error_message(error: Exception, include_traceback: bool = False) -> str:
    """Format error messages consistently."""
    if isinstance(error, HostblockError):
        message = f"hostblock error: {error.message}"
        shown = {k: v for k, v in error.details.items() if k != "original_type"}
        if shown:
            details = ", ".join(f"{k}={v}" for k, v in shown.items())
            message += f" ({details})"
    else:
        message = f"{type(error).__name__}: {str(error)}"

    if include_traceback:
        message += f"\n{traceback.format_exc()}"

    return message
