"""Re-run a hostblock edit with elevated privileges.

On POSIX systems the edit is replayed through ``sudo``.  On Windows a small
PowerShell script starts the interpreter with ``-Verb RunAs``; the script is
passed base64-encoded (UTF-16LE) via ``-EncodedCommand`` so no shell quoting
of the arguments is needed on the command line.
"""

from __future__ import annotations

import base64
import logging
import subprocess
import sys
from typing import Callable, List, Optional

from .config import HostblockConfig
from .editor import EditRequest, RemoveRequest, UpsertRequest
from .exceptions import ErrorHandler

__all__ = ["ElevatedExecutor", "encode_powershell", "request_args"]

logger = logging.getLogger(__name__)


def encode_powershell(script: str) -> str:
    """Encode *script* for ``powershell -EncodedCommand``."""
    return base64.b64encode(script.encode("utf-16-le")).decode("ascii")


def _ps_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def request_args(config: HostblockConfig, request: EditRequest) -> List[str]:
    """CLI arguments that replay *request* in a non-elevating child process."""
    args = [
        "--hosts-file",
        str(config.hosts_file),
        "--elevate",
        "never",
        "--encoding",
        config.encoding,
        "--begin-marker",
        config.markers.begin,
        "--end-marker",
        config.markers.end,
        "--backup" if config.backup else "--no-backup",
    ]
    if isinstance(request, UpsertRequest):
        args += ["upsert", request.value, request.key]
    elif isinstance(request, RemoveRequest):
        args += ["remove", request.key]
    else:
        raise TypeError(f"Unsupported edit request: {request!r}")
    return args


class ElevatedExecutor:
    """Run ``python -m hostblock <args>`` with administrator rights."""

    def __init__(
        self,
        python: Optional[str] = None,
        platform: Optional[str] = None,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        self.python = python or sys.executable
        self.platform = platform or sys.platform
        self._run = runner
        self._errors = ErrorHandler(logger)

    @property
    def is_windows(self) -> bool:
        return self.platform.startswith("win")

    def build_command(self, args: List[str]) -> List[str]:
        if not self.is_windows:
            return ["sudo", self.python, "-m", "hostblock", *args]

        # Start-Process joins ArgumentList with spaces, so each item carries
        # its own double quotes.
        arg_list = ",".join(_ps_quote(f'"{a}"') for a in ["-m", "hostblock", *args])
        script = (
            f"$p = Start-Process -FilePath {_ps_quote(self.python)} "
            f"-ArgumentList @({arg_list}) -Verb RunAs -Wait -PassThru -WindowStyle Hidden\n"
            "exit $p.ExitCode\n"
        )
        return [
            "powershell",
            "-NoProfile",
            "-NonInteractive",
            "-ExecutionPolicy",
            "Bypass",
            "-EncodedCommand",
            encode_powershell(script),
        ]

    def run(self, args: List[str]) -> None:
        cmd = self.build_command(args)
        logger.info(f"🔐 Re-running with elevated privileges via {cmd[0]}")
        logger.debug(f"Elevated arguments: {args}")
        try:
            self._run(cmd, check=True, capture_output=True, text=True)
        except (subprocess.CalledProcessError, FileNotFoundError, OSError) as e:
            self._errors.handle_subprocess_error(cmd, e, operation="elevated hosts update")

    def apply(self, config: HostblockConfig, request: EditRequest) -> None:
        self.run(request_args(config, request))
