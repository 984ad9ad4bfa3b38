from __future__ import annotations

import logging
import os
import shutil
import stat
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .exceptions import (
    ErrorHandler,
    HostsEncodingError,
    HostsFileNotFoundError,
    HostsIOError,
    HostsPermissionError,
)

__all__ = ["HostsFile"]

logger = logging.getLogger(__name__)


class HostsFile:
    """Read and write a hosts file as raw text.

    Text is decoded and encoded strictly with a single-byte encoding and no
    newline translation, so the bytes written are exactly the editor output.
    Writes temporarily lift the read-only bit and keep a ``.bak`` copy of the
    previous contents.
    """

    def __init__(
        self,
        path: Path,
        encoding: str = "ascii",
        backup: bool = True,
        backup_suffix: str = ".bak",
    ) -> None:
        self.path = Path(path)
        self.encoding = encoding
        self.backup = backup
        self.backup_suffix = backup_suffix
        self._errors = ErrorHandler(logger)

    @property
    def backup_path(self) -> Path:
        return self.path.with_name(self.path.name + self.backup_suffix)

    def read(self) -> Optional[str]:
        """Return the file text, or ``None`` if the file does not exist."""
        if not self.path.exists():
            logger.debug(f"Hosts file {self.path} does not exist")
            return None
        try:
            data = self.path.read_bytes()
            return data.decode(self.encoding)
        except PermissionError as e:
            self._errors.log_and_raise(
                HostsPermissionError, f"Permission denied reading {self.path}", e, {"path": str(self.path)}
            )
        except UnicodeDecodeError as e:
            self._errors.log_and_raise(
                HostsEncodingError,
                f"Hosts file is not valid {self.encoding} text: {self.path}",
                e,
                {"path": str(self.path), "position": e.start},
            )
        except FileNotFoundError as e:
            self._errors.log_and_raise(
                HostsFileNotFoundError, f"Hosts file not found: {self.path}", e, {"path": str(self.path)}
            )
        except OSError as e:
            self._errors.log_and_raise(
                HostsIOError, f"Cannot read {self.path}: {e.strerror or e}", e, {"path": str(self.path)}
            )
        return None  # pragma: no cover - log_and_raise always raises

    def write(self, text: str) -> None:
        """Replace the file contents with *text*."""
        try:
            data = text.encode(self.encoding)
        except UnicodeEncodeError as e:
            self._errors.log_and_raise(
                HostsEncodingError,
                f"New contents for {self.path} cannot be encoded as {self.encoding}",
                e,
                {"path": str(self.path), "position": e.start},
            )
            return  # pragma: no cover

        try:
            with self._writable():
                if self.backup and self.path.exists():
                    shutil.copyfile(self.path, self.backup_path)
                    logger.info(f"💾 Backed up {self.path} to {self.backup_path}")
                self.path.write_bytes(data)
        except PermissionError as e:
            self._errors.log_and_raise(
                HostsPermissionError, f"Permission denied writing {self.path}", e, {"path": str(self.path)}
            )
        except FileNotFoundError as e:
            self._errors.log_and_raise(
                HostsFileNotFoundError,
                f"Directory for hosts file not found: {self.path.parent}",
                e,
                {"path": str(self.path)},
            )
        except OSError as e:
            details = {"path": str(self.path)}
            if self.backup and self.backup_path.exists():
                # The file may be truncated; the previous contents are here
                details["backup"] = str(self.backup_path)
            self._errors.log_and_raise(
                HostsIOError, f"Cannot write {self.path}: {e.strerror or e}", e, details
            )
        logger.info(f"✍️  Wrote {len(data)} bytes to {self.path}")

    @contextmanager
    def _writable(self) -> Iterator[None]:
        """Clear the read-only bit for the duration of the block, then restore it."""
        if not self.path.exists():
            yield
            return
        mode = self.path.stat().st_mode
        read_only = not mode & stat.S_IWUSR
        if read_only:
            logger.info(f"🔓 Clearing read-only flag on {self.path}")
            os.chmod(self.path, stat.S_IMODE(mode) | stat.S_IWUSR)
        try:
            yield
        finally:
            if read_only:
                os.chmod(self.path, stat.S_IMODE(mode))
