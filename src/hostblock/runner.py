from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional

from .config import HostblockConfig
from .editor import EditRequest, Entry, ManagedBlockEditor, RemoveRequest, UpsertRequest
from .elevation import ElevatedExecutor
from .exceptions import HostsPermissionError
from .hosts_file import HostsFile

__all__ = ["HostsRunner"]

logger = logging.getLogger(__name__)

_locks: Dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _locks_guard:
        return _locks.setdefault(key, threading.Lock())


class HostsRunner:
    """Apply managed-block edits to the configured hosts file.

    One call is one read-modify-write cycle, serialized per file within this
    process.  Depending on ``config.elevate`` the cycle runs locally, is
    handed to :class:`ElevatedExecutor`, or runs locally and falls back to
    the executor when the file is not writable.
    """

    def __init__(
        self,
        config: HostblockConfig,
        editor: Optional[ManagedBlockEditor] = None,
        hosts_file: Optional[HostsFile] = None,
        executor: Optional[ElevatedExecutor] = None,
    ) -> None:
        self.config = config
        self.editor = editor or ManagedBlockEditor(config.markers)
        self.hosts_file = hosts_file or HostsFile(
            config.hosts_file,
            encoding=config.encoding,
            backup=config.backup,
            backup_suffix=config.backup_suffix,
        )
        self.executor = executor or ElevatedExecutor()
        logger.debug(f"🗂️  HostsRunner initialized - file: {self.hosts_file.path}, elevate: {config.elevate}")

    def upsert(self, value: str, key: str) -> bool:
        return self.apply(UpsertRequest(value=value, key=key))

    def remove(self, key: str) -> bool:
        return self.apply(RemoveRequest(key=key))

    def apply(self, request: EditRequest) -> bool:
        """Run *request*; return ``True`` if the file was (or will be) changed."""
        if self.config.elevate == "always":
            # The child process reads the file itself; we may lack read access.
            self.executor.apply(self.config, request)
            return True

        try:
            return self._apply_locally(request)
        except HostsPermissionError:
            if self.config.elevate == "never":
                raise
            logger.warning(f"⚠️  No permission to update {self.hosts_file.path}, retrying elevated")
            self.executor.apply(self.config, request)
            return True

    def preview(self, request: EditRequest) -> Optional[str]:
        """Return the text *request* would write, or ``None`` for a no-op."""
        return self.editor.apply(self.hosts_file.read(), request)

    def entries(self) -> List[Entry]:
        return self.editor.entries(self.hosts_file.read())

    def _apply_locally(self, request: EditRequest) -> bool:
        with _lock_for(self.hosts_file.path):
            current = self.hosts_file.read()
            new_text = self.editor.apply(current, request)
            if new_text is None:
                logger.info(f"✅ {self.hosts_file.path} already up to date")
                return False
            self.hosts_file.write(new_text)
        logger.info(f"✅ Applied {type(request).__name__} for '{request.key}'")
        return True
