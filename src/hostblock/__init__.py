"""hostblock - keep a managed block of entries in a hosts file"""
from __future__ import annotations

__version__ = "0.1.0"

from .markers import BlockMarkers, DEFAULT_MARKERS  # noqa: E402
from .editor import ManagedBlockEditor, UpsertRequest, RemoveRequest  # noqa: E402
from .config import HostblockConfig  # noqa: E402
from .runner import HostsRunner  # noqa: E402

__all__: list[str] = [
    "BlockMarkers",
    "DEFAULT_MARKERS",
    "ManagedBlockEditor",
    "UpsertRequest",
    "RemoveRequest",
    "HostblockConfig",
    "HostsRunner",
]
