"""Runtime configuration for hostblock.

Settings come from ``HOSTBLOCK_*`` variables, first from an optional dotenv
file, then from the process environment, then from explicit overrides (the
CLI flags).  Later sources win.
"""

from __future__ import annotations

import codecs
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import dotenv_values

from .exceptions import HostblockConfigError
from .markers import DEFAULT_MARKERS, BlockMarkers

__all__ = ["HostblockConfig", "default_hosts_path", "ELEVATE_MODES", "ENV_PREFIX"]

logger = logging.getLogger(__name__)

ENV_PREFIX = "HOSTBLOCK_"
ELEVATE_MODES = ("auto", "always", "never")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def default_hosts_path(platform: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the platform's hosts file location."""
    platform = platform or sys.platform
    environ = os.environ if environ is None else environ
    if platform.startswith("win"):
        root = environ.get("SystemRoot") or environ.get("SYSTEMROOT") or r"C:\Windows"
        return Path(root) / "System32" / "drivers" / "etc" / "hosts"
    return Path("/etc/hosts")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise HostblockConfigError(f"Invalid boolean for {name}: {raw!r}", {"variable": name})


def _check_encoding(encoding: str) -> str:
    try:
        info = codecs.lookup(encoding)
    except LookupError as exc:
        raise HostblockConfigError(f"Unknown encoding: {encoding!r}") from exc
    # Every byte must decode to exactly one character.
    if info.name.startswith("utf") or len(bytes(range(256)).decode(info.name, errors="replace")) != 256:
        raise HostblockConfigError(f"Encoding must be single-byte, got {encoding!r}")
    return info.name


@dataclass
class HostblockConfig:
    hosts_file: Path = field(default_factory=default_hosts_path)
    markers: BlockMarkers = DEFAULT_MARKERS
    encoding: str = "ascii"
    backup: bool = True
    backup_suffix: str = ".bak"
    elevate: str = "auto"
    log_file: Optional[Path] = None

    def __post_init__(self) -> None:
        self.hosts_file = Path(self.hosts_file)
        if self.elevate not in ELEVATE_MODES:
            raise HostblockConfigError(
                f"elevate must be one of {', '.join(ELEVATE_MODES)}, got {self.elevate!r}"
            )
        self.encoding = _check_encoding(self.encoding)
        if self.log_file is not None:
            self.log_file = Path(self.log_file)

    @classmethod
    def load(
        cls,
        env_file: Optional[str | Path] = None,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "HostblockConfig":
        """Build a config from *env_file*, *environ* and keyword *overrides*.

        Overrides whose value is ``None`` are ignored so CLI options that were
        not given fall through to the environment.
        """
        values: Dict[str, str] = {}
        if env_file is not None and Path(env_file).exists():
            logger.debug(f"📄 Loading settings from {env_file}")
            for key, value in dotenv_values(env_file).items():
                if key.startswith(ENV_PREFIX) and value is not None:
                    values[key] = value
        environ = os.environ if environ is None else environ
        values.update({k: v for k, v in environ.items() if k.startswith(ENV_PREFIX)})

        kwargs: Dict[str, Any] = {}
        if "HOSTBLOCK_HOSTS_FILE" in values:
            kwargs["hosts_file"] = Path(values["HOSTBLOCK_HOSTS_FILE"])
        if "HOSTBLOCK_ENCODING" in values:
            kwargs["encoding"] = values["HOSTBLOCK_ENCODING"]
        if "HOSTBLOCK_BACKUP" in values:
            kwargs["backup"] = _parse_bool("HOSTBLOCK_BACKUP", values["HOSTBLOCK_BACKUP"])
        if "HOSTBLOCK_ELEVATE" in values:
            kwargs["elevate"] = values["HOSTBLOCK_ELEVATE"].strip().lower()
        if values.get("HOSTBLOCK_LOG_FILE"):
            kwargs["log_file"] = Path(values["HOSTBLOCK_LOG_FILE"])

        begin = overrides.pop("begin_marker", None) or values.get("HOSTBLOCK_BEGIN_MARKER")
        end = overrides.pop("end_marker", None) or values.get("HOSTBLOCK_END_MARKER")
        if begin or end:
            try:
                kwargs["markers"] = BlockMarkers(
                    begin=begin or DEFAULT_MARKERS.begin,
                    end=end or DEFAULT_MARKERS.end,
                )
            except ValueError as exc:
                raise HostblockConfigError(f"Invalid markers: {exc}") from exc

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
