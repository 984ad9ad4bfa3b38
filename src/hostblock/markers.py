"""Sentinel lines delimiting the hostblock managed section.

The default literals must stay stable: files written by earlier runs are only
recognised if the markers match exactly.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["BlockMarkers", "DEFAULT_MARKERS", "DEFAULT_BEGIN", "DEFAULT_END", "CRLF"]

DEFAULT_BEGIN = "# BEGIN HOSTBLOCK MANAGED ENTRIES"
DEFAULT_END = "# END HOSTBLOCK MANAGED ENTRIES"
CRLF = "\r\n"


@dataclass(frozen=True)
class BlockMarkers:
    """Begin/end sentinel pair plus the line ending used when writing."""

    begin: str = DEFAULT_BEGIN
    end: str = DEFAULT_END
    line_ending: str = CRLF

    def __post_init__(self) -> None:
        for name in ("begin", "end"):
            value = getattr(self, name)
            if not value or not value.strip():
                raise ValueError(f"{name} marker must not be empty")
            if "\n" in value or "\r" in value:
                raise ValueError(f"{name} marker must be a single line")
            if value != value.rstrip():
                raise ValueError(f"{name} marker must not end with whitespace")
        if self.begin == self.end:
            raise ValueError("begin and end markers must differ")
        if self.line_ending not in ("\r\n", "\n"):
            raise ValueError("line_ending must be '\\r\\n' or '\\n'")

    def is_begin(self, line: str) -> bool:
        return line.rstrip() == self.begin

    def is_end(self, line: str) -> bool:
        return line.rstrip() == self.end


DEFAULT_MARKERS = BlockMarkers()
