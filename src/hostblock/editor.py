"""Managed-block editing for hosts-style files.

The editor is a pure text transformation: it receives the current file text
(``None`` when the file does not exist) together with an edit request and
returns the full text to write back, or ``None`` when nothing needs writing.

Layout of a document::

    <before>                       untouched
    # BEGIN HOSTBLOCK MANAGED ENTRIES
    10.0.0.5 foo.local foo         managed entries, one per line
    # END HOSTBLOCK MANAGED ENTRIES
    <after>                        untouched

Each managed entry is ``<value> <key>`` where the key is everything after the
first run of whitespace.  Entries are matched by comparing that key with the
requested key as plain text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .markers import DEFAULT_MARKERS, BlockMarkers

__all__ = [
    "Document",
    "Entry",
    "ManagedBlockEditor",
    "RemoveRequest",
    "UpsertRequest",
    "EditRequest",
    "entry_key",
    "split_lines",
]

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r\n|\n|\r")


def split_lines(text: str) -> List[str]:
    """Split *text* on any mix of ``\\r\\n``, ``\\n`` and ``\\r``.

    A final line break terminates the last line instead of opening a new,
    empty one, so ``"a\\nb\\n"`` and ``"a\\r\\nb"`` both give ``["a", "b"]``.
    """
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def entry_key(line: str) -> Optional[str]:
    """Return the key part of a managed *line*, or ``None`` if it has none."""
    parts = line.strip().split(None, 1)
    if len(parts) < 2:
        return None
    return parts[1].strip()


def _clean_value(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("entry value must not be empty")
    if len(value.split()) != 1:
        raise ValueError(f"entry value must not contain whitespace: {value!r}")
    return value


def _clean_key(key: str) -> str:
    key = key.strip()
    if not key:
        raise ValueError("entry key must not be empty")
    return key


@dataclass(frozen=True)
class Entry:
    """One parsed managed line."""

    value: str
    key: Optional[str]
    line: str


@dataclass(frozen=True)
class UpsertRequest:
    value: str
    key: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _clean_value(self.value))
        object.__setattr__(self, "key", _clean_key(self.key))


@dataclass(frozen=True)
class RemoveRequest:
    key: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", _clean_key(self.key))


EditRequest = Union[UpsertRequest, RemoveRequest]


@dataclass
class Document:
    """A file split around its managed section.

    When ``has_section`` is false the whole file lives in ``before`` and
    ``managed``/``after`` are empty.
    """

    before: List[str] = field(default_factory=list)
    managed: List[str] = field(default_factory=list)
    after: List[str] = field(default_factory=list)
    has_section: bool = False


class ManagedBlockEditor:
    """Insert, replace and remove entries inside the managed section."""

    def __init__(self, markers: BlockMarkers = DEFAULT_MARKERS) -> None:
        self.markers = markers

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def locate_section(self, lines: List[str]) -> Optional[Tuple[int, int]]:
        """Return ``(begin_index, end_index)`` of the managed section.

        The first begin marker wins, and the section closes at the first end
        marker after it.  End markers above the first begin marker are
        ordinary content.  Without a begin marker followed by an end marker
        the file has no section.
        """
        start = -1
        for index, line in enumerate(lines):
            if start < 0:
                if self.markers.is_begin(line):
                    start = index
            elif self.markers.is_end(line):
                return start, index
        if start >= 0:
            logger.debug(f"Begin marker at line {start + 1} has no matching end marker")
        return None

    def parse(self, text: Optional[str]) -> Document:
        lines = split_lines(text) if text is not None else []
        span = self.locate_section(lines)
        if span is None:
            return Document(before=lines)
        start, end = span
        return Document(
            before=lines[:start],
            managed=lines[start + 1 : end],
            after=lines[end + 1 :],
            has_section=True,
        )

    def entries(self, text: Optional[str]) -> List[Entry]:
        """List the non-blank entries of the managed section, in file order."""
        result: List[Entry] = []
        for line in self.parse(text).managed:
            parts = line.strip().split(None, 1)
            if not parts:
                continue
            result.append(Entry(value=parts[0], key=entry_key(line), line=line))
        return result

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def upsert(self, text: Optional[str], value: str, key: str) -> str:
        """Add ``value key`` to the managed section, replacing any entry for *key*.

        The new entry always goes to the end of the section.  A missing
        section is appended to the end of the file, separated from existing
        content by one blank line.
        """
        value = _clean_value(value)
        key = _clean_key(key)
        new_entry = f"{value} {key}"
        doc = self.parse(text)

        if doc.has_section:
            managed = self._without(doc.managed, key)
            managed.append(new_entry)
            lines = self._assemble(doc.before, managed, doc.after)
        else:
            lines = list(doc.before)
            while lines and not lines[-1].strip():
                lines.pop()
            if lines:
                lines.append("")
            lines += [self.markers.begin, new_entry, self.markers.end]
            logger.debug(f"Creating managed section for {key!r}")

        return self.serialize(lines)

    def remove(self, text: Optional[str], key: str) -> Optional[str]:
        """Drop the entry for *key*; ``None`` when there is no section to edit.

        A section left without entries is removed together with its markers.
        When the section exists but holds no entry for *key* the section is
        still rewritten, which normalizes line endings.
        """
        key = _clean_key(key)
        if text is None:
            return None
        doc = self.parse(text)
        if not doc.has_section:
            return None

        managed = self._without(doc.managed, key)
        if managed:
            lines = self._assemble(doc.before, managed, doc.after)
        else:
            logger.debug("Managed section is empty, dropping markers")
            lines = doc.before + doc.after
        return self.serialize(lines)

    def apply(self, text: Optional[str], request: EditRequest) -> Optional[str]:
        """Run *request* against *text*.

        Returns the text to write, or ``None`` when the file should be left
        alone (a no-op removal, or a result identical to *text*).
        """
        if isinstance(request, UpsertRequest):
            result: Optional[str] = self.upsert(text, request.value, request.key)
        elif isinstance(request, RemoveRequest):
            result = self.remove(text, request.key)
        else:
            raise TypeError(f"Unsupported edit request: {request!r}")

        if result is None or result == text:
            return None
        return result

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def serialize(self, lines: List[str]) -> str:
        if not lines:
            return ""
        eol = self.markers.line_ending
        return eol.join(lines) + eol

    def _assemble(self, before: List[str], managed: List[str], after: List[str]) -> List[str]:
        return before + [self.markers.begin] + managed + [self.markers.end] + after

    @staticmethod
    def _without(managed: List[str], key: str) -> List[str]:
        return [line for line in managed if line.strip() and entry_key(line) != key]
