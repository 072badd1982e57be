"""Build entry statements from export lines.

The export format has no brackets or lengths. Structure comes from three
kinds of lines:

- ``--------`` ends an entry
- ``KEY: value`` is a field; ``KEY:`` alone opens a block when ``KEY`` is a
  multi-line key
- ``-----`` closes the open block (outside a block it separates sections)

Entries are terminated by the entry separator. Trailing content after the
last separator becomes one more entry only if it produced a section.
"""

from __future__ import annotations

import logging
import re
from enum import Enum, auto
from pathlib import Path
from typing import IO, Iterable, Optional

from mtexport.config import (
    DEFAULT_ENCODING,
    ENTRY_SEPARATOR,
    MULTILINE_KEYS,
    SECTION_SEPARATOR,
)
from mtexport.errors import StructuralError
from mtexport.models import (
    EntryStmt,
    FieldStmt,
    MultilineSectionStmt,
    NormalSectionStmt,
    SectionStmt,
)
from mtexport.parser.scanner import iter_lines

logger = logging.getLogger(__name__)

FIELD_PATTERN = re.compile(r"^(?P<key>[A-Za-z][A-Za-z0-9 _-]*):(?P<value>.*)$")


class State(Enum):
    AWAITING_ENTRY = auto()
    IN_ENTRY_HEADER = auto()
    IN_MULTILINE_BODY = auto()


def match_field(line: str) -> Optional[tuple[str, str]]:
    """Split a ``KEY: value`` line, or return None for other shapes.

    One space after the colon belongs to the separator; the rest of the
    value is kept as is.
    """
    match = FIELD_PATTERN.match(line)
    if not match:
        return None
    value = match.group("value")
    if value.startswith(" "):
        value = value[1:]
    return match.group("key"), value


class StatementBuilder:
    """Line-driven state machine producing ``EntryStmt`` values.

    One builder serves one parse; create a new one per stream.
    """

    def __init__(self, multiline_keys: frozenset[str]):
        self.multiline_keys = multiline_keys
        self.state = State.AWAITING_ENTRY
        self.entries: list[EntryStmt] = []
        self._sections: list[SectionStmt] = []
        self._fields: Optional[list[FieldStmt]] = None
        self._body_key: Optional[str] = None
        self._body_lines: list[str] = []
        self._body_start = 0
        self._line_no = 0

    def feed(self, line: str):
        self._line_no += 1

        if line == ENTRY_SEPARATOR:
            if self.state is State.IN_MULTILINE_BODY:
                raise StructuralError(
                    self._line_no,
                    f"entry separator inside {self._body_key} block "
                    f"opened at line {self._body_start}",
                )
            self._close_entry()
            return

        if self.state is State.IN_MULTILINE_BODY:
            if line == SECTION_SEPARATOR:
                self._sections.append(
                    MultilineSectionStmt(self._body_key, "\n".join(self._body_lines))
                )
                self._body_key = None
                self._body_lines = []
                self.state = State.IN_ENTRY_HEADER
            else:
                self._body_lines.append(line)
            return

        if line == SECTION_SEPARATOR:
            self._close_fields()
            return

        field = match_field(line)
        if field is None:
            if line.strip():
                logger.debug("Skipping unrecognized line %d: %r", self._line_no, line)
            return

        key, value = field
        if value == "" and key in self.multiline_keys:
            self._close_fields()
            self._body_key = key
            self._body_lines = []
            self._body_start = self._line_no
            self.state = State.IN_MULTILINE_BODY
            return

        if self._fields is None:
            self._fields = []
        self._fields.append(FieldStmt(key, value))
        self.state = State.IN_ENTRY_HEADER

    def finish(self) -> list[EntryStmt]:
        if self.state is State.IN_MULTILINE_BODY:
            raise StructuralError(
                self._body_start,
                f"{self._body_key} block is not closed with {SECTION_SEPARATOR!r}",
            )
        self._close_fields()
        if self._sections:
            self._close_entry()
        return self.entries

    def _close_fields(self):
        if self._fields is not None:
            self._sections.append(NormalSectionStmt(tuple(self._fields)))
            self._fields = None

    def _close_entry(self):
        self._close_fields()
        self.entries.append(EntryStmt(tuple(self._sections)))
        self._sections = []
        self.state = State.AWAITING_ENTRY


def build_entries(
    lines: Iterable[str],
    extra_multiline_keys: Iterable[str] = (),
) -> list[EntryStmt]:
    """Assemble entries from already-split lines."""
    builder = StatementBuilder(MULTILINE_KEYS | frozenset(extra_multiline_keys))
    for line in lines:
        builder.feed(line)
    return builder.finish()


def parse(
    stream: IO,
    extra_multiline_keys: Iterable[str] = (),
    encoding: str = DEFAULT_ENCODING,
) -> list[EntryStmt]:
    """Parse an export stream into entries.

    ``extra_multiline_keys`` extends the built-in block keys for this call
    only. The stream is closed before returning, also on error.

    Raises:
        StructuralError: an unterminated block or a separator inside one.
        OSError: reading the stream failed.
    """
    with stream:
        return build_entries(iter_lines(stream, encoding), extra_multiline_keys)


def parse_file(
    path: Path,
    extra_multiline_keys: Iterable[str] = (),
    encoding: str = DEFAULT_ENCODING,
) -> list[EntryStmt]:
    """Parse an export file; line terminators are not translated."""
    stream = open(path, encoding=encoding, newline="")
    return parse(stream, extra_multiline_keys, encoding)
