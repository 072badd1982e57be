"""Split an export stream into logical lines."""

from __future__ import annotations

from typing import IO, Iterator

from mtexport.config import DEFAULT_ENCODING

BOM = "\ufeff"


def strip_terminator(line: str) -> str:
    """Remove exactly one line terminator, keeping all other whitespace."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n") or line.endswith("\r"):
        return line[:-1]
    return line


def iter_lines(stream: IO, encoding: str = DEFAULT_ENCODING) -> Iterator[str]:
    """Yield the lines of a text or binary stream without terminators.

    Byte lines are decoded with ``encoding``. A byte order mark at the
    start of the stream is dropped. Read errors propagate.
    """
    first = True
    for raw in stream:
        if isinstance(raw, bytes):
            raw = raw.decode(encoding)
        if first:
            raw = raw.removeprefix(BOM)
            first = False
        yield strip_terminator(raw)
