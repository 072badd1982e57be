"""Exception types for mtexport."""

from __future__ import annotations


class MTExportError(Exception):
    """Base class for mtexport errors."""


class StructuralError(MTExportError):
    """The export text does not follow the entry/section grammar.

    Aborts the whole parse; no partial result is returned.
    """

    def __init__(self, line_no: int, message: str):
        self.line_no = line_no
        self.message = message
        super().__init__(f"line {line_no}: {message}")


class EntryError(MTExportError):
    """A single entry has a field the converter cannot use."""


class ConfigError(MTExportError):
    """Invalid run configuration."""
