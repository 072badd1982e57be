"""Data models for mtexport.

The parser produces a closed set of statement nodes:

    EntryStmt
      sections: NormalSectionStmt | MultilineSectionStmt
        NormalSectionStmt.fields: FieldStmt

All nodes are frozen; a parsed tree belongs to the caller and is never
mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


@dataclass(frozen=True)
class FieldStmt:
    key: str
    value: str  # raw text after the separator, untrimmed


@dataclass(frozen=True)
class NormalSectionStmt:
    fields: tuple[FieldStmt, ...] = ()


@dataclass(frozen=True)
class MultilineSectionStmt:
    key: str
    body: str


SectionStmt = Union[NormalSectionStmt, MultilineSectionStmt]


@dataclass(frozen=True)
class EntryStmt:
    sections: tuple[SectionStmt, ...] = ()

    def fields(self) -> list[FieldStmt]:
        """All field statements across normal sections, in input order."""
        result = []
        for section in self.sections:
            if isinstance(section, NormalSectionStmt):
                result.extend(section.fields)
        return result

    def values(self, key: str) -> list[str]:
        return [f.value for f in self.fields() if f.key == key]

    def multiline(self, key: str) -> list[str]:
        return [
            s.body
            for s in self.sections
            if isinstance(s, MultilineSectionStmt) and s.key == key
        ]


Stmt = Union[EntryStmt, NormalSectionStmt, MultilineSectionStmt, FieldStmt]


@dataclass
class Post:
    basename: str
    title: str = ""
    draft: bool = False
    date: Optional[datetime] = None
    tags: list[str] = field(default_factory=list)
    content: str = ""

    def markdown_filename(self, output_dir: Path) -> Path:
        return output_dir / f"{self.basename}.md"


@dataclass
class EntryResult:
    index: int
    basename: Optional[str] = None
    path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ConversionReport:
    results: list[EntryResult] = field(default_factory=list)

    @property
    def written(self) -> list[EntryResult]:
        return [r for r in self.results if r.ok]

    @property
    def failed(self) -> list[EntryResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failed
