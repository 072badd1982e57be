"""Shared test fixtures for mtexport."""

from __future__ import annotations

import io
from zoneinfo import ZoneInfo

import pytest

from mtexport.models import (
    EntryStmt,
    FieldStmt,
    MultilineSectionStmt,
    NormalSectionStmt,
)

SAMPLE_EXPORT = """\
AUTHOR: alice
TITLE: First post
BASENAME: first_post
STATUS: Publish
ALLOW COMMENTS: 1
CONVERT BREAKS: 0
PRIMARY CATEGORY: diary
CATEGORY: diary
CATEGORY: perl
DATE: 03/15/2024 10:30:00
-----
BODY:
<p>Hello, world.</p>
  indented line
-----
EXTENDED BODY:
-----
EXCERPT:
-----
KEYWORDS:
-----
COMMENT:
AUTHOR: bob
DATE: 03/16/2024 09:00:00
Nice post!
-----
--------
AUTHOR: alice
TITLE: Second post
BASENAME: 2024/second
STATUS: Draft
CATEGORY: misc
DATE: 04/01/2024 23:59:59
-----
BODY:
Second body.
-----
IMAGE:
<img src="a.png">
-----
--------
"""


@pytest.fixture
def sample_export():
    return SAMPLE_EXPORT


@pytest.fixture
def sample_stream():
    return io.StringIO(SAMPLE_EXPORT)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "export.txt"
    path.write_text(SAMPLE_EXPORT, encoding="utf-8")
    return path


@pytest.fixture
def tokyo():
    return ZoneInfo("Asia/Tokyo")


@pytest.fixture
def make_entry():
    """Build an EntryStmt from field pairs and optional blocks."""

    def _make(fields=(), blocks=()):
        sections = []
        if fields:
            sections.append(
                NormalSectionStmt(tuple(FieldStmt(k, v) for k, v in fields))
            )
        sections.extend(MultilineSectionStmt(k, b) for k, b in blocks)
        return EntryStmt(tuple(sections))

    return _make
