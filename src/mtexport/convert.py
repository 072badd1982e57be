"""Batch conversion of parsed entries into content files.

Every entry gets its own ``EntryResult``. A bad entry is recorded and
logged, and the remaining entries are still converted.
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from pathlib import Path
from typing import Iterable

from jinja2 import Template, TemplateError

from mtexport.config import ConvertConfig
from mtexport.errors import EntryError
from mtexport.models import ConversionReport, EntryResult, EntryStmt
from mtexport.parser.builder import parse_file
from mtexport.render.frontmatter import load_template, render_post
from mtexport.render.post import build_post
from mtexport.render.writer import write_post

logger = logging.getLogger(__name__)


def convert_entry(
    index: int,
    entry: EntryStmt,
    output_dir: Path,
    tz: tzinfo,
    template: Template | None = None,
) -> EntryResult:
    """Convert one entry, capturing its failure in the result."""
    result = EntryResult(index=index)
    try:
        post = build_post(entry, tz)
        result.basename = post.basename
        result.path = write_post(post, output_dir, render_post(post, template))
    except (EntryError, TemplateError, OSError, ValueError) as e:
        result.error = str(e)
        logger.warning("Entry %d skipped: %s", index, e)
    else:
        logger.debug("Wrote %s", result.path)
    return result


def convert_entries(
    entries: Iterable[EntryStmt],
    output_dir: Path,
    tz: tzinfo,
    template: Template | None = None,
) -> ConversionReport:
    """Convert entries one by one into a report with one result each."""
    report = ConversionReport()
    for index, entry in enumerate(entries, start=1):
        report.results.append(convert_entry(index, entry, output_dir, tz, template))
    return report


def convert_file(config: ConvertConfig) -> ConversionReport:
    """Parse an export file and write one content file per entry.

    Structural parse errors and configuration errors propagate; entry
    errors are collected in the report.
    """
    config.validate()
    tz = config.tzinfo
    template = load_template(config.template_path)

    entries = parse_file(
        config.input_path,
        config.multiline_keys,
        encoding=config.encoding,
    )
    logger.info("Parsed %d entries from %s", len(entries), config.input_path)

    return convert_entries(entries, config.output_dir, tz, template)
