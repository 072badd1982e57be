"""Turn a parsed entry into a Post."""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo

from mtexport.config import (
    CONTENT_KEYS,
    DATE_FORMATS,
    IGNORED_MULTILINE_KEYS,
    STATUS_VALUES,
    TAG_KEYS,
)
from mtexport.errors import EntryError
from mtexport.models import (
    EntryStmt,
    FieldStmt,
    MultilineSectionStmt,
    NormalSectionStmt,
    Post,
)

logger = logging.getLogger(__name__)


def parse_status(value: str) -> bool:
    """Return the draft flag for a STATUS value."""
    try:
        return STATUS_VALUES[value.lower()]
    except KeyError:
        raise EntryError(f"not supported status: {value}") from None


def parse_date(value: str, tz: tzinfo) -> datetime:
    """Parse a DATE value as local time in ``tz``."""
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=tz)
        except ValueError:
            continue
    raise EntryError(f"unparseable date: {value!r}")


def _apply_field(post: Post, field: FieldStmt, tz: tzinfo):
    value = field.value.strip()
    if field.key == "TITLE":
        post.title = value
    elif field.key == "STATUS":
        post.draft = parse_status(value)
    elif field.key == "DATE":
        post.date = parse_date(value, tz)
    elif field.key == "BASENAME":
        post.basename = value
    elif field.key in TAG_KEYS:
        if value and value not in post.tags:
            post.tags.append(value)


def build_post(entry: EntryStmt, tz: tzinfo) -> Post:
    """Extract the front matter fields and content of one entry.

    Raises EntryError for values the converter cannot use.
    """
    post = Post(basename="")
    content: dict[str, list[str]] = {key: [] for key in CONTENT_KEYS}

    for section in entry.sections:
        if isinstance(section, NormalSectionStmt):
            for field in section.fields:
                _apply_field(post, field, tz)
        elif isinstance(section, MultilineSectionStmt):
            if section.key in content:
                content[section.key].append(section.body)
            elif section.key in IGNORED_MULTILINE_KEYS:
                logger.info("%s is ignored", section.key)
            else:
                raise EntryError(
                    f"not supported multiline section key: {section.key}"
                )
        else:
            raise TypeError(f"unexpected section statement: {section!r}")

    if not post.basename:
        raise EntryError(f"entry has no BASENAME (title: {post.title!r})")
    if "\x00" in post.basename:
        raise EntryError(f"invalid BASENAME {post.basename!r}")
    if post.date is None:
        raise EntryError(f"entry {post.basename!r} has no DATE")

    # Last BODY wins; every non-empty EXTENDED BODY follows it
    bodies = content["BODY"][-1:] + [b for b in content["EXTENDED BODY"] if b.strip()]
    post.content = "\n\n".join(bodies)
    return post
