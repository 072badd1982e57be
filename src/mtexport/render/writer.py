"""File writing for rendered posts."""

from __future__ import annotations

from pathlib import Path

from mtexport.errors import EntryError
from mtexport.models import Post


def write_post(post: Post, output_dir: Path, content: str) -> Path:
    """Write rendered content to ``<output_dir>/<basename>.md``.

    Basenames may contain ``/``; missing directories are created and an
    existing file is overwritten. A basename resolving outside
    ``output_dir`` raises EntryError.
    """
    path = post.markdown_filename(output_dir)
    if not path.resolve().is_relative_to(output_dir.resolve()):
        raise EntryError(f"BASENAME {post.basename!r} points outside {output_dir}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
