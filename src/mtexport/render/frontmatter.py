"""Render posts as Markdown with TOML front matter."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, StrictUndefined, Template, TemplateSyntaxError

from mtexport.errors import ConfigError
from mtexport.models import Post

CONTENT_TEMPLATE = """\
+++
date  = {{ post.date.isoformat() | toml_string }}
draft = {{ post.draft | toml_bool }}
title = {{ post.title | toml_string }}
tags  = {{ post.tags | toml_array }}
+++
{{ post.content }}
"""

_TOML_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def toml_string(value) -> str:
    """Quote a value as a TOML basic string."""
    out = []
    for ch in str(value):
        if ch in _TOML_ESCAPES:
            out.append(_TOML_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def toml_bool(value) -> str:
    return "true" if value else "false"


def toml_array(values) -> str:
    return "[" + ", ".join(toml_string(v) for v in values) + "]"


def _environment() -> Environment:
    env = Environment(
        autoescape=False,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["toml_string"] = toml_string
    env.filters["toml_bool"] = toml_bool
    env.filters["toml_array"] = toml_array
    return env


def default_template() -> Template:
    return _environment().from_string(CONTENT_TEMPLATE)


def load_template(path: Path | None = None) -> Template:
    """Load a user template file, or the built-in one when path is None."""
    if path is None:
        return default_template()
    try:
        source = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read template {path}: {e}") from e
    try:
        return _environment().from_string(source)
    except TemplateSyntaxError as e:
        raise ConfigError(f"Invalid template {path}: line {e.lineno}: {e.message}") from e


def render_post(post: Post, template: Template | None = None) -> str:
    """Render a post to the text of its content file."""
    if template is None:
        template = default_template()
    return template.render(post=post)
