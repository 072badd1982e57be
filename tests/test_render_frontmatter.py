"""Tests for mtexport.render.frontmatter and mtexport.render.writer."""

from __future__ import annotations

from datetime import datetime

import pytest

from mtexport.errors import ConfigError, EntryError
from mtexport.models import Post
from mtexport.render.frontmatter import (
    load_template,
    render_post,
    toml_array,
    toml_bool,
    toml_string,
)
from mtexport.render.writer import write_post


@pytest.fixture
def post(tokyo):
    return Post(
        basename="hello",
        title="Hello",
        draft=False,
        date=datetime(2024, 3, 15, 10, 30, tzinfo=tokyo),
        tags=["diary", "perl"],
        content="<p>Hi</p>",
    )


class TestTomlFilters:
    def test_plain_string(self):
        assert toml_string("Hello") == '"Hello"'

    def test_escapes_quotes_and_backslashes(self):
        assert toml_string('say "hi" \\o/') == '"say \\"hi\\" \\\\o/"'

    def test_escapes_control_characters(self):
        assert toml_string("a\tb\nc\x01") == '"a\\tb\\nc\\u0001"'

    def test_non_ascii_kept(self):
        assert toml_string("日本語") == '"日本語"'

    def test_bool(self):
        assert toml_bool(True) == "true"
        assert toml_bool(False) == "false"

    def test_array(self):
        assert toml_array(["a", 'b"c']) == '["a", "b\\"c"]'
        assert toml_array([]) == "[]"


class TestRenderPost:
    def test_default_template(self, post):
        assert render_post(post) == (
            "+++\n"
            'date  = "2024-03-15T10:30:00+09:00"\n'
            "draft = false\n"
            'title = "Hello"\n'
            'tags  = ["diary", "perl"]\n'
            "+++\n"
            "<p>Hi</p>\n"
        )

    def test_draft_and_empty_tags(self, post):
        post.draft = True
        post.tags = []
        text = render_post(post)
        assert "draft = true\n" in text
        assert "tags  = []\n" in text

    def test_title_with_quotes(self, post):
        post.title = 'The "best" post'
        assert 'title = "The \\"best\\" post"\n' in render_post(post)


class TestLoadTemplate:
    def test_default_when_none(self, post):
        assert load_template(None).render(post=post) == render_post(post)

    def test_custom_template(self, tmp_path, post):
        path = tmp_path / "post.j2"
        path.write_text("---\ntitle: {{ post.title | toml_string }}\n---\n{{ post.content }}\n")
        assert render_post(post, load_template(path)) == '---\ntitle: "Hello"\n---\n<p>Hi</p>\n'

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read template"):
            load_template(tmp_path / "nope.j2")

    def test_syntax_error(self, tmp_path):
        path = tmp_path / "bad.j2"
        path.write_text("{{ post.title ")
        with pytest.raises(ConfigError, match="Invalid template"):
            load_template(path)


class TestWritePost:
    def test_writes_file(self, tmp_path, post):
        path = write_post(post, tmp_path, "content")
        assert path == tmp_path / "hello.md"
        assert path.read_text(encoding="utf-8") == "content"

    def test_nested_basename(self, tmp_path, post):
        post.basename = "2024/03/hello"
        path = write_post(post, tmp_path / "out", "x")
        assert path == tmp_path / "out" / "2024" / "03" / "hello.md"
        assert path.exists()

    def test_overwrites_existing(self, tmp_path, post):
        write_post(post, tmp_path, "old")
        write_post(post, tmp_path, "new")
        assert (tmp_path / "hello.md").read_text(encoding="utf-8") == "new"

    def test_rejects_path_outside_output_dir(self, tmp_path, post):
        post.basename = "../../escaped"
        with pytest.raises(EntryError, match="outside"):
            write_post(post, tmp_path / "out" / "nested", "x")
        assert not (tmp_path / "escaped.md").exists()
