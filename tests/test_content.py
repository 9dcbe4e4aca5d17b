import datetime as dt

import pytest

from conftest import ExplodingMarkdown, make_post_text
from staticblog.config import SiteConfig
from staticblog.content import parse_date, parse_front_matter, parse_post, slug_from_filename
from staticblog.errors import (
    InvalidDate,
    MissingField,
    MissingMetadataBlock,
    RenderFailure,
    UnclosedMetadataBlock,
)
from staticblog.render import make_markdown_renderer

CONFIG = SiteConfig(site_url="https://example.test", author_name="Ada Example")


def test_parse_front_matter_splits_meta_and_body():
    text = "---\ntitle: Hello\ndate: 2025-01-01\n---\n# Hi\n\nBody text."

    meta, body = parse_front_matter(text, "hello.md")

    assert meta == {"title": "Hello", "date": "2025-01-01"}
    assert body == "# Hi\n\nBody text."


def test_parse_front_matter_keeps_only_known_keys():
    text = "---\ntitle: Hello\ntags: a, b\nlayout: post\ncover: img/a.png\n---\nbody"

    meta, _ = parse_front_matter(text, "hello.md")

    assert meta == {"title": "Hello", "cover": "img/a.png"}


def test_parse_front_matter_trims_and_unquotes_values():
    text = '---\ntitle:   "Colons: everywhere"  \ndescription: \'quoted\'\n---\n'

    meta, body = parse_front_matter(text, "q.md")

    assert meta["title"] == "Colons: everywhere"
    assert meta["description"] == "quoted"
    assert body == ""


def test_parse_front_matter_ignores_bom_and_crlf():
    text = "\ufeff---\r\ntitle: Hello\r\ndate: 2025-01-01\r\n---\r\nline one\r\n"

    meta, body = parse_front_matter(text, "bom.md")

    assert meta["title"] == "Hello"
    assert body == "line one\r\n"


def test_parse_front_matter_without_block_is_rejected():
    with pytest.raises(MissingMetadataBlock) as exc_info:
        parse_front_matter("# Just markdown\n", "plain.md")

    assert exc_info.value.filename == "plain.md"
    assert "plain.md" in str(exc_info.value)


def test_parse_front_matter_without_closing_delimiter():
    with pytest.raises(UnclosedMetadataBlock) as exc_info:
        parse_front_matter("---\ntitle: Hello\n# body", "open.md")

    assert isinstance(exc_info.value, MissingMetadataBlock)
    assert "closing" in str(exc_info.value)


def test_parse_front_matter_empty_document():
    with pytest.raises(MissingMetadataBlock):
        parse_front_matter("", "empty.md")


@pytest.mark.parametrize("raw", ["2025-1-01", "2025/01/01", "01-01-2025", "2025-02-30", "2025-01-01T10:00", ""])
def test_parse_date_rejects_other_layouts(raw):
    with pytest.raises(InvalidDate) as exc_info:
        parse_date(raw, "bad.md")

    assert exc_info.value.raw == raw
    assert exc_info.value.filename == "bad.md"


def test_parse_date_accepts_calendar_date():
    assert parse_date(" 2024-02-29 ", "leap.md") == dt.date(2024, 2, 29)


def test_slug_is_filename_without_extension():
    assert slug_from_filename("Hello_World.md") == "Hello_World"
    assert slug_from_filename("notes.v2.md") == "notes.v2"


def test_parse_post_builds_validated_post(stub_markdown):
    text = make_post_text(title="Hello", date="2025-01-01", description="Greeting", cover="img.png")

    post = parse_post("hello.md", text, stub_markdown, CONFIG)

    assert post.title == "Hello"
    assert post.date == dt.date(2025, 1, 1)
    assert post.slug == "hello"
    assert post.description == "Greeting"
    assert post.cover == "img.png"
    assert post.content == "<h1>Hi</h1>"
    assert post.structured_data["headline"] == "Hello"
    assert stub_markdown.calls == ["# Hi\n"]


def test_parse_post_optional_fields_default_to_empty(stub_markdown):
    post = parse_post("bare.md", make_post_text(), stub_markdown, CONFIG)

    assert post.description == ""
    assert post.cover == ""


@pytest.mark.parametrize("title", [None, "", "   "])
def test_parse_post_requires_title(stub_markdown, title):
    with pytest.raises(MissingField) as exc_info:
        parse_post("untitled.md", make_post_text(title=title), stub_markdown, CONFIG)

    assert exc_info.value.field == "title"
    assert exc_info.value.filename == "untitled.md"


def test_parse_post_missing_date_names_file(stub_markdown):
    with pytest.raises(InvalidDate) as exc_info:
        parse_post("missingdate.md", make_post_text(date=None), stub_markdown, CONFIG)

    assert "missingdate.md" in str(exc_info.value)


def test_parse_post_wraps_renderer_errors():
    with pytest.raises(RenderFailure) as exc_info:
        parse_post("boom.md", make_post_text(), ExplodingMarkdown(), CONFIG)

    assert exc_info.value.name == "boom.md"
    assert isinstance(exc_info.value.cause, RuntimeError)


def test_real_markdown_rendering_is_stable():
    render = make_markdown_renderer()
    text = make_post_text(body="# Hi\n\nSome *text*.\n\n```python\nx = 1\n```")

    first = parse_post("hello.md", text, render, CONFIG)
    second = parse_post("hello.md", text, render, CONFIG)

    assert "<h1>Hi</h1>" in first.content
    assert "<em>text</em>" in first.content
    assert "<pre" in first.content
    assert first.content == second.content


def test_parse_front_matter_keeps_body_verbatim():
    body = "| a | b\u2028c |\n|---|---|\n\x0cx\x1e\u0085y\r\n\n"
    text = "---\ntitle: T\ndate: 2025-01-01\n---\n" + body

    meta, parsed_body = parse_front_matter(text, "table.md")

    assert meta == {"title": "T", "date": "2025-01-01"}
    assert parsed_body == body


def test_parse_front_matter_closing_delimiter_at_end_of_file():
    meta, body = parse_front_matter("---\ntitle: T\n---", "short.md")

    assert meta == {"title": "T"}
    assert body == ""
