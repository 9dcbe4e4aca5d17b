import html
import shutil
from pathlib import Path

import pytest

from staticblog.config import SiteConfig

REPO_TEMPLATES = Path(__file__).resolve().parents[1] / "templates"


class StubMarkdown:
    """
    Deterministic markdown stand-in.
    Turns "# Heading" lines into <h1> and everything else into <p>.
    """

    def __init__(self):
        self.calls = []

    def __call__(self, text: str) -> str:
        self.calls.append(text)
        out = []
        for line in text.splitlines():
            line = line.strip()
            if not line:
                continue
            if line.startswith("# "):
                out.append(f"<h1>{html.escape(line[2:])}</h1>")
            else:
                out.append(f"<p>{html.escape(line)}</p>")
        return "\n".join(out)


class ExplodingMarkdown:
    def __call__(self, text: str) -> str:
        raise RuntimeError("renderer crashed")


def make_post_text(title="Hello", date="2025-01-01", description=None, cover=None, body="# Hi", extra=()):
    lines = ["---"]
    if title is not None:
        lines.append(f"title: {title}")
    if date is not None:
        lines.append(f"date: {date}")
    if description is not None:
        lines.append(f"description: {description}")
    if cover is not None:
        lines.append(f"cover: {cover}")
    lines.extend(extra)
    lines.append("---")
    lines.append(body)
    return "\n".join(lines) + "\n"


@pytest.fixture
def site_dirs(tmp_path):
    posts = tmp_path / "posts"
    static = tmp_path / "static"
    templates = tmp_path / "templates"
    posts.mkdir()
    static.mkdir()
    shutil.copytree(REPO_TEMPLATES, templates)
    return tmp_path


@pytest.fixture
def config(site_dirs):
    return SiteConfig(
        site_url="https://example.test",
        site_name="Example Blog",
        author_name="Ada Example",
        analytics_id="",
        posts=str(site_dirs / "posts"),
        static=str(site_dirs / "static"),
        output=str(site_dirs / "public"),
        templates=str(site_dirs / "templates"),
    )


@pytest.fixture
def stub_markdown():
    return StubMarkdown()


@pytest.fixture
def write_post(site_dirs):
    def _write(filename, text=None, **fields):
        path = site_dirs / "posts" / filename
        path.write_text(text if text is not None else make_post_text(**fields), encoding="utf-8")
        return path

    return _write
