from __future__ import annotations

import html
import re
import shutil
from pathlib import Path
from typing import Callable

import markdown

from .errors import IOFailure, TemplateError

PLACEHOLDER_RE = re.compile(r"{{\s*(\w+)\s*}}")
MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "codehilite"]


def make_markdown_renderer(style: str = "vim") -> Callable[[str], str]:
    """Return a markdown -> HTML function with Pygments-highlighted code blocks."""
    md = markdown.Markdown(
        extensions=MARKDOWN_EXTENSIONS,
        extension_configs={
            "codehilite": {"noclasses": True, "pygments_style": style, "guess_lang": False},
        },
    )

    def render(text: str) -> str:
        try:
            return md.convert(text)
        finally:
            md.reset()

    return render


def render_template(template: str, context: dict) -> str:
    # Single pass: substituted values are never scanned for placeholders.
    def repl(match: re.Match) -> str:
        key = match.group(1)
        if key not in context:
            raise TemplateError(f"no value for placeholder {{{{{key}}}}}")
        return str(context[key])

    return PLACEHOLDER_RE.sub(repl, template)


def escape_xml(text: str) -> str:
    return html.escape(text, quote=True)


def cdata(text: str) -> str:
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def read_template(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise IOFailure(path, exc) from exc


def write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise IOFailure(path, exc) from exc


def copy_static(static_dir: Path, output_dir: Path) -> list[Path]:
    """Copy the regular files of ``static_dir`` flat into ``output_dir``."""
    copied = []
    try:
        items = sorted(static_dir.iterdir())
    except OSError as exc:
        raise IOFailure(static_dir, exc) from exc
    for item in items:
        if item.is_dir():
            continue
        dest = output_dir / item.name
        try:
            shutil.copy2(item, dest)
        except OSError as exc:
            raise IOFailure(item, exc) from exc
        copied.append(dest)
    return copied
