from __future__ import annotations

import datetime as dt
import re
from typing import TYPE_CHECKING, Callable

from .errors import InvalidDate, MissingField, MissingMetadataBlock, RenderFailure, UnclosedMetadataBlock
from .models import Post
from .structured import build_structured_data
from .utils import DATE_FMT

if TYPE_CHECKING:
    from .config import SiteConfig

DELIMITER = "---"
MARKDOWN_EXT = ".md"
META_KEYS = ("title", "date", "description", "cover")
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value


def parse_meta_line(line: str) -> tuple[str, str] | None:
    for key in META_KEYS:
        prefix = f"{key}:"
        if line.startswith(prefix):
            return key, unquote(line[len(prefix) :].strip())
    return None


def parse_front_matter(text: str, filename: str = "<string>") -> tuple[dict, str]:
    """Split a document into its metadata block and markdown body.

    The block must open on the first line. Only ``title``, ``date``,
    ``description`` and ``cover`` are kept; anything else in the block is
    ignored. The body is returned exactly as written after the closing
    delimiter line.
    """
    clean_text = text.lstrip("\ufeff")
    # Only "\n" ends a line here; other separators belong to the body.
    lines = clean_text.split("\n")
    if lines[0].rstrip("\r").strip() != DELIMITER:
        raise MissingMetadataBlock(filename)

    end = None
    offset = len(lines[0]) + 1
    for i in range(1, len(lines)):
        if lines[i].rstrip("\r").strip() == DELIMITER:
            end = i
            break
        offset += len(lines[i]) + 1
    if end is None:
        raise UnclosedMetadataBlock(filename)

    meta = {}
    for line in lines[1:end]:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parsed = parse_meta_line(line)
        if parsed is not None:
            key, value = parsed
            meta[key] = value
    body = clean_text[offset + len(lines[end]) + 1 :]
    return meta, body


def parse_date(raw: str, filename: str) -> dt.date:
    raw = raw.strip()
    if not DATE_RE.match(raw):
        raise InvalidDate(raw, filename)
    try:
        return dt.datetime.strptime(raw, DATE_FMT).date()
    except ValueError as exc:
        raise InvalidDate(raw, filename) from exc


def slug_from_filename(filename: str) -> str:
    if filename.endswith(MARKDOWN_EXT):
        return filename[: -len(MARKDOWN_EXT)]
    return filename


def parse_post(
    filename: str,
    text: str,
    markdown_renderer: Callable[[str], str],
    config: "SiteConfig",
) -> Post:
    meta, body = parse_front_matter(text, filename)

    title = (meta.get("title") or "").strip()
    if not title:
        raise MissingField("title", filename)
    date = parse_date(meta.get("date") or "", filename)
    description = meta.get("description") or ""
    cover = meta.get("cover") or ""
    slug = slug_from_filename(filename)

    try:
        content = markdown_renderer(body)
    except Exception as exc:
        raise RenderFailure(filename, exc) from exc

    return Post(
        title=title,
        date=date,
        slug=slug,
        content=content,
        description=description,
        cover=cover,
        structured_data=build_structured_data(config, title, date, slug, description, cover),
    )
