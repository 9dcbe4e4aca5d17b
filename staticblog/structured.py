"""schema.org ``BlogPosting`` descriptions embedded in post pages as JSON-LD."""

from __future__ import annotations

import datetime as dt
import json
from typing import TYPE_CHECKING

from .utils import iso_date, join_url

if TYPE_CHECKING:
    from .config import SiteConfig

# Characters that would let the JSON close or confuse a surrounding <script> block.
SCRIPT_ESCAPES = {char: "\\u%04x" % ord(char) for char in "<>&"}


def page_url(config: "SiteConfig", slug: str) -> str:
    return join_url(config.base_url, f"{slug}.html")


def build_structured_data(
    config: "SiteConfig",
    title: str,
    date: dt.date,
    slug: str,
    description: str = "",
    cover: str = "",
) -> dict:
    data = {
        "@context": "https://schema.org",
        "@type": "BlogPosting",
        "headline": title,
    }
    if description:
        data["description"] = description
    data.update(
        {
            "datePublished": iso_date(date),
            "author": {"@type": "Person", "name": config.author_name, "url": config.base_url},
            "publisher": {"@type": "Person", "name": config.author_name},
            "mainEntityOfPage": {"@type": "WebPage", "@id": page_url(config, slug)},
        }
    )
    if cover:
        data["image"] = join_url(config.base_url, cover)
    return data


def dump_structured_data(data: dict) -> str:
    """Serialize compactly; the result is safe to place verbatim inside ``<script>``."""
    text = json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    for char, escape in SCRIPT_ESCAPES.items():
        text = text.replace(char, escape)
    return text
