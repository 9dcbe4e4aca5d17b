from __future__ import annotations

import datetime as dt
import html
from pathlib import Path
from typing import Callable, Optional, Sequence

from .config import SiteConfig, resolve_analytics
from .errors import RenderFailure
from .models import Post
from .render import cdata, escape_xml, render_template, write_text
from .structured import page_url
from .utils import DATE_FMT, iso_date, join_url, utc_now

INDEX_FILE = "index.html"
FEED_FILE = "feed.xml"
SITEMAP_FILE = "sitemap.xml"

Render = Callable[[str, dict], str]


def newest_date(posts: Sequence[Post], now: Optional[dt.datetime]) -> dt.date:
    if posts:
        return posts[0].date
    return now or utc_now()


def render_page(render: Render, name: str, template: str, context: dict) -> str:
    try:
        return render(template, context)
    except Exception as exc:
        raise RenderFailure(name, exc) from exc


def post_context(post: Post, config: SiteConfig) -> dict:
    cover_url = join_url(config.base_url, post.cover) if post.cover else ""
    cover_meta = f'<meta property="og:image" content="{html.escape(cover_url)}">' if cover_url else ""
    return {
        "title": html.escape(post.title),
        "description": html.escape(post.description),
        "date": post.date_display,
        "date_iso": post.date_iso,
        "content": post.content,
        "json_ld": post.json_ld,
        "canonical_url": html.escape(page_url(config, post.slug)),
        "cover_meta": cover_meta,
        "site_name": html.escape(config.site_name),
        "site_url": config.base_url,
        "analytics": resolve_analytics(config),
    }


def build_post_list(posts: Sequence[Post]) -> str:
    items = []
    for post in posts:
        items.append(
            '<li class="post-item">'
            f'<a href="{html.escape(post.filename)}">{html.escape(post.title)}</a>'
            f'<time datetime="{post.date_iso}">{post.date_display}</time>'
            "</li>"
        )
    return "\n".join(items)


def index_context(posts: Sequence[Post], config: SiteConfig) -> dict:
    return {
        "site_name": html.escape(config.site_name),
        "site_description": html.escape(config.site_description),
        "site_url": config.base_url,
        "posts": build_post_list(posts),
        "analytics": resolve_analytics(config),
    }


def feed_context(posts: Sequence[Post], config: SiteConfig, now: Optional[dt.datetime] = None) -> dict:
    entries = []
    for post in posts:
        link = page_url(config, post.slug)
        entries.append(
            "\n".join(
                [
                    "<entry>",
                    f"<title>{escape_xml(post.title)}</title>",
                    f'<link href="{escape_xml(link)}" />',
                    f"<id>{escape_xml(link)}</id>",
                    f"<published>{post.date_rfc3339}</published>",
                    f"<updated>{post.date_rfc3339}</updated>",
                    f'<summary type="html">{cdata(post.description)}</summary>',
                    "</entry>",
                ]
            )
        )
    return {
        "site_name": escape_xml(config.site_name),
        "site_url": escape_xml(config.base_url),
        "feed_url": escape_xml(join_url(config.base_url, FEED_FILE)),
        "author_name": escape_xml(config.author_name),
        "updated": iso_date(newest_date(posts, now)),
        "entries": "\n".join(entries),
    }


def sitemap_context(posts: Sequence[Post], config: SiteConfig, now: Optional[dt.datetime] = None) -> dict:
    last_updated = newest_date(posts, now).strftime(DATE_FMT)
    urls = [(config.base_url + "/", last_updated)]
    urls.extend((page_url(config, post.slug), post.date_iso) for post in posts)
    items = []
    for url, lastmod in urls:
        items.append(
            "\n".join(
                [
                    "<url>",
                    f"<loc>{escape_xml(url)}</loc>",
                    f"<lastmod>{lastmod}</lastmod>",
                    "</url>",
                ]
            )
        )
    return {
        "last_updated": last_updated,
        "urls": "\n".join(items),
    }


def build_post_pages(
    posts: Sequence[Post],
    template: str,
    config: SiteConfig,
    output_dir: Path,
    render: Render = render_template,
) -> list[Path]:
    written = []
    for post in posts:
        path = output_dir / post.filename
        html_doc = render_page(render, post.slug, template, post_context(post, config))
        write_text(path, html_doc)
        written.append(path)
    return written


def build_index(
    posts: Sequence[Post],
    template: str,
    config: SiteConfig,
    output_dir: Path,
    render: Render = render_template,
) -> Path:
    path = output_dir / INDEX_FILE
    write_text(path, render_page(render, INDEX_FILE, template, index_context(posts, config)))
    return path


def build_feed(
    posts: Sequence[Post],
    template: str,
    config: SiteConfig,
    output_dir: Path,
    render: Render = render_template,
    now: Optional[dt.datetime] = None,
) -> Path:
    path = output_dir / FEED_FILE
    write_text(path, render_page(render, FEED_FILE, template, feed_context(posts, config, now)))
    return path


def build_sitemap(
    posts: Sequence[Post],
    template: str,
    config: SiteConfig,
    output_dir: Path,
    render: Render = render_template,
    now: Optional[dt.datetime] = None,
) -> Path:
    path = output_dir / SITEMAP_FILE
    write_text(path, render_page(render, SITEMAP_FILE, template, sitemap_context(posts, config, now)))
    return path
