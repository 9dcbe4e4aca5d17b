from __future__ import annotations

import argparse
import datetime as dt
import sys
import time
from pathlib import Path
from typing import Callable, Optional

from .collection import build_collection
from .config import SiteConfig, load_config
from .errors import BuildError, IOFailure
from .models import Post
from .pages import FEED_FILE, INDEX_FILE, SITEMAP_FILE, build_feed, build_index, build_post_pages, build_sitemap
from .render import copy_static, make_markdown_renderer, read_template, render_template

POST_TEMPLATE = "post.html"


def build_site(
    config: SiteConfig,
    markdown_renderer: Optional[Callable[[str], str]] = None,
    render: Callable[[str, dict], str] = render_template,
    now: Optional[dt.datetime] = None,
) -> tuple[Post, ...]:
    """Regenerate the whole site from ``config.posts_dir`` into ``config.output_dir``.

    Any failure raises a ``BuildError`` and stops the build; files written
    before the failure are left in place.
    """
    if markdown_renderer is None:
        markdown_renderer = make_markdown_renderer(config.highlight_style)
    templates_dir = config.templates_dir
    output_dir = config.output_dir

    post_template = read_template(templates_dir / POST_TEMPLATE)
    index_template = read_template(templates_dir / INDEX_FILE)
    feed_template = read_template(templates_dir / FEED_FILE)
    sitemap_template = read_template(templates_dir / SITEMAP_FILE)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise IOFailure(output_dir, exc) from exc

    posts = build_collection(config.posts_dir, markdown_renderer, config)

    build_post_pages(posts, post_template, config, output_dir, render)
    build_index(posts, index_template, config, output_dir, render)
    build_feed(posts, feed_template, config, output_dir, render, now)
    build_sitemap(posts, sitemap_template, config, output_dir, render, now)

    copy_static(config.static_dir, output_dir)
    return posts


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Build the static blog from Markdown posts.")
    parser.add_argument("--config", default="site.toml", help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--posts", help="Directory containing Markdown posts.")
    parser.add_argument("--static", help="Directory containing static assets.")
    parser.add_argument("--output", help="Output directory for the site.")
    args = parser.parse_args(argv)

    start = time.perf_counter()
    try:
        config = SiteConfig.from_mapping(load_config(Path(args.config)))
        config = config.with_overrides(posts=args.posts, static=args.static, output=args.output)
        build_site(config)
    except BuildError as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        sys.exit(1)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    print(f"Site generated in: {config.output}")
