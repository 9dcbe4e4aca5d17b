from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Callable

from .content import MARKDOWN_EXT, parse_post
from .errors import DuplicateSlug, IOFailure
from .models import Post

if TYPE_CHECKING:
    from .config import SiteConfig


def list_post_files(posts_dir: Path) -> list[Path]:
    try:
        entries = sorted(posts_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise IOFailure(posts_dir, exc) from exc
    return [path for path in entries if not path.is_dir() and path.name.endswith(MARKDOWN_EXT)]


def load_posts(
    posts_dir: Path,
    markdown_renderer: Callable[[str], str],
    config: "SiteConfig",
) -> list[Post]:
    """Parse every post in ``posts_dir``, in filename order.

    Stops at the first file that cannot be read or parsed. The result is not
    sorted; pass it through ``sort_posts`` before rendering.
    """
    posts = []
    for path in list_post_files(posts_dir):
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise IOFailure(path, exc) from exc
        posts.append(parse_post(path.name, text, markdown_renderer, config))
    return posts


def sort_posts(posts: list[Post]) -> list[Post]:
    # sorted() is stable, so same-day posts keep filename order
    return sorted(posts, key=lambda post: post.date, reverse=True)


def ensure_unique_slugs(posts: list[Post]) -> None:
    seen: dict[str, Post] = {}
    for post in posts:
        key = post.slug.lower()
        if key in seen:
            raise DuplicateSlug(post.slug, f"{seen[key].slug}.md", f"{post.slug}.md")
        seen[key] = post


def build_collection(
    posts_dir: Path,
    markdown_renderer: Callable[[str], str],
    config: "SiteConfig",
) -> tuple[Post, ...]:
    posts = load_posts(posts_dir, markdown_renderer, config)
    ensure_unique_slugs(posts)
    return tuple(sort_posts(posts))
