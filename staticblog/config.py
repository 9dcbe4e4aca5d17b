from __future__ import annotations

import html
import json
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

try:
    import tomllib as toml
except ImportError:
    import tomli as toml

from .errors import ConfigError

SITE_URL = "https://otrv.dev"
AUTHOR_NAME = "Özgür Tanrıverdi"
ANALYTICS_ID = "G-DZ4KVNJVCR"


@dataclass(frozen=True)
class SiteConfig:
    """Site-wide identity and locations, fixed for the whole build."""

    site_url: str = SITE_URL
    site_name: str = AUTHOR_NAME
    site_description: str = ""
    author_name: str = AUTHOR_NAME
    analytics_id: str = ANALYTICS_ID
    posts: str = "posts"
    static: str = "static"
    output: str = "public"
    templates: str = "templates"
    highlight_style: str = "vim"

    @property
    def posts_dir(self) -> Path:
        return Path(self.posts)

    @property
    def static_dir(self) -> Path:
        return Path(self.static)

    @property
    def output_dir(self) -> Path:
        return Path(self.output)

    @property
    def templates_dir(self) -> Path:
        return Path(self.templates)

    @property
    def base_url(self) -> str:
        return self.site_url.rstrip("/")

    @classmethod
    def from_mapping(cls, data: dict) -> "SiteConfig":
        known = {field.name for field in fields(cls)}
        values = {key: str(value) for key, value in data.items() if key in known and value is not None}
        return cls(**values)

    def with_overrides(self, **overrides: object) -> "SiteConfig":
        values = {key: str(value) for key, value in overrides.items() if value}
        return replace(self, **values)


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(path, f"Cannot read config file ({exc})") from exc
    if suffix == ".toml":
        try:
            data = toml.loads(text)
        except toml.TOMLDecodeError as exc:
            raise ConfigError(path, f"Invalid TOML in config file ({exc})") from exc
        return data
    if suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(path, f"Invalid YAML in config file ({exc})") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(path, "YAML config must be a mapping")
        return data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(path, f"Invalid JSON in config file ({exc})") from exc
    if not isinstance(data, dict):
        raise ConfigError(path, "JSON config must be a mapping")
    return data


def resolve_analytics(config: SiteConfig) -> str:
    analytics_id = html.escape(config.analytics_id.strip())
    if not analytics_id:
        return ""
    return (
        f'<script async src="https://www.googletagmanager.com/gtag/js?id={analytics_id}"></script>\n'
        "<script>\n"
        "  window.dataLayer = window.dataLayer || [];\n"
        "  function gtag(){dataLayer.push(arguments);}\n"
        "  gtag('js', new Date());\n"
        f"  gtag('config', '{analytics_id}');\n"
        "</script>"
    )
