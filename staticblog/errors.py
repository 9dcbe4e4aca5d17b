from __future__ import annotations

from pathlib import Path


class BuildError(Exception):
    """Base class for every failure that aborts a site build."""


class ConfigError(BuildError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class MissingMetadataBlock(BuildError):
    def __init__(self, filename: str, reason: str = "missing front matter"):
        self.filename = filename
        self.reason = reason
        super().__init__(f"{reason} in {filename}")


class UnclosedMetadataBlock(MissingMetadataBlock):
    def __init__(self, filename: str):
        super().__init__(filename, "missing closing front matter delimiter")


class MissingField(BuildError):
    def __init__(self, field: str, filename: str):
        self.field = field
        self.filename = filename
        super().__init__(f"missing {field} in {filename}")


class InvalidDate(BuildError):
    def __init__(self, raw: str, filename: str):
        self.raw = raw
        self.filename = filename
        super().__init__(f"invalid date {raw!r} in {filename} (expected YYYY-MM-DD)")


class DuplicateSlug(BuildError):
    def __init__(self, slug: str, first: str, second: str):
        self.slug = slug
        self.first = first
        self.second = second
        super().__init__(f"duplicate slug {slug!r}: {first} and {second} would write the same page")


class RenderFailure(BuildError):
    def __init__(self, name: str, cause: BaseException):
        self.name = name
        self.cause = cause
        super().__init__(f"render {name}: {cause}")


class IOFailure(BuildError):
    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause}")


class TemplateError(ValueError):
    """Raised by ``render_template`` for a placeholder with no value."""
