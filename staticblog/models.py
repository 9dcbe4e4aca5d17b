from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field

from .structured import dump_structured_data
from .utils import DATE_FMT, display_date, iso_date


@dataclass(frozen=True)
class Post:
    title: str
    date: dt.date
    slug: str
    content: str
    description: str = ""
    cover: str = ""
    structured_data: dict = field(default_factory=dict, compare=False)

    @property
    def filename(self) -> str:
        return f"{self.slug}.html"

    @property
    def date_display(self) -> str:
        return display_date(self.date)

    @property
    def date_iso(self) -> str:
        return self.date.strftime(DATE_FMT)

    @property
    def date_rfc3339(self) -> str:
        return iso_date(self.date)

    @property
    def json_ld(self) -> str:
        if not self.structured_data:
            return ""
        return dump_structured_data(self.structured_data)
