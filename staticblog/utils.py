from __future__ import annotations

import datetime as dt

DATE_FMT = "%Y-%m-%d"


def join_url(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return base
    return f"{base}/{path}"


def as_datetime(value: dt.date) -> dt.datetime:
    if isinstance(value, dt.datetime):
        return value
    return dt.datetime.combine(value, dt.time())


def iso_date(value: dt.date) -> str:
    value = as_datetime(value)
    if value.tzinfo is not None:
        value = value.astimezone(dt.timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def display_date(value: dt.date) -> str:
    # "Jan 2, 2006"; %-d is not portable
    return f"{value:%b} {value.day}, {value.year}"


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc).replace(microsecond=0)
