# Copyright (c) Syntropy Systems
"""Options shared by canaryctl commands."""
from __future__ import annotations

from datetime import datetime, timedelta

TIME_FORMATS = ["%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d"]

ONE_HOUR = timedelta(hours=1)


def resolve_window(
    start: datetime | None,
    end: datetime | None,
    now: datetime | None = None,
) -> tuple[datetime, datetime]:
    """Fill in the analysis window defaults.

    The start defaults to one hour ago and the end to one hour after the
    start. Naive values are local time.
    """
    if start is None:
        if now is None:
            now = datetime.now().astimezone()
        start = now - ONE_HOUR
    if end is None:
        end = start + ONE_HOUR
    return start, end


def empty_as_none(value: str | None) -> str | None:
    """Treat an empty account name as unset."""
    return value or None
