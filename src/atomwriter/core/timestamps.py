"""RFC 3339 timestamps for Atom date constructs."""

from datetime import datetime, timedelta, timezone

from atomwriter.core.ports import Clock


def current_time() -> datetime:
    """Timezone-aware local now."""
    return datetime.now().astimezone()


def format_rfc3339(dt: datetime | None = None, clock: Clock = current_time) -> str:
    """Format ``dt`` as ``YYYY-MM-DDTHH:MM:SS+HH:MM``.

    strftime only knows the colon-less ``+HHMM`` offset, so the offset is
    formatted that way first and a colon is spliced in before its last two
    digits. Offsets carrying seconds (old LMT zones) are rounded to whole
    minutes first, and the year is always four digits. Naive datetimes are
    taken as local time; ``clock`` supplies the time when ``dt`` is omitted.

    Examples:
        >>> from datetime import UTC
        >>> format_rfc3339(datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC))
        '2025-01-02T03:04:05+00:00'

    """
    if dt is None:
        dt = clock()
    if dt.tzinfo is None:
        dt = dt.astimezone()

    offset = dt.utcoffset()
    if offset % timedelta(minutes=1):
        minutes = max(-1439, min(1439, round(offset.total_seconds() / 60)))
        dt = dt.astimezone(timezone(timedelta(minutes=minutes)))

    # glibc does not pad %Y below year 1000
    formatted = f"{dt.year:04d}" + dt.strftime("-%m-%dT%H:%M:%S%z")
    return f"{formatted[:-2]}:{formatted[-2:]}"
