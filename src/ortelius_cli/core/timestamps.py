"""
Timestamp utilities.

Dates reach the collector as free-form text: RFC 2822 from ``git log
--date=rfc``, ISO 8601 from CI variables, whatever a user typed into
``component.toml``. ``parse_timestamp`` accepts all of them through
``dateutil`` and returns ``None`` (the "unset" value) for anything it cannot
read, so a bad date never stops a run.

Examples:
    >>> parse_timestamp("Mon, 2 Jan 2006 15:04:05 -0700").isoformat()
    '2006-01-02T22:04:05+00:00'
    >>> parse_timestamp("not a date") is None
    True

Tags:
    timestamps, utc, datetime, dateutil, ortelius-cli
"""

from datetime import UTC, datetime

from dateutil import parser as date_parser


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def parse_timestamp(text: str | None) -> datetime | None:
    """Parse free-form date text into an aware UTC datetime.

    Naive results are taken to be UTC. Empty, unparseable or out-of-range
    text gives None.
    """
    if not text or not text.strip():
        return None
    try:
        parsed = date_parser.parse(text)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=UTC)
        return parsed.astimezone(UTC)
    except (ValueError, OverflowError):
        return None


def format_utc(dt: datetime) -> str:
    """Render ``dt`` as ISO 8601 in UTC."""
    return dt.astimezone(UTC).isoformat()


def normalize_timestamp(text: str) -> str:
    """Re-render parseable date text in UTC; other text is returned unchanged."""
    parsed = parse_timestamp(text)
    if parsed is None:
        return text
    return format_utc(parsed)
