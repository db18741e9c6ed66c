"""Server timestamp helpers.

Swift listings report ``last_modified`` without a zone designator. The
server's own ``Date`` (or ``Last-Modified``) header is used as the zone anchor
so timestamps are not skewed by the client's local timezone.
"""

import re
from datetime import datetime, timedelta
from email.utils import parsedate_to_datetime
from typing import Optional

import httpx
from pydantic import TypeAdapter

_DATETIME = TypeAdapter(datetime)
_ZONE_SUFFIX = re.compile(r"(Z|[+-]\d{2}:?\d{2}|UTC|GMT)\s*$", re.IGNORECASE)


def _parse_http_date(value: str) -> Optional[datetime]:
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None


def _utc_offset(value: str) -> Optional[timedelta]:
    parsed = _parse_http_date(value)
    if parsed is None:
        try:
            parsed = _DATETIME.validate_python(value.strip())
        except ValueError:
            return None
    return parsed.utcoffset()


def format_offset(offset: timedelta) -> str:
    """Render a UTC offset as ``+HH:MM``."""
    minutes = int(offset.total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def local_offset() -> str:
    offset = datetime.now().astimezone().utcoffset() or timedelta(0)
    return format_offset(offset)


def get_server_datetime_offset(response: httpx.Response) -> str:
    """Derive the server's UTC offset from a response.

    Args:
        response: Any response from the storage service

    Returns:
        Offset string such as ``+00:00``. The local offset is used when the
        response carries neither ``Date`` nor ``Last-Modified``.
    """
    header = response.headers.get("Date") or response.headers.get("Last-Modified")
    if not header:
        return local_offset()
    offset = _utc_offset(header)
    if offset is None:
        return "+00:00"
    return format_offset(offset)


def has_timezone(value: str) -> bool:
    return bool(_ZONE_SUFFIX.search(value))


def parse_date_with_server_timezone(value: str, server_offset: str) -> datetime:
    """Parse a server timestamp into an aware datetime.

    Args:
        value: ISO 8601 or HTTP-date timestamp
        server_offset: ``+HH:MM`` offset applied when ``value`` has no zone

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the timestamp cannot be parsed
    """
    value = value.strip()
    parsed = _parse_http_date(value)
    if parsed is not None and parsed.tzinfo is not None:
        return parsed
    if not has_timezone(value):
        value = f"{value}{server_offset}"
    return _DATETIME.validate_python(value)
