from __future__ import annotations

from datetime import datetime, timezone

from volchart.core.errors import DateConversionError

DATE_FORMAT = "%Y-%m-%d"


def timestamp_to_datetime(timestamp: int) -> datetime:
    try:
        return datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
    except (OverflowError, OSError, TypeError, ValueError) as exc:
        raise DateConversionError(timestamp) from exc


def format_date(timestamp: int) -> str:
    return timestamp_to_datetime(timestamp).strftime(DATE_FORMAT)
