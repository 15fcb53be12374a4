"""Decode browser timestamp encodings into UTC datetimes."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

# Chromium stores microseconds since 1601-01-01 (the WebKit/Windows epoch).
WEBKIT_EPOCH = datetime(1601, 1, 1, tzinfo=timezone.utc)
# Firefox stores microseconds since the Unix epoch.
UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

WEBKIT = "webkit"
UNIX = "unix"


def _to_microseconds(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        micros = int(value)
    except (TypeError, ValueError, OverflowError):
        # "1.5e15" style strings
        try:
            micros = int(float(value))
        except (TypeError, ValueError, OverflowError):
            return None
    if micros <= 0:
        return None
    return micros


def _from_epoch(epoch: datetime, value: object) -> datetime | None:
    micros = _to_microseconds(value)
    if micros is None:
        return None
    try:
        return epoch + timedelta(microseconds=micros)
    except OverflowError:
        return None


def webkit_to_datetime(value: object) -> datetime | None:
    """Microseconds since 1601-01-01 UTC; 0 and undecodable values give None."""
    return _from_epoch(WEBKIT_EPOCH, value)


def unix_to_datetime(value: object) -> datetime | None:
    """Microseconds since 1970-01-01 UTC; 0 and undecodable values give None."""
    return _from_epoch(UNIX_EPOCH, value)


_DECODERS = {
    WEBKIT: webkit_to_datetime,
    UNIX: unix_to_datetime,
}


def decode_timestamp(value: object, encoding: str) -> datetime | None:
    try:
        decoder = _DECODERS[encoding]
    except KeyError:
        raise ValueError(f"Unknown timestamp encoding: {encoding!r}") from None
    return decoder(value)


def format_timestamp(dt: datetime | None) -> str:
    """ISO 8601 for export; blank when the time is unknown."""
    if dt is None:
        return ""
    return dt.isoformat()
