"""Browser history extraction (Chromium + Firefox, Windows)."""

from history_export.browser.models import (
    CHROMIUM_QUERY,
    FIREFOX_QUERY,
    HistoryRecord,
    QuerySpec,
    SourceDescriptor,
)
from history_export.browser.reader import HistoryExtractor
from history_export.browser.sources import default_sources, group_by_family
from history_export.browser.timestamps import (
    decode_timestamp,
    unix_to_datetime,
    webkit_to_datetime,
)

__all__ = [
    "HistoryExtractor",
    "HistoryRecord",
    "QuerySpec",
    "SourceDescriptor",
    "CHROMIUM_QUERY",
    "FIREFOX_QUERY",
    "default_sources",
    "group_by_family",
    "decode_timestamp",
    "webkit_to_datetime",
    "unix_to_datetime",
]
