"""Data models for the browser history module."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class QuerySpec:
    """Table and column layout of one browser family's history schema."""

    table: str
    url_column: str
    title_column: str
    visit_count_column: str
    last_visit_column: str
    encoding: str  # "webkit" | "unix"

    @property
    def order_by(self) -> str:
        return self.last_visit_column

    def build_sql(self) -> str:
        """Bounded query; the row cap is bound as the single parameter."""
        return (
            f"SELECT {self.url_column} AS url, "
            f"{self.title_column} AS title, "
            f"{self.visit_count_column} AS visit_count, "
            f"{self.last_visit_column} AS last_visit "
            f"FROM {self.table} "
            f"ORDER BY {self.order_by} DESC "
            "LIMIT ?"
        )


# Chrome, Edge, Brave, Opera: microseconds since 1601-01-01.
CHROMIUM_QUERY = QuerySpec(
    table="urls",
    url_column="url",
    title_column="title",
    visit_count_column="visit_count",
    last_visit_column="last_visit_time",
    encoding="webkit",
)

# Firefox: microseconds since 1970-01-01.
FIREFOX_QUERY = QuerySpec(
    table="moz_places",
    url_column="url",
    title_column="title",
    visit_count_column="visit_count",
    last_visit_column="last_visit_date",
    encoding="unix",
)


@dataclass(frozen=True)
class SourceDescriptor:
    """A candidate history database location for one browser family."""

    family: str
    path: Path
    query: QuerySpec
    profile: str = "Default"


@dataclass
class HistoryRecord:
    """A normalized browser history entry."""

    source: str
    url: str
    title: str
    visit_count: int
    last_visit_time: datetime | None  # UTC, None if unknown
    profile: str = ""
