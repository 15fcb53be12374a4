"""Read-only extraction from browser history database snapshots."""

from __future__ import annotations

import logging
import os
import shutil
import sqlite3
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from history_export.browser.models import HistoryRecord, SourceDescriptor
from history_export.browser.sources import group_by_family
from history_export.browser.timestamps import decode_timestamp
from history_export.exceptions import QueryError, SnapshotError, SourceError

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 1000
# SQLite binds integers as signed 64-bit.
MAX_SQLITE_INTEGER = 2**63 - 1

# Files SQLite may create next to a snapshot; all are removed with it.
_SIDECAR_SUFFIXES = ("-wal", "-shm", "-journal")


class HistoryExtractor:
    """Extract history records from browser SQLite databases.

    Browsers keep their history database open, so each source is copied to a
    temporary snapshot and the query runs against the copy.

    Args:
        max_results: Row cap applied to each source file.
        temp_dir: Directory for snapshots; defaults to the system temp dir.
    """

    def __init__(
        self,
        max_results: int = DEFAULT_MAX_RESULTS,
        temp_dir: Path | None = None,
    ) -> None:
        if not 1 <= max_results <= MAX_SQLITE_INTEGER:
            raise ValueError(f"max_results must be between 1 and {MAX_SQLITE_INTEGER}")
        self.max_results = max_results
        self.temp_dir = temp_dir
        self.last_errors: dict[str, str] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def extract_all(
        self, sources: list[SourceDescriptor]
    ) -> dict[str, list[HistoryRecord]]:
        """Extract every family in order; empty families map to []."""
        self.last_errors = {}
        results: dict[str, list[HistoryRecord]] = {}
        for family, descriptors in group_by_family(sources).items():
            results[family] = self._extract_family(family, descriptors)
        return results

    def extract_family(
        self, family: str, sources: list[SourceDescriptor]
    ) -> list[HistoryRecord]:
        """Concatenate records from every existing source of one family.

        Missing files are skipped silently; snapshot and query failures are
        logged and skipped so the remaining sources still run.
        """
        self.last_errors = {}
        return self._extract_family(family, sources)

    def _extract_family(
        self, family: str, sources: list[SourceDescriptor]
    ) -> list[HistoryRecord]:
        records: list[HistoryRecord] = []
        for source in sources:
            if not source.path.exists():
                logger.debug("%s history not found at %s", family, source.path)
                continue
            try:
                found = self.query_source(source)
            except SourceError as e:
                self.last_errors[str(source.path)] = str(e)
                logger.warning("Skipping %s (%s): %s", family, source.profile, e)
                continue
            logger.info("%s (%s): %d records", family, source.profile, len(found))
            records.extend(found)
        return records

    def query_source(self, source: SourceDescriptor) -> list[HistoryRecord]:
        """Query one source through a snapshot. Raises SourceError subclasses."""
        spec = source.query
        with self.snapshot(source.path) as db_copy:
            conn: sqlite3.Connection | None = None
            try:
                conn = sqlite3.connect(str(db_copy))
                conn.row_factory = sqlite3.Row
                conn.text_factory = _decode_text
                rows = conn.execute(spec.build_sql(), (self.max_results,)).fetchall()
            except (sqlite3.Error, OverflowError) as e:
                raise QueryError(f"Failed querying {source.path}: {e}") from e
            finally:
                if conn is not None:
                    conn.close()

        records: list[HistoryRecord] = []
        for row in rows:
            try:
                records.append(self._row_to_record(source, row))
            except (TypeError, ValueError, OverflowError) as e:
                logger.warning("Skipping malformed row in %s: %s", source.path, e)
        return records

    @contextmanager
    def snapshot(self, path: Path) -> Iterator[Path]:
        """Copy a (possibly locked) database to a unique temp file.

        The copy and its journal are removed on every exit path.
        """
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix="history-snapshot-",
                suffix=".db",
                dir=str(self.temp_dir) if self.temp_dir else None,
            )
        except OSError as e:
            raise SnapshotError(f"Cannot create snapshot for {path}: {e}") from e
        os.close(fd)
        tmp_path = Path(tmp_name)
        copies = [tmp_path] + [
            tmp_path.with_name(tmp_path.name + suffix) for suffix in _SIDECAR_SUFFIXES
        ]

        try:
            try:
                shutil.copyfile(path, tmp_path)
                journal = path.with_name(path.name + "-wal")
                if journal.exists():
                    shutil.copyfile(journal, tmp_path.with_name(tmp_path.name + "-wal"))
            except OSError as e:
                raise SnapshotError(f"Failed to copy {path}: {e}") from e
            yield tmp_path
        finally:
            for copy in copies:
                try:
                    copy.unlink(missing_ok=True)
                except OSError as e:
                    logger.warning("Could not remove snapshot %s: %s", copy, e)

    # ------------------------------------------------------------------
    # Row conversion
    # ------------------------------------------------------------------

    @staticmethod
    def _row_to_record(source: SourceDescriptor, row: sqlite3.Row) -> HistoryRecord:
        return HistoryRecord(
            source=source.family,
            url=row["url"] if row["url"] is not None else "",
            title=row["title"] or "",
            visit_count=_visit_count(row["visit_count"]),
            last_visit_time=decode_timestamp(row["last_visit"], source.query.encoding),
            profile=source.profile,
        )


def _visit_count(value: object) -> int:
    try:
        count = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, count)


def _decode_text(value: bytes) -> str:
    # Titles copied from web pages are not always valid UTF-8
    return value.decode("utf-8", errors="replace")
