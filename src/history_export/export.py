"""Write extracted history records to per-family CSV files."""

from __future__ import annotations

import csv
import logging
from datetime import datetime
from pathlib import Path

from history_export.browser.models import HistoryRecord
from history_export.browser.timestamps import format_timestamp
from history_export.exceptions import OutputPathError

logger = logging.getLogger(__name__)

CSV_HEADER = ["Browser/Source", "URL", "Title", "VisitCount", "LastVisit"]


def prepare_output_dir(path: Path) -> Path:
    """Create the export directory if needed. Raises OutputPathError."""
    path = Path(path)
    if path.exists() and not path.is_dir():
        raise OutputPathError(f"Output path {path} exists and is not a directory.")
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputPathError(f"Cannot create output directory {path}: {e}") from e
    return path


def export_filename(family: str, generated_at: datetime) -> str:
    return f"{family}_History_{generated_at:%Y%m%d_%H%M%S_%f}.csv"


def write_family_csv(
    family: str,
    records: list[HistoryRecord],
    output_dir: Path,
    generated_at: datetime | None = None,
) -> Path | None:
    """Write one family's records; returns None and writes nothing if empty."""
    if not records:
        return None
    generated_at = generated_at or datetime.now()
    out_path = Path(output_dir) / export_filename(family, generated_at)

    # utf-8-sig so spreadsheet tools detect the encoding of non-ASCII titles
    with out_path.open("w", newline="", encoding="utf-8-sig") as handle:
        writer = csv.writer(handle)
        writer.writerow(CSV_HEADER)
        for record in records:
            writer.writerow([
                record.source,
                record.url,
                record.title,
                record.visit_count,
                format_timestamp(record.last_visit_time),
            ])

    logger.info("Wrote %d %s records to %s", len(records), family, out_path)
    return out_path


def export_families(
    results: dict[str, list[HistoryRecord]],
    output_dir: Path,
    generated_at: datetime | None = None,
) -> dict[str, Path]:
    """Write a CSV per non-empty family, sharing one generation timestamp."""
    generated_at = generated_at or datetime.now()
    written: dict[str, Path] = {}
    for family, records in results.items():
        path = write_family_csv(family, records, output_dir, generated_at)
        if path is None:
            logger.info("No history found for %s", family)
            continue
        written[family] = path
    return written
