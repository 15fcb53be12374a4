"""Tests for CSV export."""

import csv
from datetime import datetime, timezone

import pytest

from history_export.browser.models import HistoryRecord
from history_export.exceptions import OutputPathError
from history_export.export import (
    CSV_HEADER,
    export_families,
    export_filename,
    prepare_output_dir,
    write_family_csv,
)

GENERATED = datetime(2024, 3, 5, 14, 7, 9, 123456)


def _record(url, when=None, title="T", source="Chrome"):
    return HistoryRecord(
        source=source,
        url=url,
        title=title,
        visit_count=2,
        last_visit_time=when,
        profile="Default",
    )


def _read(path):
    with path.open(newline="", encoding="utf-8-sig") as handle:
        return list(csv.reader(handle))


def test_prepare_creates_nested_dir(tmp_path):
    target = tmp_path / "a" / "b"
    assert prepare_output_dir(target) == target
    assert target.is_dir()


def test_prepare_rejects_file(tmp_path):
    target = tmp_path / "file.txt"
    target.write_text("x")
    with pytest.raises(OutputPathError):
        prepare_output_dir(target)


def test_export_filename():
    assert export_filename("Chrome", GENERATED) == "Chrome_History_20240305_140709_123456.csv"


def test_write_family_csv(tmp_path):
    when = datetime(2024, 1, 1, 12, tzinfo=timezone.utc)
    records = [
        _record("https://a.example/", when, title="Ünïcode"),
        _record("https://b.example/", None, title=""),
    ]

    path = write_family_csv("Chrome", records, tmp_path, GENERATED)

    assert path == tmp_path / "Chrome_History_20240305_140709_123456.csv"
    rows = _read(path)
    assert rows[0] == CSV_HEADER == ["Browser/Source", "URL", "Title", "VisitCount", "LastVisit"]
    assert rows[1] == ["Chrome", "https://a.example/", "Ünïcode", "2", "2024-01-01T12:00:00+00:00"]
    assert rows[2] == ["Chrome", "https://b.example/", "", "2", ""]
    assert path.read_bytes().startswith(b"\xef\xbb\xbf")


def test_write_family_csv_empty(tmp_path):
    assert write_family_csv("Chrome", [], tmp_path, GENERATED) is None
    assert list(tmp_path.iterdir()) == []


def test_export_families_skips_empty(tmp_path, caplog):
    results = {
        "Chrome": [_record("https://a.example/")],
        "Edge": [],
        "Firefox": [_record("https://f.example/", source="Firefox")],
    }

    with caplog.at_level("INFO"):
        written = export_families(results, tmp_path, GENERATED)

    assert list(written) == ["Chrome", "Firefox"]
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "Chrome_History_20240305_140709_123456.csv",
        "Firefox_History_20240305_140709_123456.csv",
    ]
    assert "No history found for Edge" in caplog.text


def test_runs_in_same_second_do_not_overwrite(tmp_path):
    records = [_record("https://a.example/")]
    first = write_family_csv("Chrome", records, tmp_path, datetime(2024, 3, 5, 14, 7, 9, 1))
    second = write_family_csv("Chrome", records, tmp_path, datetime(2024, 3, 5, 14, 7, 9, 2))

    assert first != second
    assert len(list(tmp_path.iterdir())) == 2
